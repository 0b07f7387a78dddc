"""Scene entities, collaborator interfaces and ground surfaces."""

from splinetrack.scene.ground import (
    FlatGround,
    GroundCollection,
    HeightfieldGround,
    HeightSurface,
    layer_bit,
    layer_mask,
)
from splinetrack.scene.memory import InMemoryScene
from splinetrack.scene.models import Entity, EntityTemplate, GroundQuery, SceneGraph

__all__ = [
    "Entity",
    "EntityTemplate",
    "FlatGround",
    "GroundCollection",
    "GroundQuery",
    "HeightSurface",
    "HeightfieldGround",
    "InMemoryScene",
    "SceneGraph",
    "layer_bit",
    "layer_mask",
]
