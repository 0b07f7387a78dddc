"""Scene entities and collaborator interfaces consumed by the track tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from splinetrack.geometry import IDENTITY_ROTATION, FloatArray, VectorLike


@dataclass(frozen=True)
class EntityTemplate:
    """Prototype used to instantiate scene entities.

    Args:
        name: Base name given to instances.
        renderable: Whether instances carry a renderer that accepts materials.
        material: Material assigned to new instances, if any.
    """

    name: str
    renderable: bool = True
    material: str | None = None


@dataclass(eq=False)
class Entity:
    """Handle to one live scene node.

    Args:
        name: Node name.
        position: World position [m].
        rotation: World rotation quaternion ``(x, y, z, w)``.
        template: Template the node was instantiated from; ``None`` for
            containers.
        parent: Parent node, ``None`` for the scene root.
        children: Child nodes in creation order.
        material: Currently assigned material.
        tags: Free-form labels used for traceability.
        active: Whether the node is shown.
        alive: ``False`` once the node has been destroyed.
    """

    name: str
    position: FloatArray = field(default_factory=lambda: np.zeros(3))
    rotation: FloatArray = field(default_factory=lambda: IDENTITY_ROTATION.copy())
    template: EntityTemplate | None = None
    parent: Entity | None = field(default=None, repr=False)
    children: list[Entity] = field(default_factory=list, repr=False)
    material: str | None = None
    tags: dict[str, str] = field(default_factory=dict)
    active: bool = True
    alive: bool = True

    @property
    def renderable(self) -> bool:
        """Whether the node can display a material.

        Returns:
            ``True`` when the node was instantiated from a renderable template.
        """
        return self.template is not None and self.template.renderable


class SceneGraph(Protocol):
    """Render/scene collaborator that owns entity lifetimes."""

    def create_container(self, name: str, parent: Entity | None = None) -> Entity:
        """Create an empty grouping node.

        Args:
            name: Container name.
            parent: Parent node; the scene root when ``None``.

        Returns:
            New container entity.
        """
        ...

    def instantiate(
        self,
        template: EntityTemplate,
        position: VectorLike,
        rotation: FloatArray,
        parent: Entity | None = None,
    ) -> Entity:
        """Instantiate a template.

        Args:
            template: Template to copy.
            position: World position [m].
            rotation: World rotation quaternion ``(x, y, z, w)``.
            parent: Parent node; the scene root when ``None``.

        Returns:
            New entity handle.
        """
        ...

    def destroy(self, entity: Entity) -> None:
        """Destroy an entity and its children.

        Args:
            entity: Entity to destroy.
        """
        ...

    def set_material(self, entity: Entity, material: str) -> None:
        """Assign a material to an entity's renderer.

        Args:
            entity: Renderable entity.
            material: Material handle.
        """
        ...

    def children(self, container: Entity) -> list[Entity]:
        """List the current children of a node.

        Args:
            container: Parent node.

        Returns:
            Snapshot of the child list.
        """
        ...


class GroundQuery(Protocol):
    """Collision collaborator answering downward ray queries."""

    def cast_down(
        self,
        origin: VectorLike,
        max_distance: float,
        layer_mask: int,
    ) -> FloatArray | None:
        """Cast a ray straight down.

        Args:
            origin: Ray start point [m].
            max_distance: Maximum ray length [m].
            layer_mask: Bit mask of layers the ray may hit.

        Returns:
            Nearest hit point, or ``None`` when nothing is hit.
        """
        ...
