"""In-memory scene graph used by tooling scripts and tests."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from splinetrack.geometry import FloatArray, VectorLike, as_vector
from splinetrack.scene.models import Entity, EntityTemplate
from splinetrack.utils.exceptions import SplineTrackError

ROOT_NAME = "SceneRoot"


class InMemoryScene:
    """Scene graph that keeps entities as plain Python objects."""

    def __init__(self) -> None:
        """Create an empty scene with a root node."""
        self.root = Entity(name=ROOT_NAME)

    def _attach(self, entity: Entity, parent: Entity | None) -> Entity:
        """Attach a node under a parent.

        Args:
            entity: Node to attach.
            parent: Parent node; the scene root when ``None``.

        Returns:
            The attached node.

        Raises:
            splinetrack.utils.exceptions.SplineTrackError: If ``parent`` has
                already been destroyed.
        """
        owner = parent if parent is not None else self.root
        if not owner.alive:
            msg = f"Cannot attach '{entity.name}' to destroyed entity '{owner.name}'"
            raise SplineTrackError(msg)
        entity.parent = owner
        owner.children.append(entity)
        return entity

    def create_container(self, name: str, parent: Entity | None = None) -> Entity:
        """Create an empty grouping node at its parent's position.

        Args:
            name: Container name.
            parent: Parent node; the scene root when ``None``.

        Returns:
            New container entity.
        """
        anchor = parent.position.copy() if parent is not None else np.zeros(3)
        return self._attach(Entity(name=name, position=anchor), parent)

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
        entity = Entity(
            name=template.name,
            position=as_vector(position),
            rotation=np.array(rotation, dtype=np.float64),
            template=template,
            material=template.material,
        )
        return self._attach(entity, parent)

    def destroy(self, entity: Entity) -> None:
        """Destroy an entity and all of its children.

        Args:
            entity: Entity to destroy; destroyed entities are ignored.

        Raises:
            splinetrack.utils.exceptions.SplineTrackError: If asked to destroy
                the scene root.
        """
        if entity is self.root:
            msg = "The scene root cannot be destroyed"
            raise SplineTrackError(msg)
        if not entity.alive:
            return
        for child in list(entity.children):
            self.destroy(child)
        if entity.parent is not None and entity in entity.parent.children:
            entity.parent.children.remove(entity)
        entity.parent = None
        entity.alive = False

    def set_material(self, entity: Entity, material: str) -> None:
        """Assign a material to a renderable entity.

        Args:
            entity: Renderable entity.
            material: Material handle.

        Raises:
            splinetrack.utils.exceptions.SplineTrackError: If the entity is
                destroyed or has no renderer.
        """
        if not entity.alive:
            msg = f"Cannot set material on destroyed entity '{entity.name}'"
            raise SplineTrackError(msg)
        if not entity.renderable:
            msg = f"Entity '{entity.name}' has no renderer"
            raise SplineTrackError(msg)
        entity.material = material

    def children(self, container: Entity) -> list[Entity]:
        """List the current children of a node.

        Args:
            container: Parent node.

        Returns:
            Snapshot of the child list.
        """
        return list(container.children)

    def walk(self, start: Entity | None = None) -> Iterator[Entity]:
        """Iterate live nodes depth-first, excluding the start node.

        Args:
            start: Node to start from; the scene root when ``None``.

        Returns:
            Iterator over descendant entities.
        """
        stack = list(reversed((start or self.root).children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> Entity | None:
        """Find the first live node with a given name.

        Args:
            name: Node name.

        Returns:
            Matching entity, or ``None``.
        """
        return next((node for node in self.walk() if node.name == name), None)
