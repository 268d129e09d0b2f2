"""
Graph provider — источник иерархии для HierarchyStructure.

HierarchyStructure only reads the graph through the GraphSource protocol:

    for entity in graph.entities():
        if not graph.has_parent(entity):
            ...
    graph.children_of(entity)   # ordered children or None
    graph.name_of(entity)       # best-effort display label

EntityGraph is a small in-memory entity/component store implementing the
protocol. It is what tests and headless tools drive the hierarchy with.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Iterator, Protocol, Sequence, runtime_checkable

from hierview.entity import Entity
from hierview.errors import UnknownEntityError


# Components whose presence is a good hint about what an unnamed entity is.
# Checked in order, the first one found wins.
WELL_KNOWN_COMPONENTS: tuple[str, ...] = (
    "Camera",
    "Window",
    "PointLight",
    "DirectionalLight",
    "SpotLight",
    "Mesh",
    "Text",
    "Node",
)


@runtime_checkable
class GraphSource(Protocol):
    """
    Протокол графа сущностей.

    Методы:
        entities: All entities of the graph, any order.
        children_of: Ordered child list, or None when the entity has no
                     children relation.
        has_parent: True when the entity carries a parent relation.
        name_of: Display label. Never raises for a known entity; the
                 fallback policy belongs to the provider.
    """

    def entities(self) -> Iterable[Hashable]:
        ...

    def children_of(self, entity: Hashable) -> Sequence[Hashable] | None:
        ...

    def has_parent(self, entity: Hashable) -> bool:
        ...

    def name_of(self, entity: Hashable) -> str:
        ...


class EntityGraph:
    """
    In-memory entity store with parent/child relations and components.

    Components are keyed by type name. The "Name" component, when present,
    is the entity display name.
    """

    def __init__(self) -> None:
        self._next_index = 0
        self._parents: dict[Entity, Entity | None] = {}
        self._children: dict[Entity, list[Entity]] = {}
        self._components: dict[Entity, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._parents)

    def __contains__(self, entity: object) -> bool:
        return entity in self._parents

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._parents)

    # ------------------------------------------------------
    # Mutation
    # ------------------------------------------------------

    def spawn(
        self,
        name: str | None = None,
        parent: Entity | None = None,
        components: Iterable[str] = (),
    ) -> Entity:
        """Create an entity, optionally named and attached to a parent."""
        if parent is not None and parent not in self._parents:
            raise UnknownEntityError(parent)

        entity = Entity(self._next_index)
        self._next_index += 1

        self._parents[entity] = parent
        self._components[entity] = {}
        if parent is not None:
            self._children.setdefault(parent, []).append(entity)

        for component in components:
            self._components[entity][component] = True
        if name is not None:
            self._components[entity]["Name"] = name
        return entity

    def set_name(self, entity: Entity, name: str | None) -> None:
        components = self._components_checked(entity)
        if name is None:
            components.pop("Name", None)
        else:
            components["Name"] = name

    def add_component(self, entity: Entity, component: str, value: Any = True) -> None:
        self._components_checked(entity)[component] = value

    def despawn(self, entity: Entity) -> list[Entity]:
        """
        Remove an entity together with its descendants.

        Returns removed entities, the given one first.
        """
        if entity not in self._parents:
            raise UnknownEntityError(entity)

        parent = self._parents[entity]
        if parent is not None:
            siblings = self._children[parent]
            siblings.remove(entity)
            if not siblings:
                del self._children[parent]

        removed: list[Entity] = []
        stack = [entity]
        while stack:
            current = stack.pop()
            removed.append(current)
            stack.extend(reversed(self._children.pop(current, [])))
            del self._parents[current]
            del self._components[current]
        return removed

    # ------------------------------------------------------
    # GraphSource
    # ------------------------------------------------------

    def entities(self) -> list[Entity]:
        return list(self._parents)

    def children_of(self, entity: Entity) -> list[Entity] | None:
        children = self._children.get(entity)
        if not children:
            return None
        return list(children)

    def has_parent(self, entity: Entity) -> bool:
        return self._parents.get(entity) is not None

    def parent_of(self, entity: Entity) -> Entity | None:
        return self._parents.get(entity)

    def name_of(self, entity: Entity) -> str:
        return guess_entity_name(self, entity)

    def components_of(self, entity: Entity) -> dict[str, Any]:
        return dict(self._components.get(entity, {}))

    def _components_checked(self, entity: Entity) -> dict[str, Any]:
        components = self._components.get(entity)
        if components is None:
            raise UnknownEntityError(entity)
        return components


def guess_entity_name(graph: EntityGraph, entity: Entity) -> str:
    """
    Best-effort display name.

    Name component first, then a well-known component as "Camera (3v0)",
    then "Entity (3v0)". Unknown entities get the plain fallback too.
    """
    components = graph.components_of(entity)

    name = components.get("Name")
    if isinstance(name, str) and name:
        return name

    for component in WELL_KNOWN_COMPONENTS:
        if component in components:
            return f"{component} ({entity})"

    return f"Entity ({entity})"
