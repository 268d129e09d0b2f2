"""
HierarchyStructure — плоский снимок дерева сущностей.

The driver rebuilds the structure on every UI pass:

    hierarchy = HierarchyStructure()
    hierarchy.read_from_source(graph, root_filter)
    hierarchy.compute_visible(expanded)

    for element in hierarchy.visible_items():
        draw_row(element)

`elements` is a depth-first pre-order walk over all roots, roots sorted by
identifier. `visible_elements` is the subsequence whose every ancestor is
expanded. Neither is diffed against the previous pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Iterator, Optional

from hierview import log
from hierview.expanded import ExpandedSource, as_predicate
from hierview.graph import GraphSource


@dataclass
class HierarchyElement:
    """
    One node of the flattened snapshot.

    Attributes:
        entity: Graph node identifier.
        parent: Immediate ancestor, None for roots.
        name: Display label resolved once per snapshot.
        depth: 0 for roots, parent depth + 1 otherwise.
        has_children: Node had a non-empty child list at snapshot time.
    """

    entity: Hashable
    parent: Optional[Hashable]
    name: str
    depth: int
    has_children: bool


class HierarchyStructure:
    def __init__(self) -> None:
        self.elements: list[HierarchyElement] = []
        self.visible_elements: list[Hashable] = []
        self._by_entity: dict[Hashable, int] = {}
        self._visible_index: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[HierarchyElement]:
        return iter(self.elements)

    # ------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------

    def read_from_source(
        self,
        graph: GraphSource,
        root_filter: Callable[[Hashable], bool] | None = None,
    ) -> None:
        """
        Replace `elements` with a fresh pre-order walk of the graph.

        Roots are entities without a parent relation that pass root_filter.
        The previous visible order is dropped; call compute_visible again.
        """
        self.elements.clear()
        self._by_entity.clear()
        self.visible_elements.clear()
        self._visible_index.clear()

        roots = [
            entity
            for entity in graph.entities()
            if not graph.has_parent(entity)
            and (root_filter is None or root_filter(entity))
        ]
        roots.sort()

        for root in roots:
            self._add_subtree(graph, root)

    def _add_subtree(self, graph: GraphSource, root: Hashable) -> None:
        # Explicit stack instead of recursion: deep chains must not hit the
        # interpreter recursion limit. Children are pushed reversed so they
        # pop in stored order.
        stack: list[tuple[Hashable, Optional[Hashable], int]] = [(root, None, 0)]
        while stack:
            entity, parent, depth = stack.pop()
            if entity in self._by_entity:
                log.warn(f"[HierarchyStructure] {entity} reached twice, skipping repeated subtree")
                continue

            children = graph.children_of(entity) or ()
            self._by_entity[entity] = len(self.elements)
            self.elements.append(
                HierarchyElement(
                    entity=entity,
                    parent=parent,
                    name=_resolve_name(graph, entity),
                    depth=depth,
                    has_children=len(children) > 0,
                )
            )

            for child in reversed(children):
                stack.append((child, entity, depth + 1))

    # ------------------------------------------------------
    # Visibility
    # ------------------------------------------------------

    def compute_visible(self, expanded_lookup: ExpandedSource) -> list[Hashable]:
        """
        Recompute `visible_elements` for the current expanded flags.

        Single pass in pre-order: a parent is always decided before its
        children, so each element only looks at its parent's verdict.

        Returns a copy of the new visible order; later passes do not touch it.
        """
        is_expanded = as_predicate(expanded_lookup)

        # entity -> "children of this entity are visible"
        opens_children: dict[Hashable, bool] = {}

        self.visible_elements.clear()
        self._visible_index.clear()
        for element in self.elements:
            if element.parent is None:
                visible = True
            else:
                visible = opens_children.get(element.parent, False)

            opens_children[element.entity] = visible and bool(is_expanded(element.entity))
            if visible:
                self._visible_index[element.entity] = len(self.visible_elements)
                self.visible_elements.append(element.entity)

        return list(self.visible_elements)

    def is_visible(self, element: HierarchyElement, expanded_lookup: ExpandedSource) -> bool:
        """
        Visibility of one element by walking its ancestor chain.

        Same answer as membership in visible_elements after compute_visible,
        without needing the full pass.
        """
        is_expanded = as_predicate(expanded_lookup)

        parent = element.parent
        while parent is not None:
            parent_element = self.element(parent)
            if parent_element is None:
                return False
            if not is_expanded(parent):
                return False
            parent = parent_element.parent
        return True

    # ------------------------------------------------------
    # Lookup
    # ------------------------------------------------------

    def element(self, entity: Hashable) -> HierarchyElement | None:
        index = self._by_entity.get(entity)
        if index is None:
            return None
        return self.elements[index]

    def ancestors(self, entity: Hashable) -> list[Hashable]:
        """Ancestors of an entity, nearest first."""
        result = []
        element = self.element(entity)
        while element is not None and element.parent is not None:
            result.append(element.parent)
            element = self.element(element.parent)
        return result

    def index_of_visible(self, entity: Hashable) -> int | None:
        return self._visible_index.get(entity)

    def visible_items(self) -> Iterator[HierarchyElement]:
        for entity in self.visible_elements:
            yield self.elements[self._by_entity[entity]]

    def visible_range(self, clicked: Hashable, anchor: Hashable) -> Iterator[Hashable]:
        """
        Visible entities between two endpoints, inclusive, in visible order.

        Empty when either endpoint is not visible. Used as the range
        resolver for shift-click selection.
        """
        start = self._visible_index.get(clicked)
        end = self._visible_index.get(anchor)
        if start is None or end is None:
            return iter(())
        if start > end:
            start, end = end, start
        return iter(self.visible_elements[start:end + 1])


def _resolve_name(graph: GraphSource, entity: Hashable) -> str:
    try:
        return graph.name_of(entity)
    except Exception as e:
        log.warn(e, f"[HierarchyStructure] Name lookup failed for {entity}")
        return f"Entity ({entity})"
