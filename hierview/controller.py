"""
HierarchyController — один проход панели иерархии без привязки к UI.

Glues graph, HierarchyStructure, expanded flags and selection together.
A renderer calls refresh() once per frame, draws rows(), and forwards
clicks and expander toggles back:

    controller = HierarchyController(graph)
    controller.refresh()
    for row in controller.rows():
        draw(row, indent=controller.row_indent(row))
    controller.click(row.entity, ctrl=modifiers.ctrl, shift=modifiers.shift)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from hierview import log
from hierview.expanded import ExpandedState
from hierview.filter import RootFilter
from hierview.graph import GraphSource
from hierview.hierarchy import HierarchyStructure
from hierview.selection import SelectedEntities, SelectionMode
from hierview.settings import HierarchySettings


@dataclass(frozen=True)
class HierarchyRow:
    """What a renderer needs to draw one visible row."""

    entity: Hashable
    name: str
    depth: int
    has_children: bool
    expanded: bool
    selected: bool


class HierarchyController:
    def __init__(
        self,
        graph: GraphSource,
        selection: Optional[SelectedEntities] = None,
        expanded: Optional[ExpandedState] = None,
        root_filter: Optional[RootFilter] = None,
        settings: Optional[HierarchySettings] = None,
    ) -> None:
        self.graph = graph
        self.selection = selection if selection is not None else SelectedEntities()
        self.expanded = expanded if expanded is not None else ExpandedState()
        self.root_filter = root_filter
        self.settings = settings if settings is not None else HierarchySettings()
        self.hierarchy = HierarchyStructure()

        self._known_roots: set[Hashable] = set()

    def refresh(self) -> HierarchyStructure:
        """
        Rebuild the snapshot, recompute visibility, prune state of
        despawned entities (selection, expanded flags, seen roots).
        """
        self.hierarchy.read_from_source(self.graph, self.root_filter)

        alive = set(self.graph.entities())
        self.expanded.retain(lambda entity: entity in alive)
        self._known_roots &= alive

        if self.settings.expand_roots_by_default:
            for element in self.hierarchy.elements:
                if element.parent is None and element.entity not in self._known_roots:
                    self._known_roots.add(element.entity)
                    self.expanded.set_expanded(element.entity, True)

        self.hierarchy.compute_visible(self.expanded)

        stale = len(self.selection)
        self.selection.retain(lambda entity: entity in alive)
        stale -= len(self.selection)
        if stale:
            log.debug(f"[HierarchyController] Dropped {stale} stale selected entities")

        return self.hierarchy

    def click(self, entity: Hashable, ctrl: bool = False, shift: bool = False) -> bool:
        """
        Handle a click on a row.

        Returns False when the entity is not a visible row; the selection
        is left alone in that case.
        """
        if self.hierarchy.index_of_visible(entity) is None:
            return False

        mode = SelectionMode.from_ctrl_shift(ctrl, shift)
        self.selection.select(mode, entity, self.hierarchy.visible_range)
        return True

    def toggle_expanded(self, entity: Hashable) -> bool:
        """Flip the expander of a row. Returns the new expanded flag."""
        expanded = self.expanded.toggle(entity)
        self.hierarchy.compute_visible(self.expanded)
        return expanded

    def reveal(self, entity: Hashable) -> bool:
        """
        Expand every ancestor so the entity shows up as a row.

        Returns False if the entity is not part of the current snapshot.
        """
        if self.hierarchy.element(entity) is None:
            return False
        for ancestor in self.hierarchy.ancestors(entity):
            self.expanded.set_expanded(ancestor, True)
        self.hierarchy.compute_visible(self.expanded)
        return True

    def rows(self) -> list[HierarchyRow]:
        return [
            HierarchyRow(
                entity=element.entity,
                name=element.name,
                depth=element.depth,
                has_children=element.has_children,
                expanded=element.has_children and self.expanded.is_expanded(element.entity),
                selected=self.selection.contains(element.entity),
            )
            for element in self.hierarchy.visible_items()
        ]

    def row_indent(self, row: HierarchyRow) -> float:
        return row.depth * self.settings.indent_per_depth

    def row_height(self, text_size: float) -> float:
        return text_size * self.settings.row_height_scale
