"""Multi-entity selection with file-explorer click semantics."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Hashable, Iterable, Iterator, Optional

from hierview.core.event import Event


RangeResolver = Callable[[Hashable, Hashable], Iterable[Hashable]]


class SelectionMode(Enum):
    """Kind of selection click."""
    REPLACE = "replace"   # no modifiers
    ADD = "add"           # ctrl / cmd
    EXTEND = "extend"     # shift

    @staticmethod
    def from_ctrl_shift(ctrl: bool, shift: bool) -> "SelectionMode":
        """Ctrl takes precedence over shift when both are held."""
        if ctrl:
            return SelectionMode.ADD
        if shift:
            return SelectionMode.EXTEND
        return SelectionMode.REPLACE


def _no_range(clicked: Hashable, anchor: Hashable) -> Iterable[Hashable]:
    return ()


class SelectedEntities:
    """
    Упорядоченное множество выделенных сущностей.

    Ответственности:
    - Хранение выделения без дубликатов в порядке добавления
    - Якорь последнего действия для shift-расширения
    - Уведомление подписчиков об изменениях (changed)

    The anchor (last_action) is written by Replace, Add and by the first
    click into an empty selection. Extend never moves it, so repeated
    shift-clicks all measure their range from the original anchor.
    """

    def __init__(self) -> None:
        self._entities: list[Hashable] = []
        self._last_action: Optional[tuple[SelectionMode, Hashable]] = None
        self.changed: Event["SelectedEntities"] = Event()

    # ------------------------------------------------------
    # Click handling
    # ------------------------------------------------------

    def select(
        self,
        mode: SelectionMode,
        entity: Hashable,
        range_resolver: RangeResolver | None = None,
    ) -> None:
        """
        Apply one click.

        Args:
            mode: How the click modifies the selection.
            entity: The clicked entity.
            range_resolver: (clicked, anchor) -> entities between them in
                visible order, inclusive. Only used by EXTEND.
        """
        before = list(self._entities)

        if not self._entities:
            self._insert(entity)
            self._last_action = (mode, entity)
        elif mode is SelectionMode.REPLACE:
            self._entities = [entity]
            self._last_action = (mode, entity)
        elif mode is SelectionMode.ADD:
            self._toggle(entity)
            self._last_action = (mode, entity)
        elif self._last_action is None:
            self._insert(entity)
        else:
            last_mode, anchor = self._last_action
            if last_mode in (SelectionMode.REPLACE, SelectionMode.ADD):
                self._entities.clear()
            resolver = range_resolver or _no_range
            for ranged in resolver(entity, anchor):
                self._insert(ranged)

        self._notify_if_changed(before)

    def select_replace(self, entity: Hashable) -> None:
        self.select(SelectionMode.REPLACE, entity)

    def select_maybe_add(self, entity: Hashable, add: bool) -> None:
        mode = SelectionMode.ADD if add else SelectionMode.REPLACE
        self.select(mode, entity)

    # ------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------

    def contains(self, entity: Hashable) -> bool:
        return entity in self._entities

    def remove(self, entity: Hashable) -> Hashable | None:
        """Remove an entity. Returns it, or None if it was not selected."""
        try:
            index = self._entities.index(entity)
        except ValueError:
            return None
        removed = self._entities.pop(index)
        self.changed.emit(self)
        return removed

    def retain(self, predicate: Callable[[Hashable], bool]) -> None:
        """Drop every entity failing the predicate."""
        before = list(self._entities)
        self._entities = [entity for entity in self._entities if predicate(entity)]
        self._notify_if_changed(before)

    def clear(self) -> None:
        """Empty the selection. The anchor is kept."""
        if self._entities:
            self._entities.clear()
            self.changed.emit(self)

    # ------------------------------------------------------
    # Queries
    # ------------------------------------------------------

    @property
    def last_action(self) -> Optional[tuple[SelectionMode, Hashable]]:
        return self._last_action

    def is_empty(self) -> bool:
        return not self._entities

    def as_list(self) -> list[Hashable]:
        return list(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._entities))

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def __repr__(self) -> str:
        return f"SelectedEntities({self._entities!r}, last_action={self._last_action!r})"

    # ------------------------------------------------------
    # Internals
    # ------------------------------------------------------

    def _insert(self, entity: Hashable) -> None:
        if entity not in self._entities:
            self._entities.append(entity)

    def _toggle(self, entity: Hashable) -> None:
        if entity in self._entities:
            self._entities.remove(entity)
        else:
            self._entities.append(entity)

    def _notify_if_changed(self, before: list[Hashable]) -> None:
        if before != self._entities:
            self.changed.emit(self)
