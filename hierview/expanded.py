"""
Expand/collapse flags keyed by entity.

The flags live outside HierarchyStructure and survive hierarchy rebuilds.
Anything callable as entity -> bool, or exposing is_expanded(entity),
works as a lookup for HierarchyStructure.compute_visible.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Protocol, Union, runtime_checkable


@runtime_checkable
class ExpandedLookup(Protocol):
    def is_expanded(self, entity: Hashable) -> bool:
        ...


ExpandedSource = Union[ExpandedLookup, Callable[[Hashable], bool]]


def as_predicate(source: ExpandedSource) -> Callable[[Hashable], bool]:
    """Normalize a lookup object or a plain callable to a predicate."""
    if isinstance(source, ExpandedLookup):
        return source.is_expanded
    return source


class ExpandedState:
    """
    Хранилище флагов раскрытия узлов.

    Unknown entities are collapsed.
    """

    def __init__(self, expanded: Iterable[Hashable] = ()) -> None:
        self._expanded: set[Hashable] = set(expanded)

    def __call__(self, entity: Hashable) -> bool:
        return self.is_expanded(entity)

    def __len__(self) -> int:
        return len(self._expanded)

    def is_expanded(self, entity: Hashable) -> bool:
        return entity in self._expanded

    def set_expanded(self, entity: Hashable, expanded: bool) -> None:
        if expanded:
            self._expanded.add(entity)
        else:
            self._expanded.discard(entity)

    def toggle(self, entity: Hashable) -> bool:
        """Flip the flag. Returns the new value."""
        expanded = not self.is_expanded(entity)
        self.set_expanded(entity, expanded)
        return expanded

    def expand_all(self, entities: Iterable[Hashable]) -> None:
        self._expanded.update(entities)

    def collapse_all(self) -> None:
        self._expanded.clear()

    def retain(self, predicate: Callable[[Hashable], bool]) -> None:
        """Forget flags of entities failing the predicate."""
        self._expanded = {entity for entity in self._expanded if predicate(entity)}

    # --- Save/restore ---

    def expanded_entities(self) -> list[Hashable]:
        """Expanded entities in identifier order, for saving editor state."""
        return sorted(self._expanded)

    def set_expanded_entities(self, entities: Iterable[Hashable]) -> None:
        """Replace all flags with a previously saved list."""
        self._expanded = set(entities)
