"""Change notifications, connected the way Qt signals are."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Event(Generic[T]):
    """
    Сигнал об изменении с одним аргументом.

    Usage:
        selection.changed.connect(inspector.show_selection)
        selection.changed.disconnect(inspector.show_selection)

    Slots run in connection order; connecting the same slot twice keeps one
    connection. A slot may disconnect itself while the signal is emitted.
    """

    def __init__(self) -> None:
        self._slots: list[Callable[[T], None]] = []

    def connect(self, slot: Callable[[T], None]) -> Callable[[T], None]:
        """Connect a slot. Returns it, so connect() works as a decorator."""
        if slot not in self._slots:
            self._slots.append(slot)
        return slot

    def disconnect(self, slot: Callable[[T], None]) -> bool:
        """Disconnect a slot. Returns False if it was not connected."""
        try:
            self._slots.remove(slot)
        except ValueError:
            return False
        return True

    def emit(self, value: T) -> None:
        for slot in tuple(self._slots):
            slot(value)

    def __len__(self) -> int:
        return len(self._slots)
