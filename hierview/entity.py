"""Entity identifier."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Entity:
    """
    Opaque, stable identifier of a graph node.

    Entities compare by (index, generation). This total order is what makes
    root traversal deterministic across hierarchy rebuilds.
    """

    index: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.index}v{self.generation}"

    def __repr__(self) -> str:
        return f"Entity({self})"
