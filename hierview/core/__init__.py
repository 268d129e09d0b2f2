"""Small shared building blocks."""

from hierview.core.event import Event

__all__ = ["Event"]
