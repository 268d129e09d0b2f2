"""Exceptions raised at the edges of hierview.

Hierarchy snapshots and selection updates never raise. These are reserved
for misuse of the in-memory graph and for broken settings.
"""


class HierviewError(Exception):
    """Base class for hierview errors."""


class UnknownEntityError(HierviewError, KeyError):
    """Graph operation referenced an entity that is not in the graph."""

    def __init__(self, entity) -> None:
        super().__init__(entity)
        self.entity = entity

    def __str__(self) -> str:
        return f"Unknown entity: {self.entity}"


class SettingsError(HierviewError, ValueError):
    """Settings value is out of range or has the wrong type."""
