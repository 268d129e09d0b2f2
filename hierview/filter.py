"""Root filters for HierarchyStructure.read_from_source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable

from hierview.graph import GraphSource


RootFilter = Callable[[Hashable], bool]


@dataclass
class NameFilter:
    """
    Keeps roots whose subtree contains a matching name.

    Empty word matches everything. Matching is case-insensitive; with
    fuzzy=True the word only has to appear as a subsequence of the name
    ("cmr" matches "Camera").
    """

    word: str = ""
    fuzzy: bool = False

    @classmethod
    def all(cls) -> "NameFilter":
        return cls()

    def is_empty(self) -> bool:
        return not self.word.strip()

    def matches(self, name: str) -> bool:
        if self.is_empty():
            return True

        needle = self.word.strip().lower()
        haystack = name.lower()
        if not self.fuzzy:
            return needle in haystack

        chars = iter(haystack)
        return all(ch in chars for ch in needle)

    def root_filter(self, graph: GraphSource) -> RootFilter:
        if self.is_empty():
            return lambda entity: True

        def subtree_matches(entity) -> bool:
            stack = [entity]
            seen = set()
            while stack:
                current = stack.pop()
                if current in seen:
                    continue
                seen.add(current)
                if self.matches(graph.name_of(current)):
                    return True
                stack.extend(graph.children_of(current) or ())
            return False

        return subtree_matches
