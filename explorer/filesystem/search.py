"""Substring search over the tree: depth-first and breadth-first strategies."""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterator, List, Optional

from ..settings import settings
from .tree import EntryRef, TreeStore
from .types import Entry, SearchHit

logger = logging.getLogger(__name__)


class SearchStrategy(ABC):
    """Base class for search strategies.

    A strategy only decides the visiting order. Matching is always a
    case-sensitive substring test against the entry's own name.
    """

    name = ""

    def __init__(self, tree: TreeStore):
        self.tree = tree

    @staticmethod
    def matches(entry: Entry, query: str) -> bool:
        return query in entry.name

    def _hit(self, entry: Entry, depth: int) -> SearchHit:
        return SearchHit(
            path=self.tree.full_path(entry),
            kind=entry.kind,
            entry_id=entry.id,
            depth=depth,
        )

    @abstractmethod
    def iter_matches(self, query: str, start: Optional[EntryRef] = None) -> Iterator[SearchHit]:
        """
        Lazily yield every entry whose name contains query.

        Args:
            query: Substring to look for
            start: Entry to start from (defaults to root); it is tested too

        Yields:
            SearchHit objects in this strategy's visiting order
        """

    def search(self, query: str, start: Optional[EntryRef] = None) -> List[SearchHit]:
        hits = list(self.iter_matches(query, start))
        logger.debug(f"{self.name} search for '{query}' returned {len(hits)} hits")
        return hits


class DepthFirstSearch(SearchStrategy):
    """Pre-order: a folder is reported before anything inside it."""

    name = "dfs"

    def iter_matches(self, query: str, start: Optional[EntryRef] = None) -> Iterator[SearchHit]:
        start_entry = self.tree.root if start is None else self.tree.get(start)
        stack = [(start_entry, 0)]
        while stack:
            entry, depth = stack.pop()
            if self.matches(entry, query):
                yield self._hit(entry, depth)
            children = self.tree.children(entry)
            stack.extend((child, depth + 1) for child in reversed(children))


class BreadthFirstSearch(SearchStrategy):
    """Level order, driven by an unbounded pending-visit queue."""

    name = "bfs"

    def iter_matches(self, query: str, start: Optional[EntryRef] = None) -> Iterator[SearchHit]:
        start_entry = self.tree.root if start is None else self.tree.get(start)
        pending = deque([(start_entry, 0)])
        while pending:
            entry, depth = pending.popleft()
            if self.matches(entry, query):
                yield self._hit(entry, depth)
            pending.extend((child, depth + 1) for child in self.tree.children(entry))


class SearchFactory:
    """Factory for creating search strategy instances."""

    _strategies = {
        "dfs": DepthFirstSearch,
        "bfs": BreadthFirstSearch,
    }

    @classmethod
    def get_strategy(cls, tree: TreeStore, strategy_name: Optional[str] = None) -> SearchStrategy:
        """
        Get a search strategy bound to a tree.

        Args:
            tree: Tree to search
            strategy_name: 'dfs' or 'bfs' (defaults to settings value)

        Raises:
            ValueError: If strategy name is unknown
        """
        if strategy_name is None:
            strategy_name = settings.explorer.search_strategy

        strategy_name = strategy_name.strip().lower()
        if strategy_name not in cls._strategies:
            available = ", ".join(cls._strategies.keys())
            raise ValueError(
                f"Unknown search strategy: {strategy_name}. "
                f"Available: {available}"
            )
        return cls._strategies[strategy_name](tree)

    @classmethod
    def list_strategies(cls) -> list:
        """List available search strategies."""
        return list(cls._strategies.keys())


# Convenience functions
def get_search_strategy(tree: TreeStore, strategy_name: Optional[str] = None) -> SearchStrategy:
    return SearchFactory.get_strategy(tree, strategy_name)


def search_dfs(tree: TreeStore, query: str, start: Optional[EntryRef] = None) -> Iterator[SearchHit]:
    return DepthFirstSearch(tree).iter_matches(query, start)


def search_bfs(tree: TreeStore, query: str, start: Optional[EntryRef] = None) -> Iterator[SearchHit]:
    return BreadthFirstSearch(tree).iter_matches(query, start)
