"""In-memory file system tree: store, navigation and search."""

from .types import Entry, EntryKind, SearchHit
from .errors import (
    FileSystemError,
    NotADirectory,
    NameCollision,
    NotFound,
    InvalidName,
    CannotDeleteRoot,
    CannotDeleteCurrent,
    CannotDeleteAncestorOfCurrent,
    CannotMoveRoot,
    DestinationNotDirectory,
    CyclicMove,
    AlreadyAtRoot,
)
from .tree import TreeStore, SEPARATOR, ROOT_ID
from .navigator import Navigator
from .search import (
    SearchStrategy,
    DepthFirstSearch,
    BreadthFirstSearch,
    SearchFactory,
    get_search_strategy,
    search_dfs,
    search_bfs,
)
from .session import ExplorerSession, build_sample_session

__all__ = [
    # Types
    "Entry",
    "EntryKind",
    "SearchHit",
    # Errors
    "FileSystemError",
    "NotADirectory",
    "NameCollision",
    "NotFound",
    "InvalidName",
    "CannotDeleteRoot",
    "CannotDeleteCurrent",
    "CannotDeleteAncestorOfCurrent",
    "CannotMoveRoot",
    "DestinationNotDirectory",
    "CyclicMove",
    "AlreadyAtRoot",
    # Tree
    "TreeStore",
    "SEPARATOR",
    "ROOT_ID",
    "Navigator",
    # Search
    "SearchStrategy",
    "DepthFirstSearch",
    "BreadthFirstSearch",
    "SearchFactory",
    "get_search_strategy",
    "search_dfs",
    "search_bfs",
    # Session
    "ExplorerSession",
    "build_sample_session",
]
