"""Session context tying one tree to one navigator."""

import logging
import threading
from typing import List, Optional

from ..settings import settings
from .navigator import Navigator
from .search import get_search_strategy
from .tree import EntryRef, TreeStore
from .types import Entry, EntryKind, SearchHit

logger = logging.getLogger(__name__)

# Distinguishes "not given" from an explicit None (unbounded names)
_FROM_SETTINGS = object()


class ExplorerSession:
    """
    One independent explorer: a tree plus the current location inside it.

    Collaborators (CLI, API) hold a session and call into it by names and
    paths; the tree and navigator stay reachable for id-based access.
    """

    def __init__(
        self,
        root_name: Optional[str] = None,
        max_name_length: "Optional[int] | object" = _FROM_SETTINGS,
        search_strategy: Optional[str] = None,
    ):
        if root_name is None:
            root_name = settings.explorer.root_name
        if max_name_length is _FROM_SETTINGS:
            max_name_length = settings.explorer.max_name_length
        if search_strategy is None:
            search_strategy = settings.explorer.search_strategy

        self.tree = TreeStore(root_name=root_name, max_name_length=max_name_length)
        self.navigator = Navigator(self.tree)
        self.search_strategy = search_strategy
        # Validate early so a bad configuration fails at startup
        get_search_strategy(self.tree, search_strategy)
        self.lock = threading.RLock()

    @property
    def root(self) -> Entry:
        return self.tree.root

    @property
    def current(self) -> Entry:
        return self.navigator.current

    def pwd(self) -> str:
        return self.navigator.get_current_path()

    def resolve(self, path: str) -> Entry:
        """Resolve a path relative to the current location."""
        return self.tree.resolve_path(path, start=self.current)

    def create(self, name: str, kind: "EntryKind | str", parent: Optional[str] = None) -> Entry:
        """Create name under parent (a path), or under the current location."""
        parent_entry = self.current if parent is None else self.resolve(parent)
        return self.tree.create(parent_entry, name, kind)

    def mkdir(self, name: str, parent: Optional[str] = None) -> Entry:
        return self.create(name, EntryKind.FOLDER, parent)

    def touch(self, name: str, parent: Optional[str] = None) -> Entry:
        return self.create(name, EntryKind.FILE, parent)

    def remove(self, path: str) -> List[int]:
        return self.remove_entry(self.resolve(path))

    def remove_entry(self, ref: EntryRef) -> List[int]:
        return self.tree.remove(ref)

    def move(self, source: str, destination: str) -> Entry:
        return self.tree.move(self.resolve(source), self.resolve(destination))

    def cd(self, target: str) -> Entry:
        """
        Change directory.

        Single-step targets ("..", "/", a child name) follow the navigator's
        rules; anything containing '/' is resolved as a path.
        """
        if target in ("..", "/") or "/" not in target:
            return self.navigator.change_directory(target)
        return self.navigator.navigate_to(target)

    def list(self, path: Optional[str] = None) -> List[Entry]:
        folder = self.current if path is None else self.resolve(path)
        return self.tree.children(folder)

    def search(
        self,
        query: str,
        strategy: Optional[str] = None,
        start: Optional[str] = None,
    ) -> List[SearchHit]:
        """Search from start (a path) or from the root."""
        start_entry = None if start is None else self.resolve(start)
        search_strategy = get_search_strategy(self.tree, strategy or self.search_strategy)
        return search_strategy.search(query, start_entry)

    def reset(self) -> int:
        """Drop everything below the root and go back there."""
        return self.tree.clear()


def build_sample_session(session: Optional[ExplorerSession] = None) -> ExplorerSession:
    """Populate a session with the small demo tree (docs/a.txt, docs/b.txt, readme.md)."""
    if session is None:
        session = ExplorerSession()
    tree = session.tree
    docs = tree.create(tree.root, "docs", EntryKind.FOLDER)
    tree.create(docs, "a.txt", EntryKind.FILE)
    tree.create(docs, "b.txt", EntryKind.FILE)
    tree.create(tree.root, "readme.md", EntryKind.FILE)
    return session
