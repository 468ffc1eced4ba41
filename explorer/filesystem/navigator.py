"""Current-location tracking and change-directory semantics."""

import logging

from .errors import AlreadyAtRoot, NotADirectory, NotFound
from .tree import SEPARATOR, EntryRef, TreeStore
from .types import Entry

logger = logging.getLogger(__name__)

PARENT = ".."


class Navigator:
    """Holds the current location of one session, initially the root."""

    def __init__(self, tree: TreeStore):
        self.tree = tree
        self._current_id = tree.root.id
        tree.track(self)

    @property
    def current(self) -> Entry:
        """Current folder; the store refuses to remove it or any of its ancestors."""
        return self.tree.get(self._current_id)

    def get_current_path(self) -> str:
        return self.tree.full_path(self.current)

    def set_current(self, ref: EntryRef) -> Entry:
        """Jump to any live folder."""
        entry = self.tree.get(ref)
        if entry.is_file:
            raise NotADirectory(f"'{entry.name}' is a file, not a directory")
        self._current_id = entry.id
        logger.info(f"Current directory changed to: {self.tree.full_path(entry)}")
        return entry

    def change_directory(self, target: str) -> Entry:
        """
        Change the current location.

        Args:
            target: ".." for the parent, "/" for the root, or the name of a
                child folder of the current location

        Returns:
            The new current folder

        Raises:
            AlreadyAtRoot: If target is ".." while at the root
            NotFound: If no child has that name
            NotADirectory: If the named child is a file
        """
        current = self.current
        if target == PARENT:
            if current.is_root:
                raise AlreadyAtRoot("Already at root directory")
            return self.set_current(current.parent)
        if target == SEPARATOR:
            return self.set_current(self.tree.root)

        try:
            child = self.tree.find_child(current, target)
        except NotFound:
            raise NotFound(f"Directory '{target}' not found")
        if child.is_file:
            raise NotADirectory(f"'{target}' is a file, not a directory")
        return self.set_current(child)

    def navigate_to(self, path: str) -> Entry:
        """Change to an absolute or relative multi-segment path."""
        return self.set_current(self.tree.resolve_path(path, start=self.current))
