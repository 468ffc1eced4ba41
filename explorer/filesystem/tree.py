"""Arena-backed tree store: creation, lookup, removal, moves and paths."""

import logging
import threading
from itertools import count
from typing import Dict, Iterator, List, Optional, Union

from .errors import (
    CannotDeleteAncestorOfCurrent,
    CannotDeleteCurrent,
    CannotDeleteRoot,
    CannotMoveRoot,
    CyclicMove,
    DestinationNotDirectory,
    InvalidName,
    NameCollision,
    NotADirectory,
    NotFound,
)
from .types import Entry, EntryKind

logger = logging.getLogger(__name__)

SEPARATOR = "/"
ROOT_ID = 0

EntryRef = Union[Entry, int]


class TreeStore:
    """Owns every Entry of one tree.

    Entries are kept in a single id -> Entry mapping. A folder owns the list
    of its children's ids; the parent field is a plain id and owns nothing.
    Removing a subtree means dropping its ids from the mapping.
    """

    def __init__(self, root_name: str = "root", max_name_length: Optional[int] = None):
        self.max_name_length = max_name_length
        self.lock = threading.RLock()
        self._entries: Dict[int, Entry] = {}
        self._ids = count()
        root = Entry(id=next(self._ids), name=root_name, kind=EntryKind.FOLDER)
        self._entries[root.id] = root
        self.root = root
        # Navigators whose current location must survive removals
        self._navigators: list = []
        logger.debug(f"Tree initialized with root '{root_name}'")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ref: EntryRef) -> bool:
        entry_id = ref.id if isinstance(ref, Entry) else ref
        return entry_id in self._entries

    def get(self, ref: EntryRef) -> Entry:
        """Return the live entry for an id (or Entry), raising NotFound if it was removed."""
        entry_id = ref.id if isinstance(ref, Entry) else ref
        entry = self._entries.get(entry_id)
        if entry is None:
            raise NotFound(f"Entry #{entry_id} does not exist")
        return entry

    def parent_of(self, ref: EntryRef) -> Optional[Entry]:
        entry = self.get(ref)
        return None if entry.parent is None else self._entries[entry.parent]

    def children(self, ref: EntryRef) -> List[Entry]:
        """Children of an entry in stored order (folders first, then by name)."""
        entry = self.get(ref)
        return [self._entries[child_id] for child_id in entry.children]

    def count_children(self, ref: EntryRef) -> int:
        return len(self.get(ref).children)

    def find_child(self, parent: EntryRef, name: str) -> Entry:
        """
        Find a direct child by exact name.

        Args:
            parent: Folder to look in
            name: Exact child name (case-sensitive, no wildcards)

        Returns:
            The matching Entry

        Raises:
            NotFound: If no child has that name
        """
        parent_entry = self.get(parent)
        for child_id in parent_entry.children:
            child = self._entries[child_id]
            if child.name == name:
                return child
        raise NotFound(f"'{name}' not found in {self.full_path(parent_entry)}")

    def has_child(self, parent: EntryRef, name: str) -> bool:
        try:
            self.find_child(parent, name)
        except NotFound:
            return False
        return True

    def ancestors(self, ref: EntryRef) -> Iterator[Entry]:
        """Yield the entry itself, then each parent up to and including root."""
        entry: Optional[Entry] = self.get(ref)
        while entry is not None:
            yield entry
            entry = None if entry.parent is None else self._entries[entry.parent]

    def is_ancestor(self, candidate: EntryRef, ref: EntryRef) -> bool:
        """True if candidate is ref itself or lies on ref's parent chain."""
        candidate_id = self.get(candidate).id
        return any(entry.id == candidate_id for entry in self.ancestors(ref))

    def walk(self, ref: EntryRef = ROOT_ID) -> Iterator[Entry]:
        """Pre-order iteration over a subtree, children in stored order."""
        stack = [self.get(ref)]
        while stack:
            entry = stack.pop()
            yield entry
            stack.extend(self._entries[child_id] for child_id in reversed(entry.children))

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def full_path(self, ref: EntryRef) -> str:
        """
        Absolute path of an entry, root first.

        The root itself is "/"; its display name is not part of any path.
        """
        names = [entry.name for entry in self.ancestors(ref) if not entry.is_root]
        return SEPARATOR + SEPARATOR.join(reversed(names))

    def resolve_path(self, path: str, start: Optional[EntryRef] = None) -> Entry:
        """
        Resolve a '/'-separated path to an entry.

        Args:
            path: Absolute ("/docs/a.txt") or relative ("../docs") path
            start: Folder relative paths start from (defaults to root)

        Returns:
            The resolved Entry

        Raises:
            NotFound: If a segment does not exist
            NotADirectory: If a non-final segment is a file
        """
        if path.startswith(SEPARATOR) or start is None:
            current = self.root
        else:
            current = self.get(start)

        for segment in path.split(SEPARATOR):
            if segment in ("", "."):
                continue
            if current.is_file:
                raise NotADirectory(f"'{current.name}' is a file, not a directory")
            if segment == "..":
                if current.parent is not None:
                    current = self._entries[current.parent]
                continue
            current = self.find_child(current, segment)
        return current

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def validate_name(self, name: str) -> None:
        """Raise InvalidName unless name can be used as a child name."""
        if not name:
            raise InvalidName("Name must not be empty")
        if SEPARATOR in name:
            raise InvalidName(f"Name must not contain '{SEPARATOR}': {name!r}")
        if name in (".", ".."):
            raise InvalidName(f"'{name}' is reserved")
        if self.max_name_length is not None and len(name) > self.max_name_length:
            raise InvalidName(
                f"Name is {len(name)} characters long, maximum is {self.max_name_length}"
            )

    def _insert_sorted(self, parent: Entry, child: Entry) -> None:
        key = child.sort_key()
        position = len(parent.children)
        for index, sibling_id in enumerate(parent.children):
            if key < self._entries[sibling_id].sort_key():
                position = index
                break
        parent.children.insert(position, child.id)
        child.parent = parent.id

    def _unlink(self, entry: Entry) -> None:
        parent = self._entries[entry.parent]
        parent.children.remove(entry.id)
        entry.parent = None

    def create(self, parent: EntryRef, name: str, kind: "EntryKind | str") -> Entry:
        """
        Create a new file or folder under parent.

        Args:
            parent: Folder that will own the new entry
            name: Name, unique among parent's children
            kind: EntryKind.FILE or EntryKind.FOLDER

        Returns:
            The new Entry

        Raises:
            NotADirectory: If parent is a file
            NameCollision: If parent already has a child with this name
            InvalidName: If the name is empty, reserved, contains '/' or is too long
        """
        kind = EntryKind.parse(kind)
        with self.lock:
            parent_entry = self.get(parent)
            if parent_entry.is_file:
                raise NotADirectory(f"Cannot create '{name}' inside file '{parent_entry.name}'")
            self.validate_name(name)
            if self.has_child(parent_entry, name):
                raise NameCollision(f"A file or folder named '{name}' already exists")

            entry = Entry(id=next(self._ids), name=name, kind=kind)
            self._entries[entry.id] = entry
            self._insert_sorted(parent_entry, entry)

        logger.info(f"Created {kind.value} {self.full_path(entry)}")
        return entry

    def track(self, navigator) -> None:
        """Protect a navigator's current location in every later remove()."""
        self._navigators.append(navigator)

    def current_locations(self, current: Optional[EntryRef] = None) -> List[Entry]:
        """Locations remove() must keep alive: the explicit one plus every tracked navigator's."""
        locations = [] if current is None else [self.get(current)]
        locations.extend(navigator.current for navigator in self._navigators)
        return locations or [self.root]

    def remove(self, ref: EntryRef, current: Optional[EntryRef] = None) -> List[int]:
        """
        Remove an entry and, for a folder, its whole subtree.

        Args:
            ref: Entry to remove
            current: Extra location that must stay alive, checked together
                with the current location of every tracked navigator

        Returns:
            Ids of all released entries, the removed entry first

        Raises:
            CannotDeleteRoot: If ref is the root
            CannotDeleteCurrent: If ref is the current location
            CannotDeleteAncestorOfCurrent: If the current location lies inside ref
        """
        with self.lock:
            entry = self.get(ref)
            if entry.is_root:
                raise CannotDeleteRoot("Cannot delete root directory")
            for location in self.current_locations(current):
                if location.id == entry.id:
                    raise CannotDeleteCurrent(
                        "Cannot delete current directory, navigate to its parent first"
                    )
                if self.is_ancestor(entry, location):
                    raise CannotDeleteAncestorOfCurrent(
                        f"Cannot delete '{entry.name}': it contains the current directory"
                    )

            path = self.full_path(entry)
            released = [node.id for node in self.walk(entry)]
            self._unlink(entry)
            for entry_id in released:
                del self._entries[entry_id]

        logger.info(f"Deleted {path} ({len(released)} entries)")
        return released

    def move(self, source: EntryRef, destination: EntryRef) -> Entry:
        """
        Reparent an entry (and its subtree) under destination.

        The entry keeps its identity; only its parent and position change.

        Raises:
            CannotMoveRoot: If source is the root
            DestinationNotDirectory: If destination is a file
            CyclicMove: If destination is source or one of its descendants
            NameCollision: If destination already has a child with source's name
        """
        with self.lock:
            source_entry = self.get(source)
            dest_entry = self.get(destination)
            if source_entry.is_root:
                raise CannotMoveRoot("Cannot move root directory")
            if dest_entry.is_file:
                raise DestinationNotDirectory(f"Destination '{dest_entry.name}' is not a folder")
            if source_entry.is_folder and self.is_ancestor(source_entry, dest_entry):
                raise CyclicMove(
                    f"Cannot move folder '{source_entry.name}' into itself or its descendants"
                )
            if self.has_child(dest_entry, source_entry.name):
                raise NameCollision(
                    f"A file or folder named '{source_entry.name}' already exists in destination"
                )

            old_path = self.full_path(source_entry)
            self._unlink(source_entry)
            self._insert_sorted(dest_entry, source_entry)

        logger.info(f"Moved {old_path} -> {self.full_path(source_entry)}")
        return source_entry

    def clear(self) -> int:
        """Release every entry except the root. Returns the number released."""
        with self.lock:
            released = len(self._entries) - 1
            self._entries = {self.root.id: self.root}
            self.root.children.clear()
            for navigator in self._navigators:
                navigator.set_current(self.root)
        logger.info(f"Cleared tree ({released} entries released)")
        return released
