"""Entry and search result types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class EntryKind(str, Enum):
    """Kind of a tree entry."""

    FOLDER = "folder"
    FILE = "file"

    @classmethod
    def parse(cls, value: "str | EntryKind") -> "EntryKind":
        """Accept 'file', 'folder' (or 'dir'/'directory') in any case."""
        if isinstance(value, EntryKind):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("dir", "directory"):
            normalized = "folder"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown entry kind: {value!r} (expected 'file' or 'folder')")


@dataclass(eq=False)
class Entry:
    """One node in the tree.

    Entries live in the arena of a TreeStore. ``parent`` and ``children`` hold
    arena ids, not Entry objects, so the parent link never owns anything.
    """

    id: int
    name: str
    kind: EntryKind
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def sort_key(self) -> tuple:
        # Folders before files, then by name
        return (self.is_file, self.name)


@dataclass(frozen=True)
class SearchHit:
    """A single search match."""

    path: str
    kind: EntryKind
    entry_id: int
    depth: int = 0
