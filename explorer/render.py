"""Text rendering of trees, listings and search results."""

from typing import Dict, List, Optional

from .filesystem import Entry, EntryKind, SearchHit, TreeStore

FOLDER_ICON = "📁"
FILE_ICON = "📄"
CURRENT_MARKER = " [Current]"


def icon_for(kind: EntryKind) -> str:
    return FILE_ICON if kind is EntryKind.FILE else FOLDER_ICON


def render_tree(
    tree: TreeStore,
    start: Optional[Entry] = None,
    current: Optional[Entry] = None,
    max_depth: Optional[int] = None,
) -> List[str]:
    """
    Draw a subtree with box-drawing connectors.

    Args:
        tree: Tree to draw
        start: Top entry (defaults to root, shown with its display name)
        current: Folder to mark as the current location
        max_depth: Stop descending below this depth (None = everything)

    Returns:
        List of formatted tree lines
    """
    start = tree.root if start is None else start
    current_id = None if current is None else current.id
    lines = [_label(start, current_id)]

    # Explicit stack of (entry, prefix, is_last, depth) frames; deep trees must not recurse
    stack = _child_frames(tree, start, "", 1)
    while stack:
        entry, prefix, is_last, depth = stack.pop()
        if max_depth is not None and depth > max_depth:
            continue
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(entry, current_id)}")
        if entry.is_folder:
            extension = "    " if is_last else "│   "
            stack.extend(_child_frames(tree, entry, prefix + extension, depth + 1))
    return lines


def _label(entry: Entry, current_id: Optional[int]) -> str:
    label = f"{icon_for(entry.kind)} {entry.name}"
    if entry.id == current_id:
        label += CURRENT_MARKER
    return label


def _child_frames(tree, entry, prefix, depth):
    """Frames for entry's children, reversed so the first child is popped first."""
    children = tree.children(entry)
    frames = [
        (child, prefix, i == len(children) - 1, depth)
        for i, child in enumerate(children)
    ]
    frames.reverse()
    return frames


def render_listing(tree: TreeStore, folder: Entry) -> List[str]:
    """One line per direct child; folders show their entry count."""
    lines = [f"{FOLDER_ICON} Contents of {tree.full_path(folder)}:"]
    children = tree.children(folder)
    if not children:
        lines.append("   (empty)")
    for child in children:
        if child.is_folder:
            lines.append(f"   {FOLDER_ICON} {child.name}/ ({tree.count_children(child)} entries)")
        else:
            lines.append(f"   {FILE_ICON} {child.name}")
    return lines


def render_search_results(query: str, hits: List[SearchHit], strategy: str = "dfs") -> List[str]:
    lines = [f"🔍 {strategy.upper()} search for '{query}':"]
    if not hits:
        lines.append("   No matches found.")
        return lines
    for hit in hits:
        lines.append(f"  {icon_for(hit.kind)} {hit.path}")
    lines.append(f"   {len(hits)} match(es)")
    return lines


def tree_to_rows(
    tree: TreeStore,
    start: Optional[Entry] = None,
    max_depth: Optional[int] = None,
) -> List[Dict]:
    """
    Flat pre-order view of a subtree (used by the HTTP API).

    Each row carries its parent id and its depth below start, so clients can
    rebuild the nesting without the payload itself being nested.
    """
    start = tree.root if start is None else start
    rows = []
    stack = [(start, tree.full_path(start), 0)]
    while stack:
        entry, path, depth = stack.pop()
        rows.append({
            "id": entry.id,
            "name": entry.name,
            "kind": entry.kind.value,
            "path": path,
            "parent": entry.parent,
            "depth": depth,
        })
        if max_depth is not None and depth >= max_depth:
            continue
        base = path.rstrip("/")
        for child in reversed(tree.children(entry)):
            stack.append((child, f"{base}/{child.name}", depth + 1))
    return rows
