"""Tests for the tree store: creation, ordering, removal, moves and paths."""

import logging

import pytest

from explorer.filesystem import (
    CannotDeleteAncestorOfCurrent,
    CannotDeleteCurrent,
    CannotDeleteRoot,
    CannotMoveRoot,
    CyclicMove,
    DestinationNotDirectory,
    EntryKind,
    FileSystemError,
    InvalidName,
    NameCollision,
    NotADirectory,
    NotFound,
    TreeStore,
)


def names(tree, folder):
    return [child.name for child in tree.children(folder)]


def snapshot(tree):
    """Structure of the whole tree as (path, kind) pairs in pre-order."""
    return [(tree.full_path(entry), entry.kind) for entry in tree.walk()]


# ============================================================================
# Creation and lookup
# ============================================================================

def test_root_is_a_folder_without_parent(tree):
    assert tree.root.is_folder
    assert tree.root.is_root
    assert tree.full_path(tree.root) == "/"
    assert len(tree) == 1


@pytest.mark.parametrize("kind", [EntryKind.FILE, EntryKind.FOLDER])
def test_create_then_find_child(tree, kind):
    created = tree.create(tree.root, "thing", kind)

    found = tree.find_child(tree.root, "thing")

    assert found is created
    assert found.name == "thing"
    assert found.kind is kind
    assert tree.parent_of(found) is tree.root


def test_create_accepts_kind_strings(tree):
    assert tree.create(tree.root, "src", "folder").is_folder
    assert tree.create(tree.root, "setup.py", "file").is_file
    assert tree.create(tree.root, "lib", "DIR").is_folder


def test_create_rejects_unknown_kind(tree):
    with pytest.raises(ValueError):
        tree.create(tree.root, "x", "symlink")


def test_create_inside_file_fails(tree):
    note = tree.create(tree.root, "note.txt", EntryKind.FILE)

    with pytest.raises(NotADirectory):
        tree.create(note, "inner", EntryKind.FILE)
    assert tree.count_children(note) == 0


def test_create_name_collision_is_case_sensitive(tree):
    tree.create(tree.root, "Docs", EntryKind.FOLDER)

    with pytest.raises(NameCollision):
        tree.create(tree.root, "Docs", EntryKind.FILE)
    tree.create(tree.root, "docs", EntryKind.FOLDER)

    assert names(tree, tree.root) == ["Docs", "docs"]


@pytest.mark.parametrize("bad_name", ["", ".", "..", "a/b", "/"])
def test_create_rejects_invalid_names(tree, bad_name):
    with pytest.raises(InvalidName):
        tree.create(tree.root, bad_name, EntryKind.FILE)
    assert len(tree) == 1


def test_max_name_length_is_enforced_when_configured():
    tree = TreeStore(max_name_length=5)

    tree.create(tree.root, "12345", EntryKind.FILE)
    with pytest.raises(InvalidName):
        tree.create(tree.root, "123456", EntryKind.FILE)


def test_names_are_unbounded_by_default(tree):
    long_name = "x" * 500
    assert tree.create(tree.root, long_name, EntryKind.FILE).name == long_name


def test_find_child_does_not_recurse(sample):
    tree = sample.tree
    with pytest.raises(NotFound):
        tree.find_child(tree.root, "a.txt")


def test_errors_share_a_base_with_kind(tree):
    with pytest.raises(FileSystemError) as exc_info:
        tree.find_child(tree.root, "missing")

    assert exc_info.value.kind == "NotFound"
    assert exc_info.value.to_dict()["error"] == "NotFound"


def test_ids_are_not_reused(tree):
    first = tree.create(tree.root, "a", EntryKind.FILE)
    tree.remove(first)
    second = tree.create(tree.root, "a", EntryKind.FILE)

    assert second.id != first.id
    with pytest.raises(NotFound):
        tree.get(first.id)


# ============================================================================
# Ordering
# ============================================================================

def test_children_are_folders_first_then_by_name(tree):
    for name, kind in [
        ("zeta.txt", EntryKind.FILE),
        ("beta", EntryKind.FOLDER),
        ("alpha.txt", EntryKind.FILE),
        ("Zulu", EntryKind.FOLDER),
        ("alpha", EntryKind.FOLDER),
        ("Main.c", EntryKind.FILE),
    ]:
        tree.create(tree.root, name, kind)

    assert names(tree, tree.root) == ["Zulu", "alpha", "beta", "Main.c", "alpha.txt", "zeta.txt"]


def test_ordering_holds_after_moves(tree):
    inbox = tree.create(tree.root, "inbox", EntryKind.FOLDER)
    target = tree.create(tree.root, "target", EntryKind.FOLDER)
    tree.create(target, "m.txt", EntryKind.FILE)
    tree.create(target, "k", EntryKind.FOLDER)
    b = tree.create(inbox, "b.txt", EntryKind.FILE)
    a = tree.create(inbox, "a", EntryKind.FOLDER)
    z = tree.create(inbox, "z", EntryKind.FOLDER)

    for entry in (b, a, z):
        tree.move(entry, target)

    children = tree.children(target)
    kinds = [child.kind for child in children]
    assert kinds == sorted(kinds, key=lambda kind: kind is EntryKind.FILE)
    assert names(tree, target) == ["a", "k", "z", "b.txt", "m.txt"]


# ============================================================================
# Removal
# ============================================================================

def test_remove_file(sample):
    tree = sample.tree
    readme = tree.find_child(tree.root, "readme.md")

    released = tree.remove(readme)

    assert released == [readme.id]
    assert names(tree, tree.root) == ["docs"]


def test_remove_folder_removes_every_descendant(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    nested = tree.create(docs, "nested", EntryKind.FOLDER)
    deep = tree.create(nested, "deep.txt", EntryKind.FILE)

    released = tree.remove(docs)

    assert released[0] == docs.id
    assert len(released) == 5
    assert deep.id not in tree
    assert [entry.name for entry in tree.walk()] == ["root", "readme.md"]
    for name in ("docs", "a.txt", "b.txt", "nested", "deep.txt"):
        assert all(entry.name != name for entry in tree.walk())


def test_remove_root_fails_without_mutation(sample):
    tree = sample.tree
    before = snapshot(tree)

    with pytest.raises(CannotDeleteRoot):
        tree.remove(tree.root)
    assert snapshot(tree) == before


def test_remove_current_fails_without_mutation(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    before = snapshot(tree)

    with pytest.raises(CannotDeleteCurrent):
        tree.remove(docs, current=docs)
    assert snapshot(tree) == before


def test_remove_ancestor_of_current_fails_without_mutation(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    inner = tree.create(docs, "inner", EntryKind.FOLDER)
    before = snapshot(tree)

    with pytest.raises(CannotDeleteAncestorOfCurrent):
        tree.remove(docs, current=inner)
    assert snapshot(tree) == before


def test_remove_sibling_of_current_is_allowed(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    other = tree.create(tree.root, "other", EntryKind.FOLDER)

    tree.remove(other, current=docs)

    assert names(tree, tree.root) == ["docs", "readme.md"]


def test_clear_keeps_only_root(sample):
    tree = sample.tree

    assert tree.clear() == 4
    assert len(tree) == 1
    assert tree.children(tree.root) == []


# ============================================================================
# Moves
# ============================================================================

def test_move_keeps_identity(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    readme = tree.find_child(tree.root, "readme.md")

    moved = tree.move(readme, docs)

    assert moved is readme
    assert tree.find_child(docs, "readme.md") is readme
    assert tree.full_path(readme) == "/docs/readme.md"
    with pytest.raises(NotFound):
        tree.find_child(tree.root, "readme.md")


def test_move_folder_carries_subtree(sample):
    tree = sample.tree
    archive = tree.create(tree.root, "archive", EntryKind.FOLDER)
    docs = tree.find_child(tree.root, "docs")

    tree.move(docs, archive)

    a_txt = tree.resolve_path("/archive/docs/a.txt")
    assert a_txt.is_file
    assert tree.count_children(docs) == 2


def test_move_root_fails(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    with pytest.raises(CannotMoveRoot):
        tree.move(tree.root, docs)


def test_move_into_file_fails(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    readme = tree.find_child(tree.root, "readme.md")
    before = snapshot(tree)

    with pytest.raises(DestinationNotDirectory):
        tree.move(docs, readme)
    assert snapshot(tree) == before


@pytest.mark.parametrize("into", ["self", "child", "grandchild"])
def test_move_folder_into_itself_or_descendant_fails(tree, into):
    folder_a = tree.create(tree.root, "A", EntryKind.FOLDER)
    child = tree.create(folder_a, "B", EntryKind.FOLDER)
    grandchild = tree.create(child, "C", EntryKind.FOLDER)
    destination = {"self": folder_a, "child": child, "grandchild": grandchild}[into]
    before = snapshot(tree)

    with pytest.raises(CyclicMove):
        tree.move(folder_a, destination)
    assert snapshot(tree) == before


def test_move_name_collision(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    tree.create(docs, "readme.md", EntryKind.FILE)
    readme = tree.find_child(tree.root, "readme.md")
    before = snapshot(tree)

    with pytest.raises(NameCollision):
        tree.move(readme, docs)
    assert snapshot(tree) == before


# ============================================================================
# Paths
# ============================================================================

def test_full_path_round_trips_through_find_child(tree):
    level1 = tree.create(tree.root, "projects", EntryKind.FOLDER)
    level2 = tree.create(level1, "2025", EntryKind.FOLDER)
    leaf = tree.create(level2, "plan.md", EntryKind.FILE)

    path = tree.full_path(leaf)
    assert path == "/projects/2025/plan.md"

    entry = tree.root
    for segment in path.strip("/").split("/"):
        entry = tree.find_child(entry, segment)
    assert entry is leaf


def test_full_path_ignores_root_display_name():
    tree = TreeStore(root_name="home")
    docs = tree.create(tree.root, "docs", EntryKind.FOLDER)
    assert tree.full_path(docs) == "/docs"


def test_resolve_relative_and_parent_segments(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")

    assert tree.resolve_path("a.txt", start=docs).name == "a.txt"
    assert tree.resolve_path("../readme.md", start=docs).name == "readme.md"
    assert tree.resolve_path("./../docs/./b.txt", start=docs).name == "b.txt"
    assert tree.resolve_path("/..") is tree.root
    assert tree.resolve_path("/") is tree.root


def test_resolve_through_file_fails(sample):
    with pytest.raises(NotADirectory):
        sample.tree.resolve_path("/readme.md/x")


def test_resolve_missing_segment_fails(sample):
    with pytest.raises(NotFound):
        sample.tree.resolve_path("/docs/c.txt")


def test_mutations_are_logged(tree, caplog):
    with caplog.at_level(logging.INFO, logger="explorer.filesystem.tree"):
        docs = tree.create(tree.root, "docs", EntryKind.FOLDER)
        tree.remove(docs)

    messages = [record.getMessage() for record in caplog.records]
    assert "Created folder /docs" in messages
    assert any(message.startswith("Deleted /docs") for message in messages)


# ============================================================================
# Navigator-aware removal
# ============================================================================

def test_store_remove_refuses_the_navigators_current_folder(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    sample.cd("docs")
    before = snapshot(tree)

    with pytest.raises(CannotDeleteCurrent):
        tree.remove(docs)
    assert snapshot(tree) == before
    assert sample.pwd() == "/docs"


def test_store_remove_refuses_ancestors_of_the_navigators_folder(sample):
    tree = sample.tree
    docs = tree.find_child(tree.root, "docs")
    sample.mkdir("inner", parent="/docs")
    sample.cd("/docs/inner")

    with pytest.raises(CannotDeleteAncestorOfCurrent):
        tree.remove(docs)
    assert sample.pwd() == "/docs/inner"


def test_store_remove_checks_every_session_on_the_tree(sample):
    from explorer.filesystem import Navigator

    tree = sample.tree
    other = Navigator(tree)
    other.change_directory("docs")

    with pytest.raises(CannotDeleteCurrent):
        tree.remove(tree.find_child(tree.root, "docs"))


def test_clear_moves_navigators_back_to_root(sample):
    sample.cd("docs")

    sample.tree.clear()

    assert sample.current is sample.root
    assert sample.pwd() == "/"


def test_max_name_length_none_means_unbounded(monkeypatch):
    from explorer.filesystem import ExplorerSession
    from explorer.settings import settings

    monkeypatch.setattr(settings.explorer, "max_name_length", 3)

    limited = ExplorerSession()
    unbounded = ExplorerSession(max_name_length=None)

    with pytest.raises(InvalidName):
        limited.touch("long-name.txt")
    assert unbounded.touch("long-name.txt").name == "long-name.txt"
