"""Tests for change-directory semantics and the session context."""

import pytest

from explorer.filesystem import (
    AlreadyAtRoot,
    CannotDeleteAncestorOfCurrent,
    CannotDeleteCurrent,
    EntryKind,
    ExplorerSession,
    NotADirectory,
    NotFound,
)


def test_starts_at_root(session):
    assert session.current is session.root
    assert session.pwd() == "/"


def test_cd_into_child_and_back(sample):
    sample.cd("docs")
    assert sample.pwd() == "/docs"

    sample.cd("..")
    assert sample.current is sample.root


def test_cd_parent_at_root_fails(session):
    with pytest.raises(AlreadyAtRoot):
        session.navigator.change_directory("..")
    assert session.current is session.root


def test_cd_slash_always_returns_to_root(sample):
    sample.mkdir("deep", parent="/docs")
    sample.cd("docs")
    sample.cd("deep")

    sample.cd("/")
    assert sample.pwd() == "/"

    sample.cd("/")
    assert sample.pwd() == "/"


def test_cd_missing_child(sample):
    with pytest.raises(NotFound):
        sample.cd("nowhere")
    assert sample.pwd() == "/"


def test_cd_into_file(sample):
    with pytest.raises(NotADirectory):
        sample.cd("readme.md")
    assert sample.pwd() == "/"


def test_cd_only_looks_at_direct_children(sample):
    sample.mkdir("inner", parent="/docs")
    with pytest.raises(NotFound):
        sample.navigator.change_directory("inner")


def test_cd_with_path(sample):
    sample.mkdir("inner", parent="/docs")

    sample.cd("/docs/inner")
    assert sample.pwd() == "/docs/inner"

    sample.cd("../..")
    assert sample.pwd() == "/"


def test_create_defaults_to_current_location(sample):
    sample.cd("docs")
    entry = sample.touch("c.txt")

    assert sample.tree.full_path(entry) == "/docs/c.txt"
    assert [e.name for e in sample.list()] == ["a.txt", "b.txt", "c.txt"]


def test_session_remove_protects_current_and_ancestors(sample):
    sample.mkdir("inner", parent="/docs")
    sample.cd("/docs/inner")

    with pytest.raises(CannotDeleteCurrent):
        sample.remove(".")
    with pytest.raises(CannotDeleteAncestorOfCurrent):
        sample.remove("/docs")

    sample.cd("/")
    sample.remove("docs")
    assert [e.name for e in sample.list()] == ["readme.md"]


def test_scenario_move_readme_into_docs(sample):
    sample.move("readme.md", "docs")

    docs = sample.tree.find_child(sample.root, "docs")
    assert sample.tree.find_child(docs, "readme.md").is_file


def test_reset_returns_to_root(sample):
    sample.cd("docs")

    assert sample.reset() == 4
    assert sample.current is sample.root
    assert sample.list() == []


def test_sessions_are_independent():
    first = ExplorerSession(search_strategy="dfs")
    second = ExplorerSession(search_strategy="dfs")

    first.mkdir("only-here")

    assert [e.name for e in first.list()] == ["only-here"]
    assert second.list() == []


def test_unknown_default_strategy_fails_at_startup():
    with pytest.raises(ValueError):
        ExplorerSession(search_strategy="random")


def test_navigator_set_current_rejects_files(sample):
    readme = sample.tree.find_child(sample.root, "readme.md")
    with pytest.raises(NotADirectory):
        sample.navigator.set_current(readme)


def test_create_kind_string(session):
    assert session.create("src", "folder").kind is EntryKind.FOLDER
