"""Shared fixtures for explorer tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from explorer.filesystem import ExplorerSession, build_sample_session


@pytest.fixture
def session():
    """Fresh, empty session with fixed settings."""
    return ExplorerSession(root_name="root", max_name_length=None, search_strategy="dfs")


@pytest.fixture
def sample(session):
    """
    root
    ├── docs
    │   ├── a.txt
    │   └── b.txt
    └── readme.md
    """
    return build_sample_session(session)


@pytest.fixture
def tree(session):
    return session.tree
