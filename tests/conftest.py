"""Shared pytest fixtures and utilities for dmc tests."""

from pathlib import Path
from typing import Generator

import pytest

from dmc.config.loader import save_config
from dmc.config.models import DMCConfig
from tests.helpers import AUTHOR, git, make_commit


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real user config and API key.

    Returns:
        The temporary XDG config home
    """
    xdg_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_home))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    # Stop git from discovering repositories above the test directory
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return xdg_home


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path for a configuration file that does not exist yet."""
    return tmp_path / "config" / "config.json"


@pytest.fixture
def saved_config(config_path: Path) -> Path:
    """Write a configuration with author and API key set.

    Returns:
        Path to the written configuration file
    """
    config = DMCConfig(author=AUTHOR, api_key="stored-key-123456")
    save_config(config, config_path)
    return config_path


# ============================================================================
# Git Fixtures
# ============================================================================


@pytest.fixture
def git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository for testing.

    The repository is initialized with:
    - Git config (user.name and user.email)
    - Two commits by test@example.com

    Yields:
        Path to the git repository
    """
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir(parents=True, exist_ok=True)

    git(repo_path, "init")
    git(repo_path, "config", "user.name", "Test User")
    git(repo_path, "config", "user.email", AUTHOR)
    git(repo_path, "config", "commit.gpgsign", "false")

    make_commit(repo_path, "README.md", "# Test Repository\n", "Initial commit")
    make_commit(repo_path, "src/app.py", "print('hi')\n", "Add app entry point")

    yield repo_path


@pytest.fixture
def plain_dir(tmp_path: Path) -> Path:
    """A directory that is not inside any git repository."""
    path = tmp_path / "plain"
    path.mkdir()
    return path
