"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo

# Dated branch switches; reflog entries take their time from the committer date
SWITCHES = [
    ("feature/alpha", "2024-01-10 09:00:00 +0000"),
    ("feature/beta", "2024-01-11 09:00:00 +0000"),
    ("main", "2024-01-12 09:00:00 +0000"),
    ("feature/alpha", "2024-01-13 09:00:00 +0000"),
]


def switch(repo: Repo, name: str, when: str) -> None:
    """Check out name with a fixed reflog timestamp."""
    repo.git.checkout(name, env={"GIT_COMMITTER_DATE": when})


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    The local repo has branches main, feature/alpha, feature/beta and
    feature/gamma; origin additionally has feature/remote. The reflog holds
    the dated switches in SWITCHES, leaving feature/alpha checked out.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    # Set up git config
    author = Actor("Test User", "test@example.com")
    local_repo.config_writer().set_value("user", "name", author.name).release()
    local_repo.config_writer().set_value("user", "email", author.email).release()

    # Start on main without a checkout entry in the reflog
    local_repo.git.symbolic_ref("HEAD", "refs/heads/main")

    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author)

    for name in ("feature/alpha", "feature/beta", "feature/gamma"):
        local_repo.create_head(name)

    # main moves ahead so switching to it touches README.md
    readme.write_text("# Test Repository\n\nUpdated on main")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Update README", author=author)

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")

    # Create a remote-only branch
    local_repo.create_head("feature/remote", "main")
    origin.push("feature/remote")
    local_repo.delete_head("feature/remote")
    origin.fetch()
    local_repo.git.remote("set-head", "origin", "main")

    for name, when in SWITCHES:
        switch(local_repo, name, when)

    yield local_path, remote_path

    # Cleanup is handled by pytest's tmp_path fixture


@pytest.fixture
def test_repo(test_env: tuple[Path, Path]) -> Path:
    """Path of the local repository."""
    local_path, _ = test_env
    return local_path
