"""Git repository operations."""

import sys
import threading
from pathlib import Path
from typing import IO, Optional

from git import Git, GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError, Repo

from easy_checkout.logging_config import get_logger
from easy_checkout.parsing import parse_git_version

logger = get_logger(__name__)

MIN_GIT_VERSION = (2, 22)


class GitError(Exception):
    """Git operation error."""


class NotARepository(GitError):
    """The path is not inside a git working tree."""


class UnsupportedToolVersion(GitError):
    """The installed git is too old."""

    def __init__(self, version: str) -> None:
        """Initialize error.

        Args:
            version: The offending version string, e.g. "2.21.0"
        """
        super().__init__(
            f"git version {version} is too old. Please upgrade to git "
            f"{MIN_GIT_VERSION[0]}.{MIN_GIT_VERSION[1]}.0 or later"
        )
        self.version = version


class QueryFailed(GitError):
    """A read-only git query exited with an error."""

    def __init__(self, command: str, stderr: str) -> None:
        """Initialize error.

        Args:
            command: The git command line that failed
            stderr: What git wrote to stderr
        """
        message = f"'{command}' failed"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class CheckoutFailed(GitError):
    """git checkout exited with an error."""

    def __init__(self, branch: str, stderr: str) -> None:
        """Initialize error.

        Args:
            branch: The branch that could not be checked out
            stderr: What git wrote to stderr, shown to the user verbatim
        """
        message = f"Failed to check out '{branch}'"
        if stderr:
            message += f":\n{stderr.strip()}"
        super().__init__(message)
        self.branch = branch
        self.stderr = stderr


class SelectionCancelled(Exception):
    """The user closed the branch finder without picking anything.

    Not a GitError: cancelling is a clean exit, not a failure.
    """


def check_git_version(git: Optional[Git] = None) -> tuple[int, int, int]:
    """Make sure the installed git supports ``git branch --show-current``.

    Raises:
        UnsupportedToolVersion: If git is older than 2.22
        GitError: If git is missing or its version cannot be parsed
    """
    git = git or Git()
    try:
        output = git.version()
    except GitCommandNotFound as err:
        raise GitError(f"Failed to run git: {err}") from err

    version = parse_git_version(output)
    if version is None:
        raise GitError(f"Could not parse git version from: {output}")

    logger.debug("Detected git %s", ".".join(str(part) for part in version))
    if version[:2] < MIN_GIT_VERSION:
        raise UnsupportedToolVersion(".".join(str(part) for part in version))
    return version


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Open the repository containing path.

        Raises:
            NotARepository: If path is not inside a git working tree
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as err:
            raise NotARepository(f"Not in a git repository: {path}") from err
        if self.repo.bare:
            raise NotARepository("Cannot operate on bare repository")

    def _run(self, *args: str) -> tuple[int, str, str]:
        """Run a git command and return (status, stdout, stderr) without raising."""
        logger.debug("Running git %s", " ".join(args))
        return self.repo.git.execute(
            [self.repo.git.GIT_PYTHON_GIT_EXECUTABLE, *args],
            with_extended_output=True,
            with_exceptions=False,
        )

    def _query(self, *args: str) -> str:
        """Run a read-only git command and return its stdout."""
        status, stdout, stderr = self._run(*args)
        if status != 0:
            if "not a git repository" in stderr:
                raise NotARepository(stderr.strip())
            raise QueryFailed("git " + " ".join(args), stderr)
        return stdout

    def get_current_branch_name(self) -> str:
        """Get current branch name, or an empty string on a detached HEAD."""
        return self._query("branch", "--show-current").strip()

    def list_local_branches(self) -> str:
        """Raw ``git branch`` output."""
        return self._query("branch")

    def list_remote_branches(self) -> str:
        """Raw ``git branch -r`` output."""
        return self._query("branch", "-r")

    def read_switch_history(self) -> str:
        """Raw reflog with absolute ISO timestamps."""
        return self._query("reflog", "show", "--date=iso")

    def local_branch_exists(self, name: str) -> bool:
        """Check whether refs/heads/<name> exists."""
        status, _, _ = self._run("rev-parse", "--verify", "--quiet", f"refs/heads/{name}")
        return status == 0

    def checkout(self, name: str) -> None:
        """Check out an existing local branch."""
        self._checkout(name, "checkout", name)

    def checkout_tracking(self, local_name: str, remote_ref: str) -> None:
        """Create local_name tracking remote_ref and check it out."""
        self._checkout(local_name, "checkout", "-b", local_name, remote_ref)

    def _checkout(self, branch: str, *args: str) -> None:
        """Run a checkout, streaming git's output to the terminal as it arrives.

        stderr is also kept so a failure can report git's message verbatim.
        """
        logger.debug("Running git %s", " ".join(args))
        process = self.repo.git.execute([self.repo.git.GIT_PYTHON_GIT_EXECUTABLE, *args], as_process=True)
        stdout_pump = threading.Thread(target=_pump, args=(process.stdout, sys.stdout), daemon=True)
        stdout_pump.start()
        stderr_lines = _pump(process.stderr, sys.stderr)
        stdout_pump.join()
        try:
            process.wait()
        except GitCommandError as err:
            raise CheckoutFailed(branch, "".join(stderr_lines)) from err


def _pump(source: IO[bytes], sink: IO[str]) -> list[str]:
    """Copy source to sink line by line and return the lines copied."""
    lines = []
    for raw in iter(source.readline, b""):
        line = raw.decode("utf-8", errors="replace")
        sink.write(line)
        sink.flush()
        lines.append(line)
    return lines
