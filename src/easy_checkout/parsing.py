"""Parsers for git's human-readable output.

Git's porcelain text is not a stable API, so everything that depends on its
exact shape lives here. The substrings below are the whole contract:

- ``checkout: moving`` marks a reflog entry for a branch switch
- ``HEAD@{`` opens the ``--date=iso`` timestamp of a reflog entry
- ``to `` precedes the destination branch (last occurrence on the line)
- ``HEAD ->`` marks a symbolic alias in ``git branch -r``
"""

import re
from datetime import datetime
from typing import Optional

SWITCH_MARKER = "checkout: moving"
TIMESTAMP_OPEN = "HEAD@{"
TIMESTAMP_CLOSE = "}"
DESTINATION_MARKER = "to "
REMOTE_ALIAS_MARKER = "HEAD ->"
LOCAL_MARKER_COLUMNS = ("* ", "+ ", "  ")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


def parse_reflog_timestamp(line: str) -> Optional[datetime]:
    """Extract the ISO timestamp from a ``HEAD@{...}`` reflog selector.

    Returns None when the selector is missing or the timestamp is malformed.
    """
    _, found, rest = line.partition(TIMESTAMP_OPEN)
    if not found:
        return None
    raw, found, _ = rest.partition(TIMESTAMP_CLOSE)
    if not found:
        return None
    try:
        return datetime.strptime(raw.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_switch_history(text: str) -> dict[str, datetime]:
    """Map each branch to the latest time it was switched to.

    Args:
        text: Output of ``git reflog show --date=iso``

    Returns:
        Branch name to timezone-aware timestamp. Branches never switched to
        inside the reflog window are absent.
    """
    history: dict[str, datetime] = {}
    for line in text.splitlines():
        if SWITCH_MARKER not in line:
            continue

        timestamp = parse_reflog_timestamp(line)
        if timestamp is None:
            continue

        idx = line.rfind(DESTINATION_MARKER)
        if idx == -1:
            continue
        branch_name = line[idx + len(DESTINATION_MARKER) :].strip()
        if not branch_name:
            continue

        # Reflog is newest-first, but never rely on line order
        previous = history.get(branch_name)
        if previous is None or timestamp > previous:
            history[branch_name] = timestamp
    return history


def parse_local_branches(text: str) -> list[str]:
    """Parse ``git branch`` output into branch names, in listed order."""
    names = []
    for line in text.splitlines():
        # Two-character marker column: current ("* "), other worktree ("+ ")
        if line[:2] in LOCAL_MARKER_COLUMNS:
            line = line[2:]
        name = line.strip()
        if not name:
            continue
        # "(HEAD detached at 1a2b3c4)" is not a branch
        if name.startswith("("):
            continue
        names.append(name)
    return names


def parse_remote_branches(text: str) -> list[tuple[str, str]]:
    """Parse ``git branch -r`` output into ``(remote, short_name)`` pairs."""
    pairs = []
    for line in text.splitlines():
        name = line.strip()
        if not name or REMOTE_ALIAS_MARKER in name:
            continue
        remote, sep, short_name = name.partition("/")
        if not sep or not remote or not short_name:
            continue
        pairs.append((remote, short_name))
    return pairs


def parse_git_version(text: str) -> Optional[tuple[int, int, int]]:
    """Find the first ``MAJOR.MINOR[.PATCH]`` token in ``git version`` output."""
    match = _VERSION_RE.search(text)
    if not match:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)
