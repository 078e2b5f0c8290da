"""Branch records and recency ranking."""

from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Iterable, Mapping, Optional

from easy_checkout.git import GitRepo
from easy_checkout.logging_config import get_logger
from easy_checkout.parsing import parse_local_branches, parse_remote_branches, parse_switch_history

logger = get_logger(__name__)


@dataclass(frozen=True)
class BranchRecord:
    """A branch that can be checked out.

    Remote-only branches are named ``<remote>/<short_name>``.
    ``last_usage`` is None when no switch to the branch is in the reflog.
    """

    name: str
    last_usage: Optional[datetime] = None
    is_current: bool = False
    is_remote: bool = False

    @property
    def remote(self) -> Optional[str]:
        if not self.is_remote:
            return None
        return self.name.split("/", 1)[0]

    @property
    def short_name(self) -> str:
        if not self.is_remote:
            return self.name
        return self.name.split("/", 1)[1]


def build_branch_set(
    local_names: Iterable[str],
    remote_pairs: Iterable[tuple[str, str]],
    current: str,
    history: Mapping[str, datetime],
) -> list[BranchRecord]:
    """Merge local and remote branches into one list of records.

    Local branches come first in listed order, then remote branches that have
    no local branch of the same short name. Usage times are looked up by exact
    name, so a remote branch only gets one if the reflog switched to
    ``remote/short_name`` literally.
    """
    records: list[BranchRecord] = []
    seen: set[str] = set()

    for name in local_names:
        if name in seen:
            continue
        seen.add(name)
        records.append(
            BranchRecord(
                name=name,
                last_usage=history.get(name),
                is_current=bool(current) and name == current,
            )
        )

    local = set(seen)
    for remote, short_name in remote_pairs:
        full_name = f"{remote}/{short_name}"
        # Skip if we already have this branch locally
        if short_name in local or full_name in seen:
            continue
        seen.add(full_name)
        records.append(BranchRecord(name=full_name, last_usage=history.get(full_name), is_remote=True))

    return records


def compare_by_recency(a: BranchRecord, b: BranchRecord) -> int:
    """Three-way comparison: used branches first, most recent first.

    Returns a negative number if a sorts before b, positive if after, and 0
    when they tie (both never used, or used at the same instant).
    """
    if a.last_usage is None and b.last_usage is None:
        return 0
    if a.last_usage is None:
        return 1
    if b.last_usage is None:
        return -1
    if a.last_usage > b.last_usage:
        return -1
    if a.last_usage < b.last_usage:
        return 1
    return 0


def rank_branches(records: Iterable[BranchRecord]) -> list[BranchRecord]:
    """Sort records by recency. Ties keep their original order."""
    return sorted(records, key=cmp_to_key(compare_by_recency))


def collect_branches(repo: GitRepo, include_remote: bool = True) -> list[BranchRecord]:
    """Query git for branches and reflog and return the unranked records."""
    current = repo.get_current_branch_name()
    if not current:
        logger.info("HEAD is detached, no branch is current")

    local_names = parse_local_branches(repo.list_local_branches())
    remote_pairs = parse_remote_branches(repo.list_remote_branches()) if include_remote else []
    history = parse_switch_history(repo.read_switch_history())
    logger.debug("Found switch times for %d branches in the reflog", len(history))

    records = build_branch_set(local_names, remote_pairs, current, history)
    logger.info(
        "Collected %d local and %d remote branches",
        sum(1 for record in records if not record.is_remote),
        sum(1 for record in records if record.is_remote),
    )
    return records
