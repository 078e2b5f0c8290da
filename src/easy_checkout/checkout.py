"""Check out the branch the user picked."""

from easy_checkout.branches import BranchRecord
from easy_checkout.git import GitRepo
from easy_checkout.logging_config import get_logger

logger = get_logger(__name__)


def dispatch(repo: GitRepo, record: BranchRecord) -> str:
    """Check out record, creating a tracking branch for remote-only picks.

    Returns:
        The local branch name that is now checked out

    Raises:
        CheckoutFailed: If git refuses the checkout (dirty tree, name clash, ...)
    """
    if not record.is_remote:
        logger.info("Checking out %s", record.name)
        repo.checkout(record.name)
        return record.name

    local_name = record.short_name
    if repo.local_branch_exists(local_name):
        logger.info("Local branch %s already exists, checking it out", local_name)
        repo.checkout(local_name)
        return local_name

    logger.info("Creating %s to track %s", local_name, record.name)
    repo.checkout_tracking(local_name, record.name)
    return local_name
