"""Command line interface for easy-checkout."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from easy_checkout import __version__
from easy_checkout.branches import collect_branches, rank_branches
from easy_checkout.checkout import dispatch
from easy_checkout.finder import select_branch
from easy_checkout.git import GitError, GitRepo, SelectionCancelled, check_git_version
from easy_checkout.logging_config import get_logger, setup_logging

app = typer.Typer(help="Check out a recently used git branch with fuzzy search", add_completion=False)
err_console = Console(stderr=True)
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print the version and exit before touching any repository."""
    if value:
        print(f"easy-checkout {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    local_only: Annotated[bool, typer.Option("--local-only", help="Hide remote-tracking branches")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show verbose output")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Show git commands and parse details")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Print version information"),
    ] = None,
) -> None:
    """Pick a branch, most recently used first, and check it out."""
    setup_logging(verbose=verbose, debug=debug)

    try:
        check_git_version()
        repo = GitRepo(path)
        branches = rank_branches(collect_branches(repo, include_remote=not local_only))
    except GitError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    try:
        index = select_branch(branches)
    except SelectionCancelled:
        logger.info("Selection cancelled, nothing checked out")
        raise typer.Exit() from None

    try:
        dispatch(repo, branches[index])
    except GitError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
