"""Command line interface for svn-cherrypick."""

import sys
from typing import List, Optional, Tuple

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.measure import Measurement
from rich.table import Table

from svn_cherrypick import __version__
from svn_cherrypick.core.errors import SvnCherrypickError, ToolNotFoundError
from svn_cherrypick.core.log_parser import DEFAULT_MESSAGE_LIMIT, parse_mergeinfo_log
from svn_cherrypick.core.selector import classify_arguments, resolve_source, select
from svn_cherrypick.core.svn_client import SvnClient
from svn_cherrypick.models.commit import CommitRecord
from svn_cherrypick.models.config import DateMode, RunConfig

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def build_config(
    source: str,
    filters: Tuple[str, ...],
    author: Optional[str] = None,
    grep: Optional[str] = None,
    date_mode: str = DateMode.LOCAL.value,
    message_limit: int = DEFAULT_MESSAGE_LIMIT,
    svn_binary: str = "svn",
    target: str = ".",
    dry_run: bool = False,
) -> RunConfig:
    """Turn raw command line values into a RunConfig."""
    revisions, tickets = classify_arguments(filters)
    return RunConfig(
        source=resolve_source(source),
        revisions=revisions,
        tickets=tickets,
        author=author,
        grep=grep,
        date_mode=DateMode(date_mode),
        message_limit=message_limit,
        svn_binary=svn_binary,
        target=target,
        dry_run=dry_run,
    )


def render_commits(commits: List[CommitRecord]) -> None:
    """Print commits as a table; print nothing at all for an empty list."""
    if not commits:
        return

    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("Revision", style="cyan", no_wrap=True)
    table.add_column("Author", style="green", no_wrap=True)
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Message", no_wrap=True)

    for commit in commits:
        table.add_row(
            commit.revision,
            escape(commit.author),
            commit.date,
            escape(commit.message),
        )

    # One line per commit, even on a pipe where rich assumes 80 columns
    unbounded = console.options.update(max_width=10**6)
    needed = Measurement.get(console, unbounded, table).maximum
    if console.width < needed:
        console.width = needed
    console.print(table)


def cherry_pick(client: SvnClient, commits: List[CommitRecord], config: RunConfig) -> None:
    """Merge each commit in order, stopping at the first failed merge."""
    for commit in commits:
        source = commit.source or config.source
        if config.dry_run:
            console.print(f"Would merge r{commit.revision} from {escape(source)}")
            continue
        console.print(f"Cherrypicking r{commit.revision} from {escape(source)}...")
        client.merge(commit.revision, source, config.target)


def run(config: RunConfig, client: SvnClient) -> None:
    """List eligible revisions or merge the selected ones."""
    output = client.eligible_log(config.source, config.target)
    commits = parse_mergeinfo_log(
        output,
        source=config.source,
        date_mode=config.date_mode,
        message_limit=config.message_limit,
    )
    selection = select(commits, config)

    if not config.cherry_picking:
        if not selection.listed:
            logger.info(f"No eligible revisions from {config.source}")
        render_commits(selection.listed)
        return

    for revision in selection.not_eligible_revisions:
        err_console.print(
            f"[yellow]r{revision} is not eligible for merging from {escape(config.source)}[/yellow]"
        )
    for revision in selection.filtered_revisions:
        err_console.print(f"[yellow]r{revision} is eligible but excluded by the filters[/yellow]")
    cherry_pick(client, selection.cherry_picks, config)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", prog_name="svn-cherrypick")
@click.argument("source")
@click.argument("filters", nargs=-1)
@click.option("--author", "-a", help="Only revisions committed by this user")
@click.option("--grep", "-g", help="Only revisions whose message contains this text")
@click.option(
    "--date-mode",
    type=click.Choice([mode.value for mode in DateMode]),
    default=DateMode.LOCAL.value,
    envvar="SVN_CHERRYPICK_DATE_MODE",
    show_default=True,
    help="'local' converts timestamps to local time, 'raw' shows the date as logged",
)
@click.option(
    "--message-limit",
    type=click.IntRange(min=4),
    default=DEFAULT_MESSAGE_LIMIT,
    envvar="SVN_CHERRYPICK_MESSAGE_LIMIT",
    show_default=True,
    help="Truncate messages longer than this",
)
@click.option(
    "--svn",
    "svn_binary",
    default="svn",
    envvar="SVN_CHERRYPICK_SVN",
    show_default=True,
    help="svn executable to run",
)
@click.option("--target", default=".", show_default=True, help="Working copy to merge into")
@click.option("--dry-run", is_flag=True, help="Show the merges without running them")
@click.option("--verbose", "-v", is_flag=True, help="Log svn commands and parser decisions")
def main(
    source: str,
    filters: Tuple[str, ...],
    author: Optional[str],
    grep: Optional[str],
    date_mode: str,
    message_limit: int,
    svn_binary: str,
    target: str,
    dry_run: bool,
    verbose: bool,
):
    """List revisions of SOURCE eligible for merging into the working copy.

    SOURCE is a branch name, 'trunk', or a path such as ^/branches/foo.
    Numeric FILTERS are revisions to cherry-pick; others are ticket ids
    (e.g. JIRA-123) that narrow the listing or the cherry-pick.
    """
    _configure_logging(verbose)

    try:
        config = build_config(
            source,
            filters,
            author=author,
            grep=grep,
            date_mode=date_mode,
            message_limit=message_limit,
            svn_binary=svn_binary,
            target=target,
            dry_run=dry_run,
        )
        client = SvnClient(config.svn_binary)
        if verbose:
            try:
                logger.debug(f"Using svn {client.version()}")
            except SvnCherrypickError as e:
                logger.debug(f"Could not read the svn version: {e}")
        run(config, client)
    except ToolNotFoundError as e:
        err_console.print(f"[red]Error: {escape(str(e))}. Is Subversion installed?[/red]")
        raise click.Abort() from e
    except SvnCherrypickError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e


if __name__ == "__main__":
    main()
