"""Command-line entry point for wikibulk.

Typer application with ``list``, ``move``, ``tag`` and ``title`` commands.
Connection settings come from the environment (``.env`` is loaded) and can be
overridden with the global options.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from wikibulk import __version__
from wikibulk.core.config import Settings
from wikibulk.core.engine import BulkEngine
from wikibulk.core.errors import PartialRequestFailure, WikiBulkError
from wikibulk.log_utils import setup_logging
from wikibulk.models import BatchReport, Page, TagReport
from wikibulk.tag_utils import merge_tag_options
from wikibulk.wikijs_client import WikiJSClient

app = typer.Typer(
    name="wikibulk",
    help="Bulk list, move and tag Wiki.js pages by path prefix.",
    add_completion=False,
    no_args_is_help=True,
)

NULL_TITLE = "[Untitled]"


class Color(str, Enum):
    always = "always"
    auto = "auto"
    never = "never"


@dataclass
class GlobalOptions:
    endpoint: Optional[str]
    http2: Optional[bool]
    force_https: Optional[bool]
    verbose: int
    console: Console


class Aborted(Exception):
    pass


def build_client(settings: Settings) -> WikiJSClient:
    return WikiJSClient.from_settings(settings)


def _opts(ctx: typer.Context) -> GlobalOptions:
    return ctx.obj


def _tags(values: list[str] | None) -> list[str] | None:
    try:
        return merge_tag_options(values)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _step(console: Console, n: int, message: str) -> None:
    console.print(f"[bold]\\[{n}/3][/bold] [blue]{escape(message)}[/blue]")


def _page_lines(pages: list[Page], trim: int) -> list[str]:
    lines = ["ID\tPath\tTitle\tTags"]
    width = max((len(p.path) - trim for p in pages), default=50)
    for p in pages:
        lines.append(
            f"{p.id}\t{p.path[trim:].ljust(width)}\t{p.title or NULL_TITLE} ({', '.join(p.tags or [])})"
        )
    return lines


def _print_pages(console: Console, pages: list[Page], trim: int) -> None:
    for line in _page_lines(pages, trim):
        console.print(line, markup=False, highlight=False)


def _tag_clause(tags: list[str] | None) -> str:
    return f" which have the tags: {', '.join(tags)}" if tags else ""


def _print_report(console: Console, report: BatchReport, success_message: str, noun: str, verb: str) -> None:
    if report.failures is None:
        console.print(f"[green]{escape(success_message)}[/green]")
    else:
        console.print(
            f"[red]{len(report.failures)} failures occurred during {noun}. "
            f"{report.success_count} successes occurred. Pages may be inconsistently {verb}.[/red]"
        )
        for failure in report.failures:
            s = failure.status
            tag = f" Tag: {failure.tag}" if failure.tag else ""
            console.print(
                f"Page: {failure.page_id} {failure.path}{tag} Code: {s.error_code} Slug: {s.slug} Message: {s.message or ''}",
                markup=False,
                highlight=False,
            )
    if report.unconfirmed:
        console.print(
            f"[yellow]{len(report.unconfirmed)} operations returned no status and could not be confirmed:[/yellow]"
        )
        for op in report.unconfirmed:
            tag = f" Tag: {op.tag}" if op.tag else ""
            console.print(f"Page: {op.page_id} {op.path}{tag}", markup=False, highlight=False)


def _confirm(prompt: str, assume_yes: bool) -> None:
    if assume_yes:
        return
    if not typer.confirm(prompt, default=False, err=True):
        raise Aborted(prompt)


def _settings(opts: GlobalOptions) -> Settings:
    return Settings.from_env(
        endpoint=opts.endpoint,
        http2=opts.http2,
        force_https=opts.force_https,
    )


async def _listing(engine: BulkEngine, opts: GlobalOptions, prefix: str, tags: list[str] | None):
    console = opts.console
    _step(console, 2, f"Finding all pages beginning with {prefix}{_tag_clause(tags)}.")
    listing = await engine.list_pages(prefix, tags)
    suffix = f" out of {listing.pages_returned} returned by wiki" if opts.verbose else ""
    _step(console, 3, f"Formatting {len(listing.pages)} matching pages{suffix}.")
    _print_pages(console, listing.pages, len(prefix))
    return listing


def _gate_private(engine: BulkEngine, console: Console, pages: list[Page], trim: int, action: str, allow: bool) -> None:
    private = engine.private_pages(pages)
    if private is None:
        return
    console.print(f"[yellow]The following pages you intend to {action} are marked as private:[/yellow]")
    _print_pages(console, private, trim)
    _confirm(
        f"Changing private pages may change who can access them.\nAre you really sure you want to {action} private pages?",
        allow,
    )


async def _run_list(opts: GlobalOptions, prefix: str, tags: list[str] | None) -> None:
    async with build_client(_settings(opts)) as client:
        await _listing(BulkEngine(client), opts, prefix, tags)


async def _run_move(opts, prefix, destination, tags, assume_yes, allow_private) -> None:
    console = opts.console
    async with build_client(_settings(opts)) as client:
        engine = BulkEngine(client)
        listing = await _listing(engine, opts, prefix, tags)
        if not listing.pages:
            console.print("Nothing to move.")
            return
        console.print(f"All of these pages will be relocated from {prefix}… to {destination}…!", markup=False)
        _confirm("Are you sure you want to do this?", assume_yes)
        _gate_private(engine, console, listing.pages, len(prefix), "move", allow_private)

        report = await engine.move_pages(listing.pages, prefix, destination)
    _print_report(
        console,
        report,
        f"All pages have been moved successfully from `{prefix}` to `{destination}`.",
        "moves",
        "moved",
    )


async def _run_tag(opts, prefix, destination, tags, add_tags, assume_yes, allow_private) -> None:
    console = opts.console
    async with build_client(_settings(opts)) as client:
        engine = BulkEngine(client)
        listing = await _listing(engine, opts, prefix, tags)
        if not listing.pages:
            console.print("Nothing to tag.")
            return
        extra = f" and {', '.join(add_tags)}" if add_tags else ""
        console.print(f"All of these pages will be tagged with a safety tag{extra}.", markup=False)
        _confirm("Are you sure you want to do this?", assume_yes)
        _gate_private(engine, console, listing.pages, len(prefix), "tag", allow_private)

        report: TagReport = await engine.tag_pages(listing.pages, prefix, destination, add_tags)
    console.print(f"Safety tag: {report.safety_tag}", markup=False, highlight=False)
    console.print(f"Tags requested: {', '.join(report.tags)}", markup=False, highlight=False)
    _print_report(console, report, f"All pages under `{prefix}` have been tagged successfully.", "tagging", "tagged")


def _execute(ctx: typer.Context, coro) -> None:
    opts = _opts(ctx)
    try:
        asyncio.run(coro)
    except Aborted:
        opts.console.print("[red]Aborted: operator did not confirm.[/red]")
        raise typer.Exit(code=1)
    except PartialRequestFailure as e:
        opts.console.print(f"[red]Error: {escape(e.message)}[/red]")
        opts.console.print("[red]Some changes may have been applied; list the pages again to check.[/red]")
        raise typer.Exit(code=1)
    except WikiBulkError as e:
        opts.console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="GraphQL endpoint (default: $WIKIJS_BASE_URL/graphql)"),
    http2: Optional[bool] = typer.Option(None, "--http2/--no-http2", help="Use HTTP/2"),
    no_force_https: bool = typer.Option(False, "--no-force-https", help="Allow a plain http endpoint"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Verbosity (repeatable)"),
    color: Color = typer.Option(Color.auto, "--color", help="Colored output"),
):
    """Bulk operations on Wiki.js pages."""
    load_dotenv()
    setup_logging(verbose)
    console = Console(
        force_terminal=True if color == Color.always else None,
        no_color=color == Color.never,
        highlight=False,
        soft_wrap=True,
    )
    ctx.obj = GlobalOptions(
        endpoint=endpoint,
        http2=http2,
        force_https=False if no_force_https else None,
        verbose=verbose,
        console=console,
    )
    _step(console, 1, f"Preparing to connect to the Wiki (wikibulk {__version__}).")


@app.command("list")
def list_command(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Path prefix"),
    tags: Optional[List[str]] = typer.Option(None, "--tags", "-t", help="Filter by tags (CSV or JSON list)"),
):
    """List wiki pages by path prefix."""
    _execute(ctx, _run_list(_opts(ctx), prefix, _tags(tags)))


@app.command("move")
def move_command(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Path prefix"),
    destination: str = typer.Option(..., "--destination", "-d", help="Replaces the prefix"),
    tags: Optional[List[str]] = typer.Option(None, "--tags", "-t", help="Filter by tags (CSV or JSON list)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    allow_private: bool = typer.Option(False, "--allow-private", help="Skip the private pages prompt"),
):
    """Move wiki pages to a new path."""
    _execute(ctx, _run_move(_opts(ctx), prefix, destination, _tags(tags), yes, allow_private))


@app.command("tag")
def tag_command(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Path prefix"),
    destination: str = typer.Option(..., "--destination", "-d", help="Combined with the prefix to derive the safety tag"),
    tags: Optional[List[str]] = typer.Option(None, "--tags", "-t", help="Filter by tags (CSV or JSON list)"),
    add_tags: Optional[List[str]] = typer.Option(None, "--add-tags", "-a", help="Extra tags to apply"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    allow_private: bool = typer.Option(False, "--allow-private", help="Skip the private pages prompt"),
):
    """Apply the derived safety tag plus any extra tags to matching pages."""
    _execute(
        ctx,
        _run_tag(
            _opts(ctx),
            prefix,
            destination,
            _tags(tags),
            _tags(add_tags) or [],
            yes,
            allow_private,
        ),
    )


@app.command("title")
def title_command(ctx: typer.Context):
    """Fetch the wiki title (connectivity check)."""

    async def _run():
        async with build_client(_settings(_opts(ctx))) as client:
            return await BulkEngine(client).get_wiki_title()

    opts = _opts(ctx)
    try:
        title = asyncio.run(_run())
    except WikiBulkError as e:
        opts.console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(code=1)
    opts.console.print(title, markup=False)


if __name__ == "__main__":
    app()
