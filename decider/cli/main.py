"""Main CLI entrypoint for Decider.

Provides commands for picking from a list, inspecting parses, and managing
the decision history.
"""

from __future__ import annotations

import json
import logging
import random
import sys
import time
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from decider import __version__
from decider.config import get_config
from decider.errors import DeciderError, ValidationError

console = Console()


def setup_logging() -> None:
    """Configure logging with rich output."""
    config = get_config()

    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if config.logging.file:
        config.logging.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.logging.file)
        file_handler.setFormatter(logging.Formatter(config.logging.format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format=config.logging.format,
        handlers=handlers,
        force=True,
    )


def read_input(source: str | None, text: str | None) -> str:
    """Resolve the list text from --text, a file path, or stdin."""
    from decider.sources import decode_shared_bytes, load_shared_text

    if text is not None and source is not None:
        raise click.UsageError("Provide either a SOURCE file or --text, not both.")
    if text is not None:
        return load_shared_text(text)
    if source is None or source == "-":
        return decode_shared_bytes(click.get_binary_stream("stdin").read())
    return load_shared_text(Path(source))


def _history_database():
    from decider.db import get_database

    db = get_database()
    db.migrate()
    return db


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/] {escape(message)}")
    if get_config().logging.level == "DEBUG":
        console.print_exception()
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="decider")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Decider – share a list, get one item back.

    Reads a plain list (one item per line) or a checklist ([ ] / [x]) and
    picks one item at random.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        get_config().logging.level = "DEBUG"

    setup_logging()


@cli.command()
def init() -> None:
    """Initialize the history database."""
    console.print("[bold blue]Initializing Decider...[/]")

    try:
        db = _history_database()
        console.print(f"[green]✓[/] Database initialized at [cyan]{db.db_path}[/]")
        console.print("\n[bold green]Decider is ready![/]")
    except Exception as e:
        console.print(f"[red]Error initializing database:[/] {e}")
        sys.exit(1)


_source_argument = click.argument("source", required=False)
_text_option = click.option(
    "--text",
    "-t",
    default=None,
    help="List text to use instead of reading SOURCE or stdin",
)


@cli.command("parse")
@_source_argument
@_text_option
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
def parse_command(source: str | None, text: str | None, output_json: bool) -> None:
    """Show the items Decider would choose from.

    SOURCE: File to read, or "-" for stdin (the default).
    """
    from decider.parse import parse_list

    try:
        parsed = parse_list(read_input(source, text))
    except DeciderError as e:
        _fail(e.message)

    if output_json:
        output = {"title": parsed.title, "items": list(parsed.items), "count": len(parsed)}
        click.echo(json.dumps(output, indent=2))
        return

    if parsed.title:
        console.print(f"[bold]{escape(parsed.title)}[/]")
    console.print(f"[dim]{len(parsed)} items in list[/]")
    for position, item in enumerate(parsed.items, start=1):
        console.print(f"  {position}. {escape(item)}")


def _spin(items: tuple[str, ...], rng: random.Random | None) -> str:
    """Show the slowing reveal and return the final pick."""
    from rich.live import Live
    from rich.text import Text

    from decider.selection import spin_frames

    final = ""
    with Live(Text("Ready!", style="bold"), console=console, transient=True) as live:
        for frame in spin_frames(items, rng):
            live.update(Text(frame.item, style="bold"))
            if frame.final:
                final = frame.item
            else:
                time.sleep(frame.delay)
    return final


@cli.command()
@_source_argument
@_text_option
@click.option("--spin/--no-spin", default=None, help="Animate the pick (terminal only)")
@click.option("--save/--no-save", default=True, help="Record the pick in history")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible pick")
@click.option("--json", "output_json", is_flag=True, help="Output the decision as JSON")
def pick(
    source: str | None,
    text: str | None,
    spin: bool | None,
    save: bool,
    seed: int | None,
    output_json: bool,
) -> None:
    """Pick one item at random from a list.

    SOURCE: File to read, or "-" for stdin (the default).
    """
    from decider.history import Decision, record_decision
    from decider.parse import parse_list
    from decider.selection import check_decidable, decide

    config = get_config()
    rng = random.Random(seed) if seed is not None else None
    use_spin = config.selection.spin if spin is None else spin

    try:
        parsed = parse_list(read_input(source, text))
        items = check_decidable(parsed, min_items=config.selection.min_items)

        if use_spin and not output_json and console.is_terminal:
            decision = Decision.create(
                selected_item=_spin(tuple(items), rng),
                total_items=len(items),
                title=parsed.title,
            )
        else:
            decision = decide(parsed, rng=rng, min_items=config.selection.min_items)
    except ValidationError as e:
        console.print(f"[yellow]{e.message}[/]")
        sys.exit(1)
    except DeciderError as e:
        _fail(e.message)

    if save and config.history.enabled:
        try:
            record_decision(decision, db=_history_database())
        except Exception as e:
            _fail(f"Could not save decision: {e}")

    if output_json:
        click.echo(json.dumps(decision.to_dict(), indent=2))
        return

    if decision.title:
        console.print(f"[dim]{escape(decision.title)}[/]")
    console.print(f"[dim]{decision.total_items} items in list[/]")
    console.print(f"[bold green]{escape(decision.selected_item)}[/]")


@cli.group("history")
def history_group() -> None:
    """View and manage past decisions."""


@history_group.command("list")
@click.option(
    "--limit",
    "-n",
    default=None,
    type=click.IntRange(min=1),
    help="Maximum decisions to show",
)
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
def history_list(limit: int | None, output_json: bool) -> None:
    """List past decisions, most recent first."""
    from rich.table import Table

    from decider.history import get_history

    try:
        history = get_history(limit=limit, db=_history_database())
    except Exception as e:
        _fail(f"Could not load history: {e}")

    if output_json:
        click.echo(json.dumps({"count": len(history), "decisions": history.to_list()}, indent=2))
        return

    if not len(history):
        console.print("[yellow]No decisions yet.[/]")
        console.print("\nRun [cyan]decider pick[/] to make one.")
        return

    console.print(f"[bold blue]Decisions ({len(history)})[/]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("When", style="dim", width=16)
    table.add_column("Picked", width=30)
    table.add_column("Of", width=4, justify="right")
    table.add_column("List", width=24)

    for decision in history:
        table.add_row(
            decision.timestamp.astimezone().strftime("%Y-%m-%d %H:%M"),
            escape(decision.selected_item),
            str(decision.total_items),
            escape(decision.title or "-"),
        )

    console.print(table)


@history_group.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def history_clear(yes: bool) -> None:
    """Delete all past decisions."""
    from decider.history import clear_history

    if not yes and not click.confirm("Delete all past decisions?"):
        console.print("[dim]Aborted.[/]")
        return

    try:
        removed = clear_history(db=_history_database())
    except Exception as e:
        _fail(f"Could not clear history: {e}")

    console.print(f"[green]✓[/] Removed {removed} decision(s)")


@history_group.command("stats")
@click.option("--top", default=5, type=int, help="Number of most-picked items to show")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
def history_stats(top: int, output_json: bool) -> None:
    """Show statistics about past decisions."""
    from decider.history import get_history, summarize_history

    try:
        stats = summarize_history(get_history(db=_history_database()), top=top)
    except Exception as e:
        _fail(f"Could not load history: {e}")

    if output_json:
        click.echo(json.dumps(stats.to_dict(), indent=2))
        return

    if not stats.total_decisions:
        console.print("[yellow]No decisions yet.[/]")
        return

    console.print("[bold]Decision statistics[/]\n")
    console.print(f"  [cyan]Decisions:[/]         {stats.total_decisions}")
    console.print(f"  [cyan]Distinct picks:[/]    {stats.distinct_items}")
    console.print(f"  [cyan]Average list size:[/] {stats.average_list_size:.1f}")
    if stats.top_items:
        console.print("\n[bold]Most picked:[/]")
        for item, count in stats.top_items:
            console.print(f"  {count:>3} × {escape(item)}")


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default from config, localhost only recommended)",
)
@click.option(
    "--port",
    "-p",
    default=None,
    type=int,
    help="Port to listen on (default from config)",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Decider API server.

    The server binds to localhost by default. It has no authentication.
    """
    import uvicorn

    config = get_config()
    host = host or config.api.host
    port = port or config.api.port

    if host not in {"127.0.0.1", "localhost"}:
        console.print(
            f"[bold yellow]⚠️  Warning:[/] Binding to non-localhost address [cyan]{host}[/]"
        )
        console.print("   This exposes the server to your network. Decider has no authentication.")
        console.print()

    try:
        _history_database()
    except Exception as e:
        console.print(f"[red]Error initializing database:[/] {e}")
        sys.exit(1)

    console.print("[bold blue]Starting Decider API server...[/]")
    console.print(f"  URL: [cyan]http://{host}:{port}[/]")
    console.print(f"  API docs: [cyan]http://{host}:{port}/docs[/]")
    console.print("\nPress [bold]Ctrl+C[/] to stop the server.\n")

    try:
        uvicorn.run(
            "decider.api.app:create_app",
            host=host,
            port=port,
            reload=reload,
            factory=True,
            log_level="info",
        )
    except KeyboardInterrupt:
        console.print("\n[bold green]Server stopped.[/]")


if __name__ == "__main__":
    cli()
