"""Typer-based CLI entry point."""

from __future__ import annotations

import asyncio
import functools
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import DEMO_MAX_PAGES, DEMO_TOTAL_ITEMS
from .domain.models.status import Failed, ListStatus, can_load_more
from .errors import InfinilistError, SettingsError
from .infrastructure.sources import SequencePageSource
from .settings.loader import ListConfig, load_config
from .viewmodels.paginated_list import PaginatedListMachine

app = typer.Typer(help="Drive a paginated list state machine from the terminal")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SettingsError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except InfinilistError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


async def run_demo(
    source: SequencePageSource,
    config: ListConfig,
    max_pages: int = DEMO_MAX_PAGES,
) -> List[ListStatus]:
    """Load, then load more until the list stops offering more pages.

    Returns every status the machine went through, starting with the initial one.
    """

    machine: PaginatedListMachine = PaginatedListMachine(source, config, name="demo")
    transitions: List[ListStatus] = [machine.status]
    machine.status_changed.connect(lambda new, old: transitions.append(new))
    try:
        machine.load()
        await machine.wait_idle()
        pages = 0
        while can_load_more(machine.status) and pages < max_pages:
            machine.load_more()
            await machine.wait_idle()
            pages += 1
    finally:
        await machine.aclose()
    return transitions


def _render(transitions: List[ListStatus]) -> Table:
    table = Table(title="List transitions")
    table.add_column("#", justify="right")
    table.add_column("Status")
    table.add_column("Items", justify="right")
    table.add_column("Detail")
    for index, status in enumerate(transitions):
        detail = ""
        if isinstance(status, Failed):
            detail = status.error.message
        elif status.items:
            detail = f"{status.items[0]} … {status.items[-1]}"
        table.add_row(str(index), status.kind.value, str(len(status.items)), detail)
    return table


@app.command()
@_handle_errors
def demo(
    total: int = typer.Option(DEMO_TOTAL_ITEMS, min=0, help="Items held by the in-memory source."),
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, help="Override the configured page size."),
    fail_at: List[int] = typer.Option([], "--fail-at", help="Offset whose fetch fails (repeatable)."),
    seed: int = typer.Option(0, min=0, help="Pre-seed the list with this many items."),
    max_pages: int = typer.Option(DEMO_MAX_PAGES, "--max-pages", min=0),
    delay: float = typer.Option(0.0, min=0.0, help="Simulated latency per fetch, in seconds."),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run Load followed by LoadMore against an in-memory source."""

    _configure_logging(verbose)
    config = load_config(config_path) if config_path else ListConfig()
    if page_size is not None or seed:
        config = ListConfig(
            page_size=page_size or config.page_size,
            initial_items=tuple(f"Seed {i + 1}" for i in range(seed)) or config.initial_items,
            guard_load_more=config.guard_load_more,
            discard_stale_results=config.discard_stale_results,
        )

    source = SequencePageSource.generated(total, fail_at=fail_at, delay=delay)
    transitions = asyncio.run(run_demo(source, config, max_pages))

    Console().print(_render(transitions))
    final = transitions[-1]
    print(f"Fetched {len(source.requests)} page(s); final status: [bold]{final.kind.value}[/bold]")
    if isinstance(final, Failed):
        typer.echo(f"Error: {final.error.message}", err=True)
        raise typer.Exit(1)


@app.command("check-config")
@_handle_errors
def check_config(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate a list configuration file and print the effective values."""

    config = load_config(path)
    print(f"[green]{path} is valid")
    print(config.to_mapping())


if __name__ == "__main__":  # pragma: no cover
    app()
