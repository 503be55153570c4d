import asyncio
import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.table import Table

from pptgirl.acontext.client import AcontextClient
from pptgirl.context.compaction import (
    AUTOMATIC_CONFIG,
    MANUAL_CONFIG,
    compact_on_demand,
    count_tool_usage,
    determine_strategies,
)
from pptgirl.errors import format_error_response
from pptgirl.utils.log import configure_logging

console = Console()
logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _build_client() -> AcontextClient:
    try:
        return AcontextClient()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def _fail(error: Exception) -> NoReturn:
    payload = format_error_response(error)
    console.print(f"[red]{payload.code}: {payload.message}[/red]")
    raise SystemExit(1)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
)
def main(log_level: str) -> None:
    """Inspect and compress conversation context stored in Acontext."""
    configure_logging(log_level)


@main.command()
@click.argument("session_id")
@click.option("--manual", is_flag=True, help="Evaluate with the manual (compress) thresholds")
def inspect(session_id: str, manual: bool) -> None:
    """Show token usage and the strategy that would be applied, without applying it."""
    client = _build_client()

    async def run():
        token_counts = await client.get_token_counts(session_id)
        messages = await client.get_messages(session_id)
        return token_counts, messages

    try:
        token_counts, messages = asyncio.run(run())
    except Exception as e:
        _fail(e)

    config = MANUAL_CONFIG if manual else AUTOMATIC_CONFIG
    strategies = determine_strategies(token_counts, messages, config)
    tool_calls, tool_results = count_tool_usage(messages)

    table = Table(title=f"Session {session_id}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total tokens", str(token_counts.total_tokens) if token_counts else "unknown")
    table.add_row("Messages", str(len(messages)))
    table.add_row("Tool calls", str(tool_calls))
    table.add_row("Tool results", str(tool_results))
    table.add_row("Token threshold", str(config.token_limit_threshold))
    console.print(table)

    if strategies:
        for strategy in strategies:
            console.print(f"[yellow]Would apply[/yellow] {strategy.type} {strategy.params.model_dump()}")
    else:
        console.print("[green]No compaction needed.[/green]")


@main.command()
@click.argument("session_id")
def compress(session_id: str) -> None:
    """Compress a session's context using the manual thresholds."""
    client = _build_client()
    try:
        result = asyncio.run(compact_on_demand(client, session_id))
    except Exception as e:
        logger.debug("Compression failed for session %s", session_id, exc_info=True)
        _fail(e)

    if not result.strategies_applied:
        console.print("[green]Nothing to compress.[/green]")
    else:
        console.print(f"[green]Applied:[/green] {', '.join(result.strategies_applied)}")

    tokens = result.token_counts.total_tokens if result.token_counts else "unknown"
    console.print(f"Messages: {len(result.messages)}  Total tokens: {tokens}")


if __name__ == "__main__":
    main()
