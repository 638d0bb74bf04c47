"""
Neverstale command line interface.

Reads its configuration from NEVERSTALE_* environment variables (or a .env
file); ``--api-key`` and ``--base-uri`` override them.

Author: Neverstale
Date: 2026-10-19
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from neverstale.client import ApiException, Client, ConfigurationError, Content, TransactionResult
from neverstale.config import NeverstaleSettings
from neverstale.utils.logging import configure_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2

console = Console()
error_console = Console(stderr=True)


def _format_time(value: Optional[datetime]) -> str:
    return value.isoformat() if value else "-"


def print_content(content: Content) -> None:
    """Render a content record and its flags."""
    table = Table(title=f"Content {content.id}", border_style="blue")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Custom ID", content.custom_id)
    table.add_row("Status", content.analysis_status.value)
    table.add_row("Analyzed at", _format_time(content.analyzed_at))
    table.add_row("Expired at", _format_time(content.expired_at))
    table.add_row("Flags", str(len(content.flags)))
    console.print(table)

    if not content.flags:
        return

    flags = Table(title="Flags", border_style="yellow")
    flags.add_column("ID", style="cyan")
    flags.add_column("Flag")
    flags.add_column("Expires")
    flags.add_column("Ignored")
    flags.add_column("Reason", overflow="fold")

    for flag in content.flags:
        flags.add_row(
            flag.id,
            flag.flag,
            _format_time(flag.expired_at),
            "yes" if flag.is_ignored else "no",
            flag.reason,
        )
    console.print(flags)


def print_result(result: TransactionResult) -> None:
    """Render a transaction result."""
    style = "green" if result.succeeded else "red"
    console.print(f"[{style}]{result.status.value}[/{style}] {result.message}")

    if isinstance(result.data, Content):
        print_content(result.data)
    elif isinstance(result.data, tuple):
        for identifier in result.data:
            console.print(f"  - {identifier}")


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date/time: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neverstale",
        description="Neverstale content analysis API client",
    )
    parser.add_argument("--api-key", help="API key (default: NEVERSTALE_API_KEY)")
    parser.add_argument("--base-uri", help="API base address (default: NEVERSTALE_BASE_URI)")
    parser.add_argument("--verbose", action="store_true", help="Log requests to stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check the API is reachable")

    retrieve = subparsers.add_parser("retrieve", help="Show content and its flags")
    retrieve.add_argument("id", help="Content ID or custom ID")

    ingest = subparsers.add_parser("ingest", help="Submit content for analysis")
    ingest.add_argument("--custom-id", required=True, help="Your identifier for the content")
    ingest.add_argument("--title")
    ingest.add_argument("--author")
    ingest.add_argument("--url")
    source = ingest.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", help="Content text")
    source.add_argument("--file", type=Path, help="Read content text from a file")
    ingest.add_argument("--webhook", help="Endpoint notified when analysis completes")

    delete = subparsers.add_parser("delete", help="Delete content")
    delete.add_argument("ids", nargs="+", help="Content IDs or custom IDs")

    ignore = subparsers.add_parser("ignore", help="Ignore a flag")
    ignore.add_argument("flag_id")

    reschedule = subparsers.add_parser("reschedule", help="Change a flag's expiry date")
    reschedule.add_argument("flag_id")
    reschedule.add_argument("expired_at", type=_parse_datetime, help="e.g. '2025-06-15 00:00:00'")

    return parser


def _ingest_payload(args: argparse.Namespace) -> tuple[dict[str, Any], dict[str, Any]]:
    text = args.file.read_text(encoding="utf-8") if args.file else args.data
    data: dict[str, Any] = {"custom_id": args.custom_id, "data": text}
    for key in ("title", "author", "url"):
        value = getattr(args, key)
        if value:
            data[key] = value

    callback_config: dict[str, Any] = {}
    if args.webhook:
        callback_config["webhook"] = {"endpoint": args.webhook}

    return data, callback_config


def run(client: Client, args: argparse.Namespace) -> int:
    """Execute a parsed command against a client."""
    if args.command == "health":
        if client.health():
            console.print("[green]✓[/green] Neverstale API is available")
            return EXIT_OK
        error_console.print("[red]✗[/red] Neverstale API is unavailable")
        return EXIT_FAILURE

    if args.command == "retrieve":
        print_content(client.retrieve(args.id))
        return EXIT_OK

    if args.command == "ingest":
        result = client.ingest(*_ingest_payload(args))
    elif args.command == "delete":
        result = client.batch_delete(args.ids)
    elif args.command == "ignore":
        result = client.ignore_flag(args.flag_id)
    else:
        result = client.reschedule_flag(args.flag_id, args.expired_at)

    print_result(result)
    return EXIT_OK if result.succeeded else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in (("api_key", args.api_key), ("base_uri", args.base_uri))
        if value
    }

    try:
        settings = NeverstaleSettings(**overrides)
        # The command owns the process, so loguru's default stderr sink goes
        logger.remove()
        configure_logging("DEBUG" if args.verbose else settings.log_level)
        client = Client.from_settings(settings)
    except (ConfigurationError, ValidationError) as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        return EXIT_CONFIG

    with client:
        try:
            return run(client, args)
        except ApiException as e:
            error_console.print(f"[red]API error ({e.status}):[/red] {e.message}")
            return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
