"""Entry point for the status collector: serve, list, or run collectors."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from status_collector.collectors.engine import run
from status_collector.collectors.loader import load_registry
from status_collector.collectors.models import Envelope
from status_collector.collectors.registry import CollectorRegistry
from status_collector.config import settings
from status_collector.utils.serialization import encode, serialize_envelope

console = Console()


def print_collectors(registry: CollectorRegistry) -> None:
    """Print every registered collector name, sorted."""
    names = registry.list_names()
    console.print(f"Registered status collectors ({len(names)}):")
    for name in names:
        console.print(name, highlight=False, markup=False)


def print_envelopes(envelopes: list[Envelope]) -> None:
    table = Table(title="Status")
    table.add_column("Collector")
    table.add_column("OK")
    table.add_column("Detail", overflow="fold")

    for e in envelopes:
        if e.failed:
            detail = f"{type(e.error).__name__}: {e.error}"
        else:
            detail = json.dumps(encode(e.results), default=str)
        table.add_row(escape(e.name), "[green]yes[/green]" if e.success else "[red]no[/red]", escape(detail))

    console.print(table)


def run_collectors(registry: CollectorRegistry, pattern: str | None, as_json: bool = False) -> int:
    """Run matching collectors and print the report. Returns the exit code."""
    envelopes = asyncio.run(run(registry.select(pattern)))

    if as_json:
        console.print_json(data=[serialize_envelope(e) for e in envelopes])
    else:
        print_envelopes(envelopes)

    return 0 if all(e.success for e in envelopes) else 1


def run_server() -> None:
    """Start the FastAPI server."""
    console.print(Panel("Starting Status Collector API Server", style="bold green"))
    uvicorn.run(
        "status_collector.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Status Collector")
    parser.add_argument(
        "--file", default=settings.collectors_file,
        help="Collectors YAML file (default: %(default)s)",
    )
    # Also accepted after the subcommand
    file_opt = argparse.ArgumentParser(add_help=False)
    file_opt.add_argument("--file", default=argparse.SUPPRESS, help="Collectors YAML file")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", parents=[file_opt], help="Start the API server")
    sub.add_parser("list", parents=[file_opt], help="List registered collectors")

    run_parser = sub.add_parser("run", parents=[file_opt], help="Run collectors and print the report")
    run_parser.add_argument("pattern", nargs="?", default=None, help="Glob pattern, e.g. 'db.*'")
    run_parser.add_argument("--json", action="store_true", help="Print envelopes as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    if args.command == "serve":
        settings.collectors_file = args.file
        run_server()
        return 0

    if args.command in ("list", "run"):
        registry = load_registry(Path(args.file))
        if args.command == "list":
            print_collectors(registry)
            return 0
        return run_collectors(registry, args.pattern, as_json=args.json)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
