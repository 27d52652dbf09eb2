"""CLI entry point — Scan one index split and print its rows as JSON lines."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from searchtable.config.settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="searchtable",
        description="searchtable — Read search-index documents as typed table rows",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"searchtable {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    scan = subparsers.add_parser("scan", help="Scan an index and print one JSON object per row")
    scan.add_argument("index", help="Index (or index pattern) to scan")
    scan.add_argument(
        "--column",
        "-C",
        dest="columns",
        action="append",
        required=True,
        help="Column as path[:type[:category]], e.g. price:double or authors:varchar:nested (repeatable)",
    )
    scan.add_argument("--shard", type=int, default=None, help="Restrict the scan to one shard")
    scan.add_argument("--routing", type=str, default=None, help="Routing value")
    scan.add_argument("--limit", type=int, default=None, help="Stop after this many rows")
    scan.add_argument(
        "--stream",
        action="store_true",
        help="Fetch pages while printing instead of draining the index first",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    from searchtable.observability.logging import setup_logging

    if args.config and not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    try:
        settings = Settings.from_yaml(args.config) if args.config else Settings()
    except (TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    if args.command == "scan":
        return _scan(args, settings)
    return 2


def _scan(args: argparse.Namespace, settings: Settings) -> int:
    from searchtable.core.cursor import RecordCursor
    from searchtable.core.exceptions import CursorError
    from searchtable.models.column import ColumnDescriptor
    from searchtable.models.split import PartitionDescriptor
    from searchtable.stores.base.exceptions import StoreError
    from searchtable.stores.connection import StoreConnection

    try:
        columns = [ColumnDescriptor.parse(definition) for definition in args.columns]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.stream:
        settings.scroll.materialize = False
    split = PartitionDescriptor(index=args.index, shard=args.shard, routing=args.routing)

    try:
        with StoreConnection.from_settings(settings) as connection, RecordCursor(columns, split, connection) as cursor:
            rows = 0
            while (args.limit is None or rows < args.limit) and cursor.advance_position():
                row = {column.path: cursor.read_value(i) for i, column in enumerate(columns)}
                print(json.dumps(row, ensure_ascii=False))
                rows += 1
            logger.info("Printed %d rows from %s", rows, args.index)
    except (StoreError, CursorError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from searchtable import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    sys.exit(main())
