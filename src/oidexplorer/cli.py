"""CLI entry point: ``oid-explorer serve`` and ``oid-explorer lookup``."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any

from oidexplorer import __version__
from oidexplorer.config import ENV_PREFIX, Settings
from oidexplorer.errors import OidExplorerError
from oidexplorer.logging_config import parse_level, set_level, setup_logging


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"oid-explorer {__version__}")
        return

    if args.command == "serve":
        _run_serve(args)
    elif args.command == "lookup":
        _run_lookup(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="oid-explorer",
        description="Read-only lookup API over the OID namespace.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Start the HTTP API")
    serve.add_argument(
        "--host",
        default=None,
        help="Bind address (default: from settings, 0.0.0.0)",
    )
    serve.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port of the API (default: from settings, 9000)",
    )
    serve.add_argument(
        "--log-level",
        "-l",
        default=None,
        help="Log level (default: from settings, error)",
    )
    serve.add_argument(
        "--database-url",
        "-d",
        default=None,
        help="SQLAlchemy database URL to read OIDs from",
    )

    lookup = sub.add_parser(
        "lookup", help="Look up one OID and print it as JSON"
    )
    lookup.add_argument("oid", help="Dotted OID, e.g. 1.3.6.1")
    lookup.add_argument(
        "--relation",
        "-r",
        action="store_true",
        help="Print the relation tree instead of the record",
    )
    lookup.add_argument(
        "--database-url",
        "-d",
        default=None,
        help="SQLAlchemy database URL to read OIDs from",
    )

    return parser


def _apply_overrides(args: argparse.Namespace) -> Settings:
    """Push CLI flags into the environment, then load Settings.

    The app module builds its own Settings at import time, so the
    environment is how flags reach it under uvicorn.
    """
    overrides = {
        "HOST": getattr(args, "host", None),
        "PORT": getattr(args, "port", None),
        "LOG_LEVEL": getattr(args, "log_level", None),
        "DATABASE_URL": getattr(args, "database_url", None),
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[ENV_PREFIX + key] = str(value)
    return Settings()


def _run_serve(args: argparse.Namespace) -> None:
    import uvicorn

    try:
        settings = _apply_overrides(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)
    set_level(settings.log_level)

    uvicorn.run(
        "oidexplorer.main:app",
        host=settings.host,
        port=settings.port,
        log_level=parse_level(settings.log_level),
    )


def _run_lookup(args: argparse.Namespace) -> None:
    try:
        settings = _apply_overrides(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)

    try:
        result = asyncio.run(
            _lookup(settings, args.oid, relation=args.relation)
        )
    except OidExplorerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2))


async def _lookup(
    settings: Settings, oid: str, *, relation: bool
) -> dict[str, Any]:
    from oidexplorer.repositories.oid_repo import SqlOidRepository
    from oidexplorer.services.data_service import DataService
    from oidexplorer.services.oid_service import OidService

    data_service = DataService(settings)
    try:
        session_factory = await data_service.get_session_factory()
        async with session_factory() as session:
            service = OidService(SqlOidRepository(session))
            if relation:
                return (await service.resolve_relation(oid)).to_dict()
            return (await service.get_oid(oid)).to_dict()
    finally:
        await data_service.dispose()
