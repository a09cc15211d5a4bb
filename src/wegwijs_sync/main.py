#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from wegwijs_sync.api.responses import status_for
from wegwijs_sync.app import build_services
from wegwijs_sync.config import ConfigurationError, configure_logging, load_settings
from wegwijs_sync.domain.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from wegwijs_sync.app import SyncServices


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep KBO and OVO identifiers in line with Wegwijs"
    )
    commands = parser.add_subparsers(dest="command")
    parser.set_defaults(command="serve", host="0.0.0.0", port=80)

    serve = commands.add_parser("serve", help="Run the HTTP service and the healing schedule")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: %(default)s)")
    serve.add_argument("--port", type=int, default=80, help="Port (default: %(default)s)")

    commands.add_parser("heal", help="Run one healing sweep over all organisations and exit")

    sync = commands.add_parser("sync", help="Synchronise a single organisation and exit")
    sync.add_argument("structured_id_uuid", help="UUID of the KBO structured identifier")

    return parser.parse_args(list(argv))


def _serve(services: SyncServices, host: str, port: int) -> None:
    import uvicorn  # noqa: PLC0415

    from wegwijs_sync.api import create_app  # noqa: PLC0415

    uvicorn.run(create_app(services), host=host, port=port, log_config=None)


def _heal(services: SyncServices) -> int:
    result = services.heal()
    if result.skipped:
        print("Healing already running")
        return 1
    print(
        f"processed={result.processed} created={result.created} updated={result.updated} "
        f"ovo_updated={result.ovo_updated} unmatched={result.unmatched}"
    )
    return 0


def _sync(services: SyncServices, structured_id_uuid: str) -> int:
    result = services.sync_organization(structured_id_uuid)
    status_code, body = status_for(result)
    print(f"{status_code} {body}")
    if result.error is not None:
        print(f"Error: {result.error}", file=sys.stderr)
    return 0 if status_code < 400 else 1


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        args = _parse_args(sys.argv[1:] if argv is None else argv)
        settings = load_settings()
        configure_logging(level=settings.log_level)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        services = build_services(settings)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except PersistenceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.command == "heal":
        try:
            sys.exit(_heal(services))
        except Exception as e:  # noqa: BLE001
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    if args.command == "sync":
        sys.exit(_sync(services, args.structured_id_uuid))
    _serve(services, args.host, args.port)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
