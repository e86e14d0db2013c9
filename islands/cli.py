"""
Islands CLI - Command-line interface for the engine.

Usage:
    islands serve [--host HOST] [--port PORT]   Run the HTTP API
    islands sessions                            List stored session snapshots
    islands purge <name>                        Delete a session snapshot
"""

import argparse
import logging
import sys

from .config import Settings


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Islands - two-player island hunting game engine",
        prog="islands",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    subparsers.add_parser("sessions", help="List stored session snapshots")

    purge_parser = subparsers.add_parser("purge", help="Delete a session snapshot")
    purge_parser.add_argument("name", help="Session name (player 1's name)")

    args = parser.parse_args()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "sessions":
        cmd_sessions(args, settings)
    elif args.command == "purge":
        cmd_purge(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings: Settings):
    """Run the API under uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app

    if not settings.snapshot_dir:
        logging.getLogger(__name__).warning(
            "ISLANDS_SNAPSHOT_DIR not set; snapshots will not survive a restart"
        )
    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


def cmd_sessions(args, settings: Settings):
    """List session names that have a snapshot."""
    if not settings.snapshot_dir:
        print("Error: ISLANDS_SNAPSHOT_DIR is not set")
        sys.exit(1)

    names = settings.make_store().keys()
    if not names:
        print("No stored sessions")
    for name in names:
        print(name)


def cmd_purge(args, settings: Settings):
    """Delete one session's snapshot."""
    if not settings.snapshot_dir:
        print("Error: ISLANDS_SNAPSHOT_DIR is not set")
        sys.exit(1)

    settings.make_store().delete(args.name)
    print(f"Purged: {args.name}")


if __name__ == "__main__":
    main()
