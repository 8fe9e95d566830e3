"""
=============================================================================
HTTPDEMO CLI ENTRY POINT
=============================================================================

=============================================================================
USAGE
=============================================================================

    # Both parts: client examples first, then the server (Ctrl+C to stop)
    python -m httpdemo

    # Only the server
    python -m httpdemo serve
    python -m httpdemo serve --port 4000 --log-level DEBUG

    # Only the client examples, against the local server
    python -m httpdemo client --base-url http://127.0.0.1:3000/api

Every flag falls back to its environment variable (HTTP_PORT,
HTTP_CLIENT_BASE_URL, ...) and then to the dataclass default.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .client import run_client_examples
from .config import ClientConfig, ServerConfig, LOG_LEVELS
from .server import UserServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpdemo",
        description="HTTP fundamentals: client request examples and a toy users API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpdemo                                  # Client examples, then the server
  python -m httpdemo serve --port 4000                # Server only
  python -m httpdemo client --base-url http://127.0.0.1:3000/api
        """,
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpdemo {__version__}",
    )

    commands = parser.add_subparsers(dest="command", metavar="{serve,client}")

    # ─────────────────────────────────────────────────────────────────────
    # SERVE
    # ─────────────────────────────────────────────────────────────────────

    serve = commands.add_parser("serve", help="Run the toy users API server")
    serve.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: $HTTP_HOST or 127.0.0.1)",
    )
    serve.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: $HTTP_PORT or 3000)",
    )
    serve.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Read timeout per connection in seconds (default: $HTTP_TIMEOUT or 30)",
    )
    serve.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Logging level (default: $HTTP_LOG_LEVEL or INFO)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # CLIENT
    # ─────────────────────────────────────────────────────────────────────

    client = commands.add_parser("client", help="Run the four client request examples")
    client.add_argument(
        "--base-url", "-u",
        default=None,
        help="API root (default: $HTTP_CLIENT_BASE_URL or https://jsonplaceholder.typicode.com)",
    )
    client.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Request timeout in seconds (default: $HTTP_CLIENT_TIMEOUT or 10)",
    )

    return parser


def server_config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Environment first, then whatever flags were actually given."""
    config = ServerConfig.from_env()
    for name in ("host", "port", "timeout", "log_level"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)
    config.validate()
    return config


def client_config_from_args(args: argparse.Namespace) -> ClientConfig:
    config = ClientConfig.from_env()
    for name in ("base_url", "timeout"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments and run the selected part(s).

    Returns:
        Process exit code: 0 on a clean stop, 1 on bad configuration or
        a server that could not start.
    """
    args = build_parser().parse_args(argv)

    try:
        if args.command in (None, "client"):
            run_client_examples(client_config_from_args(args))

        if args.command in (None, "serve"):
            config = server_config_from_args(args)
            if args.command is None:
                print("\n" + "=" * 60)
                print("📥 PART 2: Building a Simple HTTP Server")
                print("=" * 60)
            UserServer(config).run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
