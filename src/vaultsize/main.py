"""Unified entry point for vault size history.

Starts one of the interfaces:
- CLI (default)
- REST API server
"""

import argparse
import sys

from vaultsize.core.config import setup_logging, validate_environment


def main(argv: list[str] | None = None):
    """Main entry point with interface selection."""
    parser = argparse.ArgumentParser(
        description="Vault size history - daily file counts for a vault",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Interfaces:
  cli         Run the command-line interface (default)
  api         Start the REST API server

Examples:
  python -m vaultsize.main cli show      # Update and show the history
  python -m vaultsize.main api           # Start API server
  python -m vaultsize.main api --port 9000
""",
    )

    parser.add_argument(
        "interface",
        nargs="?",
        default="cli",
        choices=["cli", "api"],
        help="Which interface to start (default: cli)",
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind API server to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for API server (default: 8421)",
    )

    args, rest = parser.parse_known_args(argv)

    setup_logging()

    if args.interface == "cli":
        from vaultsize.interfaces.cli.app import app

        app(args=rest, prog_name="vaultsize")

    elif args.interface == "api":
        is_valid, message = validate_environment()
        if not is_valid:
            print(f"Error: {message}", file=sys.stderr)
            sys.exit(1)

        import uvicorn

        from vaultsize.core.config import VAULTSIZE_HOST, VAULTSIZE_PORT

        host = args.host or VAULTSIZE_HOST or "127.0.0.1"
        port = args.port or VAULTSIZE_PORT

        print(f"Starting vault size API server on {host}:{port}")
        uvicorn.run(
            "vaultsize.api.app:app",
            host=host,
            port=port,
            reload=False,
        )


if __name__ == "__main__":
    main()
