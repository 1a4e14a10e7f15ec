"""
schema-form Server Entry Point.

Loads every form bundle under the forms directory and serves them.

Usage:
    python run_server.py
    python run_server.py --forms-dir examples --port 9110

    # Use environment variables
    SCHEMA_FORM_PORT=8080 python run_server.py
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from schema_form.compiler import SchemaLoadError, discover_bundles
from schema_form.config import get_config
from schema_form.generators import build_registry
from schema_form.server import run_server


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="schema-form Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  SCHEMA_FORM_HOST         Host to bind to (default: 127.0.0.1)
  SCHEMA_FORM_PORT         Port to listen on (default: 9110)
  SCHEMA_FORM_FORMS_DIR    Directory holding form bundles (default: examples)
  SCHEMA_FORM_LOG_LEVEL    Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--forms-dir",
        default=config.forms_dir,
        help=f"Directory holding form bundles (default: {config.forms_dir})",
    )

    parser.add_argument(
        "--host",
        default=config.server_host,
        help=f"Host to bind to (default: {config.server_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )

    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    try:
        bundles = discover_bundles(args.forms_dir)
    except SchemaLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    generators = {}
    # The calendar example ships its own generation function
    examples_dir = Path(__file__).parent / "examples"
    if examples_dir.exists():
        sys.path.insert(0, str(examples_dir))
        from calendar_link import calendar_link

        generators["calendar"] = calendar_link

    registry = build_registry(bundles, generators=generators)

    print("=" * 60)
    print("schema-form Server")
    print("=" * 60)
    print(f"Forms: {', '.join(registry.names()) or '(none)'}")
    print(f"Open http://{args.host}:{args.port} in your browser")
    print("=" * 60)

    try:
        run_server(registry, host=args.host, port=args.port)
    except KeyboardInterrupt:
        print("\nServer stopped.")


if __name__ == "__main__":
    main()
