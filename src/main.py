#!/usr/bin/env python3
"""Main entry point for Hellowed."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from uvicorn.importer import ImportFromStringError, import_from_string

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from config import ConfigurationError, Settings, load_settings
from api import create_app

logger = logging.getLogger(__name__)

# Request and startup lines are always emitted, whatever the log level
ANNOUNCING_LOGGERS = ("api.http_server", __name__)


def configure_logging(settings: Settings):
    """Send log records to stdout, and to the log file when one is configured."""
    level = getattr(logging, settings.log_level)
    if level > logging.INFO:
        for name in ANNOUNCING_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file) if settings.log_file else logging.NullHandler()
        ]
    )


def resolve_todos_app(import_string):
    """Load the todos ASGI app named by a "module:attribute" string."""
    if not import_string:
        return None
    try:
        return import_from_string(import_string)
    except ImportFromStringError as e:
        raise ConfigurationError(f"todos_app: {e}") from e


def run_http_server(settings: Settings, todos=None):
    """Bind the listening socket, announce it and serve until stopped."""
    app = create_app(settings, todos)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=getattr(logging, settings.log_level),
    )
    server = uvicorn.Server(config)

    # Exits the process if the address cannot be bound
    sock = config.bind_socket()
    logger.info(f"Server listening on port {settings.port}")

    server.run(sockets=[sock])


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Hellowed HTTP server")
    parser.add_argument(
        "--host",
        help="Interface to bind (default: HELLOWED_HOST or 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: HELLOWED_PORT)"
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings(host=args.host, port=args.port)
        todos = resolve_todos_app(settings.todos_app)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings)

    try:
        run_http_server(settings, todos)
    except KeyboardInterrupt:
        logger.info("Shutting down Hellowed...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
