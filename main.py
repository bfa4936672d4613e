"""
Price oracle server entry point.

Loads configuration from the environment (and ``.env``), builds the
oracle handler, and serves it with uvicorn.  A bad key or config aborts
before the server binds.

Usage::

    uv run main.py
    uv run main.py --host 127.0.0.1 --port 9100 --log-level DEBUG
"""
import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

from src.priceoracle.api.app import create_app  # noqa: E402
from src.priceoracle.core.config import load_settings  # noqa: E402
from src.priceoracle.core.errors import ConfigurationError  # noqa: E402
from src.priceoracle.oracle.handler import create_oracle_handler  # noqa: E402
from src.priceoracle.utils.logger import LOG_LEVELS, setup_logger  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Price Oracle: Ed25519-signed USD prices",
    )
    parser.add_argument(
        "--host", type=str, default="0.0.0.0",
        help="Interface to bind",
    )
    parser.add_argument(
        "--port", type=int, default=9100,
        help="Port to listen on",
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS,
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        help="Terminal log level (defaults to $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-dir", type=str, default="logs",
        help="Directory for rotated log files",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(log_dir=args.log_dir, level=args.log_level)

    try:
        settings = load_settings()
        handler = create_oracle_handler(settings)
    except ConfigurationError as e:
        logger.critical(f"Refusing to start: {e}")
        sys.exit(1)

    app = create_app(handler)

    logger.info(f"Price oracle starting on {args.host}:{args.port}")
    logger.info(f"  Public key: {handler.public_key_hex}")
    logger.info("  Endpoint:   GET /api/price?token=<id>")
    logger.info("  Health:     GET /health")
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
