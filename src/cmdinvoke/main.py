"""Main module for cmdinvoke."""

import logging
import os
import sys

from cmdinvoke.cli import run


def setup_logging() -> None:
    """Configure logging to stderr, or to $CMDINVOKE_LOG_FILE when set."""
    # Set level from env var, default to WARNING
    level = os.environ.get("CMDINVOKE_LOG_LEVEL", "WARNING").upper()
    log_file = os.environ.get("CMDINVOKE_LOG_FILE")

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, mode="a")
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[handler],
    )


def main() -> None:
    """Main entry point for cmdinvoke."""
    sys.exit(run(configure_logging=setup_logging))


if __name__ == "__main__":
    main()
