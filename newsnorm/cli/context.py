"""Shared CLI setup."""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line runs."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
