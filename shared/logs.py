"""Logging setup shared by the command-line generators."""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for a script run."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
