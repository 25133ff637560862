"""Console logging for luaudoc commands."""

from __future__ import annotations

import logging
import sys
from typing import IO

ROOT_LOGGER = "luaudoc"
CONSOLE_FORMAT = "[luaudoc] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``luaudoc`` logger, or its ``luaudoc.<name>`` child."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(*, verbose: bool = False, stream: IO[str] | None = None) -> logging.Logger:
    """Send luaudoc records to one console handler.

    Records go to ``stream`` (stderr by default) so stdout only carries the
    command's result line. ``verbose`` lowers the threshold to DEBUG, which
    shows per-page writes and per-scope module counts.
    """
    root = get_logger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False

    for existing in list(root.handlers):
        root.removeHandler(existing)

    console = logging.StreamHandler(sys.stderr if stream is None else stream)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)
    return root


__all__ = ["configure_logging", "get_logger"]
