"""
Logging setup for the lattice CLI.

The engine itself only logs at DEBUG (plugin order, phase execution,
overwrites); pack I/O and config loading log at INFO, and additive
apply conflicts at WARNING. ``setup_logging`` is called once from
``lattice.main`` before any command runs.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  LATTICE_LOG_LEVEL  >  WARNING

LATTICE_LOG_FILE adds a file handler; LATTICE_LOG_FILE_LEVEL sets its
level independently of the console.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "LATTICE_LOG_LEVEL"
FILE_ENV = "LATTICE_LOG_FILE"
FILE_LEVEL_ENV = "LATTICE_LOG_FILE_LEVEL"

# Console format per minimum level: bare messages for normal runs,
# logger names once INFO is on, line numbers for DEBUG.
_CONSOLE_FORMATS: tuple[tuple[int, str], ...] = (
    (logging.DEBUG, "%(levelname)-5s %(name)s:%(lineno)d %(message)s"),
    (logging.INFO, "[%(name)s] %(message)s"),
)
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_from_flags(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console (and optional file) handler on the root logger.

    Calling it again replaces the handlers from the previous call.
    """
    console_level = _parse_level(level)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_console_format(console_level)))
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _console_format(level: int) -> str:
    for threshold, fmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return fmt
    return "%(message)s"


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
