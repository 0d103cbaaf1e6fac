"""
Logging configuration — set up once by the CLI entrypoint.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
what is configured here.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  TOOLSPEC_LOG_LEVEL  >  WARNING

An optional log file (TOOLSPEC_LOG_FILE, level TOOLSPEC_LOG_FILE_LEVEL)
always records full detail with the process id, since several tool
invocations may resolve the same manifest concurrently.

Console output goes to stderr: ``toolspec resolve -q`` prints the
resolved command line on stdout and must stay pipeable.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Mapping

LOG_LEVEL_ENV = "TOOLSPEC_LOG_LEVEL"
LOG_FILE_ENV = "TOOLSPEC_LOG_FILE"
LOG_FILE_LEVEL_ENV = "TOOLSPEC_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above — just the message
_FMT_MINIMAL = "%(message)s"

# INFO — which pipeline stage said it
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG — stage plus line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File — full detail, process id to tell concurrent resolutions apart
_FMT_FILE = "%(asctime)s %(levelname)-5s %(process)d %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_PACKAGE_PREFIX = "toolspec.core."


class _StageFormatter(logging.Formatter):
    """Drops the ``toolspec.core.`` prefix so ``services.restore_graph`` reads as a stage."""

    def format(self, record: logging.LogRecord) -> str:
        original = record.name
        if original.startswith(_PACKAGE_PREFIX):
            record.name = original[len(_PACKAGE_PREFIX):]
        try:
            return super().format(record)
        finally:
            record.name = original


@dataclass(frozen=True)
class LogSettings:
    """Resolved logging options for one process."""

    level: str = "WARNING"
    log_file: str | None = None
    log_file_level: str | None = None

    @classmethod
    def from_cli(
        cls,
        *,
        debug: bool = False,
        verbose: bool = False,
        quiet: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> LogSettings:
        """Apply flag/environment precedence for the console level."""
        env = environ or {}
        if debug:
            level = "DEBUG"
        elif verbose:
            level = "INFO"
        elif quiet:
            level = "ERROR"
        else:
            level = env.get(LOG_LEVEL_ENV) or "WARNING"

        return cls(
            level=level,
            log_file=env.get(LOG_FILE_ENV) or None,
            log_file_level=env.get(LOG_FILE_LEVEL_ENV) or None,
        )


def setup_logging(settings: LogSettings | None = None) -> None:
    """Configure Python logging for the whole process.

    Replaces any handlers already on the root logger.
    """
    settings = settings or LogSettings()
    numeric_level = parse_level(settings.level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    # ── Console handler (stderr) ────────────────────────────────
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_StageFormatter(fmt, datefmt=datefmt))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if settings.log_file:
        file_level = (
            parse_level(settings.log_file_level) if settings.log_file_level else numeric_level
        )
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(settings.log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
