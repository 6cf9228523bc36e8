"""
Logging setup for command-line entry points.

Library modules only create module-level loggers; handlers are attached
here, once, by the CLI.
"""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_FORMAT = "%(message)s"


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for CLI use.

    Args:
        verbose: If True, log DEBUG with timestamps and logger names;
            otherwise INFO with bare messages.
    """
    level = logging.DEBUG if verbose else logging.INFO
    fmt = LOG_FORMAT if verbose else QUIET_FORMAT
    logging.basicConfig(level=level, format=fmt, force=True)
    # reportlab and PIL are chatty at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)
