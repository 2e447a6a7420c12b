"""Logging setup for the prflow CLI.

Progress and failures go to stderr so that listings and pull request info
printed on stdout stay clean. Level comes from config.yaml (logging.level),
env (LOGGING_LEVEL) or the --verbose flag, which wins over both.
"""

import logging
import sys
from typing import Optional, TextIO

from prflow.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Library loggers that only matter when debugging API traffic
NOISY_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names give INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class PrflowLogging:
    """Routes prflow logs to one stderr handler on the root logger."""

    def __init__(self, config: LoggingConfig, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        self._level = logging.DEBUG if verbose else _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._stream = stream

    @property
    def level(self) -> int:
        return self._level

    def setup(self) -> None:
        """Replace root handlers with a single stream handler at the configured
        level. HTTP library loggers stay at WARNING unless running at DEBUG."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=self._stream or sys.stderr,
            force=True,
        )
        library_level = logging.DEBUG if self._level <= logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(library_level)
