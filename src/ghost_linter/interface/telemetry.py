"""Telemetry over the standard logging module."""

import logging

from ghost_linter.domain.protocols import TelemetryPort

LOG_FORMAT: str = "%(levelname)s: %(message)s"
HANDLER_NAME: str = "ghost_linter.stderr"


class LoggingTelemetry(TelemetryPort):
    """TelemetryPort implementation that forwards to a logger."""

    def __init__(self, logger_name: str = "ghost_linter") -> None:
        self._logger = logging.getLogger(logger_name)

    def step(self, message: str) -> None:
        self._logger.debug(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    @staticmethod
    def configure(verbose: bool = False) -> None:
        """Send ghost_linter logs to stderr; DEBUG when verbose, else WARNING."""
        logger = logging.getLogger("ghost_linter")
        logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

        # Rebind to the current stderr on every run.
        for existing in list(logger.handlers):
            if existing.get_name() == HANDLER_NAME:
                logger.removeHandler(existing)
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
