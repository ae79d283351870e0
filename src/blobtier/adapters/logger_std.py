"""Standard logger adapter."""

import logging
import sys
from typing import Any

LOGGER_NAME = "blobtier"
LOG_FORMAT = "blobtier: %(levelname)s %(message)s"


class StdLoggerAdapter:
    """Standard logging implementation of LoggerPort.

    Extra keyword fields are rendered as ``key=value`` pairs after the message.
    """

    def __init__(self, name: str = LOGGER_NAME, level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.upper())

        # Replace handlers so repeated construction (tests, embedding) does not duplicate output
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)

        for noisy in ("boto3", "botocore", "s3transfer", "urllib3"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def log_operation(
        self,
        op: str,
        key: str,
        sizes: dict[str, int] | None = None,
        durations: dict[str, float] | None = None,
        **kwargs: Any,
    ) -> None:
        """Log a completed operation."""
        fields: dict[str, Any] = {"op": op, "key": key}
        for name, value in (sizes or {}).items():
            fields[f"size_{name}"] = value
        for name, value in (durations or {}).items():
            fields[f"duration_{name}"] = f"{value:.3f}s"
        fields.update(kwargs)
        self._log(logging.INFO, "Operation complete", fields)

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{k}={v}" for k, v in fields.items())
            message = f"{message} {rendered}"
        self.logger.log(level, message)
