import logging
import os
from dataclasses import dataclass

_LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Config:
    log_format: str = "text"
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("LABSTACK_LOG_FORMAT", "text").strip().lower()
        if log_format not in _LOG_FORMATS:
            raise RuntimeError(
                f"LABSTACK_LOG_FORMAT must be one of {', '.join(_LOG_FORMATS)}, got {log_format!r}"
            )

        level_name = os.environ.get("LABSTACK_LOG_LEVEL", "WARNING").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise RuntimeError(f"LABSTACK_LOG_LEVEL is not a logging level: {level_name!r}")

        return cls(log_format=log_format, log_level=level)
