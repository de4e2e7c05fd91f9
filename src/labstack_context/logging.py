"""Log output for the labstack-context CLI.

Library modules only attach ``labstack_*`` extras (report ids, drop reasons,
the raw stored entry that was dropped); this module decides how those reach
stderr. LABSTACK_LOG_FORMAT selects "text" (default) or "json".
"""

import json
import logging
import sys
import traceback
from collections.abc import Mapping
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError

_EXTRA_PREFIX = "labstack_"


def _json_safe(value: Any) -> Any:
    """Reduce stored payload fragments to JSON values without losing structure."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return _json_safe(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_json_safe(item) for item in value), key=repr)
    return repr(value)


def _exception_payload(exc: BaseException, exc_info: tuple) -> dict[str, Any]:
    payload: dict[str, Any] = {"type": type(exc).__name__}
    if isinstance(exc, ValidationError):
        # Field-level detail is what explains a skipped stored report.
        payload["errors"] = [
            {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
            for error in exc.errors(include_url=False)
        ]
    else:
        payload["message"] = str(exc)
        payload["traceback"] = "".join(traceback.format_exception(*exc_info))
    return payload


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = _exception_payload(record.exc_info[1], record.exc_info)

        for key, value in record.__dict__.items():
            if key.startswith(_EXTRA_PREFIX):
                log_entry[key[len(_EXTRA_PREFIX):]] = _json_safe(value)

        return json.dumps(log_entry, sort_keys=True)


def setup_logging(log_format: str, level: int = logging.WARNING) -> None:
    """Install a single stderr handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
