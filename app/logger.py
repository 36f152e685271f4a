"""Structured logging for the debouncer."""

import json
import logging
import sys
from datetime import datetime, timezone

from app.config import LOG_FORMAT

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

_COLORS = {
    "DEBUG": "\033[36m",     # cyan
    "INFO": "\033[32m",      # green
    "WARNING": "\033[33m",   # yellow
    "ERROR": "\033[31m",     # red
    "CRITICAL": "\033[1;31m",  # bold red
    "RESET": "\033[0m",
}


class _PrettyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        color = _COLORS.get(record.levelname, "")
        reset = _COLORS["RESET"]
        line = f"{color}[{ts}] [{record.levelname}]{reset} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra_data"):
            entry.update(record.extra_data)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("webhook_debouncer")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        _PrettyFormatter() if LOG_FORMAT == "pretty" else _JSONFormatter()
    )
    logger.addHandler(handler)
    return logger


logger = setup_logging()

# ---------------------------------------------------------------------------
# Dispatch outcome logging
# ---------------------------------------------------------------------------

def log_dispatch(
    method: str,
    url: str,
    outcome: str,
    detail: str = "",
    status_code: int | None = None,
) -> None:
    parts = [
        f"\n{'='*60}",
        f"  Target   : {method} {url}",
        f"  Outcome  : {outcome}",
    ]
    if status_code is not None:
        parts.append(f"  Status   : {status_code}")
    if detail:
        parts.append(f"  Detail   : {detail}")
    parts.append(f"{'='*60}")

    extra_data = {"method": method, "url": url, "outcome": outcome}
    if status_code is not None:
        extra_data["status_code"] = status_code
    level = logging.INFO if outcome == "delivered" else logging.ERROR
    logger.log(level, "\n".join(parts), extra={"extra_data": extra_data})
