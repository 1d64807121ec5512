"""Shared logging utilities."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "gateway.log"

MAX_VALUE_LENGTH = 200


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={_truncate(str(v))}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {_truncate(message)}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_file: Path | None = None) -> None:
    """Remove the CLI log from a previous run."""
    log_file = log_file or CLI_LOG_FILE
    log_file.unlink(missing_ok=True)


def shorten_url(url: str, limit: int = 60) -> str:
    """Shorten a URL for display, keeping host and the start of the path."""
    if len(url) <= limit:
        return url
    return url[: limit - 3] + "..."


def _truncate(value: str) -> str:
    value = value.replace("\n", " ")
    if len(value) <= MAX_VALUE_LENGTH:
        return value
    return value[:MAX_VALUE_LENGTH] + "..."
