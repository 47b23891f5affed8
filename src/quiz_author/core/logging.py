"""JSON-lines logging for quiz-author commands.

Every command logs through ``quiz_author`` (or a child of it). Records land in
``<workspace>/logs/<name>.log`` as one JSON object per line; anything passed
through ``extra=`` (``event``, ``key``, ``question_id`` ...) is kept under the
``extra`` field so log lines can be filtered by event.
"""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

__all__ = [
    "JsonLogFormatter",
    "configure_logger",
]

HandlerRole = Literal["file", "console"]

_ROLE_ATTR = "_quiz_author_role"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Serialise a record and its ``extra`` fields as a JSON line."""

    # Attributes every LogRecord carries; anything else came from ``extra``.
    _RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {
        "message",
        "asctime",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in self._RESERVED
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info
        return json.dumps(payload, ensure_ascii=True)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
    filename: str | None = None,
) -> tuple[logging.Logger, Path]:
    """Attach a rotating JSON file handler to ``name`` and return it.

    Safe to call repeatedly: the managed file handler is reused while it
    points at the same file and swapped when ``log_dir`` changes. ``verbose``
    lowers the file level to DEBUG and mirrors records to stderr. When the
    log directory is not writable the file goes to a temp directory instead;
    the returned path is where records are actually written.
    """

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_name = filename or f"{name.rsplit('.', 1)[-1]}.log"
    handler = _install_file_handler(
        logger,
        _open_log_path(log_dir, log_name),
        log_name=log_name,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )
    handler.setLevel(logging.DEBUG if verbose else _coerce_level(level))

    console = _managed_handler(logger, "console")
    if verbose:
        if console is None:
            console = logging.StreamHandler(stream=sys.stderr)
            console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
            _mark(console, "console")
            logger.addHandler(console)
        console.setLevel(logging.DEBUG)
    elif console is not None:
        logger.removeHandler(console)
        console.close()

    return logger, Path(handler.baseFilename)


def _install_file_handler(
    logger: logging.Logger,
    path: Path,
    *,
    log_name: str,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    current = _managed_handler(logger, "file")
    if current is not None:
        if Path(current.baseFilename) == path.absolute():
            return current  # type: ignore[return-value]
        logger.removeHandler(current)
        current.close()

    try:
        handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except PermissionError:
        handler = RotatingFileHandler(
            _open_log_path(_fallback_log_dir(), log_name),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    handler.setFormatter(JsonLogFormatter())
    _mark(handler, "file")
    logger.addHandler(handler)
    return handler


def _managed_handler(
    logger: logging.Logger, role: HandlerRole
) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, _ROLE_ATTR, None) == role:
            return handler
    return None


def _mark(handler: logging.Handler, role: HandlerRole) -> None:
    setattr(handler, _ROLE_ATTR, role)


def _open_log_path(log_dir: Path, filename: str) -> Path:
    """Create ``log_dir/filename`` (mode 0600), falling back to a temp dir."""

    for directory in (log_dir, _fallback_log_dir()):
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / filename
            path.touch(exist_ok=True)
        except PermissionError:
            continue
        _chmod(directory, 0o700)
        _chmod(path, 0o600)
        return path
    raise PermissionError(f"No writable log directory for {filename}")


def _chmod(path: Path, mode: int) -> None:
    try:
        path.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass


def _coerce_level(level: str) -> int:
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return repr(value)


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "quiz-author-logs"
