"""Central logging configuration for the module catalog.

Catalog passes run on background workers, so diagnostics go to a log file
that can be attached to bug reports.  :func:`ensure_app_logging` may be
called by every service factory; only the first call installs handlers and
later calls only adjust the file verbosity when one is requested.

Two environment variables choose where the log file is written:

``MODULE_CATALOG_LOG_FILE``
    Absolute path to the log file that should be created.

``MODULE_CATALOG_LOG_DIR``
    Directory where ``catalog.log`` will be created.  Ignored when
    ``MODULE_CATALOG_LOG_FILE`` is present.

User home paths and account names are redacted from every record because
module config targets and preference paths frequently embed them.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from enum import Enum
from pathlib import Path
from typing import TypeVar

_LOG_FILE_ENV = "MODULE_CATALOG_LOG_FILE"
_LOG_DIR_ENV = "MODULE_CATALOG_LOG_DIR"
_DEFAULT_DIRNAME = ".module_catalog"
_DEFAULT_LOGNAME = "catalog.log"
_HANDLER_TAG = "_module_catalog_logging_handler"
_RECORD_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

USER_PLACEHOLDER = "<user>"
USER_HOME_PLACEHOLDER = "<user_home>"


class LogVerbosity(str, Enum):
    """Minimum severity written to the catalog log file."""

    DISABLED = "disabled"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"

    @property
    def level(self) -> int:
        return _VERBOSITY_LEVELS[self]

    @classmethod
    def parse(cls, value: "LogVerbosity | str") -> "LogVerbosity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported log verbosity: {value}") from exc


_VERBOSITY_LEVELS = {
    LogVerbosity.DISABLED: logging.CRITICAL + 1,
    LogVerbosity.ERROR: logging.ERROR,
    LogVerbosity.WARNING: logging.WARNING,
    LogVerbosity.INFO: logging.INFO,
    LogVerbosity.VERBOSE: logging.DEBUG,
}

DEFAULT_VERBOSITY = LogVerbosity.INFO

_LOG_PATH: Path | None = None
_FILE_HANDLER: logging.FileHandler | None = None

_HandlerT = TypeVar("_HandlerT", bound=logging.Handler)


def _home_candidates() -> set[str]:
    candidates = {str(Path.home())}
    for env_var in ("HOME", "USERPROFILE"):
        value = os.environ.get(env_var)
        if value:
            candidates.add(os.path.expanduser(value))
    normalised = {os.path.normpath(candidate) for candidate in candidates if candidate}
    return {candidate for candidate in normalised if candidate not in {os.sep, "."}}


def _username_candidates() -> set[str]:
    candidates = {Path.home().name}
    for env_var in ("USERNAME", "USER", "LOGNAME"):
        value = os.environ.get(env_var)
        if value:
            candidates.add(value)
    return {candidate.strip() for candidate in candidates if candidate and candidate.strip()}


def _build_redaction_patterns() -> list[tuple[re.Pattern[str], str]]:
    flags = re.IGNORECASE if os.name == "nt" else 0
    patterns: list[tuple[re.Pattern[str], str]] = []
    # Longest first so a home directory is replaced before the bare user name.
    for home in sorted(_home_candidates(), key=len, reverse=True):
        for variant in {home, home.replace("\\", "/")}:
            patterns.append((re.compile(re.escape(variant), flags), USER_HOME_PLACEHOLDER))
    for username in sorted(_username_candidates(), key=len, reverse=True):
        escaped = re.escape(username)
        if any(character.isalnum() for character in username):
            pattern = re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)
        else:
            pattern = re.compile(escaped, re.IGNORECASE)
        patterns.append((pattern, USER_PLACEHOLDER))
    return patterns


_REDACTION_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(_build_redaction_patterns())


def redact(message: str) -> str:
    """Replace user home paths and account names in ``message``."""

    if not message:
        return message
    for pattern, replacement in _REDACTION_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class _RedactingFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def _tagged(handler: _HandlerT) -> _HandlerT:
    setattr(handler, _HANDLER_TAG, True)
    handler.setFormatter(_RedactingFormatter(_RECORD_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def managed_handlers() -> list[logging.Handler]:
    """Return the root handlers installed by :func:`ensure_app_logging`."""

    return [handler for handler in logging.getLogger().handlers if getattr(handler, _HANDLER_TAG, False)]


def ensure_app_logging(verbosity: LogVerbosity | str | None = None) -> Path:
    """Configure catalog logging and return the log file path.

    The file handler starts at ``verbosity`` (``DEFAULT_VERBOSITY`` when not
    given).  A console handler at INFO is added when stderr is a terminal
    that no other root handler writes to.  Calling again with a verbosity
    only changes the file handler level.
    """

    global _LOG_PATH, _FILE_HANDLER

    requested = LogVerbosity.parse(verbosity) if verbosity is not None else None
    if _FILE_HANDLER is not None and _LOG_PATH is not None:
        if requested is not None and _FILE_HANDLER.level != requested.level:
            _FILE_HANDLER.setLevel(requested.level)
            logging.getLogger(__name__).info("File log verbosity set to %s", requested.value)
        return _LOG_PATH

    log_path = _resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    effective = requested or DEFAULT_VERBOSITY

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    file_handler = _tagged(logging.FileHandler(log_path, encoding="utf-8"))
    file_handler.setLevel(effective.level)
    root.addHandler(file_handler)
    if _stderr_is_free_terminal(root):
        console = _tagged(logging.StreamHandler())
        console.setLevel(logging.INFO)
        root.addHandler(console)

    _FILE_HANDLER = file_handler
    _LOG_PATH = log_path
    logging.getLogger(__name__).info(
        "Writing catalog logs to %s (verbosity=%s)", log_path, effective.value
    )
    return log_path


def _resolve_log_path() -> Path:
    env_file = os.environ.get(_LOG_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()
    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser() / _DEFAULT_LOGNAME
    return Path.home() / _DEFAULT_DIRNAME / "logs" / _DEFAULT_LOGNAME


def _stderr_is_free_terminal(root: logging.Logger) -> bool:
    stderr = sys.stderr
    if stderr is None or not hasattr(stderr, "isatty") or not stderr.isatty():
        return False
    return not any(
        isinstance(handler, logging.StreamHandler) and handler.stream is stderr for handler in root.handlers
    )


def _reset_for_tests() -> None:
    """Remove and close the handlers installed by :func:`ensure_app_logging`."""

    global _LOG_PATH, _FILE_HANDLER

    root = logging.getLogger()
    for handler in managed_handlers():
        root.removeHandler(handler)
        handler.close()
    _LOG_PATH = None
    _FILE_HANDLER = None


__all__ = [
    "DEFAULT_VERBOSITY",
    "LogVerbosity",
    "USER_HOME_PLACEHOLDER",
    "USER_PLACEHOLDER",
    "ensure_app_logging",
    "managed_handlers",
    "redact",
]
