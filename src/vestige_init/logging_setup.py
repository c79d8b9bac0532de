"""Structured logging setup for vestige-init.

Provides a JSON-line formatter, a context var naming the target currently being
reconciled, and a `setup_logging()` function called by the CLI at startup.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from vestige_init.config import Config

# Key of the target being reconciled; empty outside the reconcile loop
current_target: ContextVar[str] = ContextVar("current_target", default="")


class _TargetFilter(logging.Filter):
    """Inject current target key into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.target = current_target.get("")  # type: ignore[attr-defined]
        return True


class StructuredFormatter(logging.Formatter):
    """Emit JSON log lines for machine-readable structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        target = getattr(record, "target", "")
        payload: dict = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.name,
        }
        if target:
            payload["target"] = target
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class _TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        target = getattr(record, "target", "")
        return f"{line} [{target}]" if target else line


def setup_logging(config: "Config", verbose: bool = False) -> None:
    """Configure root logger based on config.logging settings.

    When config.logging.format == 'json', use StructuredFormatter.
    Otherwise use a plain `name: message` text format.
    """
    log_cfg = config.logging
    level = logging.DEBUG if verbose else getattr(logging, log_cfg.level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicate output
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(_TargetFilter())

    if log_cfg.format.lower() == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(_TextFormatter("%(name)s: %(message)s"))

    root.addHandler(handler)


@contextmanager
def target_context(key: str) -> Iterator[None]:
    """Tag log records emitted inside the block with the given target key."""
    token = current_target.set(key)
    try:
        yield
    finally:
        current_target.reset(token)
