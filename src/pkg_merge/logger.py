"""Structured logging configuration using *structlog*.

Log events go to stderr so that stdout only carries the human-readable
progress lines.  Warnings and errors are rendered as short tagged lines
(``[warn] notes.txt: not a .pkg file``); everything else keeps the usual
console / JSON rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

import structlog

Renderer = Callable[[Any, str, dict[str, Any]], str]

_TAGS = {
    "warning": "warn",
    "error": "error",
    "critical": "error",
}


class TaggedRenderer:
    """Render warning / error events as ``[tag] <subject>: <message>``.

    The subject is the offending file (or package id) when the event names
    one; the message is its ``detail`` or ``error`` value, falling back to
    the event name.  Lower levels are handed to *fallback*.
    """

    def __init__(self, fallback: Renderer) -> None:
        self._fallback = fallback

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
        tag = _TAGS.get(event_dict.get("level", method_name))
        if tag is None:
            return self._fallback(logger, method_name, event_dict)

        subject = event_dict.get("file") or event_dict.get("package_id")
        message = event_dict.get("detail") or event_dict.get("error") or event_dict.get("event", "")
        if subject:
            return f"[{tag}] {subject}: {message}"
        return f"[{tag}] {message}"


def setup_logging(level: str = "INFO", *, cache_loggers: bool = True) -> None:
    """Configure *structlog* for the command line.

    Call once at startup.  Pass ``cache_loggers=False`` when the
    configuration will be replaced later in the same process.
    """
    fallback = structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            TaggedRenderer(fallback),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=cache_loggers,
    )
