"""Compact coloured log formatter and the package logger."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

COLOR_RED = 31
COLOR_YELLOW = 33
COLOR_BLUE = 36
COLOR_GRAY = 37

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def color_for_level(level: int) -> int:
    """ANSI colour code used for a logging level."""
    if level >= logging.ERROR:
        return COLOR_RED
    if level >= logging.WARNING:
        return COLOR_YELLOW
    if logging.DEBUG <= level < logging.INFO:
        return COLOR_GRAY
    return COLOR_BLUE


def _level_name(level: int) -> str:
    if level >= logging.CRITICAL:
        return "fatal"
    if level >= logging.ERROR:
        return "error"
    if level >= logging.WARNING:
        return "warning"
    if level >= logging.INFO:
        return "info"
    if level >= logging.DEBUG:
        return "debug"
    return "trace"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class LogFormatter(logging.Formatter):
    """Formats records as ``time [LEVL] [key:value] message``.

    Structured fields are read from a ``fields`` mapping on the record,
    passed as ``extra={"fields": {...}}``.
    """

    def __init__(
        self,
        fields_order: Sequence[str] | None = None,
        timestamp_format: str | None = None,
        hide_keys: bool = False,
        no_colors: bool = False,
        no_fields_colors: bool = False,
        show_full_level: bool = False,
        trim_messages: bool = False,
    ) -> None:
        super().__init__()
        self.fields_order = list(fields_order) if fields_order is not None else None
        self.timestamp_format = timestamp_format
        self.hide_keys = hide_keys
        self.no_colors = no_colors
        self.no_fields_colors = no_fields_colors
        self.show_full_level = show_full_level
        self.trim_messages = trim_messages

    def _timestamp(self, record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created)
        if self.timestamp_format:
            return moment.strftime(self.timestamp_format)
        return (
            f"{_MONTHS[moment.month - 1]} {moment.day:2d} "
            f"{moment:%H:%M:%S}.{int(record.msecs):03d}"
        )

    def _ordered_keys(self, fields: Mapping[str, Any]) -> list[str]:
        if self.fields_order is None:
            return sorted(fields)
        chosen = [name for name in self.fields_order if name in fields]
        seen = set(chosen)
        return chosen + sorted(name for name in fields if name not in seen)

    def _render_field(self, key: str, value: Any) -> str:
        if self.hide_keys:
            return f"[{_format_value(value)}] "
        return f"[{key}:{_format_value(value)}] "

    def format(self, record: logging.LogRecord) -> str:
        parts = [self._timestamp(record)]
        level = _level_name(record.levelno).upper()
        if not self.no_colors:
            parts.append(f"\x1b[{color_for_level(record.levelno)}m")
        parts.append(" [")
        parts.append(level if self.show_full_level else level[:4])
        parts.append("] ")
        if not self.no_colors and self.no_fields_colors:
            parts.append("\x1b[0m")

        fields: Mapping[str, Any] = getattr(record, "fields", None) or {}
        parts.extend(self._render_field(key, fields[key]) for key in self._ordered_keys(fields))

        if not self.no_colors and not self.no_fields_colors:
            parts.append("\x1b[0m")

        message = record.getMessage()
        parts.append(message.strip() if self.trim_messages else message)
        return "".join(parts)


def get_logger(name: str = "tgspec") -> logging.Logger:
    """Logger writing to stderr through :class:`LogFormatter`."""
    logger = logging.getLogger(name)
    if not any(isinstance(handler.formatter, LogFormatter) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(LogFormatter())
        logger.addHandler(handler)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    return logger