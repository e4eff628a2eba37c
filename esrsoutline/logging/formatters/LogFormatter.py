"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import logging
from typing import Any

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(messageCode)s] %(message)s%(location)s"


class LogFormatter(logging.Formatter):
    """
    .. class:: LogFormatter(fmt, datefmt)

    Formats records logged through ErrorManager or Cntlr.addToLog.  Besides the standard record
    attributes the format may use ``%(messageCode)s`` and ``%(location)s``, the latter being the
    record's refs rendered as `` - href:line, href`` (empty when the record has no refs).
    """
    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super(LogFormatter, self).__init__(fmt or DEFAULT_LOG_FORMAT, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record.location = refsLocation(getattr(record, "refs", None) or [])
        if not hasattr(record, "messageCode"):
            record.messageCode = ""
        try:
            return super(LogFormatter, self).format(record)
        except (KeyError, TypeError, ValueError) as ex:
            # message arguments not matching the message text, keep the raw text
            return "[{0}] {1}{2} (message arguments error: {3})".format(
                record.messageCode, record.msg, record.location, ex)
        finally:
            del record.location


def refsLocation(refs: list[dict[str, Any]]) -> str:
    """Refs as " - href:line, href", each document position once and in the order logged."""
    positions: list[str] = []
    for ref in refs:
        href = ref.get("href")
        if not href:
            continue
        position = "{0}:{1}".format(href, ref["sourceLine"]) if ref.get("sourceLine") else href
        if position not in positions:
            positions.append(position)
    if not positions:
        return ""
    return " - " + ", ".join(positions)
