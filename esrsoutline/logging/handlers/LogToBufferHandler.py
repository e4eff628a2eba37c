"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any


class LogToBufferHandler(logging.Handler):
    """
    .. class:: LogToBufferHandler()

    A log handler that keeps log entries in a memory buffer for later retrieval as JSON or text lines,
    usually for return to a calling application or for inspection in tests.
    """
    logRecordBuffer: list[logging.LogRecord]

    def __init__(self) -> None:
        super(LogToBufferHandler, self).__init__()
        self.logRecordBuffer = []

    def emit(self, logRecord: logging.LogRecord) -> None:
        self.logRecordBuffer.append(logRecord)

    def clearLogBuffer(self) -> None:
        del self.logRecordBuffer[:]

    def recordToJson(self, logRec: logging.LogRecord) -> dict[str, Any]:
        message = {"text": self.format(logRec)}
        if logRec.args and isinstance(logRec.args, Mapping):
            for n, v in logRec.args.items():
                message[n] = str(v)
        return {"code": getattr(logRec, "messageCode", ""),
                "level": logRec.levelname.lower(),
                "refs": getattr(logRec, "refs", []),
                "message": message}

    def getJson(self, clearLogBuffer: bool = True) -> str:
        """Returns a JSON string representing the messages in the log buffer, and clears the buffer.

        :returns: str -- json representation of messages in the log buffer
        """
        entries = [self.recordToJson(logRec) for logRec in self.logRecordBuffer]
        if clearLogBuffer:
            self.clearLogBuffer()
        return json.dumps({"log": entries}, ensure_ascii=False, indent=1, default=str)

    def getLines(self, clearLogBuffer: bool = True) -> list[str]:
        """Returns a list of the message strings in the log buffer, and clears the buffer.

        :returns: [str] -- list of strings representing messages corresponding to log buffer entries
        """
        lines = [self.format(logRec) for logRec in self.logRecordBuffer]
        if clearLogBuffer:
            self.clearLogBuffer()
        return lines

    def getText(self, separator: str = '\n', clearLogBuffer: bool = True) -> str:
        """Returns a string of the lines in the log buffer, separated by newline or provided separator.

        :returns: str -- text representation of messages in the log buffer
        """
        return separator.join(self.getLines(clearLogBuffer=clearLogBuffer))

    def getCodes(self, clearLogBuffer: bool = False) -> list[str]:
        codes = [getattr(logRec, "messageCode", "") for logRec in self.logRecordBuffer]
        if clearLogBuffer:
            self.clearLogBuffer()
        return codes
