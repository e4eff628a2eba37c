"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import logging
import sys
from typing import TextIO


class LogToPrintHandler(logging.Handler):
    """
    .. class:: LogToPrintHandler(logOutput)

    Writes each formatted record as one console line, to stderr when logOutput is "logToStdErr"
    and to stdout otherwise.  The stream is looked up per record, so a console redirected after
    startLogging still receives the log.  Characters the console cannot encode are backslash escaped.
    """
    def __init__(self, logOutput: str = "logToPrint") -> None:
        super(LogToPrintHandler, self).__init__()
        self.toStdErr = logOutput == "logToStdErr"

    @property
    def stream(self) -> TextIO:
        return sys.stderr if self.toStdErr else sys.stdout

    def emit(self, logRecord: logging.LogRecord) -> None:
        try:
            stream = self.stream
            encoding = getattr(stream, "encoding", None) or "utf-8"
            line = self.format(logRecord).encode(encoding, "backslashreplace").decode(encoding)
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            self.handleError(logRecord)
