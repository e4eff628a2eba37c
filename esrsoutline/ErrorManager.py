"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    import regex

LoggableValue = Union[str, dict[Any, Any], list[Any], set[Any], tuple[Any, ...]]

LOGGER_NAME = "esrsoutline"


class ErrorManager:
    """Routes message-coded diagnostics to the esrsoutline logger and keeps a tally of them.

    Messages are logged with %(name)s style named arguments, a messageCode (such as
    esrs:fragmentNotFound) and refs identifying the document (and source line) the message
    pertains to.  Codes of messages at or above errorCaptureLevel are kept in errors.
    """
    _errorCaptureLevel: int
    _errors: list[str]
    _logCount: dict[int, int]
    messageCodeFilter: regex.Pattern[str] | None

    def __init__(self, logger: logging.Logger | None = None, errorCaptureLevel: int = logging.WARNING) -> None:
        self.logger = logger if logger is not None else logging.getLogger(LOGGER_NAME)
        self._errorCaptureLevel = errorCaptureLevel
        self._errors = []
        self._logCount = {}
        self.messageCodeFilter = None

    @property
    def errors(self) -> list[str]:
        return self._errors

    @property
    def logCount(self) -> dict[int, int]:
        return self._logCount

    def clear(self) -> None:
        self._errors.clear()
        self._logCount.clear()

    def info(self, messageCode: str, msg: str, **args: Any) -> None:
        self.log("INFO", messageCode, msg, **args)

    def warning(self, messageCode: str, msg: str, **args: Any) -> None:
        self.log("WARNING", messageCode, msg, **args)

    def error(self, messageCode: str, msg: str, **args: Any) -> None:
        """Logs a message as error, by code, with logging-system message text (using %(name)s named
        arguments).  Args may include modelObject (an XmlNode, a document location string, or a
        sequence of them) which is converted into refs giving the href and source line; every other
        arg must be a named argument of msg.
        """
        self.log("ERROR", messageCode, msg, **args)

    def log(self, level: str, messageCode: str, msg: str, **args: Any) -> None:
        if self.messageCodeFilter is not None and not self.messageCodeFilter.match(messageCode):
            return
        numericLevel = logging.getLevelName(level.upper())
        if not isinstance(numericLevel, int):
            numericLevel = logging.INFO
        refs = logRefs(args.pop("modelObject", None))
        fmtArgs: dict[str, LoggableValue] = {name: value if isinstance(value, (str, dict, list, set, tuple)) else str(value)
                                             for name, value in args.items()}
        self._logCount[numericLevel] = self._logCount.get(numericLevel, 0) + 1
        if numericLevel >= self._errorCaptureLevel:
            self._errors.append(messageCode)
        logArgs: tuple[Any, ...] = (msg, fmtArgs) if fmtArgs else (msg,)
        self.logger.log(numericLevel, *logArgs, extra={"messageCode": messageCode, "refs": refs})


def logRefs(modelObject: Any) -> list[dict[str, Any]]:
    refs: list[dict[str, Any]] = []
    objects = modelObject if isinstance(modelObject, (tuple, list, set)) else (modelObject,)
    for obj in objects:
        if obj is None:
            continue
        if isinstance(obj, str):
            refs.append({"href": obj})
            continue
        href = getattr(obj, "documentUri", None)
        if href:
            ref: dict[str, Any] = {"href": href}
            objId = getattr(obj, "id", None)
            if objId:
                ref["href"] = "{}#{}".format(href, objId)
            sourceLine = getattr(obj, "sourceline", None)
            if sourceLine:
                ref["sourceLine"] = sourceLine
            refs.append(ref)
    return refs
