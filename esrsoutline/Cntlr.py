# -*- coding: utf-8 -*-
"""
:mod:`esrsoutline.Cntlr`
~~~~~~~~~~~~~~~~~~~~~~~~

.. py:module:: esrsoutline.Cntlr
   :copyright: See COPYRIGHT.md for copyright information.
   :synopsis: Controller to set up logging and load the ESRS disclosure outline of a taxonomy
"""
from __future__ import annotations

import asyncio
import gettext
import logging
import sys
from dataclasses import dataclass
from typing import Any

from esrsoutline import UrlUtil, XbrlConst
from esrsoutline.ErrorManager import LOGGER_NAME, ErrorManager
from esrsoutline.FileSource import FileSource
from esrsoutline.HierarchyBuilder import HierarchyNode, HierarchyRoot, buildDimensionLookup, buildHierarchy
from esrsoutline.LinkbaseIndex import (CoreIndexes, LabelIndex, buildElementIndex, buildLabelIndex,
                                       buildRoleIndex)
from esrsoutline.logging.formatters.LogFormatter import LogFormatter
from esrsoutline.logging.handlers.LogToBufferHandler import LogToBufferHandler
from esrsoutline.logging.handlers.LogToPrintHandler import LogToPrintHandler
from esrsoutline.ModelDocument import DocumentGraph, LoadingException, ResolutionContext, resolve
from esrsoutline.RuntimeOptions import RuntimeOptions
from esrsoutline.SectionAssembler import SectionNode, assemble, loadSectionDescriptors
from esrsoutline.typing import TypeFetcher, TypeGetText
from esrsoutline.XbrlConst import LinkbaseType
from esrsoutline.XmlNode import XmlNode

_: TypeGetText


@dataclass(eq=False)
class Outline:
    sections: list[SectionNode]
    roots: list[HierarchyRoot]
    graph: DocumentGraph
    indexes: CoreIndexes

    def toDict(self) -> dict[str, Any]:
        return {"sections": [section.toDict() for section in self.sections]}


class Cntlr:
    """
    Initialization sets up gettext and the esrsoutline logger.

    :param logFileName: logToPrint, logToStdErr, logToBuffer, or a file name for a plain text log
    :type logFileName: str
    :param fetcher: async read(pathOrUrl) -> bytes replacing the FileSource of each load (e.g. in tests)
    """
    logger: logging.Logger | None
    logHandler: logging.Handler | None

    def __init__(
        self,
        logFileName: str | None = None,
        logFileMode: str | None = None,
        logFileEncoding: str | None = None,
        logFormat: str | None = None,
        logLevel: str | None = None,
        logHandler: logging.Handler | None = None,
        logToBuffer: bool = False,
        fetcher: TypeFetcher | None = None,
    ) -> None:
        gettext.install("esrsoutline")
        self.logger = None
        self.logHandler = None
        self.startLogging(logFileName=logFileName, logFileMode=logFileMode, logFileEncoding=logFileEncoding,
                          logFormat=logFormat, logLevel=logLevel, logHandler=logHandler, logToBuffer=logToBuffer)
        self.errorManager = ErrorManager(self.logger)
        self.fetcher = fetcher

    def startLogging(
        self,
        logFileName: str | None = None,
        logFileMode: str | None = None,
        logFileEncoding: str | None = None,
        logFormat: str | None = None,
        logLevel: str | None = None,
        logHandler: logging.Handler | None = None,
        logToBuffer: bool = False,
    ) -> None:
        if logHandler is not None:
            self.logger = logging.getLogger(LOGGER_NAME)
            self.logHandler = logHandler
            if logHandler.formatter is None:
                logHandler.setFormatter(LogFormatter(logFormat))
            self.logger.addHandler(logHandler)
        elif logFileName or logToBuffer:
            self.logger = logging.getLogger(LOGGER_NAME)
            if logFileName in ("logToPrint", "logToStdErr") and not logToBuffer:
                self.logHandler = LogToPrintHandler(logFileName)
            elif logFileName == "logToBuffer" or logToBuffer or not logFileName:
                self.logHandler = LogToBufferHandler()
            else:
                self.logHandler = logging.FileHandler(filename=logFileName,
                                                      mode=logFileMode or "a",
                                                      encoding=logFileEncoding or "utf-8")
            self.logHandler.setFormatter(LogFormatter(logFormat))
            self.logger.addHandler(self.logHandler)
        else:
            self.logger = None
        if self.logger is not None:
            try:
                self.logger.setLevel((logLevel or "debug").upper())
            except ValueError:
                self.addToLog(_("Unknown log level name: {0}, please choose from {1}").format(
                    logLevel, ', '.join(logging.getLevelName(l).lower()
                                        for l in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL))),
                              level=logging.ERROR, messageCode="esrs:logLevel")

    def addToLog(
        self,
        message: str,
        messageCode: str = "",
        messageArgs: dict[str, Any] | None = None,
        file: str = "",
        refs: list[dict[str, Any]] | None = None,
        level: int | str = logging.INFO
    ) -> None:
        """Add a simple info message to the default logger

        :param message: Text of message to add to log.
        :type message: str
        :param messageArgs: optional dict of message format-string key-value pairs
        :type messageArgs: dict
        :param messageCode: Message code (e.g., a prefix:id of a standard error)
        :type messageCode: str
        :param file: File name (and optional line numbers) pertaining to message
        :type file: str
        """
        args: tuple[str] | tuple[str, dict[str, Any]]
        if self.logger is not None:
            if messageArgs:
                args = (message, messageArgs)
            else:
                args = (message,)  # pass no args if none provided
            if refs is None:
                refs = []
            if file:
                refs.append({"href": file})
            if isinstance(level, str):
                level = logging.getLevelName(level.upper())
            assert isinstance(level, int)
            self.logger.log(level, *args, extra={"messageCode": messageCode, "refs": refs})
        else:
            try:
                print(message % (messageArgs or {}))
            except UnicodeEncodeError:
                print(message
                      .encode(sys.stdout.encoding, 'backslashreplace')
                      .decode(sys.stdout.encoding, 'strict'))

    def run(self, options: RuntimeOptions) -> Outline:
        """Load the outline of options.entrypointFile, raises LoadingException if the entry point can't be loaded."""
        return asyncio.run(self.loadOutline(options))

    async def loadOutline(self, options: RuntimeOptions) -> Outline:
        fileSource = FileSource(options.urlMappings,
                                options.internetConnectivity or "online",
                                options.internetTimeout,
                                options.httpUserAgent)
        async with fileSource:
            context = ResolutionContext(self.fetcher or fileSource.read, self.errorManager)
            assert options.entrypointFile is not None
            graph = await resolve(options.entrypointFile, context=context)
            entrypointUri = graph.rootUri

            coreSchema = await self.findDocument(context, options.coreSchema, entrypointUri)
            labels = LabelIndex()
            for labelLinkbase in options.labelLinkbases:
                labelDoc = await self.findDocument(context, labelLinkbase, entrypointUri)
                if labelDoc is not None:
                    labels.update(buildLabelIndex(labelDoc, self.errorManager, options.labelLang))
            roles: dict[str, str] = {}
            if options.roleLabelLinkbase:
                roleLabelDoc = await self.findDocument(context, options.roleLabelLinkbase, entrypointUri)
                if roleLabelDoc is not None:
                    roles = buildRoleIndex(roleLabelDoc, self.errorManager, options.labelLang)
            indexes = CoreIndexes(labels, roles, buildElementIndex(coreSchema, self.errorManager))

        dimensionNodes: dict[str, HierarchyNode] = {}
        if options.dimensionLinkbaseFilter:
            dimensionNodes = buildDimensionLookup(
                (doc for uri, doc in linkbaseDocuments(graph, options.dimensionLinkbaseFilter)),
                indexes, self.errorManager)

        roots = []
        for uri, doc in linkbaseDocuments(graph, options.linkbaseFilter):
            root = buildHierarchy(LinkbaseType.PRESENTATION, doc, indexes,
                                  dimensionNodes=dimensionNodes,
                                  errorManager=self.errorManager)
            if isinstance(root, HierarchyRoot):
                roots.append(root)
            else:
                self.addToLog(_("skipped linkbase %(fileName)s"), messageCode="esrs:linkbaseSkipped",
                              messageArgs={"fileName": UrlUtil.baseName(uri)}, file=uri, level=logging.WARNING)

        sections = assemble(loadSectionDescriptors(options.sectionsFile), roots)
        self.addToLog(_("outline of %(entrypoint)s: %(rootCount)s hierarchies in %(sectionCount)s sections"),
                      messageCode="esrs:outlineLoaded",
                      messageArgs={"entrypoint": UrlUtil.baseName(entrypointUri),
                                   "rootCount": len(roots), "sectionCount": len(sections)},
                      file=entrypointUri)
        return Outline(sections, roots, graph, indexes)

    async def findDocument(self, context: ResolutionContext, location: str, entrypointUri: str) -> XmlNode | None:
        """The document at location (relative to the entry point) when already loaded, else the loaded
        document with location's file name (the first loaded, with a warning, when several share it),
        else location loaded through context; None, with a warning, when it can't be loaded.
        """
        assert context.graph is not None
        uri = UrlUtil.normalizeUrl(location, entrypointUri)
        doc = context.graph.document(uri)
        if doc is not None:
            return doc
        found = context.graph.findDocuments(UrlUtil.baseName(location))
        if len(found) > 1:
            self.addToLog(_("%(fileName)s matches %(count)s loaded documents, using %(uri)s"),
                          messageCode="esrs:ambiguousDocument",
                          messageArgs={"fileName": location, "count": len(found), "uri": found[0][0]},
                          refs=[{"href": foundUri} for foundUri, foundDoc in found], level=logging.WARNING)
        if found:
            return found[0][1]
        try:
            await resolve(uri, context=context)
        except LoadingException as err:
            self.addToLog(_("%(fileName)s not found: %(error)s"), messageCode="esrs:documentNotFound",
                          messageArgs={"fileName": location, "error": str(err)}, file=uri, level=logging.WARNING)
            return None
        return context.graph.document(uri)

    def close(self) -> None:
        """Closes the controller's log handler."""
        if self.logger is not None and self.logHandler is not None:
            self.logger.removeHandler(self.logHandler)
            self.logHandler.close()


def linkbaseDocuments(graph: DocumentGraph, basenamePrefix: str) -> list[tuple[str, XmlNode]]:
    """Loaded linkbases whose file name starts with basenamePrefix, by file name."""
    return sorted(((uri, doc) for uri, doc in graph.urlDocs.items()
                   if doc.tag == XbrlConst.qnLinkLinkbase and UrlUtil.baseName(uri).startswith(basenamePrefix)),
                  key=lambda uriDoc: (UrlUtil.baseName(uriDoc[0]), uriDoc[0]))


def runOutline(options: RuntimeOptions, fetcher: TypeFetcher | None = None) -> Outline:
    """Load the outline with a controller logging as options.logFile, options.logFormat and options.logLevel specify."""
    cntlr = Cntlr(logFileName=options.logFile,
                  logFormat=options.logFormat,
                  logLevel=options.logLevel,
                  fetcher=fetcher)
    try:
        return cntlr.run(options)
    finally:
        cntlr.close()
