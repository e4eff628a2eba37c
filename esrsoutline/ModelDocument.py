'''
See COPYRIGHT.md for copyright information.

Reference graph resolution: loads a root taxonomy document, discovers its xs:import /
xs:include schemaLocations and every xlink:href in the document, and loads each referenced
document once, grafting the referenced document (or, for #fragment references, the
referenced element) into the referring element.
'''
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from lxml import etree

from esrsoutline import UrlUtil, XbrlConst
from esrsoutline.ErrorManager import ErrorManager
from esrsoutline.FileSource import FileSource, FileSourceException
from esrsoutline.typing import TypeFetcher, TypeGetText
from esrsoutline.XmlNode import XmlNode, decode

_: TypeGetText


class LoadingException(Exception):
    pass


class ReferenceKind(Enum):
    SCHEMA_IMPORT = "schema-import"
    SCHEMA_INCLUDE = "schema-include"
    XLINK_HREF = "xlink-href"


@dataclass(frozen=True)
class ReferenceEdge:
    kind: ReferenceKind
    source: str
    target: str
    fragment: str | None = None


@dataclass
class DocumentGraph:
    """Documents reachable from rootUri, keyed by resolved location."""
    rootUri: str
    urlDocs: dict[str, XmlNode] = field(default_factory=dict)
    urlUnloadableDocs: set[str] = field(default_factory=set)
    edges: list[ReferenceEdge] = field(default_factory=list)
    _idIndexes: dict[str, dict[str, XmlNode]] = field(default_factory=dict, repr=False)

    @property
    def rootDocument(self) -> XmlNode | None:
        return self.urlDocs.get(self.rootUri)

    def document(self, uri: str) -> XmlNode | None:
        return self.urlDocs.get(uri)

    def findDocuments(self, basename: str) -> list[tuple[str, XmlNode]]:
        """Loaded documents whose file name is basename, in load order."""
        return [(uri, doc) for uri, doc in self.urlDocs.items()
                if UrlUtil.baseName(uri) == basename]

    def findDocument(self, basename: str) -> tuple[str, XmlNode] | None:
        found = self.findDocuments(basename)
        return found[0] if found else None

    def elementById(self, uri: str, id: str) -> XmlNode | None:
        """The element of document uri whose id attribute is id (grafted content of other documents excluded)."""
        idIndex = self._idIndexes.get(uri)
        if idIndex is None:
            doc = self.urlDocs.get(uri)
            if doc is None:
                return None
            idIndex = {}
            for node in _iterDocumentNodes(doc, uri):
                if node.id and node.id not in idIndex:
                    idIndex[node.id] = node
            self._idIndexes[uri] = idIndex
        return idIndex.get(id)


def _iterDocumentNodes(doc: XmlNode, uri: str) -> Iterator[XmlNode]:
    yield doc
    stack = list(reversed(list(doc.iterChildren())))
    while stack:
        node = stack.pop()
        if node.documentUri != uri:
            continue  # grafted from another document
        yield node
        stack.extend(reversed(list(node.iterChildren())))


class ResolutionContext:
    """State of one resolution walk.  The visited set is shared by every recursive call so that
    a document reached along several branches (or around a cycle) is fetched only once.

    Without a fetcher the context reads through a FileSource of its own, whose http session is
    released by close() (or on leaving ``async with``).
    """

    def __init__(self,
                 fetcher: TypeFetcher | None = None,
                 errorManager: ErrorManager | None = None,
                 graph: DocumentGraph | None = None) -> None:
        self.fileSource: FileSource | None = None
        if fetcher is None:
            self.fileSource = FileSource()
            fetcher = self.fileSource.read
        self.fetcher = fetcher
        self.errorManager = errorManager if errorManager is not None else ErrorManager()
        self.graph = graph
        self.visited: set[str] = set()

    async def __aenter__(self) -> ResolutionContext:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self.fileSource is not None:
            await self.fileSource.close()


async def resolve(rootLocation: str,
                  fetcher: TypeFetcher | None = None,
                  errorManager: ErrorManager | None = None,
                  context: ResolutionContext | None = None) -> DocumentGraph:
    """Load rootLocation and every document reachable from it.

    Raises LoadingException when the root itself can't be fetched or parsed; failures of
    referenced documents are logged as warnings and their edges dropped.  Passing the context
    of a prior resolution adds to its graph, skipping documents that walk already visited; the
    caller then closes that context.
    """
    if context is None:
        async with ResolutionContext(fetcher, errorManager) as ownContext:
            return await resolveInContext(rootLocation, ownContext)
    return await resolveInContext(rootLocation, context)


async def resolveInContext(rootLocation: str, context: ResolutionContext) -> DocumentGraph:
    rootUri = UrlUtil.normalizeUrl(rootLocation)
    if context.graph is None:
        context.graph = DocumentGraph(rootUri)
    if rootUri in context.visited:
        return context.graph
    rootDoc = await loadDocument(context, rootUri, isRoot=True)
    assert rootDoc is not None
    await discover(context, rootDoc, rootUri)
    return context.graph


async def loadDocument(context: ResolutionContext,
                       uri: str,
                       referringElement: XmlNode | None = None,
                       isRoot: bool = False) -> XmlNode | None:
    graph = context.graph
    assert graph is not None
    context.visited.add(uri)
    fileName = UrlUtil.baseName(uri)
    try:
        content = await context.fetcher(uri)
        doc = decode(content, uri)
    except (FileSourceException, OSError) as err:
        graph.urlUnloadableDocs.add(uri)
        if isRoot:
            context.errorManager.error("esrs:rootNotLoadable",
                _("%(fileName)s: could not load root: %(error)s"),
                modelObject=uri, fileName=fileName, error=str(err))
            raise LoadingException(_("could not load root {0}: {1}").format(uri, err)) from err
        context.errorManager.warning("esrs:fileNotLoadable",
            _("%(fileName)s: file error: %(error)s"),
            modelObject=(referringElement, uri), fileName=fileName, error=str(err))
        return None
    except (etree.LxmlError, ValueError) as err:
        graph.urlUnloadableDocs.add(uri)
        if isRoot:
            context.errorManager.error("esrs:rootNotLoadable",
                _("%(fileName)s: could not load root: %(error)s"),
                modelObject=uri, fileName=fileName, error=str(err))
            raise LoadingException(_("could not load root {0}: {1}").format(uri, err)) from err
        context.errorManager.warning("xmlSchema:syntax",
            _("Unrecoverable error: %(error)s, %(fileName)s"),
            modelObject=(referringElement, uri), fileName=fileName, error=str(err))
        return None
    graph.urlDocs[uri] = doc
    context.errorManager.info("esrs:loaded",
        _("loaded %(fileName)s"),
        modelObject=uri, fileName=fileName)
    return doc


def iterReferences(doc: XmlNode) -> Iterator[tuple[XmlNode, ReferenceKind, str]]:
    """Reference bearing elements of doc: schemaLocations of xs:schema level imports and includes,
    then every element carrying an xlink:href, in document order.
    """
    if doc.tag == XbrlConst.qnXsdSchema:
        for tag, kind in ((XbrlConst.qnXsdImport, ReferenceKind.SCHEMA_IMPORT),
                          (XbrlConst.qnXsdInclude, ReferenceKind.SCHEMA_INCLUDE)):
            for element in doc.childNodes(tag):
                if element.schemaLocation:
                    yield element, kind, element.schemaLocation
    if doc.href:
        yield doc, ReferenceKind.XLINK_HREF, doc.href
    for element in doc.iterDescendants():
        if element.href:
            yield element, ReferenceKind.XLINK_HREF, element.href


async def discover(context: ResolutionContext, doc: XmlNode, docUri: str) -> None:
    graph = context.graph
    assert graph is not None
    # references are collected before anything is grafted into doc
    for referringElement, kind, href in list(iterReferences(doc)):
        path, fragment = UrlUtil.splitDecodeFragment(href)
        target = UrlUtil.normalizeUrl(path, docUri) if path else docUri
        if target in graph.urlUnloadableDocs:
            continue
        edge = ReferenceEdge(kind, docUri, target, fragment or None)
        if target in context.visited:
            graph.edges.append(edge)
            if fragment and target != docUri and target in graph.urlDocs:
                graftFragment(context, referringElement, target, fragment)
            continue
        targetDoc = await loadDocument(context, target, referringElement)
        if targetDoc is None:
            continue
        graph.edges.append(edge)
        await discover(context, targetDoc, target)
        if fragment:
            graftFragment(context, referringElement, target, fragment)
        else:
            referringElement.addChild(targetDoc)


def graftFragment(context: ResolutionContext, referringElement: XmlNode, target: str, fragment: str) -> XmlNode | None:
    assert context.graph is not None
    element = context.graph.elementById(target, fragment)
    if element is None:
        context.errorManager.warning("esrs:fragmentNotFound",
            _("%(fileName)s: no element has id %(fragment)s"),
            modelObject=(referringElement, target), fileName=UrlUtil.baseName(target), fragment=fragment)
        return None
    if element is not referringElement:
        referringElement.addChild(element)
    return element
