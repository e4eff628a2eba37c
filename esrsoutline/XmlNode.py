'''
See COPYRIGHT.md for copyright information.

Generic decoded-XML node model: every element becomes an XmlNode whose attributes
are kept in a string keyed attribute bag, whose child elements are grouped by
qualified tag (a repeated tag becomes a list) and whose text, when it has no
element children, is a scalar.
'''
from __future__ import annotations

from collections.abc import Iterator
from typing import Dict, List, Union

from lxml import etree

from esrsoutline import XbrlConst

ChildValue = Union["XmlNode", List["XmlNode"]]


def asSequence(value: ChildValue | None) -> list[XmlNode]:
    """Normalize a child slot, which may be absent, a lone node or a list of nodes, to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class XmlNode:
    __slots__ = ("tag", "attributes", "children", "text", "sourceline", "documentUri")

    tag: str
    attributes: Dict[str, str]
    children: Dict[str, ChildValue]
    text: str | None
    sourceline: int | None
    documentUri: str | None

    def __init__(self,
                 tag: str,
                 attributes: dict[str, str] | None = None,
                 text: str | None = None,
                 sourceline: int | None = None,
                 documentUri: str | None = None) -> None:
        self.tag = tag
        self.attributes = attributes if attributes is not None else {}
        self.children = {}
        self.text = text
        self.sourceline = sourceline
        self.documentUri = documentUri

    def __repr__(self) -> str:
        return "XmlNode[{0}{1}]".format(self.tag, "#" + self.id if self.id else "")

    @property
    def prefix(self) -> str | None:
        prefix, sep, localName = self.tag.rpartition(":")
        return prefix or None

    @property
    def localName(self) -> str:
        return self.tag.rpartition(":")[2]

    def get(self, attrName: str, default: str | None = None) -> str | None:
        return self.attributes.get(attrName, default)

    # typed accessors for the attributes the resolver, indexers and builder consume
    @property
    def id(self) -> str | None:
        return self.attributes.get(XbrlConst.qnId)

    @property
    def type(self) -> str | None:
        return self.attributes.get("type")

    @property
    def order(self) -> str | None:
        return self.attributes.get(XbrlConst.qnOrder)

    @property
    def href(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkHref)

    @property
    def xlinkLabel(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkLabel)

    @property
    def xlinkFrom(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkFrom)

    @property
    def xlinkTo(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkTo)

    @property
    def role(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkRole)

    @property
    def arcrole(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXlinkArcrole)

    @property
    def schemaLocation(self) -> str | None:
        return self.attributes.get(XbrlConst.qnSchemaLocation)

    @property
    def xmlLang(self) -> str | None:
        return self.attributes.get(XbrlConst.qnXmlLang)

    def addChild(self, node: XmlNode, key: str | None = None) -> None:
        """Add node under key (its own tag by default); a second value in the same slot turns it into a list."""
        if key is None:
            key = node.tag
        existing = self.children.get(key)
        if existing is None:
            self.children[key] = node
        elif isinstance(existing, list):
            existing.append(node)
        else:
            self.children[key] = [existing, node]

    def childNodes(self, key: str) -> list[XmlNode]:
        return asSequence(self.children.get(key))

    def child(self, key: str) -> XmlNode | None:
        nodes = asSequence(self.children.get(key))
        return nodes[0] if nodes else None

    def iterChildren(self) -> Iterator[XmlNode]:
        for value in self.children.values():
            yield from asSequence(value)

    def iterDescendants(self, tag: str | None = None) -> Iterator[XmlNode]:
        """Depth-first walk below this node, in child slot order.  Grafted elements shared by
        several referring elements are walked once.
        """
        seen = {id(self)}
        stack = list(reversed(list(self.iterChildren())))
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            if tag is None or node.tag == tag:
                yield node
            stack.extend(reversed(list(node.iterChildren())))

    def findById(self, id: str) -> XmlNode | None:
        if self.id == id:
            return self
        for node in self.iterDescendants():
            if node.id == id:
                return node
        return None


def qualifiedName(clarkName: str, nsmap: dict[str | None, str]) -> str:
    """{ns}local to prefix:local, preferring the canonical prefix of known XBRL namespaces."""
    if not clarkName.startswith("{"):
        return clarkName
    ns, sep, localName = clarkName[1:].partition("}")
    prefix = XbrlConst.canonicalPrefixes.get(ns)
    if prefix is None:
        for _prefix, _ns in nsmap.items():
            if _ns == ns and _prefix:
                prefix = _prefix
                break
    return "{}:{}".format(prefix, localName) if prefix else localName


def decode(content: bytes, documentUri: str | None = None) -> XmlNode:
    """Decode xml bytes into an XmlNode tree, raises etree.XMLSyntaxError on malformed content."""
    parser = etree.XMLParser(remove_comments=True,
                             remove_pis=True,
                             resolve_entities=False,
                             no_network=True,
                             huge_tree=True)
    rootElt = etree.fromstring(content, parser=parser, base_url=documentUri)
    return _decodeElement(rootElt, documentUri)


def _decodeElement(elt: etree._Element, documentUri: str | None) -> XmlNode:
    nsmap = elt.nsmap
    node = XmlNode(qualifiedName(elt.tag, nsmap),
                   {qualifiedName(name, nsmap): value for name, value in elt.attrib.items()},
                   sourceline=elt.sourceline,
                   documentUri=documentUri)
    hasElementChildren = False
    for childElt in elt.iterchildren(tag=etree.Element):
        hasElementChildren = True
        node.addChild(_decodeElement(childElt, documentUri))
    if not hasElementChildren:
        text = "".join(elt.itertext()).strip()
        node.text = text or None
    return node
