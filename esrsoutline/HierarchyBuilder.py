'''
See COPYRIGHT.md for copyright information.

Builds a labeled, ordered tree of taxonomy elements from the arcs of one extended link
linkbase (presentation, definition or calculation), following each arc's xlink:from and
xlink:to through the link:loc locators to element ids.
'''
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from esrsoutline import LabelParts, UrlUtil, XbrlConst
from esrsoutline.ErrorManager import ErrorManager
from esrsoutline.LinkbaseIndex import CoreIndexes, hrefFragment, linkbaseElement
from esrsoutline.typing import TypeGetText
from esrsoutline.XbrlConst import LinkbaseType
from esrsoutline.XmlNode import XmlNode

_: TypeGetText

ROLE_NOT_FOUND = "(not found)"

# element attributes copied onto nodes, node field name -> schema attribute name
elementAttributeNames = (
    ("type", "type"),
    ("substitutionGroup", "substitutionGroup"),
    ("abstract", "abstract"),
    ("nillable", "nillable"),
    ("periodType", XbrlConst.qnXbrliPeriodType),
)


@dataclass(eq=False)
class HierarchyNode:
    id: str
    label: str | None = None
    documentation: str | None = None
    order: float | None = None
    type: str | None = None
    substitutionGroup: str | None = None
    abstract: str | None = None
    nillable: str | None = None
    periodType: str | None = None
    arcrole: str | None = None
    preferredLabel: str | None = None
    dimension: HierarchyNode | None = None
    children: list[HierarchyNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return "HierarchyNode[{0}, {1} children]".format(self.id, len(self.children))

    def sortKey(self) -> float:
        return self.order if self.order is not None else 0.0

    def iterDescendants(self) -> Iterable[HierarchyNode]:
        seen = {id(self)}
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    def toDict(self, _ancestors: frozenset[int] = frozenset()) -> dict[str, Any]:
        """Node shape for presenters (text, json, sql), absent values omitted."""
        result: dict[str, Any] = {"id": self.id}
        for name in ("label", "order", "type", "documentation", "substitutionGroup",
                     "abstract", "nillable", "periodType"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if id(self) in _ancestors:
            return result  # arc cycle
        ancestors = _ancestors | {id(self)}
        if self.dimension is not None and id(self.dimension) not in ancestors:
            result["dimension"] = self.dimension.toDict(ancestors)
        result["children"] = [child.toDict(ancestors) for child in self.children]
        return result


@dataclass(eq=False)
class HierarchyRoot(HierarchyNode):
    sectionCode: str | None = None
    labels: list[str | None] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    sourceFile: str | None = None
    linkType: LinkbaseType = LinkbaseType.PRESENTATION

    def __repr__(self) -> str:
        return "HierarchyRoot[{0}, {1}, {2}]".format(self.sectionCode, self.sourceFile, self.label)

    @property
    def rootNode(self) -> HierarchyNode | None:
        return self.children[0] if self.children else None

    def toDict(self, _ancestors: frozenset[int] = frozenset()) -> dict[str, Any]:
        result = super(HierarchyRoot, self).toDict(_ancestors)
        result["sectionCode"] = self.sectionCode
        result["labels"] = self.labels
        result["roles"] = self.roles
        if self.sourceFile is not None:
            result["sourceFile"] = self.sourceFile
        return result


def parseOrder(order: str | None) -> float | None:
    """Arc order attribute as a number, None when absent; raises ValueError when malformed."""
    if order is None or not order.strip():
        return None
    return float(order)


def linkbaseSourceFile(linkbase: XmlNode) -> str | None:
    href = linkbase.href
    if href:
        # path below the taxonomy's linkbases directory, e.g. pre_esrs_301060.xml
        return UrlUtil.splitDecodeFragment(href)[0].rpartition("linkbases/")[2]
    if linkbase.documentUri:
        return UrlUtil.baseName(linkbase.documentUri)
    return None


def buildHierarchy(linkType: LinkbaseType | str,
                   linkbase: XmlNode,
                   indexes: CoreIndexes,
                   getAllNodes: bool = False,
                   dimensionNodes: dict[str, HierarchyNode] | None = None,
                   sourceFile: str | None = None,
                   errorManager: ErrorManager | None = None) -> HierarchyRoot | dict[str, HierarchyNode] | None:
    """Build the tree of linkType arcs of linkbase, which is either a link:linkbase element or a
    link:linkbaseRef with its linkbase grafted beneath it.

    :returns: the HierarchyRoot, whose single child is the linkbase's root node; or, when getAllNodes,
        every node by element id; or None when the linkbase has no link of linkType.
    """
    if errorManager is None:
        errorManager = ErrorManager()
    linkType = LinkbaseType(linkType)
    if sourceFile is None:
        sourceFile = linkbaseSourceFile(linkbase)
    lbElement = linkbaseElement(linkbase)
    extendedLinks = lbElement.childNodes(linkType.linkTag) if lbElement is not None else []
    if not extendedLinks:
        errorManager.error("esrs:linkNotFound",
            _("No %(linkTag)s found in %(sourceFile)s"),
            modelObject=linkbase, linkTag=linkType.linkTag, sourceFile=sourceFile)
        return None

    nodeMap: dict[str, HierarchyNode] = {}
    childrenIds: set[str] = set()
    locatorCount = arcCount = 0

    def nodeFor(elementId: str) -> HierarchyNode:
        node = nodeMap.get(elementId)
        if node is None:
            node = HierarchyNode(elementId,
                                 label=indexes.labels.label(elementId),
                                 documentation=indexes.labels.documentation(elementId))
            attributes = indexes.elements.attributes(elementId)
            if attributes:
                for fieldName, attrName in elementAttributeNames:
                    setattr(node, fieldName, attributes.get(attrName))
            if dimensionNodes:
                node.dimension = dimensionNodes.get(elementId)
            nodeMap[elementId] = node
        return node

    for extendedLink in extendedLinks:
        # locator labels are local to their extended link
        locatorHrefs = {loc.xlinkLabel: loc.href
                        for loc in extendedLink.childNodes(XbrlConst.qnLinkLoc)
                        if loc.xlinkLabel}
        locatorCount += len(locatorHrefs)
        arcs = extendedLink.childNodes(linkType.arcTag)
        arcCount += len(arcs)
        for arc in arcs:
            parentId = hrefFragment(locatorHrefs.get(arc.xlinkFrom or ""))
            childId = hrefFragment(locatorHrefs.get(arc.xlinkTo or ""))
            if not parentId or not childId:
                errorManager.warning("esrs:unresolvedLocator",
                    _("Arc from %(from)s to %(to)s in %(sourceFile)s has no locator with an element fragment"),
                    modelObject=arc, sourceFile=sourceFile,
                    **{"from": arc.xlinkFrom or "", "to": arc.xlinkTo or ""})
                continue
            parent = nodeFor(parentId)
            child = nodeFor(childId)
            try:
                order = parseOrder(arc.order)
            except ValueError:
                errorManager.warning("esrs:malformedOrder",
                    _("Arc to %(elementId)s in %(sourceFile)s has malformed order %(order)s, treated as 0"),
                    modelObject=arc, elementId=childId, sourceFile=sourceFile, order=arc.order)
                order = 0.0
            # order describes the child's position under this parent, last arc wins
            child.order = order
            child.arcrole = arc.arcrole
            preferredLabel = arc.get(XbrlConst.qnPreferredLabel)
            if preferredLabel:
                child.preferredLabel = preferredLabel
                child.label = indexes.labels.label(childId, preferredLabel) or child.label
            parent.children.append(child)
            childrenIds.add(childId)

    if not locatorCount:
        errorManager.warning("esrs:missingLocators",
            _("No link:loc found in %(sourceFile)s"),
            modelObject=linkbase, sourceFile=sourceFile)
    if not arcCount:
        errorManager.warning("esrs:missingArcs",
            _("No %(arcTag)s found in %(sourceFile)s"),
            modelObject=linkbase, arcTag=linkType.arcTag, sourceFile=sourceFile)

    for node in nodeMap.values():
        node.children.sort(key=HierarchyNode.sortKey)

    if getAllNodes:
        return nodeMap

    roleRefs = lbElement.childNodes(XbrlConst.qnLinkRoleRef) if lbElement is not None else []
    roles = [roleId for roleId in (hrefFragment(roleRef.href) for roleRef in roleRefs) if roleId]
    labels = [roleDefinition(roleRef, indexes) for roleRef in roleRefs if hrefFragment(roleRef.href)]
    label = next((_label for _label in labels if _label is not None), ROLE_NOT_FOUND)

    rootIds = [elementId for elementId in nodeMap if elementId not in childrenIds]
    if nodeMap and len(rootIds) != 1:
        errorManager.warning("esrs:ambiguousRoot",
            _("%(sourceFile)s has %(count)s nodes without a parent (%(rootIds)s), using %(rootId)s"),
            modelObject=linkbase, sourceFile=sourceFile, count=len(rootIds),
            rootIds=", ".join(rootIds), rootId=rootIds[0] if rootIds else _("none"))
    rootNode = nodeMap[rootIds[0]] if rootIds else None

    return HierarchyRoot(roles[0] if roles else (sourceFile or ""),
                         label=label,
                         sectionCode=LabelParts.sectionCode(label),
                         labels=labels,
                         roles=roles,
                         sourceFile=sourceFile,
                         linkType=linkType,
                         children=[rootNode] if rootNode is not None else [])


def roleDefinition(roleRef: XmlNode, indexes: CoreIndexes) -> str | None:
    """Definition of the role a link:roleRef points to: the role label, else the roleType definition
    (from the core schema index, else the roleType grafted under the roleRef).
    """
    roleId = hrefFragment(roleRef.href)
    if not roleId:
        return None
    definition = indexes.roleDefinition(roleId)
    if definition is None:
        roleType = roleRef.child(XbrlConst.qnLinkRoleType)
        if roleType is not None:
            definitionElt = roleType.child(XbrlConst.qnLinkDefinition)
            if definitionElt is not None:
                definition = definitionElt.text
    return definition


def buildDimensionLookup(linkbases: Iterable[XmlNode],
                         indexes: CoreIndexes,
                         errorManager: ErrorManager | None = None) -> dict[str, HierarchyNode]:
    """Every definition linkbase node by element id, first linkbase wins on shared ids."""
    lookup: dict[str, HierarchyNode] = {}
    for linkbase in linkbases:
        nodes = buildHierarchy(LinkbaseType.DEFINITION, linkbase, indexes, getAllNodes=True, errorManager=errorManager)
        if isinstance(nodes, dict):
            for elementId, node in nodes.items():
                lookup.setdefault(elementId, node)
    return lookup
