'''
See COPYRIGHT.md for copyright information.

Lookup tables built from the core schema and the label linkbases, consumed read-only
by the hierarchy builder.
'''
from __future__ import annotations

from dataclasses import dataclass, field

from esrsoutline import UrlUtil, XbrlConst
from esrsoutline.ErrorManager import ErrorManager
from esrsoutline.typing import TypeGetText
from esrsoutline.XmlNode import XmlNode

_: TypeGetText


def linkbaseElement(node: XmlNode | None) -> XmlNode | None:
    """The link:linkbase of node: node itself, or the linkbase grafted under a link:linkbaseRef."""
    if node is None:
        return None
    if node.tag == XbrlConst.qnLinkLinkbase:
        return node
    if node.tag == XbrlConst.qnLinkLinkbaseRef:
        return node.child(XbrlConst.qnLinkLinkbase)
    return None


def hrefFragment(href: str | None) -> str | None:
    if not href:
        return None
    return UrlUtil.splitDecodeFragment(href)[1] or None


def isLangMatch(node: XmlNode, lang: str | None) -> bool:
    xmlLang = node.xmlLang
    return not lang or not xmlLang or xmlLang.lower().startswith(lang.lower())


@dataclass
class LabelIndex:
    # element id -> label role -> text
    labels: dict[str, dict[str, str]] = field(default_factory=dict)
    # locator xlink:label -> text of the standard label (or first label) it leads to
    locatorLabels: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, elementId: object) -> bool:
        return elementId in self.labels

    def label(self, elementId: str, role: str | None = None) -> str | None:
        roleLabels = self.labels.get(elementId)
        if not roleLabels:
            return None
        if role and role in roleLabels:
            return roleLabels[role]
        return roleLabels.get(XbrlConst.standardLabel)

    def documentation(self, elementId: str) -> str | None:
        roleLabels = self.labels.get(elementId)
        if roleLabels:
            return roleLabels.get(XbrlConst.documentationLabel)
        return None

    def update(self, other: LabelIndex) -> None:
        """Add the labels of other, labels already present are kept."""
        for elementId, roleLabels in other.labels.items():
            existing = self.labels.setdefault(elementId, {})
            for role, text in roleLabels.items():
                existing.setdefault(role, text)
        for locLabel, text in other.locatorLabels.items():
            self.locatorLabels.setdefault(locLabel, text)


def buildLabelIndex(linkbase: XmlNode | None,
                    errorManager: ErrorManager | None = None,
                    lang: str | None = "en") -> LabelIndex:
    """Index a label linkbase (lab_esrs-en.xml, doc_esrs-en.xml): each link:loc leads through a
    link:labelArc to the link:label resources carrying the text.
    """
    if errorManager is None:
        errorManager = ErrorManager()
    index = LabelIndex()
    lbElement = linkbaseElement(linkbase)
    labelLinks = lbElement.childNodes(XbrlConst.qnLinkLabelLink) if lbElement is not None else []
    if not labelLinks:
        errorManager.error("esrs:labelLinkNotFound",
            _("No link:labelLink elements found"),
            modelObject=linkbase)
        return index
    for labelLink in labelLinks:
        locElementIds = {loc.xlinkLabel: hrefFragment(loc.href)
                         for loc in labelLink.childNodes(XbrlConst.qnLinkLoc)
                         if loc.xlinkLabel}
        resources: dict[str, list[XmlNode]] = {}
        for resource in labelLink.childNodes(XbrlConst.qnLinkLabel):
            if resource.xlinkLabel and isLangMatch(resource, lang):
                resources.setdefault(resource.xlinkLabel, []).append(resource)
        for arc in labelLink.childNodes(XbrlConst.qnLinkLabelArc):
            fromLabel = arc.xlinkFrom
            if fromLabel is None:
                continue
            elementId = locElementIds.get(fromLabel)
            for resource in resources.get(arc.xlinkTo or "", ()):
                text = resource.text or ""
                role = resource.role or XbrlConst.standardLabel
                if role == XbrlConst.standardLabel or fromLabel not in index.locatorLabels:
                    index.locatorLabels[fromLabel] = text
                if elementId:
                    index.labels.setdefault(elementId, {}).setdefault(role, text)
    return index


def buildRoleIndex(linkbase: XmlNode | None,
                   errorManager: ErrorManager | None = None,
                   lang: str | None = "en") -> dict[str, str]:
    """Index a generic label linkbase (gla_esrs-en.xml) by role id: link:loc pointing at a
    link:roleType, gen:arc, label:label resource.
    """
    if errorManager is None:
        errorManager = ErrorManager()
    roleLabels: dict[str, str] = {}
    lbElement = linkbaseElement(linkbase)
    genLinks = lbElement.childNodes(XbrlConst.qnGenLink) if lbElement is not None else []
    if not genLinks:
        errorManager.error("esrs:genericLinkNotFound",
            _("No gen:link elements found"),
            modelObject=linkbase)
        return roleLabels
    for genLink in genLinks:
        locRoleIds = {loc.xlinkLabel: hrefFragment(loc.href)
                      for loc in genLink.childNodes(XbrlConst.qnLinkLoc)
                      if loc.xlinkLabel}
        resourceTexts = {resource.xlinkLabel: resource.text or ""
                         for resource in genLink.childNodes(XbrlConst.qnGenLabel)
                         if resource.xlinkLabel and isLangMatch(resource, lang)}
        for arc in genLink.childNodes(XbrlConst.qnGenArc):
            roleId = locRoleIds.get(arc.xlinkFrom or "")
            text = resourceTexts.get(arc.xlinkTo or "")
            if roleId and text:
                roleLabels[roleId] = text
    return roleLabels


@dataclass(frozen=True)
class RoleType:
    id: str
    roleURI: str | None
    definition: str | None
    usedOn: tuple[str, ...] = ()


@dataclass
class ElementIndex:
    elements: dict[str, dict[str, str]] = field(default_factory=dict)
    roleTypes: dict[str, RoleType] = field(default_factory=dict)

    def attributes(self, elementId: str) -> dict[str, str] | None:
        return self.elements.get(elementId)

    def roleDefinition(self, roleId: str) -> str | None:
        roleType = self.roleTypes.get(roleId)
        return roleType.definition if roleType is not None else None

    def enumerationMembers(self, domainId: str, labels: LabelIndex | None = None) -> list[dict[str, str]]:
        """Elements whose enum2:domain is domainId (the members of an enumeration list), each with its label."""
        members = []
        for elementId, attributes in self.elements.items():
            if attributes.get(XbrlConst.qnEnum2Domain) == domainId:
                member = {}
                label = labels.label(elementId) if labels is not None else None
                if label is not None:
                    member["label"] = label
                member.update(attributes)
                members.append(member)
        return members


def buildElementIndex(schema: XmlNode | None, errorManager: ErrorManager | None = None) -> ElementIndex:
    """Index the core schema's top level xsd:element declarations and link:roleType definitions by id."""
    if errorManager is None:
        errorManager = ErrorManager()
    index = ElementIndex()
    if schema is None or schema.tag != XbrlConst.qnXsdSchema:
        errorManager.error("esrs:schemaNotFound",
            _("No xsd:schema element found"),
            modelObject=schema)
        return index
    for element in schema.childNodes(XbrlConst.qnXsdElement):
        if element.id:
            index.elements[element.id] = dict(element.attributes)
    for annotation in schema.childNodes(XbrlConst.qnXsdAnnotation):
        for appinfo in annotation.childNodes(XbrlConst.qnXsdAppinfo):
            for roleTypeElt in appinfo.childNodes(XbrlConst.qnLinkRoleType):
                if not roleTypeElt.id:
                    continue
                definitionElt = roleTypeElt.child(XbrlConst.qnLinkDefinition)
                index.roleTypes[roleTypeElt.id] = RoleType(
                    roleTypeElt.id,
                    roleTypeElt.get(XbrlConst.qnRoleURI),
                    definitionElt.text if definitionElt is not None else None,
                    tuple(usedOn.text for usedOn in roleTypeElt.childNodes(XbrlConst.qnLinkUsedOn) if usedOn.text))
    return index


@dataclass
class CoreIndexes:
    labels: LabelIndex = field(default_factory=LabelIndex)
    roles: dict[str, str] = field(default_factory=dict)
    elements: ElementIndex = field(default_factory=ElementIndex)

    def roleDefinition(self, roleId: str) -> str | None:
        return self.roles.get(roleId) or self.elements.roleDefinition(roleId)
