'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

from enum import Enum

xsd = "http://www.w3.org/2001/XMLSchema"
xsi = "http://www.w3.org/2001/XMLSchema-instance"
xml = "http://www.w3.org/XML/1998/namespace"
xbrli = "http://www.xbrl.org/2003/instance"
link = "http://www.xbrl.org/2003/linkbase"
xlink = "http://www.w3.org/1999/xlink"
gen = "http://xbrl.org/2008/generic"
genLabel = "http://xbrl.org/2008/label"
genReference = "http://xbrl.org/2008/reference"
xbrldt = "http://xbrl.org/2005/xbrldt"
enum2 = "http://xbrl.org/2020/extensible-enumerations-2.0"
enum2s = ("http://xbrl.org/2020/extensible-enumerations-2.0",
          "http://xbrl.org/PWD/2020-12-09/extensible-enumerations-2.0",
          "http://xbrl.org/WGWD/YYYY-MM-DD/extensible-enumerations-2.0")

# canonical prefixes used for tags and attribute names of decoded documents,
# independent of whatever prefixes the document itself declares
canonicalPrefixes = {
    xsd: "xsd",
    xsi: "xsi",
    xml: "xml",
    xbrli: "xbrli",
    link: "link",
    xlink: "xlink",
    gen: "gen",
    genLabel: "label",
    genReference: "reference",
    xbrldt: "xbrldt",
}
for _ns in enum2s:
    canonicalPrefixes[_ns] = "enum2"

# qualified element names
qnXsdSchema = "xsd:schema"
qnXsdImport = "xsd:import"
qnXsdInclude = "xsd:include"
qnXsdElement = "xsd:element"
qnXsdAnnotation = "xsd:annotation"
qnXsdAppinfo = "xsd:appinfo"
qnLinkLinkbase = "link:linkbase"
qnLinkLinkbaseRef = "link:linkbaseRef"
qnLinkLoc = "link:loc"
qnLinkRoleRef = "link:roleRef"
qnLinkRoleType = "link:roleType"
qnLinkDefinition = "link:definition"
qnLinkUsedOn = "link:usedOn"
qnLinkLabel = "link:label"
qnLinkLabelLink = "link:labelLink"
qnLinkLabelArc = "link:labelArc"
qnGenLink = "gen:link"
qnGenArc = "gen:arc"
qnGenLabel = "label:label"

# qualified attribute names
qnId = "id"
qnSchemaLocation = "schemaLocation"
qnXlinkHref = "xlink:href"
qnXlinkLabel = "xlink:label"
qnXlinkFrom = "xlink:from"
qnXlinkTo = "xlink:to"
qnXlinkRole = "xlink:role"
qnXlinkArcrole = "xlink:arcrole"
qnXmlLang = "xml:lang"
qnRoleURI = "roleURI"
qnOrder = "order"
qnPreferredLabel = "preferredLabel"
qnXbrliPeriodType = "xbrli:periodType"
qnEnum2Domain = "enum2:domain"

# arcroles
parentChild = "http://www.xbrl.org/2003/arcrole/parent-child"
domainMember = "http://xbrl.org/int/dim/arcrole/domain-member"

# label roles
standardLabel = "http://www.xbrl.org/2003/role/label"
terseLabel = "http://www.xbrl.org/2003/role/terseLabel"
verboseLabel = "http://www.xbrl.org/2003/role/verboseLabel"
documentationLabel = "http://www.xbrl.org/2003/role/documentation"


class LinkbaseType(Enum):
    """Extended link variants; each names its own link and arc elements."""
    PRESENTATION = "presentation"
    DEFINITION = "definition"
    CALCULATION = "calculation"
    LABEL = "label"
    REFERENCE = "reference"

    @property
    def linkTag(self) -> str:
        return "link:{}Link".format(self.value)

    @property
    def arcTag(self) -> str:
        return "link:{}Arc".format(self.value)
