import pytest

from esrsoutline import XbrlConst
from esrsoutline.LinkbaseIndex import (CoreIndexes, LabelIndex, buildElementIndex, buildLabelIndex,
                                       buildRoleIndex)
from esrsoutline.XmlNode import XmlNode, decode

LINK = ('xmlns:link="http://www.xbrl.org/2003/linkbase" xmlns:xlink="http://www.w3.org/1999/xlink" '
        'xmlns:gen="http://xbrl.org/2008/generic" xmlns:label="http://xbrl.org/2008/label"')

LABEL_LINKBASE = """<link:linkbase {0}>
  <link:labelLink xlink:type="extended" xlink:role="http://www.xbrl.org/2003/role/link">
    <link:loc xlink:type="locator" xlink:href="../esrs_cor.xsd#esrs_DisclosureX" xlink:label="loc_2"/>
    <link:label xlink:type="resource" xlink:label="res_2" xlink:role="http://www.xbrl.org/2003/role/label" xml:lang="en">Disclosure X</link:label>
    <link:label xlink:type="resource" xlink:label="res_2" xlink:role="http://www.xbrl.org/2003/role/label" xml:lang="de">Angabe X</link:label>
    <link:label xlink:type="resource" xlink:label="res_3" xlink:role="http://www.xbrl.org/2003/role/terseLabel" xml:lang="en">X</link:label>
    <link:labelArc xlink:type="arc" xlink:arcrole="http://www.xbrl.org/2003/arcrole/concept-label" xlink:from="loc_2" xlink:to="res_2"/>
    <link:labelArc xlink:type="arc" xlink:arcrole="http://www.xbrl.org/2003/arcrole/concept-label" xlink:from="loc_2" xlink:to="res_3"/>
  </link:labelLink>
</link:linkbase>""".format(LINK).encode()

DOCUMENTATION_LINKBASE = """<link:linkbase {0}>
  <link:labelLink xlink:type="extended" xlink:role="http://www.xbrl.org/2003/role/link">
    <link:loc xlink:type="locator" xlink:href="../esrs_cor.xsd#esrs_DisclosureX" xlink:label="loc_1"/>
    <link:label xlink:type="resource" xlink:label="res_1" xlink:role="http://www.xbrl.org/2003/role/documentation" xml:lang="en">Explains X</link:label>
    <link:labelArc xlink:type="arc" xlink:arcrole="http://www.xbrl.org/2003/arcrole/concept-label" xlink:from="loc_1" xlink:to="res_1"/>
  </link:labelLink>
</link:linkbase>""".format(LINK).encode()

ROLE_LINKBASE = """<link:linkbase {0}>
  <gen:link xlink:type="extended" xlink:role="http://www.xbrl.org/2003/role/link">
    <link:loc xlink:type="locator" xlink:href="../esrs_cor.xsd#role-200510" xlink:label="loc_1"/>
    <link:loc xlink:type="locator" xlink:href="../esrs_cor.xsd#role-301060" xlink:label="loc_2"/>
    <label:label xlink:type="resource" xlink:label="res_1" xlink:role="http://www.xbrl.org/2008/role/label" xml:lang="en">[200510] BP-1 General basis for preparation of sustainability statements</label:label>
    <label:label xlink:type="resource" xlink:label="res_2" xlink:role="http://www.xbrl.org/2008/role/label" xml:lang="en">[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions</label:label>
    <gen:arc xlink:type="arc" xlink:arcrole="http://xbrl.org/arcrole/2008/element-label" xlink:from="loc_1" xlink:to="res_1"/>
    <gen:arc xlink:type="arc" xlink:arcrole="http://xbrl.org/arcrole/2008/element-label" xlink:from="loc_2" xlink:to="res_2"/>
  </gen:link>
</link:linkbase>""".format(LINK).encode()

CORE_SCHEMA = b"""<xsd:schema xmlns:xsd="http://www.w3.org/2001/XMLSchema"
    xmlns:link="http://www.xbrl.org/2003/linkbase"
    xmlns:xbrli="http://www.xbrl.org/2003/instance"
    xmlns:enum2="http://xbrl.org/2020/extensible-enumerations-2.0">
  <xsd:annotation>
    <xsd:appinfo>
      <link:roleType id="role-301060" roleURI="http://xbrl.efrag.org/taxonomy/esrs/2023-12-22/role-301060">
        <link:definition>[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions</link:definition>
        <link:usedOn>link:presentationLink</link:usedOn>
        <link:usedOn>link:definitionLink</link:usedOn>
      </link:roleType>
    </xsd:appinfo>
  </xsd:annotation>
  <xsd:element id="esrs_GrossScope1GHGEmissions" name="GrossScope1GHGEmissions" type="xbrli:monetaryItemType"
      substitutionGroup="xbrli:item" abstract="false" nillable="true" xbrli:periodType="duration"/>
  <xsd:element id="esrs_ScopeOfEmissions" name="ScopeOfEmissions" type="xbrli:stringItemType"
      substitutionGroup="xbrli:item" xbrli:periodType="duration"/>
  <xsd:element id="esrs_Scope1Member" name="Scope1Member" type="xbrli:stringItemType"
      substitutionGroup="xbrli:item" enum2:domain="esrs_ScopeOfEmissions"/>
  <xsd:element id="esrs_Scope2Member" name="Scope2Member" type="xbrli:stringItemType"
      substitutionGroup="xbrli:item" enum2:domain="esrs_ScopeOfEmissions"/>
</xsd:schema>"""


def test_label_index_by_locator_label():
    index = buildLabelIndex(decode(LABEL_LINKBASE))
    assert index.locatorLabels["loc_2"] == "Disclosure X"


def test_label_index_by_element_id():
    index = buildLabelIndex(decode(LABEL_LINKBASE))
    assert "esrs_DisclosureX" in index
    assert index.label("esrs_DisclosureX") == "Disclosure X"
    assert index.label("esrs_DisclosureX", XbrlConst.terseLabel) == "X"
    assert index.label("esrs_DisclosureX", XbrlConst.verboseLabel) == "Disclosure X"
    assert index.label("esrs_Other") is None


def test_label_index_other_languages_ignored():
    index = buildLabelIndex(decode(LABEL_LINKBASE), lang="de")
    assert index.label("esrs_DisclosureX") == "Angabe X"


def test_label_index_documentation_merge():
    index = buildLabelIndex(decode(LABEL_LINKBASE))
    index.update(buildLabelIndex(decode(DOCUMENTATION_LINKBASE)))
    assert index.documentation("esrs_DisclosureX") == "Explains X"
    assert index.label("esrs_DisclosureX") == "Disclosure X"


def test_label_index_from_grafted_linkbase_ref():
    linkbaseRef = XmlNode("link:linkbaseRef", {"xlink:href": "labels/lab_esrs-en.xml"})
    linkbaseRef.addChild(decode(LABEL_LINKBASE))
    assert buildLabelIndex(linkbaseRef).label("esrs_DisclosureX") == "Disclosure X"


def test_label_index_ignores_linkbase_under_other_elements(errorManager):
    wrapper = XmlNode("xsd:appinfo")
    wrapper.addChild(decode(LABEL_LINKBASE))
    assert len(buildLabelIndex(wrapper, errorManager)) == 0
    assert errorManager.errors == ["esrs:labelLinkNotFound"]


@pytest.mark.parametrize("builder", [buildLabelIndex, buildRoleIndex])
def test_label_indexes_fail_soft(builder, errorManager):
    index = builder(decode(("<link:linkbase %s/>" % LINK).encode()), errorManager)
    assert len(index) == 0
    assert len(errorManager.errors) == 1


def test_role_index():
    roles = buildRoleIndex(decode(ROLE_LINKBASE))
    assert roles == {
        "role-200510": "[200510] BP-1 General basis for preparation of sustainability statements",
        "role-301060": "[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions",
    }


def test_element_index():
    index = buildElementIndex(decode(CORE_SCHEMA))
    attributes = index.attributes("esrs_GrossScope1GHGEmissions")
    assert attributes["type"] == "xbrli:monetaryItemType"
    assert attributes["xbrli:periodType"] == "duration"
    assert index.attributes("esrs_Missing") is None
    roleType = index.roleTypes["role-301060"]
    assert roleType.definition == "[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions"
    assert roleType.usedOn == ("link:presentationLink", "link:definitionLink")


def test_element_index_idempotent():
    schema = decode(CORE_SCHEMA)
    assert buildElementIndex(schema) == buildElementIndex(schema)


def test_element_index_fail_soft(errorManager):
    index = buildElementIndex(decode(LABEL_LINKBASE), errorManager)
    assert index.elements == {}
    assert errorManager.errors == ["esrs:schemaNotFound"]


def test_enumeration_members():
    index = buildElementIndex(decode(CORE_SCHEMA))
    labels = LabelIndex(labels={"esrs_Scope1Member": {XbrlConst.standardLabel: "Scope 1"}})
    members = index.enumerationMembers("esrs_ScopeOfEmissions", labels)
    assert [member["id"] for member in members] == ["esrs_Scope1Member", "esrs_Scope2Member"]
    assert members[0]["label"] == "Scope 1"
    assert "label" not in members[1]


def test_core_indexes_role_definition_fallback():
    indexes = CoreIndexes(roles={"role-200510": "[200510] BP-1 General"},
                          elements=buildElementIndex(decode(CORE_SCHEMA)))
    assert indexes.roleDefinition("role-200510") == "[200510] BP-1 General"
    assert indexes.roleDefinition("role-301060") == "[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions"
    assert indexes.roleDefinition("role-999999") is None
