import json

import pytest

from esrsoutline.HierarchyBuilder import HierarchyRoot
from esrsoutline.SectionAssembler import (SectionConfigException, SectionDescriptor, assemble,
                                          loadSectionDescriptors, sectionDescriptors)


def hierarchyRoot(roleId, sectionCode):
    return HierarchyRoot(roleId, label="[{0}] {1}".format(roleId, sectionCode), sectionCode=sectionCode)


SECTIONS = [
    SectionDescriptor("ESRS2", "ESRS 2 General disclosures", ("BP", "GOV")),
    SectionDescriptor("E1", "ESRS E1 Climate change"),
    SectionDescriptor("S1", "ESRS S1 Own workforce"),
]


def test_assemble_by_section_code():
    e16 = hierarchyRoot("301060", "E1")
    e11 = hierarchyRoot("301010", "E1")
    bp1 = hierarchyRoot("200510", "BP")
    sections = assemble(SECTIONS, [e16, bp1, e11])
    assert [section.sectionCode for section in sections] == ["ESRS2", "E1", "S1"]
    assert sections[0].children == [bp1]
    assert sections[1].children == [e16, e11]


def test_empty_sections_kept():
    sections = assemble(SECTIONS, [])
    assert [(section.sectionCode, section.children) for section in sections] == [
        ("ESRS2", []), ("E1", []), ("S1", [])]


def test_unmatched_roots_dropped():
    sections = assemble(SECTIONS, [hierarchyRoot("999999", None), hierarchyRoot("400000", "X9")])
    assert all(not section.children for section in sections)


def test_section_to_dict():
    sections = assemble(SECTIONS[1:2], [hierarchyRoot("301060", "E1")])
    result = sections[0].toDict()
    assert result["sectionCode"] == "E1"
    assert result["label"] == "ESRS E1 Climate change"
    assert result["children"][0]["sectionCode"] == "E1"
    assert result["children"][0]["id"] == "301060"


def test_default_sections():
    descriptors = loadSectionDescriptors()
    codes = [descriptor.sectionCode for descriptor in descriptors]
    assert codes == ["ESRS2", "E1", "E2", "E3", "E4", "E5", "S1", "S2", "S3", "S4", "G1"]
    assert descriptors[0].matches("GOV")
    assert not descriptors[1].matches(None)


def test_sections_file(tmp_path):
    sectionsFile = tmp_path / "sections.json"
    sectionsFile.write_text(json.dumps([{"sectionCode": "E1", "label": "Climate", "aliases": ["CC"]}]),
                            encoding="utf-8")
    assert loadSectionDescriptors(str(sectionsFile)) == [SectionDescriptor("E1", "Climate", ("CC",))]


@pytest.mark.parametrize("content", ["not json", json.dumps({"E1": "Climate"}), json.dumps([{"label": "x"}])])
def test_bad_sections_file(tmp_path, content):
    sectionsFile = tmp_path / "sections.json"
    sectionsFile.write_text(content, encoding="utf-8")
    with pytest.raises(SectionConfigException):
        loadSectionDescriptors(str(sectionsFile))


def test_missing_sections_file(tmp_path):
    with pytest.raises(SectionConfigException):
        loadSectionDescriptors(str(tmp_path / "missing.json"))


def test_section_descriptors_from_list():
    assert sectionDescriptors([{"sectionCode": "G1", "label": "Business conduct"}]) == [
        SectionDescriptor("G1", "Business conduct")]
