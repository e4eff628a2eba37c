import pytest

from esrsoutline import LabelParts


@pytest.mark.parametrize("label, expected", [
    ("[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions", "E1"),
    ("[200510] BP-1 General basis for preparation of sustainability statements", "BP"),
    ("[500010] G1.GOV-1 The role of the administrative, management and supervisory bodies", "G1"),
    ("[100000] ESRS2 General disclosures", "ESRS2"),
    ("[301060]E1-6 no space after the code", None),
    ("E1-6 without role code", None),
    ("", None),
    (None, None),
])
def test_section_code(label, expected):
    assert LabelParts.sectionCode(label) == expected


def test_role_code():
    assert LabelParts.roleCode("[301060] E1-6 Gross Scopes") == "301060"
    assert LabelParts.roleCode("Gross Scopes") is None


@pytest.mark.parametrize("label, disclosureCode, headline", [
    ("[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions", "E1-6",
     "Gross Scopes 1, 2, 3 and Total GHG emissions"),
    ("[500010] G1.GOV-1 The role of the bodies", "G1.GOV-1", "The role of the bodies"),
    ("Untitled role", None, "Untitled role"),
])
def test_disclosure_code_and_headline(label, disclosureCode, headline):
    assert LabelParts.disclosureCode(label) == disclosureCode
    assert LabelParts.headline(label) == headline
