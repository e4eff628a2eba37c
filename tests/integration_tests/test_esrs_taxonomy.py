import pytest

from esrsoutline.Cntlr import runOutline
from esrsoutline.RuntimeOptions import RuntimeOptions


@pytest.fixture(scope="module")
def outline(request):
    entrypoint = request.config.getoption("--entrypoint")
    if not entrypoint:
        pytest.skip("no --entrypoint given")
    options = RuntimeOptions(entrypointFile=entrypoint,
                             internetConnectivity="offline" if request.config.getoption("--offline") else "online",
                             logFile="logToBuffer")
    return runOutline(options)


def test_every_section_present(outline):
    assert [section.sectionCode for section in outline.sections] == [
        "ESRS2", "E1", "E2", "E3", "E4", "E5", "S1", "S2", "S3", "S4", "G1"]


def test_every_presentation_linkbase_has_a_root(outline):
    assert outline.roots
    for root in outline.roots:
        assert root.rootNode is not None, root.sourceFile
        assert root.label != "(not found)", root.sourceFile


def test_roots_are_assigned_to_sections(outline):
    sections = {section.sectionCode: section for section in outline.sections}
    assert sections["ESRS2"].children
    assert sections["E1"].children
    assert sum(len(section.children) for section in outline.sections) <= len(outline.roots)
