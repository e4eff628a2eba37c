'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from esrsoutline.HierarchyBuilder import HierarchyRoot
from esrsoutline.typing import TypeGetText

_: TypeGetText

DEFAULT_SECTIONS_FILE = os.path.join(os.path.dirname(__file__), "config", "esrsSections.json")


class SectionConfigException(Exception):
    pass


@dataclass(frozen=True)
class SectionDescriptor:
    sectionCode: str
    label: str
    # other section codes derived from role labels that belong to this section (e.g. GOV for ESRS2)
    aliases: tuple[str, ...] = ()

    def matches(self, sectionCode: str | None) -> bool:
        return sectionCode is not None and (sectionCode == self.sectionCode or sectionCode in self.aliases)


@dataclass(eq=False)
class SectionNode:
    sectionCode: str
    label: str
    children: list[HierarchyRoot] = field(default_factory=list)

    def toDict(self) -> dict[str, Any]:
        return {"sectionCode": self.sectionCode,
                "label": self.label,
                "children": [root.toDict() for root in self.children]}


def loadSectionDescriptors(sectionsFile: str | None = None) -> list[SectionDescriptor]:
    """Read the ordered section outline, a json list of {sectionCode, label, aliases?} objects."""
    sectionsFile = sectionsFile or DEFAULT_SECTIONS_FILE
    try:
        with open(sectionsFile, encoding="utf-8") as fh:
            sections = json.load(fh)
    except (OSError, ValueError) as err:
        raise SectionConfigException(_("Unable to load sections file {0}: {1}").format(sectionsFile, err)) from err
    return sectionDescriptors(sections, sectionsFile)


def sectionDescriptors(sections: Any, source: str = "") -> list[SectionDescriptor]:
    if not isinstance(sections, list):
        raise SectionConfigException(_("Sections {0} must be a list").format(source))
    descriptors = []
    for section in sections:
        if not isinstance(section, dict) or not section.get("sectionCode") or "label" not in section:
            raise SectionConfigException(_("Section {0} of {1} needs a sectionCode and label").format(section, source))
        descriptors.append(SectionDescriptor(str(section["sectionCode"]),
                                             str(section["label"]),
                                             tuple(str(alias) for alias in section.get("aliases", ()))))
    return descriptors


def assemble(staticSections: Iterable[SectionDescriptor], hierarchyRoots: Iterable[HierarchyRoot]) -> list[SectionNode]:
    """Attach each hierarchy root to the configured section its sectionCode matches, in root order.
    Every configured section is present in the result, with no children when nothing matched.
    """
    roots = list(hierarchyRoots)
    return [SectionNode(descriptor.sectionCode,
                        descriptor.label,
                        [root for root in roots if descriptor.matches(root.sectionCode)])
            for descriptor in staticSections]
