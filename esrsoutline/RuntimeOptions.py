'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from esrsoutline.typing import TypeGetText

_: TypeGetText

INTERNET_CONNECTIVITY_VALUES = ("online", "offline")
OFFLINE_ENVIRONMENT_VARIABLE = "ESRSOUTLINE_OFFLINE"


class RuntimeOptionsException(Exception):
    pass


@dataclass(eq=False, repr=False)
class RuntimeOptions:
    """
        Options of one outline load.  entrypointFile is the taxonomy entry point (esrs_all.xsd, local
        path or url); the other files are found by file name among the documents discovered from it, else
        loaded relative to the entry point.
        RuntimeOptionsException is raised if an improper combination of options are specified.
    """
    entrypointFile: Optional[str] = None
    coreSchema: str = "common/esrs_cor.xsd"
    labelLinkbases: tuple[str, ...] = ("common/labels/lab_esrs-en.xml", "common/labels/doc_esrs-en.xml")
    roleLabelLinkbase: Optional[str] = "common/labels/gla_esrs-en.xml"
    linkbaseFilter: str = "pre_"
    dimensionLinkbaseFilter: Optional[str] = "def_"
    sectionsFile: Optional[str] = None
    labelLang: Optional[str] = "en"
    internetConnectivity: Optional[str] = None
    internetTimeout: Optional[float] = None
    httpUserAgent: Optional[str] = None
    urlMappings: dict[str, str] = field(default_factory=dict)
    logFile: Optional[str] = None
    logFormat: Optional[str] = None
    logLevel: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.entrypointFile:
            raise RuntimeOptionsException(_('Incorrect arguments, an entrypointFile is required'))
        if os.environ.get(OFFLINE_ENVIRONMENT_VARIABLE, "").lower() in ("1", "true", "yes"):
            self.internetConnectivity = "offline"
        elif self.internetConnectivity is None:
            self.internetConnectivity = "online"
        if self.internetConnectivity not in INTERNET_CONNECTIVITY_VALUES:
            raise RuntimeOptionsException(_('Unknown internetConnectivity {0}, please choose from {1}').format(
                self.internetConnectivity, ", ".join(INTERNET_CONNECTIVITY_VALUES)))
        if self.internetTimeout is not None and self.internetTimeout <= 0:
            raise RuntimeOptionsException(_('internetTimeout must be positive'))
        if not isinstance(self.urlMappings, dict) or not all(
                isinstance(mapFrom, str) and isinstance(mapTo, str)
                for mapFrom, mapTo in self.urlMappings.items()):
            raise RuntimeOptionsException(_('urlMappings must map url prefixes to replacement prefixes'))
        if isinstance(self.labelLinkbases, str):
            self.labelLinkbases = (self.labelLinkbases,)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuntimeOptions):
            return vars(self) == vars(other)
        return NotImplemented

    def __repr__(self) -> str:
        r = ", ".join(
            f"{name}={option}"
            for name, option in sorted(vars(self).items())
        )
        return f"{self.__class__.__name__}({r})"
