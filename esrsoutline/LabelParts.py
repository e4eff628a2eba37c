'''
See COPYRIGHT.md for copyright information.

Parts of ESRS role definition labels, such as
"[301060] E1-6 Gross Scopes 1, 2, 3 and Total GHG emissions":
role code 301060, disclosure code E1-6, section code E1, headline "Gross Scopes 1, 2, 3 ...".
'''
from __future__ import annotations

import regex as re

sectionCodePattern = re.compile(r"\[.*?\]\s([A-Z0-9]+)[.\-\s]")
roleCodePattern = re.compile(r"\[([^\]]*)\]")
disclosurePattern = re.compile(r"\[.*?\]\s([A-Z0-9]+(?:[.\-][A-Za-z0-9]+)*)\s+(.*)$", re.DOTALL)
headlinePattern = re.compile(r"^\s*\[.*?\]\s*(.*)$", re.DOTALL)


def sectionCode(label: str | None) -> str | None:
    """Short token following the bracketed role code, up to the next period, hyphen or space."""
    if not label:
        return None
    match = sectionCodePattern.search(label)
    return match.group(1) if match else None


def roleCode(label: str | None) -> str | None:
    if not label:
        return None
    match = roleCodePattern.search(label)
    return match.group(1) if match else None


def disclosureCode(label: str | None) -> str | None:
    if not label:
        return None
    match = disclosurePattern.search(label)
    return match.group(1) if match else None


def headline(label: str | None) -> str | None:
    """Label text after the role code and disclosure code."""
    if not label:
        return None
    match = disclosurePattern.search(label)
    if match:
        return match.group(2).strip() or None
    match = headlinePattern.match(label)
    if match:
        return match.group(1).strip() or None
    return label.strip() or None
