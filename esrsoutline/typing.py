"""
See COPYRIGHT.md for copyright information.
Type hints for esrsoutline.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable

TypeGetText = Callable[[str], str]

# async read(pathOrUrl) -> bytes collaborator
TypeFetcher = Callable[[str], Awaitable[bytes]]
