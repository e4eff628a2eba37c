'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import os
import posixpath
from urllib.parse import unquote, urldefrag, urljoin, urlsplit, urlunsplit

import regex as re

_schemePattern = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def splitDecodeFragment(url: str) -> tuple[str, str]:
    """Split an href into its document part and its (decoded) fragment, either may be empty."""
    urlPart, fragPart = urldefrag(url)
    return (urlPart, unquote(fragPart, "utf-8", errors=None))


def isHttpUrl(url: str | None) -> bool:
    return isinstance(url, str) and (url.startswith("http://") or url.startswith("https://"))


def isAbsolute(url: str | None) -> bool:
    """True when url begins with a URI scheme (http:, https:, urn:, file:...).
    A windows drive letter (C:\\) is a path, not a scheme.
    """
    if url:
        if len(url) > 2 and url[1] == ":" and url[2] in ("\\", "/"):
            return False
        return bool(_schemePattern.match(url))
    return False


def normalizeUrl(url: str, base: str | None = None) -> str:
    """Resolve url against the directory of base (the referring document).
    Absolute urls and absolute local paths are returned normalized but otherwise untouched.
    """
    if url.startswith("file://"):
        url = url[7:]
    if isHttpUrl(url):
        return _normalizeHttpUrl(url)
    if isAbsolute(url):
        return url
    if os.path.isabs(url):
        return os.path.normpath(url)
    if base and isHttpUrl(base):
        return _normalizeHttpUrl(urljoin(base, url.replace('\\', '/')))
    if base:
        if base.startswith("file://"):
            base = base[7:]
        if '%' in url:
            url = unquote(url)
        return os.path.normpath(os.path.join(os.path.dirname(base), url))
    # no base, relative to current working directory
    return os.path.abspath(url)


def _normalizeHttpUrl(url: str) -> str:
    # only the path is normalized, dot segments never climb above the host
    scheme, netloc, path, query, fragment = urlsplit(url)
    if path:
        endingSep = '/' if path.endswith('/') and path != '/' else ''  # normpath drops ending directory separator
        path = posixpath.normpath(path.replace('\\', '/'))
        if path.startswith('//'):
            path = '/' + path.lstrip('/')
        if path != '/':
            path += endingSep
    return urlunsplit((scheme, netloc, path, query, fragment))


def baseName(url: str) -> str:
    """Last path segment of a local path or url, without fragment."""
    return posixpath.basename(splitDecodeFragment(url)[0].replace('\\', '/'))
