'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import asyncio
import os
from typing import Optional

import aiofiles
import aiohttp

from esrsoutline.typing import TypeGetText
from esrsoutline.UrlUtil import isHttpUrl

_: TypeGetText

DEFAULT_TIMEOUT = 60  # seconds
DEFAULT_CONNECT_TIMEOUT = 20
DEFAULT_USER_AGENT = "esrsoutline (taxonomy outline loader)"
DEFAULT_ACCEPT_HEADER = "application/xml, text/xml, */*"
HTTP_OK = 200


class FileSourceException(Exception):
    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        self.args = (self.__repr__(),)

    def __repr__(self) -> str:
        return _('Unable to read {0}: {1}').format(self.url, self.reason)


class FileSource:
    """
    .. class:: FileSource(urlMappings, internetConnectivity, timeout, userAgent)

    Reads the raw bytes of a taxonomy document from local disk or over HTTP(S).

    Url prefixes may be remapped (e.g. a published taxonomy url onto a local mirror directory, or a
    broken path onto its correct location) before reading.  When internetConnectivity is "offline",
    remote urls that are not mapped onto local files are refused.

    :param urlMappings: prefix to replacement prefix, first match wins
    :type urlMappings: dict
    """
    urlMappings: dict[str, str]
    _session: Optional[aiohttp.ClientSession]

    def __init__(self,
                 urlMappings: dict[str, str] | None = None,
                 internetConnectivity: str = "online",
                 timeout: int | float | None = None,
                 userAgent: str | None = None) -> None:
        self.urlMappings = dict(urlMappings or {})
        self.workOffline = internetConnectivity == "offline"
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.userAgent = userAgent or DEFAULT_USER_AGENT
        self._session = None

    async def __aenter__(self) -> FileSource:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    def isMappedUrl(self, url: str) -> bool:
        return any(url.startswith(mapFrom) for mapFrom in self.urlMappings)

    def mappedUrl(self, url: str) -> str:
        for mapFrom, mapTo in self.urlMappings.items():
            if url.startswith(mapFrom):
                return mapTo + url[len(mapFrom):]
        return url

    async def read(self, url: str) -> bytes:
        """Return the content at url, raises FileSourceException on any transport or file error."""
        url = self.mappedUrl(url)
        if isHttpUrl(url):
            if self.workOffline:
                raise FileSourceException(url, _("working offline"))
            return await self._readRemote(url)
        return await self._readLocal(url)

    async def _readLocal(self, filepath: str) -> bytes:
        if filepath.startswith("file://"):
            filepath = filepath[7:]
        if not os.path.isfile(filepath):
            raise FileSourceException(filepath, _("file not found"))
        try:
            async with aiofiles.open(filepath, "rb") as fh:
                return await fh.read()
        except OSError as err:
            raise FileSourceException(filepath, str(err)) from err

    async def _readRemote(self, url: str) -> bytes:
        session = await self._getSession()
        try:
            async with session.get(
                url,
                headers={"User-Agent": self.userAgent, "Accept": DEFAULT_ACCEPT_HEADER},
                timeout=aiohttp.ClientTimeout(total=self.timeout, connect=DEFAULT_CONNECT_TIMEOUT)
            ) as response:
                if response.status != HTTP_OK:
                    raise FileSourceException(url, "HTTP {0}".format(response.status))
                return await response.read()
        except asyncio.TimeoutError as err:
            raise FileSourceException(url, _("timeout")) from err
        except aiohttp.ClientError as err:
            raise FileSourceException(url, str(err)) from err

    async def _getSession(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
