import asyncio
import builtins
import contextlib
import logging

import pytest
from aiohttp import web

from esrsoutline.ErrorManager import ErrorManager
from esrsoutline.FileSource import FileSourceException


@pytest.fixture(autouse=True)
def mock_gettext(monkeypatch):
    monkeypatch.setitem(builtins.__dict__, "_", lambda s: s)
    yield


class FakeFetcher:
    """In-memory documents by location, recording every read."""

    def __init__(self, documents):
        self.documents = documents
        self.fetched = []

    async def __call__(self, url):
        self.fetched.append(url)
        if url not in self.documents:
            raise FileSourceException(url, "file not found")
        content = self.documents[url]
        return content.encode("utf-8") if isinstance(content, str) else content


@pytest.fixture
def fakeFetcher():
    return FakeFetcher


@pytest.fixture
def errorManager():
    return ErrorManager(logging.getLogger("esrsoutline.tests"))


@contextlib.asynccontextmanager
async def serveDocuments(documents, delay=0):
    """Serve documents (path -> content) over http on a free localhost port, yielding the base url."""
    async def handle(request):
        if delay:
            await asyncio.sleep(delay)
        path = "/" + request.match_info["path"]
        if path not in documents:
            raise web.HTTPNotFound()
        content = documents[path]
        return web.Response(body=content.encode("utf-8") if isinstance(content, str) else content,
                            content_type="application/xml")

    app = web.Application()
    app.router.add_get("/{path:.*}", handle)
    runner = web.AppRunner(app)
    await runner.setup()
    try:
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        port = runner.addresses[0][1]
        yield "http://127.0.0.1:{0}".format(port)
    finally:
        await runner.cleanup()


@pytest.fixture
def httpServer():
    return serveDocuments
