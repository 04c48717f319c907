# tests/conftest.py

from typing import Any, Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from salamoonder import Salamoonder


class FakeSalamoonderAPI:
    """
    Scripted stand-in for the remote task API.

    - Records every request body per path
    - Answers each path with the JSON (and HTTP status) set via reply()
    - Serves html pages set via page() on GET
    """

    def __init__(self) -> None:
        self.replies: Dict[str, Tuple[int, Any]] = {}
        self.pages: Dict[str, str] = {}
        self.requests: List[Tuple[str, Dict[str, Any]]] = []
        self.base_url = ""

    def reply(self, path: str, payload: Any, status: int = 200) -> None:
        self.replies[path] = (status, payload)

    def page(self, path: str, html: str) -> None:
        self.pages[path] = html

    def bodies(self, path: str) -> List[Dict[str, Any]]:
        return [body for p, body in self.requests if p == path]

    async def _post(self, request: web.Request) -> web.Response:
        self.requests.append((request.path, await request.json()))
        if request.path not in self.replies:
            return web.Response(status=404, text="not found")
        status, payload = self.replies[request.path]
        if isinstance(payload, str):
            return web.Response(status=status, text=payload)
        return web.json_response(payload, status=status)

    async def _get(self, request: web.Request) -> web.Response:
        if request.path not in self.pages:
            return web.Response(status=404, text="not found")
        return web.Response(text=self.pages[request.path], content_type="text/html")

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/{tail:.*}", self._post)
        app.router.add_get("/{tail:.*}", self._get)
        return app


@pytest_asyncio.fixture()
async def api():
    fake = FakeSalamoonderAPI()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    try:
        yield fake
    finally:
        await server.close()


@pytest_asyncio.fixture()
async def client(api: FakeSalamoonderAPI):
    async with Salamoonder("test-api-key", base_url=api.base_url) as c:
        yield c


@pytest.fixture()
def ready():
    """Build a ready result envelope around a solution"""
    def _ready(solution: Any) -> Dict[str, Any]:
        return {"errorId": 0, "status": "ready", "solution": solution}
    return _ready
