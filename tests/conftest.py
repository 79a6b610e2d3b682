import json

import httpx
import pytest

from wikibulk.wikijs_client import WikiJSClient

ENDPOINT = "https://wiki.test/graphql"

OK = {"succeeded": True, "errorCode": 0, "slug": "ok", "message": "Operation succeeded."}
NO_STATUS = object()
BAD_JSON = object()
NETWORK_ERROR = object()
HTTP_500 = object()


def denied(code=403, slug="forbidden", message="Forbidden"):
    return {"succeeded": False, "errorCode": code, "slug": slug, "message": message}


class FakeWiki:
    """In-memory Wiki.js GraphQL endpoint for httpx.MockTransport."""

    def __init__(self, pages=None, title="Test Wiki"):
        self.pages = list(pages or [])
        self.title = title
        self.requests = []
        # page id -> responseResult dict or one of the sentinels above
        self.move_results = {}
        self.tag_results = {}
        self.list_payload = None

    def _mutation(self, request, field, result):
        if result is NETWORK_ERROR:
            raise httpx.ConnectError("connection refused", request=request)
        if result is HTTP_500:
            return httpx.Response(500, text="upstream exploded")
        if result is BAD_JSON:
            return httpx.Response(200, text="<html>not json</html>")
        if result is NO_STATUS:
            return httpx.Response(200, json={"data": {"pages": {field: None}}})
        return httpx.Response(200, json={"data": {"pages": {field: {"responseResult": result}}}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        query = body["query"]
        variables = body.get("variables") or {}

        if "ListAllPages" in query:
            if self.list_payload is not None:
                return httpx.Response(200, json=self.list_payload)
            wanted = set(variables.get("tags") or [])
            items = [p for p in self.pages if not wanted or wanted & set(p.get("tags") or [])]
            return httpx.Response(200, json={"data": {"pages": {"list": items}}})
        if "MoveSinglePage" in query:
            return self._mutation(request, "move", self.move_results.get(variables["id"], OK))
        if "UpdateSingleTag" in query:
            key = (variables["id"], variables["tag"])
            return self._mutation(request, "updateTag", self.tag_results.get(key, OK))
        if "GetWikiTitle" in query:
            return httpx.Response(200, json={"data": {"site": {"config": {"title": self.title}}}})
        return httpx.Response(400, json={"errors": [{"message": "unknown query"}]})

    def mutations(self, name):
        return [r["variables"] for r in self.requests if name in r["query"]]


@pytest.fixture
def fake_wiki():
    return FakeWiki(
        pages=[
            {"id": 3, "path": "docs/old/b/c", "title": "C", "tags": ["guide"]},
            {"id": 1, "path": "docs/old/a", "title": None, "tags": None},
            {"id": 7, "path": "blog/2021/hello", "title": "Hello", "tags": []},
            {"id": 5, "path": "docs/older", "title": "Older", "tags": ["guide", None]},
        ]
    )


@pytest.fixture
def make_client(fake_wiki):
    def _make(**kwargs):
        return WikiJSClient(
            ENDPOINT,
            "test-token",
            transport=httpx.MockTransport(fake_wiki.handler),
            **kwargs,
        )

    return _make
