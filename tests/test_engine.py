import asyncio

import pytest
from conftest import NETWORK_ERROR, denied

from wikibulk.core.engine import BulkEngine
from wikibulk.core.errors import PartialRequestFailure
from wikibulk.core.safety_tag import derive_safety_tag


def _run(client, fn):
    async def go():
        async with client:
            return await fn(BulkEngine(client))

    return asyncio.run(go())


def test_move_end_to_end(make_client, fake_wiki):
    async def flow(engine):
        listing = await engine.list_pages("docs/old/")
        return await engine.move_pages(listing.pages, "docs/old/", "docs/new/")

    report = _run(make_client(), flow)
    assert report.success_count == 2
    assert report.failures is None
    assert report.prefix == "docs/old/"
    sent = {v["id"]: v["destinationPath"] for v in fake_wiki.mutations("MoveSinglePage")}
    assert sent == {1: "docs/new/a", 3: "docs/new/b/c"}


def test_move_reports_application_failures(make_client, fake_wiki):
    fake_wiki.move_results[3] = denied(403, "forbidden", "nope")

    async def flow(engine):
        listing = await engine.list_pages("docs/")
        return await engine.move_pages(listing.pages, "docs/", "kb/")

    report = _run(make_client(), flow)
    assert report.success_count == 2
    assert [f.page_id for f in report.failures] == [3]
    assert report.failures[0].status.error_code == 403


def test_move_partial_transport_failure_raises(make_client, fake_wiki):
    fake_wiki.move_results[1] = NETWORK_ERROR

    async def flow(engine):
        listing = await engine.list_pages("docs/")
        return await engine.move_pages(listing.pages, "docs/", "kb/")

    with pytest.raises(PartialRequestFailure):
        _run(make_client(), flow)


def test_tag_applies_safety_tag_and_extras_to_every_page(make_client, fake_wiki):
    safety = derive_safety_tag("docs/old/", "archive/")

    async def flow(engine):
        listing = await engine.list_pages("docs/old/")
        return await engine.tag_pages(listing.pages, "docs/old/", "archive/", ["reviewed"])

    report = _run(make_client(), flow)
    assert report.safety_tag == safety
    assert report.tags == [safety, "reviewed"]
    assert report.success_count == 4
    sent = [(v["id"], v["tag"]) for v in fake_wiki.mutations("UpdateSingleTag")]
    assert sorted(sent) == sorted([(1, safety), (1, "reviewed"), (3, safety), (3, "reviewed")])


def test_tag_report_keeps_full_tag_list_after_failure(make_client, fake_wiki):
    fake_wiki.tag_results[(1, "reviewed")] = denied(6001, "tag-failed", "Tag failed")

    async def flow(engine):
        listing = await engine.list_pages("docs/old/")
        return await engine.tag_pages(listing.pages, "docs/old/", "archive/", ["reviewed"])

    report = _run(make_client(), flow)
    assert report.success_count == 3
    assert report.failures[0].tag == "reviewed"
    assert report.tags[1] == "reviewed"


def test_private_pages_helper():
    from wikibulk.models import Page

    pages = [Page(id=1, path="a"), Page(id=2, path="private/b")]
    assert [p.id for p in BulkEngine.private_pages(pages)] == [2]


def test_wiki_title(make_client):
    assert _run(make_client(), lambda engine: engine.get_wiki_title()) == "Test Wiki"
