from __future__ import annotations

from wikibulk.core.engine import BulkEngine
from wikibulk.core.errors import (
    AllRequestsFailed,
    APIError,
    BackendContractError,
    PartialRequestFailure,
    TransportError,
    WikiBulkError,
)
from wikibulk.models import PageListResponse, SiteTitleResponse
from wikibulk.wikijs_client import WikiJSClient


def map_engine_error(err: WikiBulkError) -> APIError:
    if isinstance(err, TransportError):
        return APIError(504, "upstream_network", err.message)
    if isinstance(err, BackendContractError):
        return APIError(502, "upstream_contract", err.message)
    if isinstance(err, PartialRequestFailure):
        return APIError(
            502,
            "partial_failure",
            err.message,
            details={"failed": err.failed, "total": err.total, "may_be_inconsistent": True},
        )
    if isinstance(err, AllRequestsFailed):
        return APIError(
            502,
            "all_requests_failed",
            err.message,
            details={"failed": err.failed, "total": err.total, "may_be_inconsistent": False},
        )
    return APIError(503, "not_configured", err.message)


async def site_title(client: WikiJSClient) -> SiteTitleResponse:
    try:
        title = await BulkEngine(client).get_wiki_title()
    except WikiBulkError as e:
        raise map_engine_error(e)
    return SiteTitleResponse(title=title)


async def list_pages(client: WikiJSClient, prefix: str, tags: list[str] | None) -> PageListResponse:
    engine = BulkEngine(client)
    try:
        listing = await engine.list_pages(prefix, tags)
    except WikiBulkError as e:
        raise map_engine_error(e)
    private = engine.private_pages(listing.pages) or []
    return PageListResponse(
        prefix=prefix,
        count=len(listing.pages),
        pages_returned=listing.pages_returned,
        pages=listing.pages,
        private_page_ids=[p.id for p in private],
    )
