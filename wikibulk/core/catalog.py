from __future__ import annotations

import json
import logging

from wikibulk.core import queries
from wikibulk.core.errors import BackendContractError
from wikibulk.models import Page, PageListing
from wikibulk.wikijs_client import WikiJSClient

logger = logging.getLogger("wikibulk")


def filter_pages(pages: list[Page], prefix: str) -> list[Page]:
    """Keep pages under ``prefix`` (plain string prefix, not a path segment) sorted by path."""
    return sorted((p for p in pages if p.path.startswith(prefix)), key=lambda p: p.path)


async def list_pages(
    client: WikiJSClient,
    prefix: str,
    tags: list[str] | None = None,
) -> PageListing:
    data = await client.query(queries.list_pages_body(tags))
    items = queries.read_page_list(data)
    if items is None:
        errors = queries.graphql_errors(data)
        detail = f" ({errors[0]})" if errors else ""
        raise BackendContractError(f"No page list in response: data.pages.list missing{detail}")

    try:
        pages = [Page.model_validate(item) for item in items]
    except ValueError as e:
        raise BackendContractError(f"Malformed page in list response: {e}") from e

    filtered = filter_pages(pages, prefix)
    logger.info(json.dumps({
        "msg": "list_pages",
        "prefix": prefix,
        "tags": tags or [],
        "returned": len(pages),
        "matched": len(filtered),
    }))
    return PageListing(pages=filtered, pages_returned=len(pages))
