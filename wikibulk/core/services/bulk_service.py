from __future__ import annotations

import json
import logging

from wikibulk.core.engine import BulkEngine
from wikibulk.core.errors import APIError, WikiBulkError
from wikibulk.core.services.pages_service import map_engine_error
from wikibulk.models import BulkMoveRequest, BulkTagRequest, MoveReport, Page, TagReport
from wikibulk.wikijs_client import WikiJSClient

logger = logging.getLogger("wikibulk")


def _guard_private(engine: BulkEngine, pages: list[Page], allow_private: bool) -> None:
    private = engine.private_pages(pages)
    if private is None:
        return
    if not allow_private:
        raise APIError(
            409,
            "private_pages",
            f"{len(private)} matching pages are marked private; resend with allow_private=true",
            details={"page_ids": [p.id for p in private], "paths": [p.path for p in private]},
        )
    logger.warning(json.dumps({
        "msg": "private_pages_allowed",
        "page_ids": [p.id for p in private],
    }))


async def bulk_move(client: WikiJSClient, req: BulkMoveRequest) -> MoveReport:
    engine = BulkEngine(client)
    try:
        listing = await engine.list_pages(req.prefix, req.tags)
        _guard_private(engine, listing.pages, req.allow_private)
        return await engine.move_pages(listing.pages, req.prefix, req.destination)
    except WikiBulkError as e:
        raise map_engine_error(e)


async def bulk_tag(client: WikiJSClient, req: BulkTagRequest) -> TagReport:
    engine = BulkEngine(client)
    try:
        listing = await engine.list_pages(req.prefix, req.tags)
        _guard_private(engine, listing.pages, req.allow_private)
        return await engine.tag_pages(listing.pages, req.prefix, req.destination, req.add_tags)
    except WikiBulkError as e:
        raise map_engine_error(e)
