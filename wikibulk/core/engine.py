from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from wikibulk.core import catalog, privacy
from wikibulk.core.dispatcher import dispatch
from wikibulk.core.operations import build_move_operations, build_tag_operations, tags_to_apply
from wikibulk.core.reconciler import reconcile
from wikibulk.core.safety_tag import derive_safety_tag
from wikibulk.models import MoveReport, Page, PageListing, TagReport
from wikibulk.wikijs_client import WikiJSClient

logger = logging.getLogger("wikibulk")


class BulkEngine:
    """List, privacy-check, move and tag pages through one ``WikiJSClient``.

    The operator confirmation step sits between ``list_pages``/``private_pages``
    and ``move_pages``/``tag_pages``; the engine itself never prompts.
    """

    def __init__(self, client: WikiJSClient):
        self.client = client

    async def get_wiki_title(self) -> str:
        return await self.client.get_wiki_title()

    async def list_pages(self, prefix: str, tags: list[str] | None = None) -> PageListing:
        return await catalog.list_pages(self.client, prefix, tags)

    @staticmethod
    def private_pages(pages: Sequence[Page]) -> list[Page] | None:
        return privacy.classify_private(pages)

    async def move_pages(self, pages: Sequence[Page], prefix: str, destination: str) -> MoveReport:
        ops = build_move_operations(pages, prefix, destination)
        logger.info(json.dumps({
            "msg": "move_pages",
            "prefix": prefix,
            "destination": destination,
            "operations": len(ops),
        }))
        report = reconcile(await dispatch(self.client, ops), ops)
        return MoveReport(prefix=prefix, destination=destination, **report.model_dump())

    async def tag_pages(
        self,
        pages: Sequence[Page],
        prefix: str,
        destination: str,
        add_tags: Sequence[str] | None = None,
    ) -> TagReport:
        safety_tag = derive_safety_tag(prefix, destination)
        tags = tags_to_apply(safety_tag, add_tags)
        ops = build_tag_operations(pages, tags)
        logger.info(json.dumps({
            "msg": "tag_pages",
            "prefix": prefix,
            "safety_tag": safety_tag,
            "tags": tags,
            "operations": len(ops),
        }))
        report = reconcile(await dispatch(self.client, ops), ops)
        return TagReport(safety_tag=safety_tag, tags=tags, **report.model_dump())
