"""Concurrent fan-out of one GraphQL mutation per operation.

All requests are issued at once and awaited together; one failure never
cancels the rest. Transport failures and JSON decode failures are each
classified as none / all / some of the batch, and anything but "none" aborts
the batch before reconciliation.
"""
from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from wikibulk.core import queries
from wikibulk.core.errors import AllRequestsFailed, PartialRequestFailure
from wikibulk.models import MoveOperation, TagOperation
from wikibulk.wikijs_client import WikiJSClient

logger = logging.getLogger("wikibulk")

Operation = MoveOperation | TagOperation


def _raise_for_failures(failed: int, total: int, stage: str) -> None:
    if failed == 0:
        return
    if failed == total:
        raise AllRequestsFailed(f"All {total} {stage} failed.", failed=failed, total=total)
    raise PartialRequestFailure(
        f"{failed} of {total} {stage} failed. The batch may be partially applied.",
        failed=failed,
        total=total,
    )


async def _send_all(
    client: WikiJSClient,
    operations: Sequence[Operation],
    max_concurrency: int | None,
) -> list[httpx.Response | BaseException]:
    sem = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _send(op: Operation) -> httpx.Response:
        body = queries.operation_body(op, client.locale)
        if sem is None:
            return await client.post(body)
        async with sem:
            return await client.post(body)

    return await asyncio.gather(*(_send(op) for op in operations), return_exceptions=True)


async def dispatch(
    client: WikiJSClient,
    operations: Sequence[Operation],
    max_concurrency: int | None = None,
) -> list[dict[str, Any]]:
    """Send every operation and return decoded JSON bodies in operation order."""
    if not operations:
        return []
    total = len(operations)
    limit = max_concurrency if max_concurrency is not None else client.max_concurrency

    results = await _send_all(client, operations, limit)

    responses: list[httpx.Response] = []
    transport_failures = 0
    for op, result in zip(operations, results):
        if isinstance(result, httpx.HTTPError):
            transport_failures += 1
            logger.warning(json.dumps({
                "msg": "request_failed",
                "page_id": op.page_id,
                "path": op.path,
                "error": str(result) or type(result).__name__,
            }))
        elif isinstance(result, BaseException):
            raise result
        else:
            responses.append(result)
    _raise_for_failures(transport_failures, total, "requests")

    decoded: list[dict[str, Any]] = []
    decode_failures = 0
    for op, resp in zip(operations, responses):
        try:
            decoded.append(resp.json())
        except ValueError as e:
            decode_failures += 1
            logger.warning(json.dumps({
                "msg": "decode_failed",
                "page_id": op.page_id,
                "path": op.path,
                "error": str(e),
            }))
    _raise_for_failures(decode_failures, total, "JSON decodes")

    logger.info(json.dumps({"msg": "dispatch_complete", "requests": total}))
    return decoded
