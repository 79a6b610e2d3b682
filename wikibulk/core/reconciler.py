from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from wikibulk.core import queries
from wikibulk.models import BatchReport, MoveOperation, PageFailure, TagOperation, UnconfirmedOperation

logger = logging.getLogger("wikibulk")


def reconcile(
    decoded: Sequence[dict[str, Any]],
    operations: Sequence[MoveOperation | TagOperation],
) -> BatchReport:
    """Fold decoded mutation replies into a single report.

    ``decoded`` must be in the same order as ``operations``; completion order
    is never used. A reply without ``responseResult`` is neither a success nor
    a failure, the operation is listed in ``unconfirmed`` instead.
    """
    if len(decoded) != len(operations):
        raise ValueError(f"{len(decoded)} replies for {len(operations)} operations")

    success_count = 0
    failures: list[PageFailure] = []
    unconfirmed: list[UnconfirmedOperation] = []

    for payload, op in zip(decoded, operations):
        tag = op.tag if isinstance(op, TagOperation) else None
        status = queries.read_response_status(payload, queries.mutation_field(op))
        if status is None:
            unconfirmed.append(UnconfirmedOperation(page_id=op.page_id, path=op.path, tag=tag))
            logger.warning(json.dumps({
                "msg": "no_status",
                "page_id": op.page_id,
                "path": op.path,
                "tag": tag,
                "errors": queries.graphql_errors(payload),
            }))
            continue
        if status.succeeded:
            success_count += 1
        else:
            failures.append(PageFailure(page_id=op.page_id, path=op.path, tag=tag, status=status))

    return BatchReport(
        success_count=success_count,
        failures=failures or None,
        unconfirmed=unconfirmed,
    )
