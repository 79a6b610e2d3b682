from typing import Annotated

from fastapi import APIRouter, Depends

from wikibulk.core.auth import require_api_key
from wikibulk.core.services.bulk_service import bulk_move, bulk_tag
from wikibulk.deps import get_wikijs_client
from wikibulk.models import BulkMoveRequest, BulkTagRequest, ErrorResponse, MoveReport, TagReport
from wikibulk.wikijs_client import WikiJSClient

router = APIRouter(
    prefix="/pages",
    tags=["bulk"],
    dependencies=[Depends(require_api_key)],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.post("/bulk-move", response_model=MoveReport, responses=ERROR_RESPONSES)
async def bulk_move_endpoint(
    payload: BulkMoveRequest,
    client: Annotated[WikiJSClient, Depends(get_wikijs_client)],
) -> MoveReport:
    return await bulk_move(client, payload)


@router.post("/bulk-tag", response_model=TagReport, responses=ERROR_RESPONSES)
async def bulk_tag_endpoint(
    payload: BulkTagRequest,
    client: Annotated[WikiJSClient, Depends(get_wikijs_client)],
) -> TagReport:
    return await bulk_tag(client, payload)
