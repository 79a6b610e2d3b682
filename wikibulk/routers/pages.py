from typing import Annotated

from fastapi import APIRouter, Depends, Query

from wikibulk.core.auth import require_api_key
from wikibulk.core.errors import APIError
from wikibulk.core.services.pages_service import list_pages, site_title
from wikibulk.deps import get_wikijs_client
from wikibulk.models import ErrorResponse, PageListResponse, SiteTitleResponse
from wikibulk.tag_utils import parse_tags
from wikibulk.wikijs_client import WikiJSClient

router = APIRouter(dependencies=[Depends(require_api_key)])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.get("/site/title", tags=["site"], response_model=SiteTitleResponse, responses=ERROR_RESPONSES)
async def get_site_title(
    client: Annotated[WikiJSClient, Depends(get_wikijs_client)],
) -> SiteTitleResponse:
    return await site_title(client)


@router.get("/pages", tags=["pages"], response_model=PageListResponse, responses=ERROR_RESPONSES)
async def get_pages(
    client: Annotated[WikiJSClient, Depends(get_wikijs_client)],
    prefix: str = Query("", description="Path prefix; empty matches every page"),
    tags: str | None = Query(None, description="CSV or JSON list, filtered server-side"),
) -> PageListResponse:
    try:
        parsed = parse_tags(tags)
    except ValueError as e:
        raise APIError(400, "bad_request", str(e))
    return await list_pages(client, prefix, parsed)
