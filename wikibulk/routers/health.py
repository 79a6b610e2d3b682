from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from wikibulk.core.config import missing_env
from wikibulk.models import HealthResponse, ReadyResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse, "description": "Missing required Wiki.js env vars"}},
)
async def ready():
    missing = missing_env()
    if missing:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ReadyResponse(ready=False, reason="; ".join(missing)).model_dump(),
        )
    return ReadyResponse(ready=True)
