import json
import logging
import uuid

from starlette.requests import Request
from starlette.responses import Response

LOGGER_NAME = "wikibulk"


def setup_logging(verbosity: int | None = None):
    """INFO by default; with ``verbosity`` (CLI ``-v`` count) 0=WARNING, 1=INFO, 2+=DEBUG."""
    if verbosity is None:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level)
    logging.getLogger(LOGGER_NAME).setLevel(level)


async def inject_request_id(request: Request, call_next):
    req_id = request.headers.get("X-Request-Id", str(uuid.uuid4()))
    logger = logging.getLogger(LOGGER_NAME)
    request.state.req_id = req_id
    response: Response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    # basic access log
    logger.info(json.dumps({
        "msg": "request",
        "req_id": req_id,
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
    }))
    return response
