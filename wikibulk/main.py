from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wikibulk import __version__
from wikibulk.core.errors import APIError
from wikibulk.log_utils import inject_request_id, setup_logging
from wikibulk.routers.api import api_router


load_dotenv()

app = FastAPI(title="Wiki Bulk Operations", version=__version__)
setup_logging()


@app.middleware("http")
async def add_req_id(request, call_next):
    return await inject_request_id(request, call_next)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message, "details": exc.details},
    )


app.include_router(api_router)
