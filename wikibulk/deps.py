from collections.abc import AsyncIterator

from wikibulk.core.auth import require_api_key
from wikibulk.core.errors import ConfigError
from wikibulk.core.services.pages_service import map_engine_error
from wikibulk.wikijs_client import WikiJSClient


async def get_wikijs_client() -> AsyncIterator[WikiJSClient]:
    try:
        client = WikiJSClient.from_env()
    except ConfigError as e:
        raise map_engine_error(e)
    async with client:
        yield client


__all__ = ["get_wikijs_client", "require_api_key"]
