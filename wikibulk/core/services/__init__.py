from wikibulk.core.services.bulk_service import bulk_move, bulk_tag
from wikibulk.core.services.pages_service import list_pages, map_engine_error, site_title

__all__ = [
    "bulk_move",
    "bulk_tag",
    "list_pages",
    "map_engine_error",
    "site_title",
]
