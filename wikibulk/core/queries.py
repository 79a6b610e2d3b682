"""GraphQL request/response contract for the Wiki.js operations wikibulk uses.

Every builder returns the JSON body to POST (``{"query": ..., "variables": ...}``).
Readers walk the ``data`` envelope and return ``None`` when a level is missing;
callers decide whether that is a contract violation or an unconfirmed outcome.
A status that is present but malformed raises ``BackendContractError``.
"""
from __future__ import annotations

from typing import Any

from wikibulk.core.errors import BackendContractError
from wikibulk.models import MoveOperation, ResponseStatus, TagOperation

QUERY_LIST_PAGES = """
query ListAllPages($tags: [String!]) {
  pages {
    list(tags: $tags) {
      id
      path
      title
      tags
    }
  }
}
"""

MUTATION_MOVE_PAGE = """
mutation MoveSinglePage($id: Int!, $destinationPath: String!, $destinationLocale: String!) {
  pages {
    move(id: $id, destinationPath: $destinationPath, destinationLocale: $destinationLocale) {
      responseResult { succeeded errorCode slug message }
    }
  }
}
"""

MUTATION_UPDATE_TAG = """
mutation UpdateSingleTag($id: Int!, $tag: String!, $title: String!) {
  pages {
    updateTag(id: $id, tag: $tag, title: $title) {
      responseResult { succeeded errorCode slug message }
    }
  }
}
"""

QUERY_SITE_TITLE = """
query GetWikiTitle {
  site { config { title } }
}
"""

# mutation field under data.pages for each operation kind
MOVE_FIELD = "move"
TAG_FIELD = "updateTag"


def _body(query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"query": query}
    if variables:
        payload["variables"] = variables
    return payload


def list_pages_body(tags: list[str] | None = None) -> dict[str, Any]:
    return _body(QUERY_LIST_PAGES, {"tags": tags} if tags else None)


def move_page_body(op: MoveOperation, locale: str = "en") -> dict[str, Any]:
    return _body(
        MUTATION_MOVE_PAGE,
        {"id": op.page_id, "destinationPath": op.destination_path, "destinationLocale": locale},
    )


def update_tag_body(op: TagOperation) -> dict[str, Any]:
    return _body(MUTATION_UPDATE_TAG, {"id": op.page_id, "tag": op.tag, "title": op.title})


def site_title_body() -> dict[str, Any]:
    return _body(QUERY_SITE_TITLE)


def operation_body(op: MoveOperation | TagOperation, locale: str = "en") -> dict[str, Any]:
    if isinstance(op, MoveOperation):
        return move_page_body(op, locale)
    return update_tag_body(op)


def mutation_field(op: MoveOperation | TagOperation) -> str:
    return MOVE_FIELD if isinstance(op, MoveOperation) else TAG_FIELD


def _dig(payload: Any, *keys: str) -> Any:
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def read_page_list(payload: dict[str, Any]) -> list[dict[str, Any]] | None:
    items = _dig(payload, "data", "pages", "list")
    return items if isinstance(items, list) else None


def read_site_title(payload: dict[str, Any]) -> str | None:
    title = _dig(payload, "data", "site", "config", "title")
    return title if isinstance(title, str) else None


def read_response_status(payload: dict[str, Any], field: str) -> ResponseStatus | None:
    rr = _dig(payload, "data", "pages", field, "responseResult")
    if not isinstance(rr, dict):
        return None
    try:
        return ResponseStatus.model_validate({
            "succeeded": bool(rr.get("succeeded")),
            "slug": rr.get("slug") or "",
            "error_code": rr.get("errorCode") or 0,
            "message": rr.get("message"),
        })
    except (ValueError, TypeError) as e:
        raise BackendContractError(f"Malformed responseResult in {field} reply: {e}") from e


def graphql_errors(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors") or []
    return [str(e.get("message", "GraphQL error")) if isinstance(e, dict) else str(e) for e in errors]
