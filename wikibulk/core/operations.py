from __future__ import annotations

from collections.abc import Sequence

from wikibulk.models import MoveOperation, Page, TagOperation


def rewrite_path(path: str, prefix: str, destination: str) -> str:
    """Replace the literal leading ``prefix`` of ``path`` with ``destination``."""
    if not path.startswith(prefix):
        raise ValueError(f"{path!r} does not start with {prefix!r}")
    return destination + path[len(prefix):]


def build_move_operations(pages: Sequence[Page], prefix: str, destination: str) -> list[MoveOperation]:
    return [
        MoveOperation(
            page_id=p.id,
            path=p.path,
            destination_path=rewrite_path(p.path, prefix, destination),
        )
        for p in pages
    ]


def tags_to_apply(safety_tag: str, extra_tags: Sequence[str] | None = None) -> list[str]:
    return [safety_tag, *(extra_tags or [])]


def build_tag_operations(pages: Sequence[Page], tags: Sequence[str]) -> list[TagOperation]:
    """Flat pages x tags cross product, page-major."""
    return [
        TagOperation(page_id=p.id, path=p.path, tag=tag, title=tag)
        for p in pages
        for tag in tags
    ]
