from __future__ import annotations

from collections.abc import Iterable

from wikibulk.models import Page

PRIVATE_WORD = "private"


def is_private(page: Page) -> bool:
    # substring match on purpose: "/team/privateer" counts too
    return page.has_tag(PRIVATE_WORD) or PRIVATE_WORD in page.path


def classify_private(pages: Iterable[Page]) -> list[Page] | None:
    """Return the private pages in input order, or ``None`` when there are none."""
    private = [p for p in pages if is_private(p)]
    return private or None
