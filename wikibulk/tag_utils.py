import json


def parse_tags(raw_tags: str | None) -> list[str] | None:
    """Parse a ``--tags`` style value: JSON list of strings or CSV.

    Returns ``None`` when nothing was given so callers can skip the
    server-side tag filter entirely.
    """
    if raw_tags is None:
        return None
    text = raw_tags.strip()
    if not text:
        return None

    if not text.startswith("["):
        tags = [tag.strip() for tag in text.split(",") if tag.strip()]
        return tags or None

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"tags JSON list is malformed: {e}")
    tags = [str(tag).strip() for tag in parsed if str(tag).strip()]
    return tags or None


def merge_tag_options(values: list[str] | None) -> list[str] | None:
    """Flatten repeated ``--tags`` options, each of which may itself be a list."""
    if not values:
        return None
    merged: list[str] = []
    for value in values:
        merged.extend(parse_tags(value) or [])
    return merged or None
