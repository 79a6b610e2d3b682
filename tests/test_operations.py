import pytest

from wikibulk.core.operations import (
    build_move_operations,
    build_tag_operations,
    rewrite_path,
    tags_to_apply,
)
from wikibulk.models import Page


def test_move_destinations_replace_only_the_prefix():
    pages = [Page(id=1, path="/docs/old/a"), Page(id=2, path="/docs/old/b/c")]
    ops = build_move_operations(pages, "/docs/old", "/docs/new")
    assert [op.destination_path for op in ops] == ["/docs/new/a", "/docs/new/b/c"]
    assert [op.page_id for op in ops] == [1, 2]


def test_rewrite_path_preserves_remainder_exactly():
    # prefix is a plain string, not a path segment
    assert rewrite_path("docs/older/x", "docs/old", "archive") == "archiveer/x"
    assert rewrite_path("docs/old", "docs/old", "docs/new") == "docs/new"


@pytest.mark.parametrize(
    "path,prefix,destination",
    [
        ("docs/old/a", "docs/old", "docs/new"),
        ("a/b/c", "", "root/"),
        ("x/private/y", "x/", "z/"),
    ],
)
def test_rewrite_path_round_trip(path, prefix, destination):
    moved = rewrite_path(path, prefix, destination)
    assert moved == destination + path[len(prefix):]
    assert rewrite_path(moved, destination, prefix) == path


def test_rewrite_path_rejects_non_prefix():
    with pytest.raises(ValueError):
        rewrite_path("blog/a", "docs", "x")


def test_tags_to_apply_puts_safety_tag_first():
    assert tags_to_apply("SAFE", ["reviewed", "2024"]) == ["SAFE", "reviewed", "2024"]
    assert tags_to_apply("SAFE", None) == ["SAFE"]


def test_tag_operations_are_flat_cross_product():
    pages = [Page(id=1, path="a"), Page(id=2, path="b")]
    ops = build_tag_operations(pages, ["SAFE", "extra"])
    assert [(op.page_id, op.tag) for op in ops] == [
        (1, "SAFE"),
        (1, "extra"),
        (2, "SAFE"),
        (2, "extra"),
    ]
    assert all(op.title == op.tag for op in ops)
