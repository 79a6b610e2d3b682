from wikibulk.core.privacy import classify_private, is_private
from wikibulk.models import Page


def test_private_tag_marks_page_private():
    assert is_private(Page(id=1, path="team/notes", tags=["draft", "private"]))


def test_private_substring_anywhere_in_path():
    assert is_private(Page(id=1, path="team/private/notes"))
    assert is_private(Page(id=2, path="privateer/ships"))
    assert is_private(Page(id=3, path="team/my-private-notes"))


def test_page_without_marker_is_not_private():
    assert not is_private(Page(id=1, path="team/notes", tags=["public"]))
    assert not is_private(Page(id=2, path="team/notes", tags=None))
    assert not is_private(Page(id=3, path="team/notes", tags=[]))


def test_tag_match_is_exact():
    assert not is_private(Page(id=1, path="team/notes", tags=["private-ish", "Private"]))


def test_classify_private_keeps_input_order():
    pages = [
        Page(id=1, path="b/private"),
        Page(id=2, path="a/public"),
        Page(id=3, path="c/x", tags=["private"]),
    ]
    assert [p.id for p in classify_private(pages)] == [1, 3]


def test_classify_private_returns_none_when_clean():
    assert classify_private([Page(id=1, path="docs/a")]) is None
    assert classify_private([]) is None
