import pytest

from anchortoc.toc import normalize


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Title", "title"),
        ("  Hello World  ", "hello_world"),
        ("What's new?", "what_s_new"),
        ("C++ -- Tips", "c_tips"),
        ("Tabs\tand\nlines", "tabs_and_lines"),
        ("  _leading", "_leading"),
        ("Café Ünïcode", "café_ünïcode"),
        ("Version 2.0 (beta)", "version_2_0_beta"),
        ("trailing___", "trailing"),
    ],
)
def test_normalize(title, expected):
    assert normalize(title) == expected


@pytest.mark.parametrize("title", ["", "   ", "!!!", "?", "---", "***"])
def test_punctuation_only_titles_give_empty_slug(title):
    assert normalize(title) == ""


def test_colliding_titles_share_a_slug():
    assert normalize("Foo Bar") == normalize("foo_bar") == "foo_bar"


@pytest.mark.parametrize(
    "title",
    ["Hello World", "  _x_ ", "a  --  b", "What's new?", "Ünïcode Title", "!!!", "", "__init__"],
)
def test_normalize_is_idempotent(title):
    once = normalize(title)
    assert normalize(once) == once
