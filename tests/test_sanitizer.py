"""Mini README: Tests for the markup sanitizer.

Covers tag removal, dropped script bodies, ampersands kept exactly as typed,
idempotence over randomly assembled markup, and the promise that malformed
input never raises.
"""

from __future__ import annotations

import random

import pytest

from mywallet.utils import clean

FRAGMENTS = [
    "<", ">", "&", ";", "/", "!", "-", "#", "=", "'", '"', " ", "\n",
    "a", "b", "T", "x1", "amp", "lt", "gt", "&#60", "&amp;", "&lt;",
    "<b>", "</b>", "<script>", "</script>", "<style>", "</style>",
    "<!--", "-->", "<!", "<![CDATA[", "]]>", "<?", "<a href='", "",
]


def _random_markup(generator: random.Random) -> str:
    return "".join(generator.choice(FRAGMENTS) for _ in range(generator.randint(0, 24)))


def test_clean_strips_tags() -> None:
    """Tags disappear while their text content stays."""

    assert clean("<b>salary</b>") == "salary"
    assert clean("<p class='x'>Ana <i>Maria</i></p>") == "Ana Maria"


def test_clean_drops_script_and_style_bodies() -> None:
    """Script and style contents are not treated as text."""

    assert clean("<script>alert('x')</script>Ana") == "Ana"
    assert clean("<style>p {color: red}</style>rent") == "rent"


@pytest.mark.parametrize(
    "text",
    [
        "R&D costs",
        "AT&T",
        "t&t",
        "t&&t",
        "abc&def!",
        "a&b@example.com",
        "Tom &amp; Jerry",
        "&lt;b&gt;",
        "&#60;script&#62;",
        "fish & chips",
        "trailing&",
    ],
)
def test_clean_keeps_ampersands_verbatim(text: str) -> None:
    """Ampersand sequences are plain text and come back unchanged."""

    assert clean(text) == text


def test_clean_keeps_ampersands_next_to_markup() -> None:
    assert clean("<b>R&D</b> &amp; <i>AT&T</i>") == "R&D &amp; AT&T"


def test_clean_trims_whitespace() -> None:
    assert clean("  padded text  ") == "padded text"
    assert clean("") == ""


def test_clean_is_idempotent_on_random_markup() -> None:
    """A second pass never changes the result, and nothing raises."""

    generator = random.Random(20240528)
    for _ in range(3000):
        sample = _random_markup(generator)
        once = clean(sample)
        assert clean(once) == once, sample
        assert len(once) <= len(sample)
