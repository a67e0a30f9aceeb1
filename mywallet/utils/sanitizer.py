"""Mini README: Markup stripping for user-supplied text.

Structure:
    * clean - return the plain-text content of a string that may hold markup.

Tags and comments are removed, the bodies of ``script`` and ``style`` elements
are dropped, and the result is trimmed. Ampersands never reach the parser's
entity handling: every ``&`` sequence comes out exactly as it went in, so
``R&D`` stays ``R&D`` and ``&lt;b&gt;`` is never decoded into live markup.
Passes repeat until nothing changes, which makes ``clean`` idempotent. It
never raises.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser
from itertools import chain
from typing import List, Optional

_SKIPPED_ELEMENTS = {"script", "style"}
_TAG_PATTERN = re.compile(r"<[^>]*>")
_PRIVATE_USE = (range(0xE000, 0xF900), range(0xF0000, 0xFFFFE))


class _TextCollector(HTMLParser):
    """Accumulate character data outside skipped elements."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self._chunks: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs) -> None:
        if tag in _SKIPPED_ELEMENTS:
            self._skip_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in _SKIPPED_ELEMENTS and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:
        if not self._skip_depth:
            self._chunks.append(data)

    def text(self) -> str:
        return "".join(self._chunks)


def _ampersand_stand_in(text: str) -> Optional[str]:
    """Pick a private-use character absent from ``text``."""

    return next((chr(code) for code in chain.from_iterable(_PRIVATE_USE) if chr(code) not in text), None)


def _strip_once(text: str) -> str:
    stand_in = _ampersand_stand_in(text)
    if stand_in is None:
        return _TAG_PATTERN.sub("", text).strip()
    collector = _TextCollector()
    try:
        collector.feed(text.replace("&", stand_in))
        collector.close()
        result = collector.text()
    except (AssertionError, ValueError):
        # Older parsers assert on some malformed declarations.
        result = _TAG_PATTERN.sub("", text.replace("&", stand_in))
    return result.replace(stand_in, "&").strip()


def clean(text: str) -> str:
    """Strip markup from ``text`` and return the trimmed plain content."""

    result = text or ""
    while True:
        # Each pass only removes characters, so this stops once nothing changes.
        stripped = _strip_once(result)
        if stripped == result:
            return result
        result = stripped
