"""Minimal markdown to HTML conversion for coaching responses.

Only headings (``#`` to ``###``), ``- `` bullets, blank lines and plain
paragraphs are recognised. There is no inline formatting; every piece of text
is HTML-escaped before it is wrapped in a tag.
"""
from __future__ import annotations

import re
from typing import Iterator, List

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)

_HEADINGS = (("### ", "h3"), ("## ", "h2"), ("# ", "h1"))
_LIST_PREFIX = "- "
_LINE_BREAK = "<br/>"
_NEWLINE = re.compile(r"\r?\n")


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters in a single pass."""
    return text.translate(_ESCAPES)


class MarkdownRenderer:
    """Iterable over the HTML fragments of a markdown document.

    Each iteration starts a fresh pass over the source, so the same renderer
    can be consumed any number of times.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        open_items: List[str] = []
        for line in _NEWLINE.split(self.text):
            if line.startswith(_LIST_PREFIX):
                open_items.append(f"<li>{escape_html(line[len(_LIST_PREFIX):])}</li>")
                continue
            if open_items:
                yield _flush_list(open_items)
                open_items = []
            yield _render_line(line)
        if open_items:
            yield _flush_list(open_items)


def render_markdown(text: str) -> str:
    return "".join(MarkdownRenderer(text))


def _flush_list(items: List[str]) -> str:
    return f"<ul>{''.join(items)}</ul>"


def _render_line(line: str) -> str:
    for prefix, tag in _HEADINGS:
        if line.startswith(prefix):
            return f"<{tag}>{escape_html(line[len(prefix):])}</{tag}>"
    if not line.strip():
        return _LINE_BREAK
    return f"<p>{escape_html(line)}</p>"
