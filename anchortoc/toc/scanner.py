"""Heading scanner and table-of-contents builder.

A single left-to-right pass over raw page text. Every heading line is
rewritten to an HTML heading carrying its anchor id, and a nested ``<ul>``
list of links is built alongside. Nesting follows heading level, so jumps in
depth (H1 straight to H4, H3 back to H1) open or close several groups at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .dialects import MARKDOWN, HeadingDialect
from .slug import normalize

GROUP_OPEN = "<ul>"
GROUP_CLOSE = "</ul>"


@dataclass(frozen=True)
class TocOptions:
    include_id: bool = True


@dataclass(frozen=True)
class Heading:
    level: int
    title: str
    anchor: str


@dataclass(frozen=True)
class TocResult:
    content: str
    toc: str


def _entry(heading: Heading) -> str:
    return f"<li><a href='#{heading.anchor}'>{heading.title}</a></li>"


def _heading_line(heading: Heading, options: TocOptions) -> str:
    level = heading.level
    if options.include_id:
        return f'<h{level} id="{heading.anchor}">{heading.title}</h{level}>\n\n'
    return f"<h{level}>{heading.title}</h{level}>\n\n"


def _matches(text: str, dialect: HeadingDialect) -> Iterator[Tuple[re.Match[str], Heading]]:
    for match in dialect.pattern.finditer(text):
        title = match.group(2).strip()
        heading = Heading(
            level=dialect.level_for(match.group(1)),
            title=title,
            anchor=normalize(title),
        )
        yield match, heading


def scan_headings(text: str, dialect: HeadingDialect = MARKDOWN) -> Iterator[Heading]:
    """Yield the headings of ``text`` in document order."""
    for _match, heading in _matches(text or "", dialect):
        yield heading


def process(
    text: str,
    options: Optional[TocOptions] = None,
    dialect: HeadingDialect = MARKDOWN,
) -> TocResult:
    """Rewrite headings in ``text`` and build the matching TOC markup.

    Returns the text unchanged and an empty TOC when no heading matches.
    """
    options = options or TocOptions()
    text = text or ""
    toc: List[str] = []
    content: List[str] = []
    depth = 0
    position = 0
    for match, heading in _matches(text, dialect):
        if heading.level > depth:
            toc.extend(GROUP_OPEN for _ in range(depth, heading.level))
        elif heading.level < depth:
            toc.extend(GROUP_CLOSE for _ in range(heading.level, depth))
        toc.append(_entry(heading))
        depth = heading.level

        content.append(text[position : match.start()])
        content.append(_heading_line(heading, options))
        position = match.end()

    if not toc:
        return TocResult(content=text, toc="")

    # Close every group still open, down to the top level.
    toc.extend(GROUP_CLOSE for _ in range(depth))
    content.append(text[position:])
    return TocResult(content="".join(content), toc="".join(toc))
