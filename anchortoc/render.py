from __future__ import annotations

from typing import Optional

import markdown

from anchortoc import zim
from anchortoc.adapters.files import Page, PageFormat

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "nl2br"]


def render_markdown(text: str) -> str:
    """Render Markdown to HTML. Raw HTML blocks (rewritten headings) pass through."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def page_source(page: Page) -> str:
    """Return the text to render for ``page``: the rewritten body when the TOC pass ran."""
    return page.content if page.content is not None else page.raw_content


def render_page(page: Page, page_url: Optional[zim.PageUrl] = None) -> str:
    """Render a page body. ``page_url`` maps Zim page links to URLs."""
    text = page_source(page)
    if page.format is PageFormat.ZIM:
        text = zim.to_markdown(text, page_url)
    return render_markdown(text)
