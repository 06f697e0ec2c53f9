"""Table of contents pass over a page collection.

The pass only talks to pages through a ``PageHost``: the host says which
format a page is in, hands over its raw text, and stores the results. Pages
that did not opt in are left alone; pages in an unknown format are logged and
skipped.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from anchortoc.adapters.files import Page, PageFormat
from anchortoc.toc import MARKDOWN, ZIM, HeadingDialect, TocOptions, process

logger = logging.getLogger(__name__)

DIALECTS = {
    PageFormat.MARKDOWN: MARKDOWN,
    PageFormat.ZIM: ZIM,
}


class PageHost(Protocol):
    def get_format(self, page) -> PageFormat: ...

    def get_raw_content(self, page) -> str: ...

    def wants_toc(self, page) -> bool: ...

    def store(self, page, toc: str, content: str) -> None: ...


class FolderHost:
    """Host for ``Page`` objects read from a page folder."""

    def __init__(self, toc_default: bool = False) -> None:
        self.toc_default = toc_default

    def get_format(self, page: Page) -> PageFormat:
        return page.format

    def get_raw_content(self, page: Page) -> str:
        return page.raw_content

    def wants_toc(self, page: Page) -> bool:
        if page.toc is None:
            return self.toc_default
        return bool(page.toc)

    def store(self, page: Page, toc: str, content: str) -> None:
        page.table_of_contents = toc
        page.content = content


def dialect_for(fmt: PageFormat) -> Optional[HeadingDialect]:
    return DIALECTS.get(fmt)


class TableOfContentsPass:
    def __init__(self, options: Optional[TocOptions] = None) -> None:
        self.options = options or TocOptions()

    def execute(self, pages: Iterable, host: PageHost) -> int:
        """Run the pass over ``pages``. Returns the number of pages processed."""
        processed = 0
        for page in pages:
            if not host.wants_toc(page):
                continue
            dialect = dialect_for(host.get_format(page))
            if dialect is None:
                logger.warning("Skipping table of contents for unsupported page: %s", _describe(page))
                continue
            result = process(host.get_raw_content(page), self.options, dialect)
            host.store(page, result.toc, result.content)
            logger.debug("Built table of contents for %s (%s)", _describe(page), dialect.name)
            processed += 1
        return processed


def _describe(page) -> str:
    return str(getattr(page, "path", page))
