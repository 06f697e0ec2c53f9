from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

# Markdown ATX headings: "## Title ##" followed by one or more line breaks.
MARKDOWN_HEADING_PATTERN = re.compile(r"^(#{1,6})[ ]+(.+?)[ ]*#*\n+", re.MULTILINE)
# Zim wiki headings: "====== Title ======", six '=' is the top level.
ZIM_HEADING_PATTERN = re.compile(r"^(={2,6})[ ]+(.+?)[ ]+={2,6}[ ]*\n+", re.MULTILINE)


@dataclass(frozen=True)
class HeadingDialect:
    name: str
    pattern: re.Pattern[str]
    level_for: Callable[[str], int]


def _markdown_level(marks: str) -> int:
    return len(marks)


def _zim_level(marks: str) -> int:
    # 6 '=' -> 1, 2 '=' -> 5
    return 7 - len(marks)


MARKDOWN = HeadingDialect("markdown", MARKDOWN_HEADING_PATTERN, _markdown_level)
ZIM = HeadingDialect("zim", ZIM_HEADING_PATTERN, _zim_level)
