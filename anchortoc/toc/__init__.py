from .dialects import MARKDOWN, ZIM, HeadingDialect
from .scanner import Heading, TocOptions, TocResult, process, scan_headings
from .slug import normalize

__all__ = [
    "MARKDOWN",
    "ZIM",
    "HeadingDialect",
    "Heading",
    "TocOptions",
    "TocResult",
    "process",
    "scan_headings",
    "normalize",
]
