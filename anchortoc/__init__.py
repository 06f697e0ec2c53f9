"""
anchortoc - heading anchors and tables of contents for page folders.

Rewrites Markdown and Zim wiki headings to carry stable anchor ids and builds
a nested list of links to them, ahead of Markdown rendering.
"""

__version__ = "0.1.0"

from .toc import Heading, TocOptions, TocResult, normalize, process, scan_headings
from .site import FolderHost, PageHost, TableOfContentsPass

__all__ = [
    "__version__",
    "Heading",
    "TocOptions",
    "TocResult",
    "normalize",
    "process",
    "scan_headings",
    "FolderHost",
    "PageHost",
    "TableOfContentsPass",
]
