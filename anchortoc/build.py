"""Static site build: page folder in, HTML folder out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from anchortoc import config, zim
from anchortoc.adapters import files
from anchortoc.adapters.files import FileAccessError, Page
from anchortoc.render import render_page
from anchortoc.site import FolderHost, TableOfContentsPass
from anchortoc.toc import TocOptions

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass
class BuildReport:
    written: int = 0
    with_toc: int = 0
    skipped: int = 0


def template_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )


def output_path_for(page_path: str) -> str:
    """Map ``/Notes/Home.md`` to ``/Notes/Home.html``."""
    return f"{files.strip_page_suffix(page_path)}.html"


def _depth(page_path: str) -> int:
    return len(PurePosixPath(page_path.lstrip("/")).parts) - 1


def _index_url(page_path: str) -> str:
    return "../" * _depth(page_path) + "index.html"


def page_url_for(page_path: str) -> zim.PageUrl:
    """Relative ``.html`` links from the page at ``page_path`` to other pages."""
    to_root = "../" * _depth(page_path)

    def page_url(absolute: bool, path: str) -> str:
        return f"{to_root if absolute else ''}{path}.html"

    return page_url


def load_pages(source: Path, report: BuildReport) -> List[Page]:
    pages: List[Page] = []
    targets: Dict[str, str] = {}
    for rel in files.iter_page_paths(source):
        target = output_path_for(rel)
        if target in targets:
            logger.warning("Skipping %s: %s already renders to %s", rel, targets[target], target)
            report.skipped += 1
            continue
        targets[target] = rel
        try:
            pages.append(files.read_page(source, rel))
        except FileAccessError as exc:
            logger.warning("Skipping %s: %s", rel, exc)
            report.skipped += 1
    return pages


def build_site(
    source: Path,
    output: Path,
    options: Optional[TocOptions] = None,
    toc_default: Optional[bool] = None,
) -> BuildReport:
    source = Path(source).resolve()
    output = Path(output)
    if options is None:
        options = config.load_toc_options(source)
    if toc_default is None:
        toc_default = config.load_toc_default(source)

    report = BuildReport()
    pages = load_pages(source, report)
    host = FolderHost(toc_default=toc_default)
    report.with_toc = TableOfContentsPass(options).execute(pages, host)

    env = template_environment()
    page_template = env.get_template("page.html")
    items = []
    for page in pages:
        target = output_path_for(page.path)
        html = page_template.render(
            title=page.title,
            toc=page.table_of_contents,
            content=render_page(page, page_url_for(page.path)),
            index_url=_index_url(page.path),
        )
        files.write_file(output, target, html)
        items.append({"name": page.title, "url": target.lstrip("/")})
        report.written += 1

    index = env.get_template("index.html").render(title=source.name, items=items)
    files.write_file(output, "/index.html", index)
    logger.info(
        "Built %d pages (%d with table of contents, %d skipped) into %s",
        report.written,
        report.with_toc,
        report.skipped,
        output,
    )
    return report
