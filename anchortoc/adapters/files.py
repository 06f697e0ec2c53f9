from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

PAGE_SUFFIX = ".md"
LEGACY_SUFFIX = ".txt"
PAGE_SUFFIXES = (PAGE_SUFFIX, LEGACY_SUFFIX)

FRONT_MATTER_FENCE = "---"
# Zim page headers: "Content-Type: text/x-zim-wiki", "Wiki-Format: zim 0.4", ...
ZIM_HEADER_PATTERN = re.compile(r"^(?P<key>[A-Za-z][\w-]*):\s*(?P<value>.*)$")
TRUTHY = {"1", "true", "yes", "on"}


class FileAccessError(RuntimeError):
    pass


class PageFormat(enum.Enum):
    MARKDOWN = "markdown"
    ZIM = "zim"
    UNSUPPORTED = "unsupported"


@dataclass
class Page:
    path: str  # root-relative posix path, leading slash
    raw_content: str
    metadata: Dict[str, str] = field(default_factory=dict)
    toc: Optional[bool] = None
    table_of_contents: str = ""
    content: Optional[str] = None

    @property
    def format(self) -> PageFormat:
        return page_format(self.path)

    @property
    def title(self) -> str:
        return self.metadata.get("title") or strip_page_suffix(Path(self.path).name)


def is_page_suffix(suffix: str) -> bool:
    return suffix.lower() in PAGE_SUFFIXES


def strip_page_suffix(name: str) -> str:
    lowered = name.lower()
    for suffix in PAGE_SUFFIXES:
        if lowered.endswith(suffix):
            return name[: -len(suffix)]
    return name


def page_format(path: str | Path) -> PageFormat:
    suffix = Path(path).suffix.lower()
    if suffix == PAGE_SUFFIX:
        return PageFormat.MARKDOWN
    if suffix == LEGACY_SUFFIX:
        return PageFormat.ZIM
    return PageFormat.UNSUPPORTED


def is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUTHY


def _parse_pairs(lines: List[str]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for line in lines:
        match = ZIM_HEADER_PATTERN.match(line.strip())
        if match:
            fields[match.group("key").lower()] = match.group("value").strip()
    return fields


def split_front_matter(text: str) -> Tuple[Dict[str, str], str]:
    """Split a leading ``---`` block of ``key: value`` lines off a Markdown page."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return {}, text
    for idx in range(1, len(lines)):
        if lines[idx].strip() == FRONT_MATTER_FENCE:
            return _parse_pairs(lines[1:idx]), "".join(lines[idx + 1 :])
    return {}, text


def split_zim_headers(text: str) -> Tuple[Dict[str, str], str]:
    """Split the ``Key: value`` header lines off a Zim page, up to the first blank line."""
    lines = text.splitlines(keepends=True)
    idx = 0
    while idx < len(lines) and lines[idx].strip():
        if not ZIM_HEADER_PATTERN.match(lines[idx].strip()):
            return {}, text
        idx += 1
    if idx == 0 or idx == len(lines):
        return {}, text
    return _parse_pairs(lines[:idx]), "".join(lines[idx + 1 :])


def parse_page(path: str, text: str) -> Page:
    fmt = page_format(path)
    if fmt is PageFormat.MARKDOWN:
        metadata, body = split_front_matter(text)
    elif fmt is PageFormat.ZIM:
        metadata, body = split_zim_headers(text)
    else:
        metadata, body = {}, text
    toc = is_truthy(metadata["toc"]) if "toc" in metadata else None
    return Page(path=path, raw_content=body, metadata=metadata, toc=toc)


def _resolve(root: Path, relative_path: str) -> Path:
    if not relative_path:
        raise FileAccessError("Path must not be empty")
    rel = relative_path.lstrip("/")
    target = (root / rel).resolve()
    if root not in target.parents and target != root:
        raise FileAccessError("Attempted access outside the page root")
    return target


def read_page(root: Path, path: str) -> Page:
    root = Path(root).resolve()
    target = _resolve(root, path)
    if not target.exists():
        raise FileNotFoundError(target)
    try:
        text = target.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileAccessError("File is not UTF-8 encoded text.") from exc
    rel = f"/{target.relative_to(root).as_posix()}"
    return parse_page(rel, text)


def iter_page_paths(root: Path) -> Iterator[str]:
    """Yield root-relative paths of every page file, skipping hidden folders."""
    root = Path(root).resolve()
    if not root.is_dir():
        raise FileNotFoundError(root)
    for path in sorted(root.rglob("*")):
        if not path.is_file() or not is_page_suffix(path.suffix):
            continue
        rel = path.relative_to(root)
        if any(part.startswith(".") for part in rel.parts):
            continue
        yield f"/{rel.as_posix()}"


def iter_pages(root: Path) -> Iterator[Page]:
    for rel in iter_page_paths(root):
        yield read_page(root, rel)


def write_file(root: Path, path: str, content: str) -> Path:
    root = Path(root).resolve()
    target = _resolve(root, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target
