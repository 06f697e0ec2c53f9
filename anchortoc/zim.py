from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from anchortoc.toc import normalize

# Headings already rewritten to HTML by the TOC pass.
HTML_HEADING_PATTERN = re.compile(r"^<h[1-6][ >]")
ZIM_LINK_PATTERN = re.compile(r"\[\[(?P<target>[^\]|]+)(?:\|(?P<label>[^\]]*))?\]\]")
URL_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)

# (absolute, "Notes/Page") -> URL of that page
PageUrl = Callable[[bool, str], str]


def convert_heading(line: str) -> str:
    m = re.match(r"^(\s*)(={2,6})\s*(.*?)\s*=*\s*$", line)
    if not m:
        return line
    indent, marks, body = m.groups()
    level = max(1, min(5, 7 - len(marks)))  # 6 '=' -> H1, 2 '=' -> H5
    return f"{indent}{'#' * level} {body.strip()}"


def convert_task(line: str) -> str:
    m = re.match(r"^(\s*)\[(?P<state>[ xX\*\>\<])\]\s*(.*)$", line)
    if not m:
        return line
    state = m.group("state").lower()
    done = state in {"x", "*"}
    marker = "[x]" if done else "[ ]"
    return f"{m.group(1)}- {marker} {m.group(3)}".rstrip()


def convert_inline(text: str) -> str:
    converted = text
    # Bold+italic: //**text**// -> ***text***
    converted = re.sub(r"//\*\*(.+?)\*\*//", r"***\1***", converted)
    # Italic: //text// -> *text*, leaving URLs alone
    converted = re.sub(r"(?<![:/])//(?!/)(.+?)(?<![:/])//", r"*\1*", converted)
    # Fixed width: ''code'' -> `code`
    converted = re.sub(r"''(.+?)''", r"`\1`", converted)
    return converted


def split_link(target: str) -> Tuple[bool, str, str]:
    """Split a Zim page link into (absolute, slash path, anchor).

    ``:Notes:Page#Next Steps`` gives ``(True, "Notes/Page", "next_steps")``.
    """
    base, _, section = target.partition("#")
    absolute = base.startswith(":")
    path = "/".join(part.strip() for part in base.split(":") if part.strip())
    return absolute, path, normalize(section) if section else ""


def convert_links(text: str, page_url: Optional[PageUrl] = None) -> str:
    def replacer(match: re.Match[str]) -> str:
        target = match.group("target").strip()
        label = (match.group("label") or "").strip() or target
        if page_url is None or URL_PATTERN.match(target):
            return f"[{label}]({target})"
        absolute, path, anchor = split_link(target)
        href = page_url(absolute, path) if path else ""
        if anchor:
            href = f"{href}#{anchor}"
        return f"[{label}]({href})"

    return ZIM_LINK_PATTERN.sub(replacer, text)


def to_markdown(text: str, page_url: Optional[PageUrl] = None) -> str:
    """Convert a Zim page body to Markdown for rendering.

    HTML headings produced by the TOC pass are kept as they are.
    """
    lines = []
    for line in text.splitlines():
        if HTML_HEADING_PATTERN.match(line):
            lines.append(line)
            continue
        line = convert_heading(line)
        line = convert_task(line)
        line = convert_inline(line)
        lines.append(line)
    return convert_links("\n".join(lines), page_url) + "\n"
