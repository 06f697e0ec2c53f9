from __future__ import annotations

import argparse
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Optional

from anchortoc import config
from anchortoc.adapters import files
from anchortoc.adapters.files import FileAccessError
from anchortoc.build import build_site
from anchortoc.site import dialect_for
from anchortoc.toc import TocOptions, process, scan_headings

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="anchortoc", description="Heading anchors and tables of contents for page folders.")
    sub = parser.add_subparsers(dest="command", required=True)

    toc_cmd = sub.add_parser("toc", help="Print the table of contents markup of one page.")
    toc_cmd.add_argument("file", help="Markdown (.md) or Zim (.txt) page.")
    toc_cmd.add_argument("--no-ids", action="store_true", help="Do not embed ids in rewritten headings.")
    toc_cmd.add_argument("--headings", action="store_true", help="List headings as level, anchor and title instead of the markup.")

    build_cmd = sub.add_parser("build", help="Render a page folder to HTML.")
    build_cmd.add_argument("source", help="Page folder.")
    build_cmd.add_argument("output", help="Output folder for HTML files.")
    build_cmd.add_argument("--no-ids", action="store_true", help="Do not embed ids in rewritten headings.")
    build_cmd.add_argument("--all", action="store_true", help="Build a table of contents for every page.")

    serve_cmd = sub.add_parser("serve", help="Serve a page folder over HTTP.")
    serve_cmd.add_argument("source", help="Page folder.")
    serve_cmd.add_argument("--host", default="127.0.0.1", help="Host/interface to bind.")
    serve_cmd.add_argument("--port", type=int, default=0, help="Port (0 = auto-select).")
    return parser.parse_args(argv)


def _options(args: argparse.Namespace, root: Path) -> TocOptions:
    if args.no_ids:
        return TocOptions(include_id=False)
    return config.load_toc_options(root)


def toc_command(args: argparse.Namespace) -> int:
    path = Path(args.file).resolve()
    if not path.is_file():
        raise FileNotFoundError(path)
    dialect = dialect_for(files.page_format(path))
    if dialect is None:
        print(f"Error: Unsupported page format: {path.name}", file=sys.stderr)
        return 1
    page = files.read_page(path.parent, path.name)
    if args.headings:
        for heading in scan_headings(page.raw_content, dialect):
            print(f"{heading.level}\t{heading.anchor}\t{heading.title}")
        return 0
    result = process(page.raw_content, _options(args, path.parent), dialect)
    print(result.toc)
    return 0


def build_command(args: argparse.Namespace) -> int:
    source = Path(args.source).resolve()
    toc_default: Optional[bool] = True if args.all else None
    report = build_site(source, Path(args.output), _options(args, source), toc_default)
    print(f"Built {report.written} pages ({report.with_toc} with table of contents) into {args.output}")
    return 0


def serve_command(args: argparse.Namespace) -> int:
    from anchortoc.webserver import WebServer

    source = Path(args.source).resolve()
    if not source.is_dir():
        raise FileNotFoundError(source)
    web_server = WebServer(str(source))
    actual_host, actual_port = web_server.start(args.host, args.port)
    print(f"Serving {source} at http://{actual_host}:{actual_port}/")
    print("Press Ctrl+C to stop.")

    def signal_handler(sig, frame):
        web_server.stop()

    signal.signal(signal.SIGINT, signal_handler)
    while web_server.is_running:
        time.sleep(0.5)
    return 0


COMMANDS = {
    "toc": toc_command,
    "build": build_command,
    "serve": serve_command,
}


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if config.debug_logging_enabled() else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except (FileNotFoundError, FileAccessError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
