"""
anchortoc web server.

Serves a page folder as a navigable HTML site, running the table of
contents pass on each page as it is requested.
"""

import logging
import threading
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote

from flask import Flask, abort, render_template
from werkzeug.serving import BaseWSGIServer, make_server

from anchortoc import config
from anchortoc.adapters import files
from anchortoc.adapters.files import FileAccessError, PAGE_SUFFIXES
from anchortoc.render import render_page
from anchortoc.site import FolderHost, TableOfContentsPass
from anchortoc.toc import TocOptions
from anchortoc.zim import PageUrl

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def wiki_url_for(page_path: str) -> PageUrl:
    """/wiki/ links from the page at ``page_path`` to other pages."""
    folder = PurePosixPath(page_path.lstrip("/")).parent

    def page_url(absolute: bool, path: str) -> str:
        if absolute or folder == PurePosixPath("."):
            return f"/wiki/{path}"
        return f"/wiki/{folder.as_posix()}/{path}"

    return page_url


class WebServer:
    """Web server for serving a page folder as HTML."""

    def __init__(self, root: str, options: Optional[TocOptions] = None, toc_default: Optional[bool] = None):
        """
        Initialize web server.

        Args:
            root: Path to the page folder
            options: TOC options; read from the project config when omitted
            toc_default: opt-in for pages without a toc flag; read from the project config when omitted
        """
        self.root = Path(root).resolve()
        self.options = options if options is not None else config.load_toc_options(self.root)
        if toc_default is None:
            toc_default = config.load_toc_default(self.root)
        self.host_adapter = FolderHost(toc_default=toc_default)
        self.app = Flask(__name__, template_folder=str(TEMPLATE_DIR))
        self.server_thread: Optional[threading.Thread] = None
        self._server: Optional[BaseWSGIServer] = None
        self.is_running = False
        self.host = "127.0.0.1"
        self.port = 0

        self._setup_routes()

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.route("/")
        def index():
            """Serve the page listing."""
            return self._render_index()

        @self.app.route("/wiki/<path:page_path>")
        def wiki_page(page_path: str):
            """Render a page."""
            page_path = unquote(page_path)
            if not page_path.endswith(PAGE_SUFFIXES):
                # Try both extensions
                for ext in PAGE_SUFFIXES:
                    if (self.root / (page_path + ext)).exists():
                        page_path += ext
                        break
                else:
                    page_path += files.PAGE_SUFFIX
            return self._render_page(page_path)

    def _render_page(self, page_path: str) -> str:
        """
        Render a page with its table of contents.

        Args:
            page_path: Root-relative path to the page file

        Returns:
            Rendered HTML
        """
        try:
            page = files.read_page(self.root, page_path)
        except FileNotFoundError:
            abort(404)
        except FileAccessError as e:
            logger.error(f"Cannot read page {page_path}: {e}")
            abort(403)

        TableOfContentsPass(self.options).execute([page], self.host_adapter)
        return render_template(
            "page.html",
            title=page.title,
            toc=page.table_of_contents,
            content=render_page(page, wiki_url_for(page.path)),
            index_url="/",
        )

    def _render_index(self) -> str:
        items = []
        for rel in files.iter_page_paths(self.root):
            items.append({
                "name": files.strip_page_suffix(rel.lstrip("/")),
                "url": f"/wiki/{files.strip_page_suffix(rel.lstrip('/'))}",
            })
        return render_template("index.html", title=self.root.name, items=items)

    def start(self, host: str = "127.0.0.1", port: int = 0) -> tuple[str, int]:
        """
        Start serving in a background thread.

        Args:
            host: Host to bind to (default: 127.0.0.1)
            port: Port to bind to (0 = auto-pick)

        Returns:
            Tuple of (host, bound port)
        """
        if self.is_running:
            logger.warning("Server already running")
            return self.host, self.port

        # Binding happens here, so a taken port raises to the caller.
        self._server = make_server(host, port, self.app, threaded=True)
        self.host = host
        self.port = self._server.server_port
        if host not in ("127.0.0.1", "localhost"):
            logger.warning(f"Serving pages over the network at {host}:{self.port}")

        self.server_thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self.server_thread.start()
        self.is_running = True
        logger.info(f"Web server started: {self.get_url()}")
        return self.host, self.port

    def stop(self, timeout: float = 5.0):
        """Shut the server down and wait for its thread to exit."""
        if not self.is_running:
            return
        self._server.shutdown()
        self._server.server_close()
        if self.server_thread is not None:
            self.server_thread.join(timeout)
        self.is_running = False
        self._server = None
        logger.info("Web server stopped")

    def get_url(self) -> Optional[str]:
        """Get the server URL if running."""
        if not self.is_running:
            return None
        return f"http://{self.host}:{self.port}/"
