import logging

from anchortoc.adapters.files import Page, PageFormat
from anchortoc.site import FolderHost, TableOfContentsPass
from anchortoc.toc import TocOptions


class DictHost:
    """Host over plain dicts, standing in for another site generator's pages."""

    FORMATS = {"md": PageFormat.MARKDOWN, "zim": PageFormat.ZIM}

    def get_format(self, page):
        return self.FORMATS.get(page["kind"], PageFormat.UNSUPPORTED)

    def get_raw_content(self, page):
        return page["body"]

    def wants_toc(self, page):
        return page.get("toc")

    def store(self, page, toc, content):
        page["table_of_contents"] = toc
        page["body"] = content


def test_opted_in_markdown_page_is_processed():
    page = Page(path="/Home/Home.md", raw_content="# Home\ntext\n", toc=True)
    count = TableOfContentsPass().execute([page], FolderHost())
    assert count == 1
    assert page.table_of_contents == "<ul><li><a href='#home'>Home</a></li></ul>"
    assert page.content == '<h1 id="home">Home</h1>\n\ntext\n'


def test_pages_without_opt_in_are_left_alone():
    off = Page(path="/a.md", raw_content="# A\n", toc=False)
    unset = Page(path="/b.md", raw_content="# B\n")
    count = TableOfContentsPass().execute([off, unset], FolderHost())
    assert count == 0
    assert off.content is None and off.table_of_contents == ""
    assert unset.content is None


def test_toc_default_opts_in_unflagged_pages_only():
    off = Page(path="/a.md", raw_content="# A\n", toc=False)
    unset = Page(path="/b.md", raw_content="# B\n")
    count = TableOfContentsPass().execute([off, unset], FolderHost(toc_default=True))
    assert count == 1
    assert off.content is None
    assert unset.content == '<h1 id="b">B</h1>\n\n'


def test_zim_pages_use_zim_headings():
    page = Page(path="/Notes/Notes.txt", raw_content="====== Notes ======\nbody\n", toc=True)
    TableOfContentsPass().execute([page], FolderHost())
    assert page.content == '<h1 id="notes">Notes</h1>\n\nbody\n'
    assert "href='#notes'" in page.table_of_contents


def test_unsupported_pages_are_logged_and_skipped(caplog):
    caplog.set_level(logging.WARNING, logger="anchortoc.site")
    page = Page(path="/readme.rst", raw_content="Title\n=====\n", toc=True)
    count = TableOfContentsPass().execute([page], FolderHost())
    assert count == 0
    assert page.content is None
    assert "/readme.rst" in caplog.text


def test_options_are_passed_through():
    page = Page(path="/a.md", raw_content="# A\n", toc=True)
    TableOfContentsPass(TocOptions(include_id=False)).execute([page], FolderHost())
    assert page.content == "<h1>A</h1>\n\n"


def test_custom_host():
    pages = [
        {"kind": "md", "body": "## Intro\n", "toc": True},
        {"kind": "zim", "body": "===== Intro =====\n", "toc": True},
        {"kind": "textile", "body": "h1. Intro\n", "toc": True},
        {"kind": "md", "body": "# Skipped\n", "toc": False},
    ]
    count = TableOfContentsPass().execute(pages, DictHost())
    assert count == 2
    assert pages[0]["body"] == '<h2 id="intro">Intro</h2>\n\n'
    assert pages[1]["body"] == '<h2 id="intro">Intro</h2>\n\n'
    assert "table_of_contents" not in pages[2]
    assert pages[3]["body"] == "# Skipped\n"
