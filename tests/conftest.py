import pytest


@pytest.fixture
def site(tmp_path):
    """A small page folder: a Markdown page and a Zim page that opt in, one page that does not."""
    root = tmp_path / "site"
    (root / "Notes").mkdir(parents=True)
    (root / "Home.md").write_text(
        "---\ntoc: true\n---\n# Home\nWelcome.\n\n## Getting Started\nSteps.\n",
        encoding="utf-8",
    )
    (root / "Notes" / "Ideas.txt").write_text(
        "Content-Type: text/x-zim-wiki\nWiki-Format: zim 0.4\nToc: true\n\n"
        "====== Ideas ======\n//draft// list\n\n==== Later ====\nmore\n\n"
        "See [[:Home|home]], [[Plans]] and [[:Home#Getting Started|steps]].\n",
        encoding="utf-8",
    )
    (root / "Plain.md").write_text("# Plain\nNo contents here.\n", encoding="utf-8")
    return root
