"""Shared fixtures for mdbook-latex tests."""

from pathlib import Path

import pytest

from mdbook_latex.domain import Chapter, RenderContext


def _write_file(path: Path, content: bytes = b"\x89PNG fake image data") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def write_file():
    """Helper creating a file and its parent directories."""
    return _write_file


@pytest.fixture
def book_root(tmp_path) -> Path:
    """Create a book root with a src directory."""
    root = tmp_path / "book"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def destination(tmp_path) -> Path:
    """Output directory of the renderer."""
    return tmp_path / "book" / "book" / "latex"


@pytest.fixture
def make_context(book_root, destination):
    """Factory for render contexts over the test book."""

    def _make(chapters, title="Test Book", authors=("Ada", "Grace"), latex_config=None):
        config = {"book": {"title": title, "authors": list(authors), "src": "src"}}
        if latex_config is not None:
            config["output"] = {"latex": latex_config}
        return RenderContext(
            version="0.4.40",
            root=book_root,
            destination=destination,
            book_title=title,
            authors=tuple(authors),
            chapters=tuple(chapters),
            config=config,
        )

    return _make


@pytest.fixture
def sample_chapter() -> Chapter:
    """A chapter with one image and some formatting."""
    return Chapter(
        name="Chapter 1",
        content='# Chapter 1\n\nSome *text*.\n\n![A picture](./img/pic.png "Pic")\n',
        path="chapter1/index.md",
        number=(1,),
    )
