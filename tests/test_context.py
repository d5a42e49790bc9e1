"""Tests for the render context and the output.latex configuration."""

import io
import json

import pytest

from mdbook_latex.domain import LatexConfig, RenderContext
from mdbook_latex.domain.context import UNKNOWN_TITLE
from mdbook_latex.errors import ContextError


def _context_json(**overrides) -> dict:
    data = {
        "version": "0.4.40",
        "root": "/books/demo",
        "destination": "/books/demo/book/latex",
        "book": {
            "sections": [
                {
                    "Chapter": {
                        "name": "Intro",
                        "content": "# Intro\n",
                        "number": None,
                        "sub_items": [],
                        "path": "intro.md",
                        "source_path": "intro.md",
                        "parent_names": [],
                    }
                },
                "Separator",
                {"PartTitle": "Part One"},
                {
                    "Chapter": {
                        "name": "Chapter 1",
                        "content": "# Chapter 1\n",
                        "number": [1],
                        "sub_items": [
                            {
                                "Chapter": {
                                    "name": "Section 1.1",
                                    "content": "## Section\n",
                                    "number": [1, 1],
                                    "sub_items": [],
                                    "path": "chapter1/section.md",
                                }
                            }
                        ],
                        "path": "chapter1/index.md",
                    }
                },
            ],
            "__non_exhaustive": None,
        },
        "config": {
            "book": {"title": "Demo", "authors": ["Ada", "Grace"], "src": "src"},
            "output": {"latex": {"pdf": False}},
        },
    }
    data.update(overrides)
    return data


def _stream(data) -> io.BytesIO:
    return io.BytesIO(json.dumps(data).encode("utf-8"))


class TestRenderContext:
    """Tests for reading the host's render context."""

    def test_from_json(self):
        """Test the fields read from a full document."""
        context = RenderContext.from_json(_stream(_context_json()))

        assert context.version == "0.4.40"
        assert context.book_title == "Demo"
        assert context.authors == ("Ada", "Grace")
        assert str(context.source_dir) == "/books/demo/src"
        assert str(context.destination) == "/books/demo/book/latex"

    def test_iter_chapters_depth_first(self):
        """Test that separators and part titles are skipped and nesting is walked."""
        context = RenderContext.from_json(_stream(_context_json()))

        names = [chapter.name for chapter in context.iter_chapters()]

        assert names == ["Intro", "Chapter 1", "Section 1.1"]

    def test_chapter_fields(self):
        """Test the chapter fields kept from the JSON."""
        context = RenderContext.from_json(_stream(_context_json()))
        chapter = context.chapters[1]

        assert chapter.path == "chapter1/index.md"
        assert chapter.number == (1,)
        assert chapter.sub_items[0].number == (1, 1)

    def test_get_config(self):
        """Test nested configuration lookup."""
        context = RenderContext.from_json(_stream(_context_json()))

        assert context.get_config("output.latex") == {"pdf": False}
        assert context.get_config("output.html") is None

    def test_defaults_for_missing_book_config(self):
        """Test the fallback title, authors and source dir."""
        context = RenderContext.from_json(_stream(_context_json(config={})))

        assert context.book_title == UNKNOWN_TITLE
        assert context.authors == ()
        assert context.src == "src"

    def test_invalid_json_raises(self):
        """Test that a malformed document is fatal."""
        with pytest.raises(ContextError, match="RenderContext"):
            RenderContext.from_json(io.BytesIO(b"{not json"))

    def test_missing_field_raises(self):
        """Test that a document without destination is fatal."""
        data = _context_json()
        del data["destination"]

        with pytest.raises(ContextError, match="destination"):
            RenderContext.from_json(_stream(data))

    def test_non_object_raises(self):
        """Test that a JSON array is rejected."""
        with pytest.raises(ContextError):
            RenderContext.from_json(_stream([1, 2]))


class TestLatexConfig:
    """Tests for the rendering configuration."""

    def test_defaults(self):
        """Test the defaults when no table is configured."""
        config = LatexConfig.from_dict(None)

        assert config.ignores == frozenset()
        assert config.latex is True
        assert config.pdf is True
        assert config.markdown is True
        assert config.custom_template is None
        assert config.date == r"\today"

    def test_kebab_case_keys(self):
        """Test reading every key."""
        config = LatexConfig.from_dict(
            {
                "ignores": ["Appendix"],
                "latex": False,
                "pdf": False,
                "markdown": True,
                "custom-template": "tpl.tex",
                "date": "2024",
                "command": "mdbook-latex",
            }
        )

        assert config.ignores == frozenset({"Appendix"})
        assert config.latex is False
        assert config.pdf is False
        assert config.custom_template == "tpl.tex"
        assert config.date == "2024"

    @pytest.mark.parametrize(
        "table",
        [
            {"ignores": "Appendix"},
            {"ignores": [1]},
            {"pdf": "yes"},
            {"custom-template": 3},
            {"date": 2024},
        ],
    )
    def test_invalid_values_raise(self, table):
        """Test that values of the wrong type are rejected."""
        with pytest.raises(ContextError, match="output.latex"):
            LatexConfig.from_dict(table)

    def test_config_is_immutable(self):
        """Test that the configuration cannot be changed."""
        config = LatexConfig()

        with pytest.raises(AttributeError):
            config.pdf = False
