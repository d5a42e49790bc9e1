"""LaTeX service implementation.

Loads the document template, fills in the title page macros, converts
the markdown body to LaTeX with pandoc and splices the result into the
template after the insertion marker.
"""

from importlib import resources
from typing import Callable, Optional

import pypandoc

from ..domain import LatexConfig, RenderContext
from ..errors import ConversionError, TemplateError

# Content is inserted right after the first occurrence of this marker.
BEGIN_MARKER = "mdbook-latex begin"

TITLE_PLACEHOLDER = r"\title{}"
AUTHOR_PLACEHOLDER = r"\author{}"
DATE_PLACEHOLDER = r"\date{}"

AUTHOR_SEPARATOR = r" \and "

# GitHub-flavoured input keeps tables, strikethrough, task lists and footnotes.
PANDOC_FORMAT = "gfm"
PANDOC_ARGS = ["--top-level-division=chapter", "--no-highlight"]


def markdown_to_latex(markdown: str) -> str:
    """Convert a GitHub-flavoured markdown document to a LaTeX fragment with pandoc."""
    return pypandoc.convert_text(
        markdown, "latex", format=PANDOC_FORMAT, extra_args=PANDOC_ARGS
    )


def default_template() -> str:
    """Return the template bundled with the package."""
    return (
        resources.files("mdbook_latex")
        .joinpath("templates")
        .joinpath("template.tex")
        .read_text(encoding="utf-8")
    )


class LatexService:
    """Service assembling the final LaTeX document.

    The markdown to LaTeX converter is injected so the assembly steps
    can be tested without pandoc installed.
    """

    def __init__(self, converter: Optional[Callable[[str], str]] = None) -> None:
        """Initialize the LaTeX service.

        Args:
            converter: Pure function from markdown to a LaTeX fragment.
                Defaults to pandoc.
        """
        self._converter = converter or markdown_to_latex

    def load_template(self, context: RenderContext, config: LatexConfig) -> str:
        """Load the custom template if configured, else the bundled one.

        Raises:
            TemplateError: If the custom template cannot be read.
        """
        if config.custom_template is None:
            return default_template()

        template_path = context.root / config.custom_template
        try:
            return template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"Cannot read template {template_path}: {e}") from e

    def fill_placeholders(
        self, template: str, title: str, authors: tuple[str, ...] | list[str], date: str
    ) -> str:
        """Substitute the title, author and date macros once each."""
        template = template.replace(TITLE_PLACEHOLDER, f"\\title{{{title}}}", 1)
        template = template.replace(
            AUTHOR_PLACEHOLDER, f"\\author{{{AUTHOR_SEPARATOR.join(authors)}}}", 1
        )
        return template.replace(DATE_PLACEHOLDER, f"\\date{{{date}}}", 1)

    def to_latex(self, markdown: str) -> str:
        """Convert the markdown body into a LaTeX fragment.

        Raises:
            ConversionError: If the converter fails.
        """
        try:
            return self._converter(markdown)
        except (RuntimeError, OSError) as e:
            raise ConversionError(f"Failed to convert markdown to LaTeX: {e}") from e

    def insert_content(self, template: str, latex: str) -> str:
        """Insert a LaTeX fragment right after the first begin marker.

        The fragment starts on a new line, since the marker sits in a
        comment.

        Raises:
            TemplateError: If the template has no begin marker.
        """
        pos = template.find(BEGIN_MARKER)
        if pos == -1:
            raise TemplateError(f"Template has no {BEGIN_MARKER!r} marker")
        pos += len(BEGIN_MARKER)
        return f"{template[:pos]}\n{latex}{template[pos:]}"

    def assemble(
        self, template: str, markdown: str, context: RenderContext, config: LatexConfig
    ) -> str:
        """Build the complete LaTeX document from a template and body."""
        document = self.fill_placeholders(
            template, context.book_title, context.authors, config.date
        )
        return self.insert_content(document, self.to_latex(markdown))
