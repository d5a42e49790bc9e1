"""Render service implementation.

Runs one rendering pass: reads the configuration from the render
context, aggregates the chapters into a markdown body and produces the
markdown, LaTeX and PDF artifacts that were asked for.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import semver

from ..domain import LatexConfig, RenderContext
from ..errors import ContextError
from .book_service import BookService
from .image_service import ImageService
from .latex_service import LatexService
from .markdown_service import MarkdownService
from .output_service import OutputService, TectonicCompiler

logger = logging.getLogger(__name__)

# mdBook release this renderer is built against.
MDBOOK_VERSION = "0.4.40"

CONFIG_KEY = "output.latex"


@dataclass
class RenderResult:
    """Files produced by a rendering pass."""

    markdown_path: Optional[Path] = None
    latex_path: Optional[Path] = None
    pdf_path: Optional[Path] = None
    ignored: list[str] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        """All files that were written."""
        return [
            p for p in (self.markdown_path, self.latex_path, self.pdf_path) if p is not None
        ]


def is_compatible(running: str, compiled: str = MDBOOK_VERSION) -> bool:
    """Check that a host version satisfies the caret range of ``compiled``.

    Raises:
        ContextError: If either version is not valid semver.
    """
    try:
        required = semver.Version.parse(compiled)
        actual = semver.Version.parse(running)
    except ValueError as e:
        raise ContextError(f"Invalid mdbook version: {e}") from e

    if actual < required or actual.major != required.major:
        return False
    if required.major == 0:
        return actual.minor == required.minor
    return True


class RenderService:
    """Service orchestrating a complete rendering pass.

    The LaTeX service, output writer and compiler are injected; the
    book and image services are built per context since they depend on
    its paths.
    """

    def __init__(
        self,
        latex_service: Optional[LatexService] = None,
        output_service: Optional[OutputService] = None,
        compiler: Optional[TectonicCompiler] = None,
        markdown_service: Optional[MarkdownService] = None,
    ) -> None:
        """Initialize the render service.

        Args:
            latex_service: Template and conversion handling.
            output_service: Writer for the text artifacts.
            compiler: PDF compiler.
            markdown_service: Chapter parser and re-serializer.
        """
        self._latex = latex_service or LatexService()
        self._output = output_service or OutputService()
        self._compiler = compiler or TectonicCompiler()
        self._markdown = markdown_service or MarkdownService()

    def check_version(self, context: RenderContext) -> None:
        """Warn when the host's mdbook version is outside the supported range."""
        if not is_compatible(context.version):
            logger.warning(
                "The latex output was built against version %s of mdbook, "
                "but we're being called from version %s",
                MDBOOK_VERSION,
                context.version,
            )

    def load_config(self, context: RenderContext) -> LatexConfig:
        """Read the rendering configuration from the context."""
        return LatexConfig.from_dict(context.get_config(CONFIG_KEY))

    def render(self, context: RenderContext) -> RenderResult:
        """Render the book described by a context.

        Returns:
            The files that were written.
        """
        self.check_version(context)
        config = self.load_config(context)
        result = RenderResult(ignored=sorted(config.ignores))

        images = ImageService(context.source_dir, context.destination)
        book_service = BookService(self._markdown, images)
        content = book_service.aggregate(context, config)
        title = context.book_title

        if config.markdown:
            result.markdown_path = self._output.write_text(
                ".md", title, content, context.destination
            )

        if config.latex or config.pdf:
            template = self._latex.load_template(context, config)
            document = self._latex.assemble(template, content, context, config)

            if config.latex:
                result.latex_path = self._output.write_text(
                    ".tex", title, document, context.destination
                )

            if config.pdf:
                result.pdf_path = self._compiler.compile(
                    document, context.destination, title
                )

        return result
