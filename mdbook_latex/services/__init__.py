"""Service layer for rendering a book.

Provides the services that rewrite chapter markdown, assemble the
LaTeX document and write the output artifacts.
"""

from .image_service import ImageService
from .markdown_service import MarkdownService
from .rewrite_service import rewrite_events
from .book_service import BookService
from .latex_service import LatexService
from .output_service import OutputService, TectonicCompiler
from .render_service import RenderService, RenderResult

__all__ = [
    "ImageService",
    "MarkdownService",
    "rewrite_events",
    "BookService",
    "LatexService",
    "OutputService",
    "TectonicCompiler",
    "RenderService",
    "RenderResult",
]
