"""Book service implementation.

Collects the chapters of a book into one markdown body, rewriting the
image references of each chapter on the way.
"""

import logging
from pathlib import PurePosixPath

from ..domain import Chapter, LatexConfig, RenderContext
from ..errors import ChapterPathError
from .image_service import ImageService
from .markdown_service import MarkdownService
from .rewrite_service import rewrite_events

logger = logging.getLogger(__name__)


class BookService:
    """Service for aggregating chapters into a single document.

    Implements the parse, rewrite and serialize pass for every chapter
    using constructor injection for the markdown and image services.
    """

    def __init__(self, markdown_service: MarkdownService, image_service: ImageService) -> None:
        """Initialize the book service with required dependencies.

        Args:
            markdown_service: Parser and re-serializer for chapter markdown.
            image_service: Resolver and copier for chapter images.
        """
        self._markdown = markdown_service
        self._images = image_service

    def render_chapter(self, chapter: Chapter) -> str:
        """Rewrite one chapter and return its markdown.

        Raises:
            ChapterPathError: If the chapter has no source path.
        """
        if chapter.path is None:
            raise ChapterPathError(f"Chapter {chapter.name!r} has no source path")

        chapter_dir = PurePosixPath(chapter.path).parent
        events = self._markdown.parse_events(chapter.content)
        events = rewrite_events(events, chapter_dir, self._images)
        return self._markdown.serialize(events)

    def aggregate(self, context: RenderContext, config: LatexConfig) -> str:
        """Concatenate all rendered chapters in document order.

        Chapters named in ``config.ignores`` are skipped entirely, so
        their images are never copied.

        Args:
            context: The render context holding the chapters.
            config: The rendering configuration.

        Returns:
            The markdown body of the whole book.
        """
        parts: list[str] = []
        for chapter in context.iter_chapters():
            if chapter.name in config.ignores:
                logger.debug("Skipping ignored chapter %r", chapter.name)
                continue
            parts.append(self.render_chapter(chapter))
        logger.debug("Aggregated %d chapter(s)", len(parts))
        return "".join(parts)
