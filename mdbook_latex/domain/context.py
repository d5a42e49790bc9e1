"""The render context handed over by the mdBook host.

mdBook starts a renderer with the current directory set to the output
directory and writes a JSON document describing the book to its stdin.
Only the parts this renderer needs are kept.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Iterator

from ..errors import ContextError
from .content import Chapter, iter_book_items

UNKNOWN_TITLE = "<Unknown Title>"


@dataclass(frozen=True)
class RenderContext:
    """Book, configuration and paths for one rendering pass."""

    version: str
    root: Path
    destination: Path
    book_title: str = UNKNOWN_TITLE
    authors: tuple[str, ...] = ()
    src: str = "src"
    chapters: tuple[Chapter, ...] = ()
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def source_dir(self) -> Path:
        """Directory holding the book's markdown sources."""
        return self.root / self.src

    def iter_chapters(self) -> Iterator[Chapter]:
        """Walk all chapters depth-first in document order."""

        def walk(chapters: tuple[Chapter, ...]) -> Iterator[Chapter]:
            for chapter in chapters:
                yield chapter
                yield from walk(chapter.sub_items)

        return walk(self.chapters)

    def get_config(self, dotted_key: str) -> Any:
        """Look up a nested configuration value such as ``output.latex``.

        Returns:
            The value, or None if any part of the key is missing.
        """
        value: Any = self.config
        for part in dotted_key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderContext":
        """Build a context from the decoded JSON document.

        Raises:
            ContextError: If a required field is missing or malformed.
        """
        try:
            config = data.get("config") or {}
            book_config = config.get("book") or {}
            book = data["book"]
            items = book.get("sections", book.get("items", []))
            return cls(
                version=str(data["version"]),
                root=Path(data["root"]),
                destination=Path(data["destination"]),
                book_title=book_config.get("title") or UNKNOWN_TITLE,
                authors=tuple(book_config.get("authors") or ()),
                src=book_config.get("src") or "src",
                chapters=tuple(iter_book_items(items)),
                config=config,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ContextError(
                f"Failed to parse STDIN as `RenderContext` JSON: missing or invalid {e}"
            ) from e

    @classmethod
    def from_json(cls, stream: BinaryIO) -> "RenderContext":
        """Read a context from a byte stream until EOF.

        Raises:
            ContextError: If the stream is not a valid render context.
        """
        try:
            data = json.load(stream)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ContextError(f"Failed to parse STDIN as `RenderContext` JSON: {e}") from e
        if not isinstance(data, dict):
            raise ContextError("Failed to parse STDIN as `RenderContext` JSON: not an object")
        return cls.from_dict(data)
