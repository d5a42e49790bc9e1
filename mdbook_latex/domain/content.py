"""Domain models for book content.

Provides dataclasses for chapters handed over by the host and for
image references resolved while rewriting chapter markdown.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Chapter:
    """A single chapter of the book as supplied by the host.

    The path is relative to the book's source directory and is None
    only for draft chapters, which the host never renders.
    """

    name: str
    content: str
    path: Optional[str] = None
    number: tuple[int, ...] = ()
    sub_items: tuple["Chapter", ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        """Build a chapter from its JSON representation."""
        return cls(
            name=data["name"],
            content=data.get("content") or "",
            path=data.get("path"),
            number=tuple(data.get("number") or ()),
            sub_items=tuple(iter_book_items(data.get("sub_items") or [])),
        )


@dataclass(frozen=True)
class ResolvedImage:
    """An image reference resolved against the book and output trees."""

    source: Path  # absolute path inside the book sources
    destination: Path  # absolute path of the copy
    reference: str  # new path embedded in the markdown


def iter_book_items(items: list):
    """Yield the chapters among serialized book items.

    Book items are either ``{"Chapter": {...}}``, the string
    ``"Separator"`` or ``{"PartTitle": "..."}``; only chapters are kept.
    """
    for item in items:
        if isinstance(item, dict) and "Chapter" in item:
            yield Chapter.from_dict(item["Chapter"])
