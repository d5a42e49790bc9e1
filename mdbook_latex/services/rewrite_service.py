"""Event rewriting for chapter markdown.

Rewrites image events so that their paths point into the output tree
and copies the image files there as a side effect. Every other event is
passed through untouched.
"""

from pathlib import PurePosixPath
from typing import Iterable, Iterator

from markdown_it.token import Token

from .image_service import ImageService


def rewrite_image(
    token: Token, chapter_dir: PurePosixPath, images: ImageService
) -> Token:
    """Return a copy of an image token with a relocated path.

    The image file is copied before the new token is returned. The title
    and alt text are kept as they were.
    """
    image = images.resolve_and_relocate(token.attrGet("src") or "", chapter_dir)
    return token.copy(attrs={**token.attrs, "src": image.reference})


def rewrite_events(
    events: Iterable[Token], chapter_dir: PurePosixPath, images: ImageService
) -> Iterator[Token]:
    """Rewrite the image events of a chapter's event stream.

    Args:
        events: The chapter's events, consumed once.
        chapter_dir: Directory of the chapter, relative to the book source.
        images: Service resolving and copying image files.

    Yields:
        One event per input event, in the same order.
    """
    for event in events:
        if event.type == "image":
            yield rewrite_image(event, chapter_dir, images)
        else:
            yield event
