"""Image service implementation.

Resolves image references found in chapter markdown against the book
source tree and copies the referenced files into the ``images/``
directory of the output tree.
"""

import logging
import shutil
from pathlib import Path, PurePosixPath

from ..domain import ResolvedImage
from ..errors import ImageCopyError

logger = logging.getLogger(__name__)

# Relocated images live under this directory of the destination.
IMAGES_DIR = "images"


def _strip_current_dir(reference: str) -> str:
    """Remove leading ``./`` segments from a reference."""
    while reference.startswith("./"):
        reference = reference[2:]
    return reference


class ImageService:
    """Service for resolving and relocating chapter images.

    Both paths are fixed for the whole rendering pass: the book source
    directory images are read from and the destination they are copied
    into.
    """

    def __init__(self, source_dir: Path, destination: Path) -> None:
        """Initialize the image service.

        Args:
            source_dir: The book's source directory (root joined with src).
            destination: The output directory of this renderer.
        """
        self._source_dir = Path(source_dir)
        self._destination = Path(destination)

    def resolve(self, reference: str, chapter_dir: PurePosixPath) -> ResolvedImage:
        """Resolve an image reference written in a chapter.

        Relative references are taken from the chapter's directory. A
        reference starting with ``/`` is taken from the source dir, the
        root of the served book, so its copy stays under ``images/`` too.

        Args:
            reference: The path as written in the markdown.
            chapter_dir: Directory of the chapter, relative to the source dir.

        Returns:
            The source file, its copy target and the new reference.
        """
        if reference.startswith("/"):
            relpath = PurePosixPath(_strip_current_dir(reference.lstrip("/")))
        else:
            relpath = PurePosixPath(chapter_dir) / _strip_current_dir(reference)
        new_reference = PurePosixPath(IMAGES_DIR) / relpath
        return ResolvedImage(
            source=self._source_dir.joinpath(*relpath.parts),
            destination=self._destination.joinpath(*new_reference.parts),
            reference=new_reference.as_posix(),
        )

    def relocate(self, image: ResolvedImage) -> None:
        """Copy an image to its destination, overwriting any existing file.

        Raises:
            ImageCopyError: If the source is missing or the destination
                cannot be written.
        """
        try:
            image.destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(image.source, image.destination)
        except OSError as e:
            raise ImageCopyError(
                f"Failed to copy image {image.source} to {image.destination}: {e}"
            ) from e
        logger.debug("Copied %s to %s", image.source, image.destination)

    def resolve_and_relocate(
        self, reference: str, chapter_dir: PurePosixPath
    ) -> ResolvedImage:
        """Resolve a reference and copy its file in one step."""
        image = self.resolve(reference, chapter_dir)
        self.relocate(image)
        return image
