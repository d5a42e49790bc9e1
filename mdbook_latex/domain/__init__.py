"""Domain layer for book representation."""

from .content import Chapter, ResolvedImage
from .config import LatexConfig
from .context import RenderContext

__all__ = [
    "Chapter",
    "ResolvedImage",
    "LatexConfig",
    "RenderContext",
]
