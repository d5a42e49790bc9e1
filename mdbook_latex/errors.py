"""Exceptions raised while rendering a book.

Every failure in the pipeline is fatal for the run. The CLI catches
MdbookLatexError once, prints the message and exits non-zero.
"""


class MdbookLatexError(Exception):
    """Base class for all rendering errors."""


class ContextError(MdbookLatexError):
    """The render context or its output.latex table could not be read."""


class ChapterPathError(MdbookLatexError):
    """A chapter was handed over without a source path."""


class ImageCopyError(MdbookLatexError):
    """An image could not be copied into the destination tree."""


class TemplateError(MdbookLatexError):
    """The LaTeX template is missing or has no insertion marker."""


class SerializationError(MdbookLatexError):
    """A rewritten event stream could not be turned back into markdown."""


class ConversionError(MdbookLatexError):
    """The markdown body could not be converted to LaTeX."""


class CompilerError(MdbookLatexError):
    """The external LaTeX compiler is missing or failed."""
