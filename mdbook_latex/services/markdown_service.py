"""Markdown service implementation.

Turns chapter markdown into a flat stream of markdown-it tokens and
renders such a stream back into markdown with mdformat's renderer.

Chapters are read as CommonMark plus the GitHub extensions mdBook
enables: tables, strikethrough, task lists and footnotes. The mdformat
plugins that register those syntaxes also supply their renderers.

The parser nests inline tokens inside ``inline`` container tokens.
The stream flattens each container into an ``inline_open`` event, the
inline tokens themselves and an ``inline_close`` event, so consumers
see one ordered sequence per chapter.
"""

from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.plugins import PARSER_EXTENSIONS
from mdformat.renderer import MDRenderer

from ..errors import SerializationError

INLINE_OPEN = "inline_open"
INLINE_CLOSE = "inline_close"

# Renderer options understood by mdformat; "keep" leaves line breaks as parsed.
MDFORMAT_OPTIONS = {
    "wrap": "keep",
    "number": False,
    "end_of_line": "lf",
}

# mdformat parser extensions, looked up by their entry point names.
EXTENSIONS = ("gfm", "footnote")


def _keep_link(url: str) -> str:
    return url


class MarkdownService:
    """Service for parsing markdown to events and back.

    Uses the CommonMark preset of markdown-it-py, extended by mdformat
    plugins, for parsing and mdformat's MDRenderer for re-serialization,
    so anything the parser emits has a matching renderer.
    """

    def __init__(self) -> None:
        """Initialize the parser and renderer."""
        extensions = [PARSER_EXTENSIONS[name] for name in EXTENSIONS]
        self._md = MarkdownIt("commonmark")
        # Link and image targets stay as written; file paths are not URL-encoded.
        self._md.normalizeLink = _keep_link
        self._md.options["mdformat"] = dict(MDFORMAT_OPTIONS)
        self._md.options["parser_extension"] = extensions
        self._md.options["codeformatters"] = {}
        for extension in extensions:
            extension.update_mdit(self._md)
        self._renderer = MDRenderer()

    def parse_events(self, content: str) -> Iterator[Token]:
        """Parse markdown into a lazy, flat event stream.

        Args:
            content: The markdown text of one chapter.

        Yields:
            Block tokens, with each inline container expanded in place.
        """
        for token in self._md.parse(content):
            if token.type == "inline":
                yield token.copy(type=INLINE_OPEN, nesting=1, children=None)
                yield from token.children or ()
                yield Token(INLINE_CLOSE, "", -1)
            else:
                yield token

    def serialize(self, events: Iterable[Token]) -> str:
        """Render an event stream back into markdown text.

        Args:
            events: A stream as produced by parse_events, possibly rewritten.

        Returns:
            The markdown text.

        Raises:
            SerializationError: If the stream is unbalanced.
        """
        tokens = build_tokens(events)
        try:
            return self._renderer.render(tokens, self._md.options, {})
        except (ValueError, KeyError) as e:
            raise SerializationError(f"failed to convert back to markdown: {e}") from e


def build_tokens(events: Iterable[Token]) -> list[Token]:
    """Regroup a flat event stream into markdown-it's nested token list.

    Raises:
        SerializationError: If inline markers or block nesting don't balance.
    """
    tokens: list[Token] = []
    inline: Token | None = None
    depth = 0

    for event in events:
        if event.type == INLINE_OPEN:
            if inline is not None:
                raise SerializationError("nested inline_open event")
            inline = event.copy(type="inline", nesting=0, children=[])
        elif event.type == INLINE_CLOSE:
            if inline is None:
                raise SerializationError("inline_close event without inline_open")
            tokens.append(inline)
            inline = None
        elif inline is not None:
            inline.children.append(event)
        else:
            depth += event.nesting
            if depth < 0:
                raise SerializationError(f"unexpected closing token {event.type!r}")
            tokens.append(event)

    if inline is not None:
        raise SerializationError("inline_open event was never closed")
    if depth != 0:
        raise SerializationError("block tokens were left open")
    return tokens
