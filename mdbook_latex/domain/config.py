"""Rendering configuration read from the ``output.latex`` table."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..errors import ContextError

TODAY = r"\today"


@dataclass(frozen=True)
class LatexConfig:
    """Options controlling which artifacts are produced.

    Attributes:
        ignores: Names of chapters left out of the output.
        latex: Write the LaTeX source file.
        pdf: Compile a PDF with tectonic.
        markdown: Write the consolidated markdown file.
        custom_template: Template path relative to the book root, used
            instead of the bundled template.
        date: Value for the ``\\date{}`` macro.
    """

    ignores: frozenset[str] = field(default_factory=frozenset)
    latex: bool = True
    pdf: bool = True
    markdown: bool = True
    custom_template: Optional[str] = None
    date: str = TODAY

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "LatexConfig":
        """Build a config from the host's ``output.latex`` table.

        Keys are kebab-case. Missing keys take their defaults and
        unknown keys are ignored.

        Raises:
            ContextError: If a value has the wrong type.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ContextError('Error reading "output.latex" configuration: not a table')

        ignores = data.get("ignores", [])
        if not isinstance(ignores, list) or not all(isinstance(i, str) for i in ignores):
            raise ContextError(
                'Error reading "output.latex" configuration: '
                "ignores must be a list of strings"
            )

        flags = {}
        for key in ("latex", "pdf", "markdown"):
            value = data.get(key, True)
            if not isinstance(value, bool):
                raise ContextError(
                    f'Error reading "output.latex" configuration: {key} must be a boolean'
                )
            flags[key] = value

        custom_template = data.get("custom-template")
        if custom_template is not None and not isinstance(custom_template, str):
            raise ContextError(
                'Error reading "output.latex" configuration: '
                "custom-template must be a string"
            )

        date = data.get("date", TODAY)
        if not isinstance(date, str):
            raise ContextError(
                'Error reading "output.latex" configuration: date must be a string'
            )

        return cls(
            ignores=frozenset(ignores),
            custom_template=custom_template,
            date=date,
            **flags,
        )
