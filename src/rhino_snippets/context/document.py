"""Editor document and cursor position models."""

from typing import Self

from pydantic import Field, NonNegativeInt

from rhino_snippets.models import SchemaModel


class Position(SchemaModel):
    """Zero-based cursor position in a document."""

    line: NonNegativeInt = Field(
        title='Line',
        description='Zero-based line index.',
    )

    character: NonNegativeInt = Field(
        title='Character',
        description='Zero-based column of the cursor within the line.',
    )


class TextDocument(SchemaModel):
    """Read-only view of an edited Rhino test specification."""

    lines: tuple[str, ...] = Field(
        default=(),
        title='Lines',
        description='Document lines without line terminators.',
    )

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Split text into a document."""
        return cls(lines=tuple(text.splitlines()))

    def line_at(self, position: Position) -> str | None:
        """Return the text of the cursor line, or `None` when out of range."""
        if position.line >= len(self.lines):
            return None

        return self.lines[position.line]
