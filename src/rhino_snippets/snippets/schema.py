"""Composed snippet model."""

from pydantic import Field

from rhino_snippets.models import SchemaModel


class ComposedSnippet(SchemaModel):
    """Named insertion template produced for one action variant.

    The `name` is the deduplication key of the snippet.
    """

    name: str = Field(
        title='Snippet name',
        description='Base phrase followed by the folded capability suffixes.',
    )

    template: str = Field(
        title='Snippet template',
        description='Insertion body in the host editor snippet syntax.',
    )

    documentation: str = Field(
        default='',
        title='Documentation',
        description='Description of the action the snippet inserts.',
    )

    detail: str = Field(
        default='',
        title='Detail',
        description='Source of the action the snippet inserts.',
    )

    def to_vscode(self) -> dict[str, str]:
        """Convert to a VS Code `.code-snippets` entry."""
        return {
            'prefix': self.name,
            'body': self.template,
            'description': self.documentation,
        }
