"""Completion requests of the host editor.

This module exposes the two completion entry points:

- `compose_action_completions`: full action snippets, offered inside the
  actions section and outside of a parameters list;
- `compose_parameter_completions`: command-line flags of the action
  written on the cursor line.

Every request receives an immutable `CompletionConfig` bundling the
catalog snapshot it must read from. Requests share no mutable state, so
a host may serve them concurrently as long as it publishes new snapshots
instead of mutating old ones.
"""

from re import Pattern
from typing import TYPE_CHECKING, Self

from pydantic import Field

from rhino_snippets.catalog import CatalogSnapshot
from rhino_snippets.context import (
    ActionResolver,
    AnnotationClassifier,
    ParameterFlagFilter,
    Position,
    TextDocument,
    build_action_pattern,
)
from rhino_snippets.models import SchemaModel
from rhino_snippets.settings import DEFAULT_SECTION
from rhino_snippets.snippets import CatalogSnippetSet

if TYPE_CHECKING:
    from rhino_snippets.context import ContextClassifier, FlagCompletion
    from rhino_snippets.settings import EngineSettings
    from rhino_snippets.snippets import ComposedSnippet

__all__ = (
    'CompletionConfig',
    'CompletionProvider',
    'Position',
    'TextDocument',
)


class CompletionConfig(SchemaModel):
    """Immutable configuration of a completion request."""

    catalog: CatalogSnapshot = Field(
        default_factory=CatalogSnapshot,
        title='Catalog snapshot',
        description='Catalogs the request reads from.',
    )

    pattern: Pattern[str] | None = Field(
        default=None,
        title='Action recognition pattern',
        description=(
            'Regular expression locating the action phrase on a line. '
            'Derived from the catalog action phrases when not set.'
        ),
    )

    section: str = Field(
        default=DEFAULT_SECTION,
        title='Actions section',
        description='Annotation name of the section offering action completions.',
    )

    @classmethod
    def from_settings(cls, catalog: CatalogSnapshot, settings: 'EngineSettings') -> Self:
        """Create a request configuration from engine settings.

        Args:
            catalog: Catalog snapshot.
            settings: Resolved engine settings.

        Returns:
            Request configuration.

        Raises:
            pydantic.ValidationError: If the configured pattern is not
                a valid regular expression.
        """
        return cls.model_validate({
            'catalog': catalog,
            'pattern': settings.action_pattern,
            'section': settings.section,
        })

    @property
    def action_pattern(self) -> Pattern[str]:
        """Configured recognition pattern, or one derived from the catalog."""
        if self.pattern is not None:
            return self.pattern

        return build_action_pattern(self.catalog)


class CompletionProvider:
    """Entry point of completion requests.

    The provider only holds stateless collaborators; all request data
    comes through the arguments of each call.
    """

    def __init__(self, classifier: 'ContextClassifier | None' = None,
                 flag_filter: ParameterFlagFilter | None = None) -> None:
        """Initialize the provider.

        Args:
            classifier: Host predicates about the cursor context.
                Defaults to `AnnotationClassifier`.
            flag_filter: Flag predicate engine.
                Defaults to `ParameterFlagFilter` with default predicates.
        """
        self.classifier = classifier or AnnotationClassifier()
        self.flag_filter = flag_filter or ParameterFlagFilter()

    def compose_action_completions(self, config: CompletionConfig, document: TextDocument,
                                   position: Position) -> tuple['ComposedSnippet', ...]:
        """Compose full action snippets for a cursor position.

        Args:
            config: Request configuration.
            document: Edited document.
            position: Cursor position.

        Returns:
            The catalog snippet set, or an empty tuple when the cursor is
            inside a parameters list or outside the actions section.
        """
        if (line := document.line_at(position)) is None:
            return ()

        if self.classifier.is_inside_cli_region(line, position.character):
            return ()

        if not self.classifier.is_inside_recognized_section(
            document,
            position,
            config.section,
            config.catalog.annotation_keys,
        ):
            return ()

        return CatalogSnippetSet(config.catalog).compose()

    def compose_parameter_completions(self, config: CompletionConfig, document: TextDocument,
                                      position: Position) -> tuple['FlagCompletion', ...]:
        """Compose flag completions for a cursor position.

        Args:
            config: Request configuration.
            document: Edited document.
            position: Cursor position.

        Returns:
            Flags of the action on the cursor line that are legal at the
            cursor, or an empty tuple when the action cannot be resolved.
        """
        if (line := document.line_at(position)) is None:
            return ()

        resolver = ActionResolver(config.catalog, config.action_pattern)
        if (action := resolver.resolve(line)) is None:
            return ()

        return self.flag_filter.filter(action, line, position.character)
