"""Catalog-wide snippet set.

Compiles every action of a snapshot and deduplicates the result by
snippet name across the whole catalog. When two different actions
produce the same name, the later action's snippet replaces the earlier
one in the earlier one's position.
"""

from typing import TYPE_CHECKING

from rhino_snippets.ordering import deduplicate

from .compiler import ManifestSnippetCompiler

if TYPE_CHECKING:
    from rhino_snippets.catalog import CatalogSnapshot

    from .schema import ComposedSnippet


class CatalogSnippetSet:
    """Full list of action snippets of one catalog snapshot.

    Nothing is cached: the list is recomposed on every call, which keeps
    it a pure function of the snapshot.
    """

    def __init__(self, catalog: 'CatalogSnapshot') -> None:
        """Initialize the snippet set.

        Args:
            catalog: Catalog snapshot to compose snippets for.
        """
        self.catalog = catalog
        self.compiler = ManifestSnippetCompiler.from_catalog(catalog)

    def compose(self) -> tuple['ComposedSnippet', ...]:
        """Compose the deduplicated snippets of all catalog actions.

        Returns:
            Snippets in catalog order, one per name.
        """
        return tuple(deduplicate(
            snippet
            for action in self.catalog.actions
            for snippet in self.compiler.compile(action)
        ))
