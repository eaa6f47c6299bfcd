"""Snippet composition from action descriptors.

Provides the placeholder fragments, the per-action compiler and the
catalog-wide snippet set offered when a new action is being typed.
"""

from .collection import CatalogSnippetSet
from .compiler import ManifestSnippetCompiler, Variant
from .schema import ComposedSnippet

__all__ = (
    'CatalogSnippetSet',
    'ComposedSnippet',
    'ManifestSnippetCompiler',
    'Variant',
)
