"""Snippet composition and completion context engine for Rhino test scripts.

The `rhino_snippets` package turns a catalog of Rhino action descriptors
into editor completions for test specification documents.

Key features:
- compilation of action descriptors into snippet templates with stable,
  globally numbered tab-stops;
- catalog-wide deduplication of composed snippets by name;
- recognition of the action typed on the current line and filtering of
  its command-line flags by cursor context;
- catalog ingestion from YAML or JSON with strict and relaxed modes.

The engine is a pure function of an immutable catalog snapshot, the
current line and the cursor position. Editor integration is left to
the host.
"""

from .catalog import CatalogSnapshot
from .provider import CompletionConfig, CompletionProvider, Position, TextDocument

__all__ = (
    'CatalogSnapshot',
    'CompletionConfig',
    'CompletionProvider',
    'Position',
    'TextDocument',
)
