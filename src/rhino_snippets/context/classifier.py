"""Cursor context classification.

The completion provider does not decide by itself where the cursor is:
it asks a `ContextClassifier` supplied by the host. `AnnotationClassifier`
is a reference implementation relying on Rhino section annotations
(`[test-actions]`) and parameters-list markers (`{{$ ... }}`).
"""

from typing import TYPE_CHECKING, Protocol

from rhino_snippets.names import ANNOTATION_PATTERN, FLAG_LIST_CLOSE, FLAG_LIST_OPEN

if TYPE_CHECKING:
    from collections.abc import Collection

    from .document import Position, TextDocument


class ContextClassifier(Protocol):
    """Host-provided predicates about the cursor context."""

    def is_inside_cli_region(self, line: str, column: int) -> bool:
        """Tell whether the cursor is inside a command-line flags region."""
        ...  # pragma: no cover

    def is_inside_recognized_section(self, document: 'TextDocument', position: 'Position',
                                     section: str, annotations: 'Collection[str]') -> bool:
        """Tell whether the cursor is inside the named document section."""
        ...  # pragma: no cover


class AnnotationClassifier:
    """Classifier based on local markers of a Rhino test specification."""

    def is_inside_cli_region(self, line: str, column: int) -> bool:
        """Tell whether a parameters list is open before the cursor.

        Args:
            line: Text of the cursor line.
            column: Cursor column.

        Returns:
            True if the last `{{$` before the cursor is not closed yet.
        """
        prefix = line[:column]
        start = prefix.rfind(FLAG_LIST_OPEN)
        if start < 0:
            return False

        return FLAG_LIST_CLOSE not in prefix[start + len(FLAG_LIST_OPEN):]

    def is_inside_recognized_section(self, document: 'TextDocument', position: 'Position',
                                     section: str, annotations: 'Collection[str]') -> bool:
        """Tell whether the nearest annotation above the cursor is `section`.

        Lines annotated with a name unknown to the catalog are not section
        boundaries. With no known annotations, every annotation counts.

        Args:
            document: Edited document.
            position: Cursor position.
            section: Expected section name, e.g. `test-actions`.
            annotations: Annotation names known to the catalog.

        Returns:
            True if the cursor is below a `[section]` annotation and no
            other known annotation sits between them.
        """
        last = min(position.line, len(document.lines))

        for line in reversed(document.lines[:last]):
            if not (match := ANNOTATION_PATTERN.match(line)):
                continue
            name = match.group('name')
            if annotations and name not in annotations:
                continue
            return name == section

        return False
