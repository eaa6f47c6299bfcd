"""Resolution of the action written on the current line."""

from re import IGNORECASE, Pattern, escape
from re import compile as regexp
from typing import TYPE_CHECKING

from rhino_snippets.names import to_key

if TYPE_CHECKING:
    from rhino_snippets.catalog import ActionDescriptor, CatalogSnapshot

#: Pattern that never matches, used for empty catalogs.
NOTHING_PATTERN = regexp(r'(?!)')


def build_action_pattern(catalog: 'CatalogSnapshot') -> Pattern[str]:
    """Build an action recognition pattern from a catalog.

    Every action phrase is matched case-insensitively as whole words with
    any whitespace between them. Longer phrases are tried first, so
    `click on element` wins over `click` at the same position.

    Args:
        catalog: Catalog snapshot.

    Returns:
        Compiled recognition pattern.
    """
    phrases = sorted(
        {action.phrase for action in catalog.actions},
        key=lambda phrase: (-len(phrase), phrase),
    )
    if not phrases:
        return NOTHING_PATTERN

    alternatives = (
        r'\s+'.join(escape(word) for word in phrase.split())
        for phrase in phrases
    )

    return regexp(rf'\b(?:{'|'.join(alternatives)})\b', flags=IGNORECASE)


class ActionResolver:
    """Resolver of the action a flag is being completed for.

    The first match of the recognition pattern on a line is turned into a
    canonical key (`click on` becomes `ClickOn`) and looked up by exact
    key. A line without a match, or a key absent from the catalog,
    resolves to `None`.
    """

    def __init__(self, catalog: 'CatalogSnapshot', pattern: Pattern[str]) -> None:
        """Initialize the resolver.

        Args:
            catalog: Catalog snapshot to look actions up in.
            pattern: Action recognition pattern.
        """
        self.catalog = catalog
        self.pattern = pattern

    def resolve_key(self, line: str) -> str | None:
        """Rebuild the canonical key of the action written on a line."""
        if not (match := self.pattern.search(line)):
            return None

        return to_key(match.group(0)) or None

    def resolve(self, line: str) -> 'ActionDescriptor | None':
        """Find the descriptor of the action written on a line.

        Args:
            line: Text of the cursor line.

        Returns:
            The matching descriptor, or `None`.
        """
        if (key := self.resolve_key(line)) is None:
            return None

        return self.catalog.find(key)
