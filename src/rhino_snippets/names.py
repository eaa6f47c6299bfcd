"""Rhino names primitive types and conversion rules.

This module defines the patterns used to convert between action keys
(`ClickOnElement`) and the phrases they are written as in a script
(`click on element`), together with the local text patterns the
completion context relies on.

The rules defined here form part of the completion contract and are
relied upon by the snippet compiler, the action resolver and the flag
filter alike.
"""

from re import ASCII
from re import compile as regexp
from re import escape
from typing import Annotated

from pydantic import Field

#: Every upper-case letter starts a new word of a phrase.
_WORD_START_PATTERN = regexp(r'([A-Z])')

#: Opened flag list: the parameters sigil, whitespace, then a flag dash pair.
FLAG_LIST_PATTERN = regexp(r'\{\{\$\s+.*?--')

#: Token typed right before a flag name.
FLAG_INTRODUCER = ' --'

#: Characters that turn an action phrase into a quoted literal.
QUOTES = '\'"'

#: Opening and closing markers of a parameters list.
FLAG_LIST_OPEN = '{{$'
FLAG_LIST_CLOSE = '}}'

#: A line starting a section annotation, e.g. `[test-id] RH-1`.
ANNOTATION_PATTERN = regexp(r'^\s*\[(?P<name>[\w-]+)\]', flags=ASCII)


ActionKey = Annotated[
    str, Field(
        pattern=r'^[a-zA-Z][a-zA-Z0-9]*$',
        title='Action key',
        description=(
            'Unique identifier of an action in PascalCase-joined-words form. '
            'Each upper-case letter starts a new word of the action phrase.'
        ),
        examples=[
            'Click',
            'ClickOnElement',
        ],
    ),
]


def to_phrase(name: str) -> str:
    """Convert a PascalCase name into a lower-case phrase.

    Args:
        name: Action key or alias, e.g. `ClickOnElement`.

    Returns:
        Space-separated lower-case words, e.g. `click on element`.
    """
    return _WORD_START_PATTERN.sub(r' \1', name).strip().lower()


def to_key(phrase: str) -> str:
    """Rebuild a canonical action key from a typed phrase.

    Args:
        phrase: Action phrase as typed, e.g. `Click  ON`.

    Returns:
        Capitalized words joined with no separator, e.g. `ClickOn`.
    """
    return ''.join(
        word[0].upper() + word[1:]
        for word in phrase.lower().split()
    )


def quoted_exclusion(literal: str) -> str:
    """Build a pattern matching an unquoted occurrence of a literal.

    Args:
        literal: Action phrase to look for.

    Returns:
        Regular expression source rejecting occurrences that immediately
        follow a quote character.
    """
    return f'(?<![{escape(QUOTES)}]){escape(literal)}'
