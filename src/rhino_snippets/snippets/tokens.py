"""Placeholder fragments of composed snippets.

Each function renders one fragment of a snippet template in the host
editor snippet syntax: `${N:default}` for a default-value placeholder
and `${N|a,b|}` for a choice placeholder. Rhino wraps every value in
literal braces, so a fragment looks like `{${5:locator value}}`.

Tab-stop indices are global constants: the same capability always uses
the same tab-stop, whichever other capabilities an action has.
"""

from re import compile as regexp
from typing import TYPE_CHECKING

from rhino_snippets.names import to_phrase

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rhino_snippets.catalog import ActionDescriptor

#: Action choice and argument values share the first tab-stop.
ACTION_STOP = 1
ARGUMENT_STOP = 1
LOCATOR_VALUE_STOP = 5
LOCATOR_KIND_STOP = 6
ATTRIBUTE_STOP = 7
REGEX_STOP = 8

ARGUMENT_DEFAULT = 'argument value'
PARAMETERS_DEFAULT = 'parameters values'
LOCATOR_DEFAULT = 'locator value'
REGEX_DEFAULT = '.*'

_CHOICE_ESCAPE = regexp(r'([\\,|])')


def placeholder(index: int, default: str) -> str:
    """Render a default-value placeholder, e.g. `${8:.*}`."""
    return f'${{{index}:{default}}}'


def choice(index: int, options: 'Iterable[str]') -> str:
    """Render a choice placeholder, e.g. `${6|css,xpath|}`.

    Commas, pipes and backslashes inside options are escaped.
    """
    values = ','.join(_CHOICE_ESCAPE.sub(r'\\\1', option) for option in options)
    return f'${{{index}|{values}|}}'


def action_token(action: 'ActionDescriptor') -> str:
    """Render the action name fragment.

    Without aliases this is the plain base phrase. With aliases it is a
    choice on the first tab-stop listing the base phrase first, followed
    by the alias phrases in ascending order.

    Args:
        action: Action descriptor.

    Returns:
        Action fragment of a template.
    """
    aliases = sorted(to_phrase(alias) for alias in action.aliases)
    if not aliases:
        return action.phrase

    return '{' + choice(ACTION_STOP, (action.phrase, *aliases)) + '}'


def argument_token() -> str:
    """Render a single free-text argument value."""
    return '{' + placeholder(ARGUMENT_STOP, ARGUMENT_DEFAULT) + '}'


def arguments_token() -> str:
    """Render an opened command-line parameters list."""
    return '{{$ ' + placeholder(ARGUMENT_STOP, PARAMETERS_DEFAULT) + '}}'


def element_token(verb: str, locators: 'Iterable[str]') -> str:
    """Render the target element fragment.

    Args:
        verb: Word placed before the locator value.
        locators: Locator kinds offered as choices, in order.

    Returns:
        Fragment like `click {${5:locator value}} by {${6|css,xpath|}}`.
    """
    value = '{' + placeholder(LOCATOR_VALUE_STOP, LOCATOR_DEFAULT) + '}'
    kind = '{' + choice(LOCATOR_KIND_STOP, locators) + '}'

    return f'{verb} {value} by {kind}'


def attribute_token(attributes: 'Iterable[str]') -> str:
    """Render the element attribute fragment, e.g. `from {${7|href,id|}}`."""
    return 'from {' + choice(ATTRIBUTE_STOP, attributes) + '}'


def regex_token() -> str:
    """Render the regular expression fragment, `with regex {${8:.*}}`."""
    return 'with regex {' + placeholder(REGEX_STOP, REGEX_DEFAULT) + '}'
