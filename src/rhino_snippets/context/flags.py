"""Filtering of command-line flags offered at the cursor.

Each declared flag of the resolved action is checked against a set of
predicates over the cursor line. A flag is offered only when every
predicate holds; otherwise it is dropped silently.

Default predicates:
- the action literal occurs on the line in any case, not right after a quote;
- a parameters list (`{{$ ... --`) is open before the cursor;
- the cursor directly follows ` --`.
"""

from collections.abc import Callable, Sequence
from re import IGNORECASE, search
from typing import TYPE_CHECKING, NamedTuple

from pydantic import Field

from rhino_snippets.models import SchemaModel
from rhino_snippets.names import FLAG_INTRODUCER, FLAG_LIST_PATTERN, quoted_exclusion
from rhino_snippets.ordering import deduplicate

if TYPE_CHECKING:
    from rhino_snippets.catalog import ActionDescriptor


class FlagContext(NamedTuple):
    """Inputs of a flag predicate."""

    action: 'ActionDescriptor'
    flag: str
    line: str
    column: int


#: A predicate deciding whether a flag may be offered.
type FlagPredicate = Callable[[FlagContext], bool]


class FlagCompletion(SchemaModel):
    """Command-line flag offered as a completion."""

    name: str = Field(
        title='Flag name',
        description='Name of the flag, typed after `--`.',
    )

    documentation: str = Field(
        default='',
        title='Documentation',
        description='Description of the flag.',
    )


def is_action_in_scope(context: FlagContext) -> bool:
    """Check that the line contains the unquoted action literal, in any case."""
    return search(quoted_exclusion(context.action.literal), context.line, flags=IGNORECASE) is not None


def is_flag_list_open(context: FlagContext) -> bool:
    """Check that a parameters list is opened before the cursor."""
    return FLAG_LIST_PATTERN.search(context.line[:context.column]) is not None


def is_flag_introduced(context: FlagContext) -> bool:
    """Check that the cursor directly follows the flag introducer."""
    start = context.column - len(FLAG_INTRODUCER)
    if start < 0:
        return False

    return context.line[start:context.column] == FLAG_INTRODUCER


DEFAULT_PREDICATES: tuple[FlagPredicate, ...] = (
    is_action_in_scope,
    is_flag_list_open,
    is_flag_introduced,
)


class ParameterFlagFilter:
    """Predicate engine selecting the flags legal at the cursor."""

    def __init__(self, predicates: Sequence[FlagPredicate] = DEFAULT_PREDICATES) -> None:
        """Initialize the filter.

        Args:
            predicates: Predicates that must all hold for a flag.
        """
        self.predicates = tuple(predicates)

    def accepts(self, context: FlagContext) -> bool:
        """Tell whether every predicate holds for a flag."""
        return all(predicate(context) for predicate in self.predicates)

    def filter(self, action: 'ActionDescriptor', line: str, column: int) -> tuple[FlagCompletion, ...]:
        """Select the flags of an action offered at the cursor.

        Args:
            action: Resolved action descriptor.
            line: Text of the cursor line.
            column: Cursor column.

        Returns:
            Flag completions in declared order, one per name.
        """
        return tuple(deduplicate(
            FlagCompletion(name=flag, documentation=description)
            for flag, description in action.cli_arguments.items()
            if self.accepts(FlagContext(action, flag, line, column))
        ))
