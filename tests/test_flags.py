"""Tests for command-line flag filtering."""

from typing import TYPE_CHECKING

import pytest

from rhino_snippets.context import FlagCompletion, FlagContext, ParameterFlagFilter
from rhino_snippets.context.flags import is_action_in_scope, is_flag_introduced, is_flag_list_open

if TYPE_CHECKING:
    from collections.abc import Callable

    from rhino_snippets.catalog import ActionDescriptor, CatalogSnapshot


FLAGS = {
    'timeout': 'Wait timeout in milliseconds.',
    'retries': 'Number of click attempts.',
}


@pytest.fixture
def click_on(make_action: 'Callable[..., ActionDescriptor]') -> 'ActionDescriptor':
    """Provide an action with two command-line flags."""
    return make_action('ClickOn', cli_arguments=FLAGS)


@pytest.mark.parametrize('line', (
    pytest.param('2. click on {{$ --', id='opened list'),
    pytest.param('2. click on {{$ --timeout:10 --', id='second flag'),
    pytest.param("2. 'click on' and click on {{$ --", id='quoted and unquoted'),
    pytest.param('2. Click On {{$ --', id='capitalized literal'),
))
def test_flags_offered(line: str, click_on: 'ActionDescriptor') -> None:
    """Offer every flag in declared order after the flag introducer."""
    flags = ParameterFlagFilter().filter(click_on, line, len(line))

    assert flags == (
        FlagCompletion(name='timeout', documentation='Wait timeout in milliseconds.'),
        FlagCompletion(name='retries', documentation='Number of click attempts.'),
    )


@pytest.mark.parametrize('line, column', (
    pytest.param("'click on' {{$ --", None, id='quoted literal'),
    pytest.param('"click on" {{$ --', None, id='double quoted literal'),
    pytest.param('click on --', None, id='list not opened'),
    pytest.param('click on {{$--', None, id='no space after sigil'),
    pytest.param('click on {{$ --timeout', None, id='flag already typed'),
    pytest.param('click on {{$ --', 12, id='cursor inside the list marker'),
    pytest.param('hover {{$ --', None, id='other action'),
    pytest.param('--', None, id='line too short'),
))
def test_flags_rejected(line: str, column: int | None, click_on: 'ActionDescriptor') -> None:
    """Offer nothing when any predicate fails."""
    if column is None:
        column = len(line)

    assert ParameterFlagFilter().filter(click_on, line, column) == ()


def test_predicates(click_on: 'ActionDescriptor') -> None:
    """Evaluate each default predicate independently."""
    line = "'click on' {{$ --"
    context = FlagContext(click_on, 'timeout', line, len(line))

    assert not is_action_in_scope(context)
    assert is_flag_list_open(context)
    assert is_flag_introduced(context)


def test_custom_predicates(click_on: 'ActionDescriptor') -> None:
    """Evaluate predicates per candidate flag."""
    flag_filter = ParameterFlagFilter(predicates=(
        lambda context: context.flag != 'retries',
    ))

    flags = flag_filter.filter(click_on, 'anything', 0)

    assert [flag.name for flag in flags] == ['timeout']


def test_action_without_flags(catalog: 'CatalogSnapshot') -> None:
    """Offer nothing for actions without command-line arguments."""
    action = catalog.find('CloseBrowser')
    assert action is not None

    line = 'close browser {{$ --'

    assert ParameterFlagFilter().filter(action, line, len(line)) == ()


def test_custom_literal(make_action: 'Callable[..., ActionDescriptor]') -> None:
    """Look for the declared action literal instead of the key phrase."""
    action = make_action('ClickOn', cli_arguments=FLAGS, literal='press')
    line = 'press {{$ --'

    assert len(ParameterFlagFilter().filter(action, line, len(line))) == len(FLAGS)
