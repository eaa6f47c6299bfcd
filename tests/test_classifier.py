"""Tests for the annotation-based context classifier."""

import pytest

from rhino_snippets.context import AnnotationClassifier, Position, TextDocument

ANNOTATIONS = frozenset({'test-id', 'test-actions', 'test-expected-results'})


@pytest.mark.parametrize('line, column, expected', (
    pytest.param('click {{$ --timeout', None, True, id='open list'),
    pytest.param('click {{$ --timeout:1}} and', None, False, id='closed list'),
    pytest.param('click {{$ --a}} {{$ --b', None, True, id='second list open'),
    pytest.param('click {x}', None, False, id='no list'),
    pytest.param('click {{$ --timeout', 5, False, id='cursor before list'),
))
def test_cli_region(line: str, column: int | None, expected: bool) -> None:
    """Detect an unclosed parameters list before the cursor."""
    if column is None:
        column = len(line)

    assert AnnotationClassifier().is_inside_cli_region(line, column) is expected


@pytest.mark.parametrize('line, expected', (
    pytest.param(0, False, id='annotation line'),
    pytest.param(1, False, id='test id section'),
    pytest.param(4, True, id='actions section'),
    pytest.param(5, True, id='actions after unknown annotation'),
    pytest.param(7, False, id='expected results section'),
    pytest.param(42, False, id='past the end'),
))
def test_recognized_section(line: int, expected: bool) -> None:
    """Decide by the nearest known annotation above the cursor."""
    document = TextDocument.from_text(
        '[test-id] RH-1\n'
        '\n'
        '[test-actions]\n'
        '1. close browser\n'
        '[notes]\n'
        '2. click {x}\n'
        '[test-expected-results]\n'
        '[1] verify that {url} match {example}\n',
    )

    assert AnnotationClassifier().is_inside_recognized_section(
        document,
        Position(line=line, character=0),
        'test-actions',
        ANNOTATIONS,
    ) is expected


def test_unknown_annotations_without_catalog() -> None:
    """Treat every annotation as a boundary when none are known."""
    document = TextDocument.from_text('[test-actions]\n[notes]\n2. click {x}\n')

    assert not AnnotationClassifier().is_inside_recognized_section(
        document,
        Position(line=2, character=0),
        'test-actions',
        frozenset(),
    )
