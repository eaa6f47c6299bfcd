"""Tests for completion requests."""

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from rhino_snippets import CompletionConfig, CompletionProvider, Position, TextDocument
from rhino_snippets.settings import EngineSettings
from rhino_snippets.snippets import CatalogSnippetSet

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from rhino_snippets.catalog import CatalogSnapshot


def end_of(document: TextDocument, line: int) -> Position:
    """Position the cursor at the end of a document line."""
    return Position(line=line, character=len(document.lines[line]))


def test_action_completions(config: CompletionConfig, document: TextDocument) -> None:
    """Offer the catalog snippet set inside the actions section."""
    snippets = CompletionProvider().compose_action_completions(
        config, document, Position(line=4, character=0),
    )

    assert snippets
    assert snippets == CatalogSnippetSet(config.catalog).compose()


@pytest.mark.parametrize('line, character', (
    pytest.param(0, 0, id='annotation line'),
    pytest.param(1, 0, id='test id section'),
    pytest.param(4, 15, id='inside parameters list'),
    pytest.param(9, 0, id='expected results section'),
    pytest.param(100, 0, id='line out of range'),
))
def test_action_completions_rejected(line: int, character: int,
                                     config: CompletionConfig, document: TextDocument) -> None:
    """Offer no snippets outside of the actions section or inside a list."""
    snippets = CompletionProvider().compose_action_completions(
        config, document, Position(line=line, character=character),
    )

    assert snippets == ()


def test_action_completions_custom_section(catalog: 'CatalogSnapshot', document: TextDocument) -> None:
    """Offer snippets in the configured section."""
    config = CompletionConfig(catalog=catalog, section='test-expected-results')
    provider = CompletionProvider()

    assert provider.compose_action_completions(config, document, Position(line=9, character=0))
    assert not provider.compose_action_completions(config, document, Position(line=4, character=0))


def test_action_completions_classifier(mocker: 'MockerFixture', config: CompletionConfig,
                                       document: TextDocument) -> None:
    """Delegate context decisions to the host classifier."""
    classifier = mocker.Mock()
    classifier.is_inside_cli_region.return_value = False
    classifier.is_inside_recognized_section.return_value = True
    position = Position(line=0, character=3)

    snippets = CompletionProvider(classifier=classifier).compose_action_completions(
        config, document, position,
    )

    assert snippets
    classifier.is_inside_cli_region.assert_called_once_with('[test-id] RH-1', 3)
    classifier.is_inside_recognized_section.assert_called_once_with(
        document,
        position,
        'test-actions',
        frozenset({'test-id', 'test-actions', 'test-expected-results'}),
    )


def test_action_completions_cli_region_first(mocker: 'MockerFixture', config: CompletionConfig,
                                             document: TextDocument) -> None:
    """Skip the section lookup when the cursor is inside a parameters list."""
    classifier = mocker.Mock()
    classifier.is_inside_cli_region.return_value = True

    snippets = CompletionProvider(classifier=classifier).compose_action_completions(
        config, document, Position(line=4, character=0),
    )

    assert snippets == ()
    classifier.is_inside_recognized_section.assert_not_called()


@pytest.mark.parametrize('line', (
    pytest.param(4, id='opened list'),
    pytest.param(5, id='second flag'),
))
def test_parameter_completions(line: int, config: CompletionConfig, document: TextDocument) -> None:
    """Offer the flags of the action written on the cursor line."""
    flags = CompletionProvider().compose_parameter_completions(
        config, document, end_of(document, line),
    )

    assert [flag.name for flag in flags] == ['timeout', 'retries']
    assert flags[0].documentation == 'Wait timeout in milliseconds.'


@pytest.mark.parametrize('line', (
    pytest.param(3, id='action without flags'),
    pytest.param(6, id='quoted literal'),
    pytest.param(8, id='no action'),
))
def test_parameter_completions_rejected(line: int, config: CompletionConfig,
                                        document: TextDocument) -> None:
    """Offer no flags when the action or the cursor context does not allow it."""
    flags = CompletionProvider().compose_parameter_completions(
        config, document, end_of(document, line),
    )

    assert flags == ()


def test_parameter_completions_out_of_range(config: CompletionConfig, document: TextDocument) -> None:
    """Offer no flags past the end of the document."""
    flags = CompletionProvider().compose_parameter_completions(
        config, document, Position(line=100, character=0),
    )

    assert flags == ()


def test_parameter_completions_configured_pattern(catalog: 'CatalogSnapshot',
                                                  document: TextDocument) -> None:
    """Resolve actions with the configured recognition pattern."""
    config = CompletionConfig(catalog=catalog, pattern=r'(?!)')

    flags = CompletionProvider().compose_parameter_completions(
        config, document, end_of(document, 4),
    )

    assert flags == ()


def test_invalid_pattern(catalog: 'CatalogSnapshot') -> None:
    """Reject invalid recognition patterns when building the configuration."""
    with pytest.raises(ValidationError):
        CompletionConfig(catalog=catalog, pattern='(unclosed')


def test_config_is_frozen(config: CompletionConfig) -> None:
    """Forbid changing a configuration after creation."""
    with pytest.raises(ValidationError):
        config.section = 'test-id'  # type: ignore[misc]


def test_config_from_settings(catalog: 'CatalogSnapshot') -> None:
    """Build a request configuration from explicit settings."""
    settings = EngineSettings(section='test-id', action_pattern=r'click')

    config = CompletionConfig.from_settings(catalog, settings)

    assert config.section == 'test-id'
    assert config.pattern is not None
    assert config.action_pattern.pattern == 'click'


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch, catalog: 'CatalogSnapshot') -> None:
    """Resolve settings from prefixed environment variables."""
    monkeypatch.setenv('RHINO_SECTION', 'test-expected-results')
    monkeypatch.setenv('RHINO_STRICT', 'true')

    settings = EngineSettings()
    config = CompletionConfig.from_settings(catalog, settings)

    assert settings.strict is True
    assert settings.action_pattern is None
    assert config.section == 'test-expected-results'
    assert config.pattern is None


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the actions section and relaxed loading by default."""
    for name in ('RHINO_SECTION', 'RHINO_ACTION_PATTERN', 'RHINO_STRICT'):
        monkeypatch.delenv(name, raising=False)

    settings = EngineSettings()

    assert settings.section == 'test-actions'
    assert settings.strict is False


def test_empty_document(config: CompletionConfig) -> None:
    """Offer nothing for an empty document."""
    document = TextDocument.from_text('')
    position = Position(line=0, character=0)
    provider = CompletionProvider()

    assert provider.compose_action_completions(config, document, position) == ()
    assert provider.compose_parameter_completions(config, document, position) == ()
