"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING, Any

import pytest

from rhino_snippets.catalog import ActionDescriptor, CatalogLoader, CatalogSnapshot
from rhino_snippets.context import TextDocument
from rhino_snippets.provider import CompletionConfig
from tests.examples.catalog import CATALOG, DOCUMENT

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def catalog() -> CatalogSnapshot:
    """Provide the example catalog snapshot.

    The snapshot is validated from wire-format records in strict mode,
    so any record rejected by the loader fails the test early.
    """
    return CatalogLoader(strict=True).build(CATALOG)


@pytest.fixture
def config(catalog: CatalogSnapshot) -> CompletionConfig:
    """Provide a request configuration bound to the example catalog."""
    return CompletionConfig(catalog=catalog)


@pytest.fixture
def document() -> TextDocument:
    """Provide the example test specification."""
    return TextDocument.from_text(DOCUMENT)


@pytest.fixture
def make_action() -> 'Callable[..., ActionDescriptor]':
    """Provide a factory for wire-format action descriptors.

    The factory accepts a key, the names of `entity.properties` fields,
    optional command-line arguments and any extra record fields.
    """
    def make(key: str, *properties: str,
             cli_arguments: dict[str, str] | None = None,
             **fields: Any) -> ActionDescriptor:  # noqa: ANN401
        entity: dict[str, Any] = {}
        if properties:
            entity['properties'] = dict.fromkeys(properties, 'property')
        if cli_arguments is not None:
            entity['cliArguments'] = cli_arguments

        return ActionDescriptor.model_validate({
            'key': key,
            'entity': entity,
            'description': f'{key} description',
            'source': f'{key} source',
            **fields,
        })

    return make
