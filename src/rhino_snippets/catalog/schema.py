"""Catalog descriptors and the immutable catalog snapshot.

Defines the models an external catalog source is validated into: action
descriptors with their capability set, locator, attribute and annotation
descriptors, and the `CatalogSnapshot` bundling all of them.

Capabilities are computed once, when a record is validated, from the
presence of optional fields in the record's `entity` bag. The compiler
then branches on the closed `Capability` enumeration only.
"""

from enum import StrEnum
from typing import Any, Self

from pydantic import AliasChoices, ConfigDict, Field, PrivateAttr, model_validator

from rhino_snippets.models import DescribedMixin, SchemaModel
from rhino_snippets.names import ActionKey, to_phrase  # noqa: TC001

#: Fields of an entity bag with a dedicated meaning.
ENTITY_PROPERTIES = 'properties'
ENTITY_CLI_ARGUMENTS = 'cliArguments'
ENTITY_DESCRIPTION = 'description'


class Capability(StrEnum):
    """Closed set of capabilities an action may declare.

    Each value is the name of the optional entity field whose presence
    grants the capability.
    """

    CLI_ARGUMENTS = 'cliArguments'
    ARGUMENT = 'argument'
    ELEMENT = 'elementToActOn'
    ATTRIBUTE = 'elementAttributeToActOn'
    REGEX = 'regularExpression'


#: Capabilities granted by fields of the `entity.properties` bag.
PROPERTY_CAPABILITIES = (
    Capability.ARGUMENT,
    Capability.ELEMENT,
    Capability.ATTRIBUTE,
    Capability.REGEX,
)


def _unpack_flags(flags: Any) -> Any:  # noqa: ANN401
    """Normalize a `cliArguments` bag; non-mapping values are left to field validation."""
    if flags is None:
        return {}

    if not isinstance(flags, dict):
        return flags

    return {
        name: description or ''
        for name, description in flags.items()
    }


class CatalogRecord(SchemaModel):
    """Base model for records received from a catalog source.

    Catalog sources carry more fields than completion needs; unknown
    fields are ignored instead of rejected.
    """

    model_config = ConfigDict(extra='ignore')


class ActionDescriptor(DescribedMixin, CatalogRecord):
    """Catalog entry describing one invocable Rhino action."""

    key: ActionKey = Field(
        title='Action key',
        description='Unique identifier used for exact-match lookups.',
    )

    verb: str = Field(
        default='on',
        title='Element verb',
        description='Word placed before the element locator, e.g. `click`.',
    )

    literal: str = Field(
        title='Action literal',
        description=(
            'Phrase the action is written as in a script. '
            'Defaults to the phrase derived from the key.'
        ),
    )

    aliases: tuple[str, ...] = Field(
        default=(),
        title='Action aliases',
        description='Alternative names the action may be written as.',
    )

    capabilities: frozenset[Capability] = Field(
        default=frozenset(),
        title='Capabilities',
        description='Capabilities computed from the record entity bag.',
    )

    cli_arguments: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices('cli_arguments', 'cliArguments'),
        title='Command-line arguments',
        description='Mapping of flag names to their descriptions, in declared order.',
    )

    source: str = Field(
        default='',
        title='Source',
        description='Origin of the action, shown as completion detail.',
    )

    @model_validator(mode='before')
    @classmethod
    def unpack_entity(cls, data: Any) -> Any:  # noqa: ANN401
        """Compute capabilities and flags from a wire-format record.

        Args:
            data: Raw record. Records without an `entity` bag are expected
                to carry `capabilities` explicitly.

        Returns:
            Record data with the entity bag unpacked into model fields.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if data.get('aliases') is None:
            data.pop('aliases', None)

        if not data.get('literal') and isinstance(data.get('key'), str):
            data['literal'] = to_phrase(data['key'])

        entity = data.pop('entity', None)
        if not isinstance(entity, dict):
            return data

        capabilities: set[Capability] = set()

        properties = entity.get(ENTITY_PROPERTIES)
        if isinstance(properties, dict):
            capabilities.update(
                capability
                for capability in PROPERTY_CAPABILITIES
                if capability.value in properties
            )

        if ENTITY_CLI_ARGUMENTS in entity:
            capabilities.add(Capability.CLI_ARGUMENTS)
            data['cli_arguments'] = _unpack_flags(entity[ENTITY_CLI_ARGUMENTS])

        if not data.get('description') and entity.get(ENTITY_DESCRIPTION):
            data['description'] = entity[ENTITY_DESCRIPTION]

        declared = data.get('capabilities') or ()
        if isinstance(declared, (list, tuple, set, frozenset)):
            data['capabilities'] = [*declared, *capabilities]
        else:
            data['capabilities'] = declared

        return data

    @property
    def phrase(self) -> str:
        """Base phrase of the action, e.g. `click on element`."""
        return to_phrase(self.key)

    def has(self, capability: Capability) -> bool:
        """Tell whether the action declares a capability."""
        return capability in self.capabilities


class LocatorDescriptor(DescribedMixin, CatalogRecord):
    """Element locator kind, e.g. `xpath` or `css selector`."""

    literal: str = Field(
        title='Locator literal',
        description='Name of the locator kind as written in a script.',
    )

    @model_validator(mode='before')
    @classmethod
    def from_string(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept a bare string as shorthand for a locator literal."""
        if isinstance(data, str):
            return {'literal': data}

        return data


class AttributeDescriptor(DescribedMixin, CatalogRecord):
    """Element attribute name, e.g. `href`."""

    key: str = Field(
        title='Attribute key',
        description='Name of the element attribute as written in a script.',
    )

    @model_validator(mode='before')
    @classmethod
    def from_string(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept a bare string as shorthand for an attribute key."""
        if isinstance(data, str):
            return {'key': data}

        return data


class AnnotationDescriptor(AttributeDescriptor):
    """Section annotation of a test specification, e.g. `test-actions`."""


class CatalogSnapshot(SchemaModel):
    """Immutable bundle of all catalogs used by a completion request.

    A snapshot is never updated in place: a catalog change is published
    as a new snapshot.
    """

    actions: tuple[ActionDescriptor, ...] = Field(
        default=(),
        title='Actions',
        description='Action descriptors in catalog order.',
    )

    locators: tuple[LocatorDescriptor, ...] = Field(
        default=(),
        title='Locators',
        description='Element locator kinds offered by element snippets.',
    )

    attributes: tuple[AttributeDescriptor, ...] = Field(
        default=(),
        title='Attributes',
        description='Element attribute names offered by attribute snippets.',
    )

    annotations: tuple[AnnotationDescriptor, ...] = Field(
        default=(),
        title='Annotations',
        description='Section annotations recognized in test specifications.',
    )

    _index: dict[str, ActionDescriptor] = PrivateAttr(default_factory=dict)

    @model_validator(mode='after')
    def check_unique_keys(self) -> Self:
        """Check that action keys are unique.

        Raises:
            ValueError: If two actions share a key.
        """
        seen: set[str] = set()
        for action in self.actions:
            if action.key in seen:
                raise ValueError(f'action key `{action.key}` is not unique in catalog')
            seen.add(action.key)

        return self

    def model_post_init(self, context: Any) -> None:  # noqa: ANN401
        """Index actions by key."""
        self._index = {action.key: action for action in self.actions}

    def find(self, key: str) -> ActionDescriptor | None:
        """Look up an action by exact key.

        Args:
            key: Canonical action key.

        Returns:
            The matching descriptor, or `None`.
        """
        return self._index.get(key)

    @property
    def locator_literals(self) -> list[str]:
        """Sorted locator literals."""
        return sorted(locator.literal for locator in self.locators)

    @property
    def attribute_keys(self) -> list[str]:
        """Sorted attribute keys."""
        return sorted(attribute.key for attribute in self.attributes)

    @property
    def annotation_keys(self) -> frozenset[str]:
        """Known annotation names."""
        return frozenset(annotation.key for annotation in self.annotations)
