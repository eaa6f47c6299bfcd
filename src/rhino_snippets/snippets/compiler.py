"""Compilation of one action descriptor into composed snippets.

An action always gets a single-argument variant and, when it declares
command-line arguments, a parameters-list variant. Each variant starts
its own composition chain: the seed snippet is emitted first, then the
element, attribute and regex capabilities are folded in, in this fixed
order. Every true capability appends to what was accumulated so far and
emits one more snippet; a false capability is skipped without resetting
the chain.
"""

from typing import TYPE_CHECKING, NamedTuple

from rhino_snippets.catalog import Capability
from rhino_snippets.ordering import deduplicate

from . import tokens
from .schema import ComposedSnippet

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from rhino_snippets.catalog import ActionDescriptor, CatalogSnapshot


class Variant(NamedTuple):
    """Seed of a composition chain."""

    name: str
    token: str


#: Name suffixes of the chain seeds.
ARGUMENT_SUFFIX = 'w/ argument'
ARGUMENTS_SUFFIX = 'w/ arguments'

#: Name suffixes of the folded capabilities.
ELEMENT_SUFFIX = 'w/ element'
ATTRIBUTE_SUFFIX = 'w/ attribute'
REGEX_SUFFIX = 'w/ regex'


class ManifestSnippetCompiler:
    """Compiler of action descriptors into named snippet templates.

    The compiler is bound to the locator and attribute names of one
    catalog snapshot; those are offered as choices by element and
    attribute fragments.
    """

    def __init__(self, locators: 'Sequence[str]' = (),
                 attributes: 'Sequence[str]' = ()) -> None:
        """Initialize the compiler.

        Args:
            locators: Locator kinds, sorted for display.
            attributes: Attribute names, sorted for display.
        """
        self.locators = tuple(sorted(locators))
        self.attributes = tuple(sorted(attributes))

    @classmethod
    def from_catalog(cls, catalog: 'CatalogSnapshot') -> 'ManifestSnippetCompiler':
        """Create a compiler bound to a catalog snapshot."""
        return cls(catalog.locator_literals, catalog.attribute_keys)

    def build_variants(self, action: 'ActionDescriptor') -> list[Variant]:
        """Build the chain seeds of an action.

        Args:
            action: Action descriptor.

        Returns:
            The argument variant, followed by the arguments-list variant
            for actions with command-line arguments.
        """
        phrase = action.phrase
        token = tokens.action_token(action)

        variants = [
            Variant(f'{phrase} {ARGUMENT_SUFFIX}', f'{token} {tokens.argument_token()}'),
        ]
        if action.has(Capability.CLI_ARGUMENTS):
            variants.append(
                Variant(f'{phrase} {ARGUMENTS_SUFFIX}', f'{token} {tokens.arguments_token()}'),
            )

        return variants

    def build_suffixes(self, action: 'ActionDescriptor') -> 'Iterable[tuple[Capability, str, Callable[[], str]]]':
        """Enumerate foldable capabilities in composition order.

        Args:
            action: Action descriptor.

        Returns:
            Tuples of capability, name suffix and token factory.
        """
        return (
            (Capability.ELEMENT, ELEMENT_SUFFIX,
             lambda: tokens.element_token(action.verb, self.locators)),
            (Capability.ATTRIBUTE, ATTRIBUTE_SUFFIX,
             lambda: tokens.attribute_token(self.attributes)),
            (Capability.REGEX, REGEX_SUFFIX,
             tokens.regex_token),
        )

    def build_chain(self, action: 'ActionDescriptor', variant: Variant) -> list[ComposedSnippet]:
        """Compose all snippets of one chain.

        Args:
            action: Action descriptor.
            variant: Chain seed.

        Returns:
            Cumulative snippets of the chain, deduplicated by name.
        """
        names = [variant.name]
        fragments = [variant.token]
        snippets = [self.make_snippet(action, names, fragments)]

        for capability, suffix, token in self.build_suffixes(action):
            if not action.has(capability):
                continue
            names.append(suffix)
            fragments.append(token())
            snippets.append(self.make_snippet(action, names, fragments))

        return deduplicate(snippets)

    def compile(self, action: 'ActionDescriptor') -> list[ComposedSnippet]:
        """Compile an action into its composed snippets.

        Args:
            action: Action descriptor.

        Returns:
            Snippets of every variant chain, in variant order.
                Never empty: the argument variant is unconditional.
        """
        return [
            snippet
            for variant in self.build_variants(action)
            for snippet in self.build_chain(action, variant)
        ]

    @staticmethod
    def make_snippet(action: 'ActionDescriptor', names: list[str],
                     fragments: list[str]) -> ComposedSnippet:
        """Create a snippet from the accumulated names and fragments."""
        return ComposedSnippet(
            name=' '.join(names),
            template=' '.join(fragments),
            documentation=action.description,
            detail=action.source,
        )
