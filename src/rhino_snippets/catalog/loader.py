"""Catalog ingestion from YAML or JSON sources.

This module validates raw catalog documents into an immutable
`CatalogSnapshot`. Records are validated one by one: in relaxed mode an
invalid record is skipped with a `CatalogWarning`, in strict mode it
raises. A duplicate action key shadows the earlier record in relaxed
mode and raises in strict mode.

Loading always produces a new snapshot; published snapshots are never
modified.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any
from warnings import warn

from pydantic import ValidationError
from yaml import SafeLoader, load
from yaml.error import MarkedYAMLError

from rhino_snippets.errors import (
    CatalogError,
    CatalogSchemaError,
    CatalogWarning,
    ErrorContext,
    RhinoError,
)
from rhino_snippets.ordering import deduplicate

from .schema import (
    ActionDescriptor,
    AnnotationDescriptor,
    AttributeDescriptor,
    CatalogRecord,
    CatalogSnapshot,
    LocatorDescriptor,
)

if TYPE_CHECKING:
    from io import TextIOBase

#: Catalog document sections and the models their records validate into.
SECTIONS: dict[str, type[CatalogRecord]] = {
    'actions': ActionDescriptor,
    'locators': LocatorDescriptor,
    'attributes': AttributeDescriptor,
    'annotations': AnnotationDescriptor,
}


class CatalogLoader:
    """Loader turning raw catalog documents into snapshots.

    Attributes:
        strict_mode: If True, any catalog issue raises an error.
            If False, issues are emitted as warnings and loading continues.
    """

    def __init__(self, strict: bool = False,
                 loader: type[SafeLoader] = SafeLoader) -> None:
        """Initialize the catalog loader.

        Args:
            strict: Whether to raise errors on invalid or duplicate records
                instead of emitting warnings.
            loader: YAML loader class used to parse catalog documents.
        """
        self.strict_mode = strict
        self.loader = loader

    def emit_catalog_issue(self, message: str,
                           context: ErrorContext | None = None) -> Exception | None:
        """Emit a catalog warning or return the exception.

        Args:
            message: Warning message to emit.
            context: Optional error context of the issue.

        Returns:
            CatalogError on strict mode, otherwise `None`
                with producing a CatalogWarning.
        """
        if self.strict_mode:
            return CatalogError(message, context=context)

        warn(CatalogError.format(message, context), category=CatalogWarning, stacklevel=2)

        return None

    def load(self, content: 'TextIOBase | str', *,
             filename: str | None = None) -> CatalogSnapshot:
        """Parse a YAML or JSON catalog document.

        Args:
            content: Catalog content as a string or file-like object.
            filename: Optional name of the source used in error messages.

        Returns:
            A validated catalog snapshot.

        Raises:
            CatalogSchemaError: If the document cannot be parsed, its root
                is not a mapping, or a record is invalid on strict mode.
            CatalogError: If a catalog issue occurs on strict mode.
        """
        try:
            data = load(content, Loader=self.loader)  # noqa: S506

        except MarkedYAMLError as base:
            raise CatalogSchemaError.from_yaml_error(base, filename=filename) from base

        except RhinoError:
            raise

        except Exception as base:
            raise CatalogSchemaError(
                'Unexpected error',
                context=ErrorContext(filename=filename, error=base),
            ) from base

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise CatalogSchemaError(
                'Catalog must be a mapping of sections',
                context=ErrorContext(filename=filename),
            )

        return self.build(data, filename=filename)

    def load_file(self, path: Path | str) -> CatalogSnapshot:
        """Parse a catalog file.

        Args:
            path: Path to a YAML or JSON catalog file.

        Returns:
            A validated catalog snapshot.
        """
        path = Path(path)
        with path.open('rt', encoding='utf-8') as content:
            return self.load(content, filename=path.as_posix())

    def build(self, data: dict[str, Any], *,
              filename: str | None = None) -> CatalogSnapshot:
        """Validate raw catalog sections into a snapshot.

        Args:
            data: Mapping of section names to record sequences.
            filename: Optional name of the source used in error messages.

        Returns:
            A validated catalog snapshot.
        """
        sections = {
            section: self.build_section(section, data.get(section), filename=filename)
            for section in SECTIONS
        }

        sections['actions'] = self.check_unique_actions(
            sections['actions'],  # type: ignore[arg-type]
            filename=filename,
        )

        return CatalogSnapshot(**sections)

    def build_section(self, section: str, records: Any,  # noqa: ANN401
                      filename: str | None = None) -> list[CatalogRecord]:
        """Validate all records of one section.

        Args:
            section: Section name.
            records: Raw records; `None` means an empty section.
            filename: Optional name of the source used in error messages.

        Returns:
            Validated records, without those skipped in relaxed mode.

        Raises:
            CatalogSchemaError: If a record is invalid on strict mode.
            CatalogError: If the section is not a sequence on strict mode.
        """
        if records is None:
            return []

        if not isinstance(records, list):
            if error := self.emit_catalog_issue(
                f'Section {section!r} must be a sequence of records',
                ErrorContext(filename=filename, section=section),
            ):
                raise error
            return []

        model = SECTIONS[section]
        items = []

        for position, record in enumerate(records):
            try:
                items.append(model.model_validate(record))

            except ValidationError as base:
                error = CatalogSchemaError.from_pydantic_error(
                    base,
                    data=record,
                    filename=filename,
                    section=section,
                    record_num=position,
                )
                if self.strict_mode:
                    raise error from base
                warn(str(error), category=CatalogWarning, stacklevel=2)

        return items

    def check_unique_actions(self, actions: list[ActionDescriptor], *,
                             filename: str | None = None) -> list[ActionDescriptor]:
        """Resolve duplicate action keys.

        A later record shadows an earlier one with the same key and takes
        its position.

        Args:
            actions: Validated action descriptors in catalog order.
            filename: Optional name of the source used in error messages.

        Returns:
            Actions with unique keys.

        Raises:
            CatalogError: If a key is duplicated on strict mode.
        """
        seen: set[str] = set()
        for position, action in enumerate(actions):
            if action.key in seen and (error := self.emit_catalog_issue(
                f'Action {action.key!r} is shadowing an existing',
                ErrorContext(filename=filename, section='actions', record_num=position),
            )):
                raise error
            seen.add(action.key)

        return deduplicate(actions, key=lambda action: action.key)
