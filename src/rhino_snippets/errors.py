"""Core exception hierarchy.

This module defines base error and warning types used to report catalog
ingestion failures in a structured way. Completion requests themselves
never raise: every lookup or match failure degrades to an empty result.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump
from yaml.error import MarkedYAMLError

if TYPE_CHECKING:
    from typing import Self

    from pydantic_core import ErrorDetails, ValidationError

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the catalog file where the error occurred.
    filename: str | None

    #: Line number in the catalog file.
    line_num: int | None
    #: Column number in the catalog file.
    column_num: int | None

    #: Catalog section of the failing record (`actions`, `locators`, ...).
    section: str | None
    #: Position of the failing record within its section.
    record_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None
    #: Raw record associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting catalog errors.

    Produces human-readable messages with optional source location and
    a YAML snippet of the offending record.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and record location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line, column,
            section and record numbers when available.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num + 1}'
            if (column_num := context.get('column_num')) is not None:
                message += f', column {column_num + 1}'
        message += linesep

        if (record_num := context.get('record_num')) is not None:
            section = context.get('section') or 'catalog'
            message += f'{indent}on {section} record {record_num + 1}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing record or exception data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if (error := context.get('error')) and isinstance(error, MarkedYAMLError):
            snippet = ''
            if error.problem_mark is not None:
                snippet = error.problem_mark.get_snippet(indent=0) or ''
            return cls._make_indent(snippet, indent)

        if element := context.get('element'):
            snippet = f'{indent}{SNIPPET_ELLIPSIS}'
            snippet += cls._make_yaml(element, indent)
            snippet += linesep
            return snippet

        return ''

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively replace non-serializable values with a placeholder."""
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, dict):
            return {
                key: cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple, set)):
            return [cls._filter_unsafe(item) for item in value]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string."""
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string, dropping blank lines."""
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input to a string."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class CatalogWarning(UserWarning):
    """Warning emitted for non-fatal catalog issues.

    Used when a catalog record is skipped or shadowed, but the issue does
    not prevent the rest of the catalog from loading (relaxed mode).
    """


class RhinoError(Exception, ErrorFormatter):
    """Base exception for all rhino-snippets errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class CatalogError(RhinoError):
    """Error raised for structural catalog failures in strict mode.

    For example, a duplicate action key or a catalog root that is not
    a mapping of sections.
    """


class CatalogSchemaError(RhinoError):
    """Error raised when catalog content cannot be parsed or validated."""

    @classmethod
    def from_yaml_error(cls, error: MarkedYAMLError, *,
                        filename: str | None = None) -> 'Self':
        """Create a schema error from a YAML parsing failure.

        Args:
            error: Exception raised by the YAML parser.
            filename: Optional catalog file name overriding the parser mark.

        Returns:
            CatalogSchemaError representing the YAML parsing failure.
        """
        mark = error.problem_mark
        error_context = ErrorContext(
            filename=filename or (mark.name if mark else None),
            line_num=mark.line if mark else None,
            column_num=mark.column if mark else None,
            error=error,
        )

        message = 'Invalid YAML'
        if error.problem:
            message += f'{linesep}{' ' * FORMAT_INDENT}{error.problem}'

        return cls(message, context=error_context)

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None,  # noqa: ANN401
                            filename: str | None = None,
                            section: str | None = None,
                            record_num: int | None = None) -> 'Self':
        """Create a schema error from a Pydantic validation failure.

        The message is taken from the first validation issue that can be
        located in the record, and the snippet is narrowed to the field
        responsible for it.

        Args:
            error: ValidationError raised by Pydantic.
            data: Raw record data.
            filename: Name of the catalog file.
            section: Catalog section of the record.
            record_num: Position of the record within its section.

        Returns:
            CatalogSchemaError representing the validation failure.
        """
        error_context = ErrorContext(
            filename=filename,
            section=section,
            record_num=record_num,
            error=error,
            element=data,
        )

        if not data or not isinstance(data, dict):
            return cls('Type validation error', context=error_context)

        for item in error.errors(include_url=False, include_input=False):
            if located := cls._locate_pydantic_context(data, item):
                message, value = located
                return cls(message, context=ErrorContext({**error_context, 'element': value}))

        return cls('Validation error', context=error_context)

    @staticmethod
    def _locate_pydantic_context(value: dict[str, Any],
                                 error: 'ErrorDetails') -> tuple[str, Any] | None:
        """Locate the top-level record field responsible for a failure.

        Args:
            value: Raw record being validated.
            error: Pydantic error details including location path.

        Returns:
            A tuple of (error message, `{field: value}`) if the failing
            field exists in the record, otherwise `None`.
        """
        location = error.get('loc') or ()
        if not location or location[0] not in value:
            return None

        message = next((
            line.strip()
            for line in (error.get('msg') or '').splitlines()
            if line.strip()
        ), None)
        if not message:
            return None

        key = location[0]
        return message, {key: value[key]}
