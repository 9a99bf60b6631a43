"""Core exception hierarchy.

This module defines the error types raised while retrieving remote test
records, validating them against the record schema, and writing RFML
files. All of them derive from `ExportError` so callers can handle any
export failure in one place.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pydantic import ValidationError
    from pydantic_core import ErrorDetails

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: API path or file path the failure relates to.
    source: str | None

    #: Identifier of the test being exported.
    test_id: int | None

    #: HTTP status code of a failed request.
    status_code: int | None

    #: Record fragment associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting export errors.

    Produces human-readable messages with an optional location line and
    a YAML snippet of the record fragment that caused the failure.
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
                            indent: int = 0) -> str:
        """Format source and test location information.

        Args:
            context: Error context containing location metadata.
            indent: Number of spaces to prefix the location with.

        Returns:
            A formatted location string, or an empty string if the
            context holds no location.
        """
        parts = []
        if source := context.get('source'):
            parts.append(f'in "{source}"')
        if (test_id := context.get('test_id')) is not None:
            parts.append(f'for test {test_id}')
        if (status_code := context.get('status_code')) is not None:
            parts.append(f'with status {status_code}')

        if not parts:
            return ''

        return f'{' ' * indent}{', '.join(parts)}{linesep}'

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: int = 0) -> str:
        """Generate a YAML snippet of the failing record fragment.

        Args:
            context: Error context containing the record fragment.
            indent: Number of spaces to prefix every snippet line with.

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        element = context.get('element')
        if element is None:
            return ''

        prefix = ' ' * indent
        data = dump(
            cls._filter_unsafe(element),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        snippet = f'{prefix}{SNIPPET_ELLIPSIS}'
        snippet += linesep.join(
            f'{prefix}{line}'
            for line in data.splitlines()
            if line.strip()
        )

        return snippet + linesep

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, dict):
            return {
                str(key): cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple, set)):
            return [cls._filter_unsafe(item) for item in value]

        return FORMAT_REPLACER


class ExportError(Exception, ErrorFormatter):
    """Base exception for all exporter errors."""

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location and data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class RetrievalError(ExportError):
    """Error raised when a remote record cannot be retrieved.

    Covers transport failures, error responses of the API, and response
    bodies that are not valid JSON.
    """

    @classmethod
    def from_status(cls, path: str, status_code: int,
                    reason: str | None = None) -> 'Self':
        """Create an error for an unsuccessful HTTP response.

        Args:
            path: Requested API path.
            status_code: HTTP status code of the response.
            reason: Optional reason phrase.

        Returns:
            RetrievalError describing the failed request.
        """
        message = 'Request failed'
        if reason:
            message += f': {reason}'

        return cls(message, context=ErrorContext(
            source=path,
            status_code=status_code,
        ))


class RFMLFormatError(ExportError):
    """Error raised when a remote record does not match the record schema.

    This includes element variants other than steps and embedded tests,
    which can not be represented in RFML.
    """

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None,  # noqa: ANN401
                            source: str | None = None,
                            test_id: int | None = None) -> 'Self':
        """Create a format error from a Pydantic validation failure.

        The error location path is walked through the original record to
        attach the smallest failing fragment as a snippet.

        Args:
            error: ValidationError raised by Pydantic.
            data: Raw record or list of records that was validated.
            source: API path the record was retrieved from.
            test_id: Identifier of the test being validated.

        Returns:
            RFMLFormatError representing the validation failure.
        """
        error_context = ErrorContext(
            source=source,
            test_id=test_id,
        )

        if not data or not isinstance(data, (dict, list)):
            return cls('Invalid record', context=error_context)

        for item in error.errors(include_url=False, include_input=False):
            if located := cls._locate_pydantic_context(data, item):
                message, value = located
                return cls(message, context=ErrorContext({**error_context, 'element': value}))

        return cls('Invalid record', context=error_context)

    @classmethod
    def _locate_pydantic_context(cls, value: Any,  # noqa: ANN401
                                 error: 'ErrorDetails') -> tuple[str, Any] | None:
        """Locate the most specific failing fragment in validated data.

        Discriminated unions add the tag name to the error location
        (for example `('elements', 0, 'test', 'element')`); such path
        parts are skipped when they are not present in the data.

        Args:
            value: Root data structure being validated.
            error: Pydantic error details including location path.

        Returns:
            A tuple of (error message, extracted fragment) if a relevant
            fragment can be located, otherwise None.
        """
        container = last_item = value
        last_key: int | str | None = None

        for key in error['loc']:
            if isinstance(last_item, (list, tuple)):
                if isinstance(key, int) and 0 <= key < len(last_item):
                    container = last_item
                    last_item = last_item[key]
                    last_key = key
            elif isinstance(last_item, dict):
                if key in last_item:
                    container = last_item
                    last_item = last_item[key]
                    last_key = key
            else:
                break

        message = None
        for item in (error.get('msg') or '').splitlines():
            if item_message := item.strip():
                message = item_message
                break

        if not message or last_key is None:
            return None

        if isinstance(container, (list, tuple)):
            return message, [last_item]

        return message, {last_key: last_item}


class OutputError(ExportError):
    """Error raised when an RFML file can not be created or written."""

    @classmethod
    def from_os_error(cls, error: OSError, path: str) -> 'Self':
        """Create an output error from a file system failure.

        Args:
            error: Exception raised by the file system call.
            path: Path of the file being written.

        Returns:
            OutputError describing the failure.
        """
        message = 'Can not write RFML file'
        if error.strerror:
            message += f': {error.strerror}'

        return cls(message, context=ErrorContext(source=path))
