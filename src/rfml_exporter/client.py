"""HTTP access to the Rainforest API.

The client wraps a synchronous `httpx.Client` configured with the API
base URL and the client token, and converts transport failures, error
responses, and malformed bodies into `RetrievalError`.
"""

import logging
from typing import TYPE_CHECKING, Any

import httpx

from rfml_exporter.errors import ErrorContext, RetrievalError

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

if TYPE_CHECKING:
    from rfml_exporter.settings import ExportOptions

logger = logging.getLogger(__name__)

TOKEN_HEADER = 'CLIENT_TOKEN'
DEFAULT_TIMEOUT = 30.0


class HttpClient:
    """Thin JSON client for the Rainforest API.

    The client may be used as a context manager; the underlying
    connection pool is closed on exit.
    """

    def __init__(self, options: 'ExportOptions', *,
                 transport: httpx.BaseTransport | None = None,
                 timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client.

        Args:
            options: Export options providing the API URL and token.
            transport: Optional transport, used to stub the service.
            timeout: Request timeout in seconds.
        """
        headers = {'Accept': 'application/json'}
        if options.token is not None:
            headers[TOKEN_HEADER] = options.token.get_secret_value()

        self.client = httpx.Client(
            base_url=options.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> 'Self':
        return self

    def __exit__(self, exc_type: type[BaseException] | None,
                 exc_value: BaseException | None,
                 traceback: 'TracebackType | None') -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self.client.close()

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:  # noqa: ANN401
        """Send a GET request and decode the JSON response.

        Args:
            path: API path relative to the base URL.
            params: Optional query parameters.

        Returns:
            Decoded JSON body.

        Raises:
            RetrievalError: If the request fails, the service answers
                with an error status, or the body is not valid JSON.
        """
        logger.debug('GET %s', path)

        try:
            response = self.client.get(path, params=params)
        except httpx.HTTPError as base:
            raise RetrievalError(
                f'Request failed: {base}',
                context=ErrorContext(source=path),
            ) from base

        if response.is_error:
            raise RetrievalError.from_status(
                path,
                response.status_code,
                response.reason_phrase,
            )

        try:
            return response.json()
        except ValueError as base:
            raise RetrievalError(
                'Response is not valid JSON',
                context=ErrorContext(source=path, status_code=response.status_code),
            ) from base
