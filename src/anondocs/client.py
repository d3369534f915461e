"""HTTP client for the AnonDocs API.

This module contains :class:`AnonDocsClient`, the entry point of the SDK. It
builds requests, maps HTTP and network failures onto the anondocs error
hierarchy and hands streaming responses to :mod:`anondocs.streaming`.
"""

import logging
from contextlib import aclosing, contextmanager
from typing import Any, AsyncIterator, Dict, Iterator, Optional, Union

import httpx

from anondocs.config import ClientConfig
from anondocs.errors import AnonDocsApiError, AnonDocsError, AnonDocsNetworkError
from anondocs.streaming import iter_events, notify_error, run_stream
from anondocs.types import (
    AnonymizationResult,
    CompleteCallback,
    ErrorCallback,
    HealthResponse,
    LLMProvider,
    ProgressCallback,
    ProgressEvent,
    StreamCallbacks,
)
from anondocs.utils import (
    DocumentInput,
    form_fields,
    json_body,
    prepare_upload,
    provider_value,
    validate_text,
)

logger = logging.getLogger(__name__)

Provider = Optional[Union[LLMProvider, str]]


@contextmanager
def _network_errors() -> Iterator[None]:
    """Translate httpx transport exceptions into AnonDocsNetworkError."""
    try:
        yield
    except httpx.TimeoutException as e:
        raise AnonDocsNetworkError("Request timeout", e) from e
    except httpx.RequestError as e:
        raise AnonDocsNetworkError(f"Network error: {e}", e) from e


def _raise_for_status(response: httpx.Response) -> None:
    """Raise AnonDocsApiError for a non-success response that has been read."""
    if response.is_success:
        return

    status = response.status_code
    try:
        data = response.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        raise AnonDocsApiError(f"HTTP {status}: {response.reason_phrase}", status)

    error_code = data.get("error")
    message = data.get("message") or error_code or f"HTTP {status}: {response.reason_phrase}"
    raise AnonDocsApiError(str(message), status, error_code)


def _parse_result(payload: Any, status_code: int) -> AnonymizationResult:
    try:
        return AnonymizationResult.from_dict(payload["data"])
    except (KeyError, TypeError, ValueError) as e:
        raise AnonDocsApiError(f"Unexpected response from server: {e}", status_code) from e


class AnonDocsClient:
    """Async client for the AnonDocs anonymization API.

    The client keeps one ``httpx.AsyncClient`` connection pool. Use it as an
    async context manager, or call :meth:`aclose` when done.

    Attributes:
        config: The validated client configuration.

    Example:
        >>> async with AnonDocsClient(base_url="http://localhost:3000") as client:
        ...     result = await client.anonymize_text("John Smith lives in Paris")
        ...     print(result.anonymized_text)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        **overrides: Any,
    ):
        """Initialize the client.

        Args:
            config: Base configuration. Defaults to :class:`ClientConfig`.
            http_client: An existing ``httpx.AsyncClient`` to send requests
                with. It is not closed by :meth:`aclose`.
            **overrides: Any :class:`ClientConfig` field, applied on top of
                ``config``.

        Raises:
            ConfigurationError: If the resulting configuration is invalid.
        """
        self.config = (config or ClientConfig()).merge(**overrides).validate()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()

        logger.debug(
            f"AnonDocsClient initialized with base_url={self.config.base_url}, "
            f"provider={self.config.default_provider}, timeout={self.config.timeout}"
        )

    async def __aenter__(self) -> "AnonDocsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool if this client created it."""
        if self._owns_client:
            await self._client.aclose()

    # ---------- Plain JSON endpoints ----------

    async def health(self) -> HealthResponse:
        """Check API health status."""
        payload = await self._request("GET", "/health")
        try:
            return HealthResponse.from_dict(payload)
        except (KeyError, TypeError) as e:
            raise AnonDocsApiError(f"Unexpected response from server: {e}", 200) from e

    async def anonymize_text(self, text: str, provider: Provider = None) -> AnonymizationResult:
        """Anonymize text and wait for the full result.

        Args:
            text: Text to anonymize.
            provider: LLM provider; defaults to the configured one.

        Raises:
            AnonDocsValidationError: If text is not a non-blank string.
            AnonDocsApiError: If the server rejects the request.
            AnonDocsNetworkError: If the server cannot be reached.
        """
        validate_text(text)
        body = json_body(text, provider_value(provider, self.config.default_provider))
        payload = await self._request("POST", "/api/anonymize", json=body)
        return _parse_result(payload, 200)

    async def anonymize_document(
        self,
        file: DocumentInput,
        provider: Provider = None,
        filename: Optional[str] = None,
    ) -> AnonymizationResult:
        """Anonymize a PDF, DOCX or TXT document and wait for the full result.

        Args:
            file: Document bytes, a path, or a binary file object.
            provider: LLM provider; defaults to the configured one.
            filename: Name to upload the document under.
        """
        upload = prepare_upload(file, filename)
        payload = await self._request(
            "POST",
            "/api/document",
            files={"file": upload},
            data=form_fields(provider_value(provider, self.config.default_provider)),
        )
        return _parse_result(payload, 200)

    # ---------- Streaming endpoints ----------

    async def stream_anonymize_text(
        self,
        text: str,
        provider: Provider = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        callbacks: Optional[StreamCallbacks] = None,
    ) -> Optional[AnonymizationResult]:
        """Anonymize text, reporting progress events as they arrive.

        Callbacks may be given one by one or as a :class:`StreamCallbacks`.
        Validation errors are raised before any request is made and are not
        passed to ``on_error``.

        Returns:
            The final result, or ``None`` if the server closed the stream
            without one.

        Raises:
            AnonDocsValidationError: If text is not a non-blank string.
            AnonDocsApiError: If the server rejects the request.
            AnonDocsNetworkError: If the server cannot be reached.
            AnonDocsStreamError: If the server reports an error mid-stream
                or the stream breaks.
            AnonDocsHandlerError: If one of the callbacks raises.
        """
        validate_text(text)
        body = json_body(text, provider_value(provider, self.config.default_provider))
        callbacks = callbacks or StreamCallbacks(on_progress, on_complete, on_error)
        return await self._stream_request("/api/stream/anonymize", callbacks, json=body)

    async def stream_anonymize_document(
        self,
        file: DocumentInput,
        provider: Provider = None,
        filename: Optional[str] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        callbacks: Optional[StreamCallbacks] = None,
    ) -> Optional[AnonymizationResult]:
        """Anonymize a document, reporting progress events as they arrive.

        See :meth:`stream_anonymize_text` for callback and error semantics.
        """
        upload = prepare_upload(file, filename)
        callbacks = callbacks or StreamCallbacks(on_progress, on_complete, on_error)
        return await self._stream_request(
            "/api/stream/document",
            callbacks,
            files={"file": upload},
            data=form_fields(provider_value(provider, self.config.default_provider)),
        )

    async def iter_text_events(
        self, text: str, provider: Provider = None
    ) -> AsyncIterator[ProgressEvent]:
        """Stream text anonymization as an async iterator of events.

        The ``completed`` event carries the result in ``event.data``. A server
        ``error`` event is raised as :class:`AnonDocsStreamError`. Wrap the
        iterator in ``contextlib.aclosing`` when breaking out early so the
        connection is released right away.

        Example:
            >>> async for event in client.iter_text_events("Call Anna at 555-0199"):
            ...     print(event.type.value, event.progress)
        """
        validate_text(text)
        body = json_body(text, provider_value(provider, self.config.default_provider))
        response = await self._open_stream("/api/stream/anonymize", json=body)
        async with aclosing(iter_events(response)) as events:
            async for event in events:
                yield event

    async def iter_document_events(
        self,
        file: DocumentInput,
        provider: Provider = None,
        filename: Optional[str] = None,
    ) -> AsyncIterator[ProgressEvent]:
        """Stream document anonymization as an async iterator of events."""
        upload = prepare_upload(file, filename)
        response = await self._open_stream(
            "/api/stream/document",
            files={"file": upload},
            data=form_fields(provider_value(provider, self.config.default_provider)),
        )
        async with aclosing(iter_events(response)) as events:
            async for event in events:
                yield event

    # ---------- Internals ----------

    def _url(self, endpoint: str) -> str:
        return f"{self.config.base_url}{endpoint}"

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        url = self._url(endpoint)
        logger.debug(f"{method} {url}")

        with _network_errors():
            response = await self._client.request(
                method,
                url,
                headers=self.config.headers or None,
                timeout=self.config.timeout,
                **kwargs,
            )

        _raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise AnonDocsApiError(
                "Server returned a response that is not JSON", response.status_code
            ) from e

    async def _open_stream(self, endpoint: str, **kwargs: Any) -> httpx.Response:
        """Send a streaming POST and return the response with its body unread."""
        url = self._url(endpoint)
        headers: Dict[str, str] = {"Accept": "text/event-stream", **self.config.headers}
        # the timeout covers getting the stream started, not the gaps between events
        timeout = httpx.Timeout(self.config.timeout, read=None)

        logger.debug(f"POST {url} (stream)")

        with _network_errors():
            request = self._client.build_request(
                "POST", url, headers=headers, timeout=timeout, **kwargs
            )
            response = await self._client.send(request, stream=True)

            if not response.is_success:
                try:
                    await response.aread()
                finally:
                    await response.aclose()

        _raise_for_status(response)
        return response

    async def _stream_request(
        self,
        endpoint: str,
        callbacks: StreamCallbacks,
        **kwargs: Any,
    ) -> Optional[AnonymizationResult]:
        try:
            response = await self._open_stream(endpoint, **kwargs)
        except AnonDocsError as e:
            notify_error(callbacks, e)
            raise

        return await run_stream(response, callbacks)
