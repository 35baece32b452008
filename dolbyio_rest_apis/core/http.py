"""Async HTTP transport shared by every Dolby.io endpoint.

WHY: All endpoints follow the same pattern: build a hostname + path +
query string + headers + optional body, send it, reject non-success
statuses, and parse JSON. Centralizing that here keeps the endpoint
modules down to field mapping.

HOW: HttpTransport wraps httpx.AsyncClient. It is an async context
manager. Enter it to open the connection, exit to close it. Requests are
described by RequestOptions; send_get/send_post/... differ only by method.
download() streams a response body to disk, upload() streams a file to a
pre-signed URL.

RULES:
- Always use the async context manager (async with HttpTransport() as transport:)
- Status outside [200, 400) raises DolbyIoAPIError with the response text
- Empty response bodies return None
- Network failures raise NetworkError; unparsable JSON raises MalformedResponseError
- One INFO log line per completed request: "[GET] 200 - https://host/path"
- No retries; callers decide what to do with an error
"""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from dolbyio_rest_apis import __version__
from dolbyio_rest_apis.config import HTTP_TIMEOUT_S, Hostnames

logger = logging.getLogger(__name__)

USER_AGENT = "DolbyIoRestApiSdk/{}; Python/{}".format(
    __version__, platform.python_version()
)

_TRANSFER_CHUNK_SIZE = 64 * 1024


class TransportError(Exception):
    """Base class for every failure raised by HttpTransport."""


class DolbyIoAPIError(TransportError):
    """Raised when a Dolby.io endpoint answers with a non-success status.

    WHY: Callers need a typed exception to distinguish API rejections
    (bad token, unknown conference, ...) from network errors.

    HOW: Wraps the HTTP status code and response body.

    RULES:
    - Always include status_code and message
    - message is the response body text (may be empty)
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        if message:
            text = "Dolby.io API error {}: {}".format(status_code, message)
        else:
            text = "Dolby.io API error {}".format(status_code)
        super().__init__(text)


class NetworkError(TransportError):
    """Raised when the request could not be sent or the response not received."""


class MalformedResponseError(TransportError):
    """Raised when a success response carries a body that is not valid JSON."""


@dataclass
class RequestOptions:
    """Everything needed to send one request.

    RULES:
    - hostname: bare host, e.g. "api.voxeet.com"
    - path: URL path; a missing leading "/" is added when sending
    - params: query parameters; mutable, the pagination helpers rewrite
      their cursor key in place
    - body: sent verbatim (JSON or form-encoded text)
    """

    hostname: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, str]] = None
    body: Optional[str] = None

    @property
    def url(self) -> str:
        path = self.path if self.path.startswith("/") else "/" + self.path
        return "https://{}{}".format(self.hostname, path)


def _status_ok(status_code: int) -> bool:
    return 200 <= status_code < 400


async def _iter_file(file_path: Path) -> AsyncIterator[bytes]:
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(_TRANSFER_CHUNK_SIZE)
            if not chunk:
                return
            yield chunk


class HttpTransport:
    """Async HTTP transport for the Dolby.io REST APIs.

    WHY: Provides one place that knows how to talk HTTP, so the endpoint
    modules stay declarative and can be tested against a fake transport.

    HOW: Wraps httpx.AsyncClient with the SDK User-Agent and redirect
    following. Use as an async context manager to make sure the client is
    closed. An httpx transport can be injected (httpx.MockTransport in tests).

    RULES:
    - Use as: async with HttpTransport() as transport: ...
    - hostnames defaults to Hostnames.from_env()
    - timeout defaults to DOLBYIO_HTTP_TIMEOUT_S (60s)
    """

    def __init__(
        self,
        hostnames: Optional[Hostnames] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._hostnames = hostnames or Hostnames.from_env()
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT_S
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def hostnames(self) -> Hostnames:
        return self._hostnames

    async def __aenter__(self) -> HttpTransport:
        self._client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "HttpTransport must be used as an async context manager: "
                "async with HttpTransport() as transport: ..."
            )
        return self._client

    # ------------------------------------------------------------------
    # JSON requests
    # ------------------------------------------------------------------

    async def send_get(self, options: RequestOptions) -> Any:
        return await self._send("GET", options)

    async def send_post(self, options: RequestOptions) -> Any:
        return await self._send("POST", options)

    async def send_put(self, options: RequestOptions) -> Any:
        return await self._send("PUT", options)

    async def send_delete(self, options: RequestOptions) -> Any:
        return await self._send("DELETE", options)

    async def send_patch(self, options: RequestOptions) -> Any:
        return await self._send("PATCH", options)

    async def _send(self, method: str, options: RequestOptions) -> Any:
        """Send a request and return the parsed JSON body.

        Returns:
            The decoded JSON value, or None when the body is empty.
        """
        client = self._ensure_client()
        request = client.build_request(
            method,
            options.url,
            params=options.params or None,
            headers=options.headers,
            content=options.body if options.body else None,
        )

        try:
            resp = await client.send(request)
        except httpx.HTTPError as exc:
            logger.error("[%s] %s failed: %s", method, request.url, exc)
            raise NetworkError("{} {} failed: {}".format(method, request.url, exc)) from exc

        logger.info("[%s] %s - %s", method, resp.status_code, request.url)

        if not _status_ok(resp.status_code):
            raise DolbyIoAPIError(resp.status_code, resp.text)

        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "{} {} returned a non-JSON body: {!r}".format(
                    method, request.url, resp.text[:200]
                )
            ) from exc

    # ------------------------------------------------------------------
    # File transfer
    # ------------------------------------------------------------------

    async def download(self, options: RequestOptions, file_path: Path) -> None:
        """Stream the response body of a GET request into ``file_path``.

        RULES:
        - The body is written to "<file_path>.part" and renamed over
          file_path only once it has been fully received
        - On any failure the .part file is removed and an existing
          file_path is left untouched
        - Raises DolbyIoAPIError on non-success status, NetworkError on I/O
          failure with the remote end
        """
        client = self._ensure_client()
        file_path = Path(file_path)
        part_path = file_path.with_name(file_path.name + ".part")

        try:
            async with client.stream(
                "GET",
                options.url,
                params=options.params or None,
                headers=options.headers,
            ) as resp:
                logger.info("[GET] %s - %s", resp.status_code, resp.url)
                if not _status_ok(resp.status_code):
                    await resp.aread()
                    raise DolbyIoAPIError(resp.status_code, resp.text)

                with open(part_path, "wb") as f:
                    async for chunk in resp.aiter_bytes(_TRANSFER_CHUNK_SIZE):
                        f.write(chunk)
            part_path.replace(file_path)
        except httpx.HTTPError as exc:
            logger.error("[GET] %s failed: %s", options.url, exc)
            raise NetworkError("GET {} failed: {}".format(options.url, exc)) from exc
        finally:
            if part_path.exists():
                part_path.unlink()

    async def upload(self, file_path: Path, upload_url: str) -> None:
        """PUT a local file to a pre-signed upload URL.

        RULES:
        - upload_url is a full URL (scheme included), as returned by the API
        - The file is streamed in chunks, never read into memory at once
        - Content-Length is set from the file size
        - Raises DolbyIoAPIError on non-success status
        """
        client = self._ensure_client()
        file_path = Path(file_path)
        size = file_path.stat().st_size

        try:
            resp = await client.put(
                upload_url,
                content=_iter_file(file_path),
                headers={"Content-Length": str(size)},
            )
        except httpx.HTTPError as exc:
            logger.error("[PUT] %s failed: %s", upload_url, exc)
            raise NetworkError("PUT {} failed: {}".format(upload_url, exc)) from exc

        logger.info("[PUT] %s - %s", resp.status_code, upload_url)
        if not _status_ok(resp.status_code):
            raise DolbyIoAPIError(resp.status_code, resp.text)
