"""Shared plumbing: HTTP transport, credentials, response decoding, pagination.

RULES:
- Endpoint modules import from here; nothing here imports an endpoint module
"""

from dolbyio_rest_apis.core.auth import (
    ApiKeyCredential,
    BasicCredential,
    BearerTokenCredential,
    Credential,
    JwtToken,
)
from dolbyio_rest_apis.core.decode import ResponseDecodeError
from dolbyio_rest_apis.core.http import (
    DolbyIoAPIError,
    HttpTransport,
    MalformedResponseError,
    NetworkError,
    RequestOptions,
    TransportError,
)
from dolbyio_rest_apis.core.pagination import PaginationError, get_all, get_all_mapping

__all__ = [
    "ApiKeyCredential",
    "BasicCredential",
    "BearerTokenCredential",
    "Credential",
    "DolbyIoAPIError",
    "HttpTransport",
    "JwtToken",
    "MalformedResponseError",
    "NetworkError",
    "PaginationError",
    "RequestOptions",
    "ResponseDecodeError",
    "TransportError",
    "get_all",
    "get_all_mapping",
]
