"""Monitor API: past and ongoing conferences, recordings and webhook events.

WHY: The Monitor endpoints share one host (api.voxeet.com), one
authentication scheme and the same time-range/paging query parameters.

HOW: monitor_request() builds the GET RequestOptions; range_params()
renders the from/to/max window the way every listing endpoint expects.

RULES:
- from_/to are epoch milliseconds, defaulting to the whole history
- Single-page calls send max and an optional start cursor
- "all" calls send page_size as max and never a start cursor
"""

from __future__ import annotations

from typing import Dict, Optional

from dolbyio_rest_apis.config import DEFAULT_FROM, DEFAULT_PAGE_SIZE, DEFAULT_TO
from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


def range_params(
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
) -> Dict[str, str]:
    params = {"from": str(from_), "to": str(to), "max": str(max_)}
    if start:
        params["start"] = start
    return params


def flag(value: bool) -> str:
    """Render a boolean the way the query strings expect ("true"/"false")."""
    return "true" if value else "false"


def monitor_request(
    transport: HttpTransport,
    credential: Credential,
    path: str,
    params: Optional[Dict[str, str]] = None,
    accept: Optional[str] = None,
) -> RequestOptions:
    headers = auth_headers(credential)
    if accept:
        headers["Accept"] = accept
    return RequestOptions(
        hostname=transport.hostnames.comms_legacy,
        path=path,
        headers=headers,
        params=params,
    )
