"""Streaming (Millicast) REST APIs: cluster, streams, tokens, webhooks.

WHY: The Streaming REST API lives on its own host and wraps every
response in a {"status": ..., "data": ...} envelope. Callers only care
about the data.

HOW: rts_request() builds the RequestOptions for the Streaming host;
models.unwrap() checks the envelope and returns its data before the
endpoint modules decode it into dataclasses.

RULES:
- Authenticate with ApiKeyCredential(<account API secret>), see
  config.load_streaming_api_secret()
- Every call goes to Hostnames.rts (api.millicast.com)
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


def rts_request(
    transport: HttpTransport,
    credential: Credential,
    path: str,
    body: Optional[Any] = None,
    params: Optional[Dict[str, str]] = None,
) -> RequestOptions:
    return RequestOptions(
        hostname=transport.hostnames.rts,
        path=path,
        headers=auth_headers(credential, json_body=body is not None),
        params=params,
        body=json.dumps(body) if body is not None else None,
    )


def list_params(
    sort_by: str,
    page: int,
    items_on_page: int,
    is_descending: bool,
    **filters: Optional[str],
) -> Dict[str, str]:
    """Query string of the token listing endpoints; filters left None are omitted."""
    params = {k: v for k, v in filters.items() if v is not None}
    params.update(
        {
            "sortBy": sort_by,
            "page": str(page),
            "itemsOnPage": str(items_on_page),
            "isDescending": "true" if is_descending else "false",
        }
    )
    return params
