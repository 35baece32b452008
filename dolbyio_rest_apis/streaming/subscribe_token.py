"""Manage the subscribe tokens that viewers present to watch secured streams.

RULES:
- update() uses the v2 endpoint, the other calls the v1 endpoints
- The list_tokens*() pages are 1-based; items_on_page is between 1 and 100
- Token IDs are integers; the token value itself is a secret string
"""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.decode import ARRAY, decode
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.streaming import list_params, rts_request
from dolbyio_rest_apis.streaming.models import (
    CreateSubscribeToken,
    SubscribeToken,
    UpdateSubscribeToken,
    unwrap,
)


async def read(transport: HttpTransport, credential: Credential, token_id: int) -> SubscribeToken:
    request = rts_request(transport, credential, "/api/subscribe_token/{}".format(token_id))
    response = await transport.send_get(request)
    return SubscribeToken.from_dict(unwrap(response, "subscribe token"))


async def delete(transport: HttpTransport, credential: Credential, token_id: int) -> bool:
    """Delete a subscribe token; returns the API's success flag."""
    request = rts_request(transport, credential, "/api/subscribe_token/{}".format(token_id))
    response = await transport.send_delete(request)
    return bool(unwrap(response, "subscribe token deletion"))


async def create(
    transport: HttpTransport,
    credential: Credential,
    token: CreateSubscribeToken,
) -> SubscribeToken:
    request = rts_request(
        transport, credential, "/api/subscribe_token/", body=token.to_payload()
    )
    response = await transport.send_post(request)
    return SubscribeToken.from_dict(unwrap(response, "subscribe token"))


async def update(
    transport: HttpTransport,
    credential: Credential,
    token_id: int,
    changes: UpdateSubscribeToken,
) -> SubscribeToken:
    request = rts_request(
        transport,
        credential,
        "/api/v2/subscribe_token/{}".format(token_id),
        body=changes.to_payload(),
    )
    response = await transport.send_put(request)
    return SubscribeToken.from_dict(unwrap(response, "subscribe token"))


async def list_tokens(
    transport: HttpTransport,
    credential: Credential,
    sort_by: str = "Name",
    page: int = 1,
    items_on_page: int = 10,
    is_descending: bool = False,
) -> List[SubscribeToken]:
    """Get one page of subscribe tokens.

    Args:
        sort_by: "Name" or "AddedOn".
    """
    params = list_params(sort_by, page, items_on_page, is_descending)
    return await _list(transport, credential, "/api/subscribe_token/list", params)


async def list_tokens_by_name(
    transport: HttpTransport,
    credential: Credential,
    name: str,
    sort_by: str = "Name",
    page: int = 1,
    items_on_page: int = 10,
    is_descending: bool = False,
    filter_by: Optional[str] = None,
) -> List[SubscribeToken]:
    """Get one page of the subscribe tokens whose token or stream name matches ``name``.

    Args:
        filter_by: "TokenName" or "StreamName"; both are searched when None.
    """
    params = list_params(
        sort_by, page, items_on_page, is_descending, name=name, filterBy=filter_by
    )
    return await _list(transport, credential, "/api/subscribe_token/list_by_name", params)


async def _list(
    transport: HttpTransport,
    credential: Credential,
    path: str,
    params: Dict[str, str],
) -> List[SubscribeToken]:
    request = rts_request(transport, credential, path, params=params)
    response = await transport.send_get(request)
    items = decode(unwrap(response, "subscribe token list"), ARRAY, "subscribe token list")
    return [SubscribeToken.from_dict(item) for item in items]
