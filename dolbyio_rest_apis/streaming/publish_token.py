"""Manage the publish tokens that broadcasters use to start streams.

RULES:
- update() uses the v2 endpoint, the other calls the v1 endpoints
- The list_tokens*() pages are 1-based; items_on_page is between 1 and 100
- get_active_token_ids() and sync_restream() only concern live streams
- disable() reports per-token failures instead of raising
"""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.decode import ARRAY, decode
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.streaming import list_params, rts_request
from dolbyio_rest_apis.streaming.models import (
    ActivePublishToken,
    CreatePublishToken,
    DisablePublishTokenResponse,
    PublishToken,
    UpdatePublishToken,
    unwrap,
)


async def read(transport: HttpTransport, credential: Credential, token_id: int) -> PublishToken:
    request = rts_request(transport, credential, "/api/publish_token/{}".format(token_id))
    response = await transport.send_get(request)
    return PublishToken.from_dict(unwrap(response, "publish token"))


async def delete(transport: HttpTransport, credential: Credential, token_id: int) -> bool:
    """Delete a publish token; returns the API's success flag."""
    request = rts_request(transport, credential, "/api/publish_token/{}".format(token_id))
    response = await transport.send_delete(request)
    return bool(unwrap(response, "publish token deletion"))


async def create(
    transport: HttpTransport,
    credential: Credential,
    token: CreatePublishToken,
) -> PublishToken:
    request = rts_request(transport, credential, "/api/publish_token/", body=token.to_payload())
    response = await transport.send_post(request)
    return PublishToken.from_dict(unwrap(response, "publish token"))


async def update(
    transport: HttpTransport,
    credential: Credential,
    token_id: int,
    changes: UpdatePublishToken,
) -> PublishToken:
    request = rts_request(
        transport,
        credential,
        "/api/v2/publish_token/{}".format(token_id),
        body=changes.to_payload(),
    )
    response = await transport.send_put(request)
    return PublishToken.from_dict(unwrap(response, "publish token"))


async def list_tokens(
    transport: HttpTransport,
    credential: Credential,
    sort_by: str = "Name",
    page: int = 1,
    items_on_page: int = 10,
    is_descending: bool = False,
) -> List[PublishToken]:
    """Get one page of publish tokens.

    Args:
        sort_by: "Name" or "AddedOn".
    """
    params = list_params(sort_by, page, items_on_page, is_descending)
    return await _list(transport, credential, "/api/publish_token/list", params)


async def list_tokens_by_name(
    transport: HttpTransport,
    credential: Credential,
    name: str,
    sort_by: str = "Name",
    page: int = 1,
    items_on_page: int = 10,
    is_descending: bool = False,
    filter_by: Optional[str] = None,
) -> List[PublishToken]:
    """Get one page of the publish tokens whose token or stream name matches ``name``.

    Tokens with wildcard stream names are never returned. An empty page
    means the end of the listing was reached.

    Args:
        filter_by: "TokenName" or "StreamName"; both are searched when None.
    """
    params = list_params(
        sort_by, page, items_on_page, is_descending, name=name, filterBy=filter_by
    )
    return await _list(transport, credential, "/api/publish_token/list_by_name", params)


async def list_tokens_by_cluster(
    transport: HttpTransport,
    credential: Credential,
    cluster: str,
    sort_by: str = "Name",
    page: int = 1,
    items_on_page: int = 10,
    is_descending: bool = False,
) -> List[PublishToken]:
    """Get one page of the publish tokens routed to ``cluster``."""
    params = list_params(sort_by, page, items_on_page, is_descending, cluster=cluster)
    return await _list(transport, credential, "/api/publish_token/list_by_cluster", params)


async def _list(
    transport: HttpTransport,
    credential: Credential,
    path: str,
    params: Dict[str, str],
) -> List[PublishToken]:
    request = rts_request(transport, credential, path, params=params)
    response = await transport.send_get(request)
    items = decode(unwrap(response, "publish token list"), ARRAY, "publish token list")
    return [PublishToken.from_dict(item) for item in items]


async def get_active_token_ids(
    transport: HttpTransport,
    credential: Credential,
    stream_id: str,
) -> ActivePublishToken:
    """Get the IDs of the publish tokens in use by the live stream ``stream_id``."""
    request = rts_request(
        transport, credential, "/api/publish_token/active", params={"streamId": stream_id}
    )
    response = await transport.send_get(request)
    return ActivePublishToken.from_dict(unwrap(response, "active publish token"))


async def get_all_active_token_ids(
    transport: HttpTransport,
    credential: Credential,
) -> ActivePublishToken:
    """Get the IDs of the publish tokens in use by every live stream of the account."""
    request = rts_request(transport, credential, "/api/publish_token/active/all")
    response = await transport.send_get(request)
    return ActivePublishToken.from_dict(unwrap(response, "active publish token"))


async def disable(
    transport: HttpTransport,
    credential: Credential,
    token_ids: List[int],
) -> DisablePublishTokenResponse:
    """Disable several publish tokens at once."""
    request = rts_request(
        transport, credential, "/api/publish_token/disable", body={"tokenIds": list(token_ids)}
    )
    response = await transport.send_patch(request)
    return DisablePublishTokenResponse.from_dict(unwrap(response, "disable publish token"))


async def sync_restream(transport: HttpTransport, credential: Credential, token_id: int) -> bool:
    """Apply re-stream configuration changes to the token's running streams now."""
    request = rts_request(
        transport, credential, "/api/publish_token/{}/restream/sync".format(token_id)
    )
    response = await transport.send_post(request)
    return bool(unwrap(response, "restream sync"))
