"""Manage the webhooks the Streaming platform calls on feed and recording events."""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.decode import ARRAY, decode
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.streaming import rts_request
from dolbyio_rest_apis.streaming.models import Webhook, hook_flags_payload, unwrap


def _webhook_path(webhook_id: int) -> str:
    return "/api/webhooks/{}".format(webhook_id)


async def read(transport: HttpTransport, credential: Credential, webhook_id: int) -> Webhook:
    response = await transport.send_get(
        rts_request(transport, credential, _webhook_path(webhook_id))
    )
    return Webhook.from_dict(unwrap(response, "webhook"))


async def add(
    transport: HttpTransport,
    credential: Credential,
    url: str,
    is_feed_hooks: bool,
    is_recording_hooks: bool,
    is_thumbnail_hooks: Optional[bool] = None,
    is_transcoder_hooks: Optional[bool] = None,
    is_clip_hooks: Optional[bool] = None,
) -> Webhook:
    """Register a webhook URL for the selected event families."""
    body: Dict[str, object] = {"url": url}
    body.update(
        hook_flags_payload(
            is_feed_hooks=is_feed_hooks,
            is_recording_hooks=is_recording_hooks,
            is_thumbnail_hooks=is_thumbnail_hooks,
            is_transcoder_hooks=is_transcoder_hooks,
            is_clip_hooks=is_clip_hooks,
        )
    )
    request = rts_request(transport, credential, "/api/webhooks/", body=body)
    response = await transport.send_post(request)
    return Webhook.from_dict(unwrap(response, "webhook"))


async def update(
    transport: HttpTransport,
    credential: Credential,
    webhook_id: int,
    url: Optional[str] = None,
    refresh_secret: Optional[bool] = None,
    is_feed_hooks: Optional[bool] = None,
    is_recording_hooks: Optional[bool] = None,
    is_thumbnail_hooks: Optional[bool] = None,
    is_transcoder_hooks: Optional[bool] = None,
    is_clip_hooks: Optional[bool] = None,
) -> Webhook:
    """Change a webhook; arguments left None are not sent."""
    body: Dict[str, object] = {}
    if url is not None:
        body["url"] = url
    if refresh_secret is not None:
        body["refreshSecret"] = refresh_secret
    body.update(
        hook_flags_payload(
            is_feed_hooks=is_feed_hooks,
            is_recording_hooks=is_recording_hooks,
            is_thumbnail_hooks=is_thumbnail_hooks,
            is_transcoder_hooks=is_transcoder_hooks,
            is_clip_hooks=is_clip_hooks,
        )
    )
    request = rts_request(transport, credential, _webhook_path(webhook_id), body=body)
    response = await transport.send_put(request)
    return Webhook.from_dict(unwrap(response, "webhook"))


async def delete(transport: HttpTransport, credential: Credential, webhook_id: int) -> None:
    request = rts_request(transport, credential, _webhook_path(webhook_id))
    await transport.send_delete(request)


async def list_webhooks(
    transport: HttpTransport,
    credential: Credential,
    starting_id: Optional[int] = None,
    item_count: Optional[int] = None,
    is_descending: bool = False,
) -> List[Webhook]:
    """Get one page of webhooks, starting after ``starting_id``."""
    params: Dict[str, str] = {}
    if starting_id:
        params["startingId"] = str(starting_id)
    if item_count:
        params["itemCount"] = str(item_count)
    if is_descending:
        params["isDescending"] = "true"
    request = rts_request(transport, credential, "/api/webhooks/list", params=params)
    response = await transport.send_get(request)
    items = decode(unwrap(response, "webhook list"), ARRAY, "webhook list")
    return [Webhook.from_dict(item) for item in items]
