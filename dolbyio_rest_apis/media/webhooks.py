"""Register the webhook that Media API jobs call when they complete."""

from __future__ import annotations

import json
from typing import Dict, Optional

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions
from dolbyio_rest_apis.media.models import Webhook

_WEBHOOKS_PATH = "/media/webhooks"


def _callback_body(url: str, headers: Optional[Dict[str, str]]) -> str:
    callback: Dict[str, object] = {"url": url}
    if headers:
        callback["headers"] = headers
    return json.dumps({"callback": callback})


def _webhook_id(response: object) -> Optional[str]:
    if isinstance(response, dict):
        return response.get("webhook_id")
    return None


async def register_webhook(
    transport: HttpTransport,
    credential: Credential,
    url: str,
    headers: Optional[Dict[str, str]] = None,
) -> Optional[str]:
    """Register a webhook and return its ID.

    Args:
        url: Callback URL called with the job status on completion.
        headers: Extra headers the platform sends with each callback.
    """
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=_WEBHOOKS_PATH,
        headers=auth_headers(credential, json_body=True),
        body=_callback_body(url, headers),
    )
    response = await transport.send_post(options)
    return _webhook_id(response)


async def update_webhook(
    transport: HttpTransport,
    credential: Credential,
    webhook_id: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
) -> None:
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=_WEBHOOKS_PATH,
        headers=auth_headers(credential, json_body=True),
        params={"id": webhook_id},
        body=_callback_body(url, headers),
    )
    await transport.send_put(options)


async def retrieve_webhook(
    transport: HttpTransport,
    credential: Credential,
    webhook_id: str,
) -> Webhook:
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=_WEBHOOKS_PATH,
        headers=auth_headers(credential),
        params={"id": webhook_id},
    )
    response = await transport.send_get(options)
    return Webhook.from_dict(response)


async def delete_webhook(
    transport: HttpTransport,
    credential: Credential,
    webhook_id: str,
) -> Optional[str]:
    """Delete a webhook and return the ID of the deleted webhook."""
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=_WEBHOOKS_PATH,
        headers=auth_headers(credential),
        params={"id": webhook_id},
    )
    response = await transport.send_delete(options)
    return _webhook_id(response)
