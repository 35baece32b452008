"""Start and stop conference recordings."""

from __future__ import annotations

import json
from typing import Optional

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


async def start(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    layout_url: Optional[str] = None,
    region: Optional[str] = None,
) -> None:
    """Start recording a conference.

    Args:
        layout_url: Overrides the dashboard layout. "default" selects the
            Dolby.io default layout; None keeps the dashboard setting.
            Ignored for audio-only recordings.
    """
    body = {}
    if layout_url:
        body["layoutUrl"] = layout_url

    options = RequestOptions(
        hostname=transport.hostnames.comms(region),
        path="/v2/conferences/mix/{}/recording/start".format(conference_id),
        headers=auth_headers(credential, json_body=True),
        body=json.dumps(body),
    )
    await transport.send_post(options)


async def stop(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    region: Optional[str] = None,
) -> None:
    """Stop recording a conference."""
    options = RequestOptions(
        hostname=transport.hostnames.comms(region),
        path="/v2/conferences/mix/{}/recording/stop".format(conference_id),
        headers=auth_headers(credential, json_body=True),
    )
    await transport.send_post(options)
