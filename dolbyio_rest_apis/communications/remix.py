"""Remix: regenerate the recording of a past conference with the current layout.

RULES:
- start() triggers the job; a Recording.MP4.Available webhook fires when done
- get_status() is required for conferences using enhanced access control
"""

from __future__ import annotations

from dolbyio_rest_apis.communications.models import RemixStatus
from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


async def start(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> RemixStatus:
    options = RequestOptions(
        hostname=transport.hostnames.comms_legacy,
        path="/v2/conferences/mix/{}/remix/start".format(conference_id),
        headers=auth_headers(credential, json_body=True),
    )
    response = await transport.send_post(options)
    return RemixStatus.from_dict(response)


async def get_status(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> RemixStatus:
    options = RequestOptions(
        hostname=transport.hostnames.comms_legacy,
        path="/v2/conferences/mix/{}/remix/status".format(conference_id),
        headers=auth_headers(credential),
    )
    response = await transport.send_get(options)
    return RemixStatus.from_dict(response)
