"""Broadcast a conference over RTMP or to a Real-time Streaming (Millicast) stream."""

from __future__ import annotations

import json
from typing import List, Optional, Union

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


def _mix_options(
    transport: HttpTransport, credential: Credential, path: str, body: Optional[dict] = None
) -> RequestOptions:
    return RequestOptions(
        hostname=transport.hostnames.comms_legacy,
        path=path,
        headers=auth_headers(credential, json_body=True),
        body=json.dumps(body) if body is not None else None,
    )


async def start_rtmp(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    rtmp_urls: Union[str, List[str]],
) -> None:
    """Start streaming a conference to one or more RTMP endpoints.

    A Stream.Rtmp.InProgress webhook fires once streaming has started.
    Several URLs are sent joined with "|".
    """
    uri = rtmp_urls if isinstance(rtmp_urls, str) else "|".join(rtmp_urls)
    options = _mix_options(
        transport,
        credential,
        "/v2/conferences/mix/{}/rtmp/start".format(conference_id),
        {"uri": uri},
    )
    await transport.send_post(options)


async def stop_rtmp(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> None:
    options = _mix_options(
        transport, credential, "/v2/conferences/mix/{}/rtmp/stop".format(conference_id)
    )
    await transport.send_post(options)


async def start_lls(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    stream_name: str,
    publishing_token: str,
) -> None:
    """Start a low-latency stream of the conference to a Millicast stream."""
    options = _mix_options(
        transport,
        credential,
        "/v2/conferences/mix/{}/lls/start".format(conference_id),
        {"streamName": stream_name, "publishingToken": publishing_token},
    )
    await transport.send_post(options)


async def stop_lls(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> None:
    options = _mix_options(
        transport, credential, "/v2/conferences/mix/{}/lls/stop".format(conference_id)
    )
    await transport.send_post(options)
