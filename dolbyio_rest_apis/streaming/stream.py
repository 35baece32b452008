"""Stop live streams."""

from __future__ import annotations

from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.streaming import rts_request


async def stop(transport: HttpTransport, credential: Credential, stream_id: str) -> None:
    """Stop one stream.

    Args:
        stream_id: "<account id>/<stream name>".
    """
    request = rts_request(transport, credential, "/api/stream/stop", body={"streamId": stream_id})
    await transport.send_post(request)


async def stop_all(transport: HttpTransport, credential: Credential) -> None:
    """Stop every active stream of the account."""
    request = rts_request(transport, credential, "/api/stream/stop/all", body={})
    await transport.send_post(request)
