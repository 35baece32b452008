"""Read and change the account's default Streaming cluster."""

from __future__ import annotations

from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.streaming import rts_request
from dolbyio_rest_apis.streaming.models import ClusterResponse, unwrap


async def read(transport: HttpTransport, credential: Credential) -> ClusterResponse:
    response = await transport.send_get(rts_request(transport, credential, "/api/cluster"))
    return ClusterResponse.from_dict(unwrap(response, "cluster"))


async def update(
    transport: HttpTransport,
    credential: Credential,
    default_cluster: str,
) -> ClusterResponse:
    """Set the cluster new publish tokens use unless they pick one."""
    request = rts_request(
        transport, credential, "/api/cluster", body={"defaultCluster": default_cluster}
    )
    response = await transport.send_put(request)
    return ClusterResponse.from_dict(unwrap(response, "cluster"))
