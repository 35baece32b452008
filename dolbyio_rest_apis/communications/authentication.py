"""Client access tokens for the Communications client SDKs."""

from __future__ import annotations

import json
from typing import List, Optional

from dolbyio_rest_apis.core.auth import Credential, JwtToken, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


async def get_client_access_token(
    transport: HttpTransport,
    credential: Credential,
    session_scope: List[str],
    external_id: Optional[str] = None,
    expires_in: Optional[int] = None,
    region: Optional[str] = None,
) -> JwtToken:
    """Generate a client access token that a backend hands to a client app.

    RULES:
    - POST /v2/client-access-token on the Communications host
    - session_scope is sent space-separated (e.g. "conf:create notifications:set")
    - external_id and expires_in (seconds) are only sent when set

    Args:
        transport: Open HttpTransport.
        credential: Usually a BearerTokenCredential from get_api_access_token().
        session_scope: Scopes granted to the client token.
        external_id: External ID of the participant the token is for.
        expires_in: Token lifetime in seconds.
        region: Optional region prefix for the Communications host.

    Returns:
        The client access token.
    """
    body = {"sessionScope": " ".join(session_scope)}
    if external_id:
        body["externalId"] = external_id
    if expires_in:
        body["expiresIn"] = expires_in

    headers = auth_headers(credential, json_body=True)
    headers["Cache-Control"] = "no-cache"

    options = RequestOptions(
        hostname=transport.hostnames.comms(region),
        path="/v2/client-access-token",
        headers=headers,
        body=json.dumps(body),
    )
    response = await transport.send_post(options)
    return JwtToken.from_dict(response)
