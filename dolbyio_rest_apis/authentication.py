"""API access tokens for the Dolby.io platform.

WHY: Every Communications call (and the client token endpoint) needs a JWT
obtained from the app key and secret. This is the only call that
authenticates with the raw app credentials.

HOW: Form-encoded POST to /v1/auth/token with HTTP Basic auth; the JSON
response is decoded into a JwtToken, which callers wrap in a
BearerTokenCredential for the other endpoints.

RULES:
- grant_type is always client_credentials
- expires_in (seconds) and scope are only sent when set
- scope is sent space-separated
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlencode

from dolbyio_rest_apis.core.auth import BasicCredential, JwtToken
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


async def get_api_access_token(
    transport: HttpTransport,
    app_key: str,
    app_secret: str,
    expires_in: Optional[int] = None,
    scope: Optional[List[str]] = None,
) -> JwtToken:
    """Get an API access token for the app.

    Args:
        transport: Open HttpTransport.
        app_key: App key from the dashboard (see config.load_app_credentials).
        app_secret: App secret from the dashboard.
        expires_in: Token lifetime in seconds.
        scope: Scopes to request, e.g. ["comms:*"].

    Returns:
        The JWT; wrap it in a BearerTokenCredential for other calls.
    """
    form = {"grant_type": "client_credentials"}
    if expires_in:
        form["expires_in"] = str(int(expires_in))
    if scope:
        form["scope"] = " ".join(scope)

    options = RequestOptions(
        hostname=transport.hostnames.api,
        path="/v1/auth/token",
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Cache-Control": "no-cache",
            "Authorization": BasicCredential(app_key, app_secret).authorization_header(),
        },
        body=urlencode(form),
    )
    response = await transport.send_post(options)
    return JwtToken.from_dict(response)
