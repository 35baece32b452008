"""Media API access tokens."""

from __future__ import annotations

from dolbyio_rest_apis.core.auth import BasicCredential, JwtToken
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


async def get_access_token(
    transport: HttpTransport,
    api_key: str,
    api_secret: str,
) -> JwtToken:
    """Exchange a Media API key and secret for a short-lived JWT.

    RULES:
    - Form-encoded POST /media/oauth2/token on the Media host
    - Authenticates with HTTP Basic (key:secret)
    """
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path="/media/oauth2/token",
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Cache-Control": "no-cache",
            "Authorization": BasicCredential(api_key, api_secret).authorization_header(),
        },
        body="grant_type=client_credentials",
    )
    response = await transport.send_post(options)
    return JwtToken.from_dict(response)
