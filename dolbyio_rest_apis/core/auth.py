"""Credentials and the JWT token returned by the authentication endpoints.

WHY: Depending on the platform, an endpoint authenticates with a JWT
obtained from the token endpoint, with a raw API key/secret used as a
bearer value (Streaming, Media), or with HTTP Basic app credentials
(token acquisition itself). Passing "a string or a token" around and
inspecting its type at runtime hides which one is in play.

HOW: Three small frozen dataclasses, one per scheme, all exposing
authorization_header(). Endpoint functions accept the Credential union and
call that method once while building their RequestOptions.

RULES:
- BearerTokenCredential uses the token's own token_type ("Bearer" by default)
- ApiKeyCredential sends "Bearer <api_key>"
- BasicCredential sends "Basic base64(key:secret)"
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Dict, Optional, Union

from dolbyio_rest_apis.core.decode import NUMBER, STRING, decode, obj

_JWT_SCHEMA = obj(
    {"access_token": STRING},
    {
        "token_type": STRING,
        "expires_in": NUMBER,
        "refresh_token": STRING,
        "scope": STRING,
    },
)


@dataclass(frozen=True)
class JwtToken:
    """A JWT issued by one of the token endpoints.

    RULES:
    - access_token is always present
    - token_type defaults to "Bearer" when the server omits it
    - expires_in is in seconds
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> JwtToken:
        decode(data, _JWT_SCHEMA, "JWT token")
        expires_in = data.get("expires_in")
        return cls(
            access_token=data["access_token"],
            token_type=data.get("token_type") or "Bearer",
            expires_in=int(expires_in) if expires_in is not None else None,
            refresh_token=data.get("refresh_token"),
            scope=data.get("scope"),
        )


@dataclass(frozen=True)
class BearerTokenCredential:
    """Authenticate with a JWT from get_api_access_token()."""

    token: JwtToken

    def authorization_header(self) -> str:
        return "{} {}".format(self.token.token_type, self.token.access_token)


@dataclass(frozen=True)
class ApiKeyCredential:
    """Authenticate with a raw API key or account secret sent as a bearer value."""

    api_key: str

    def authorization_header(self) -> str:
        return "Bearer {}".format(self.api_key)


@dataclass(frozen=True)
class BasicCredential:
    """Authenticate with an app key and secret using HTTP Basic."""

    key: str
    secret: str

    def authorization_header(self) -> str:
        raw = "{}:{}".format(self.key, self.secret).encode("utf-8")
        return "Basic {}".format(base64.b64encode(raw).decode("ascii"))


Credential = Union[BearerTokenCredential, ApiKeyCredential, BasicCredential]


def auth_headers(credential: Credential, json_body: bool = False) -> Dict[str, str]:
    """Return the standard JSON headers plus the Authorization header.

    Args:
        credential: Any Credential variant.
        json_body: Add ``Content-Type: application/json`` for requests
            that carry a JSON body.
    """
    headers = {
        "Accept": "application/json",
        "Authorization": credential.authorization_header(),
    }
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers
