"""Tests for configuration, credentials, response decoding and token calls.

WHY: Hostnames and credentials are resolved once and then trusted by every
endpoint. Wrong defaults, a malformed Authorization header or a JWT
payload accepted with missing fields would only surface as confusing API
errors much later.

HOW: Environment overrides are set with monkeypatch. Token endpoints run
against the FakeApi fixture.

RULES:
- Never depends on a real .env file: every variable used is set or deleted
- Token calls are checked for method, host, path, auth header and body
"""

from __future__ import annotations

import base64
import dataclasses
from urllib.parse import parse_qs

import pytest

from dolbyio_rest_apis.authentication import get_api_access_token
from dolbyio_rest_apis.communications.authentication import get_client_access_token
from dolbyio_rest_apis.config import (
    DEFAULT_FROM,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TO,
    Hostnames,
    load_app_credentials,
    load_streaming_api_secret,
)
from dolbyio_rest_apis.core.auth import (
    ApiKeyCredential,
    BasicCredential,
    BearerTokenCredential,
    JwtToken,
    auth_headers,
)
from dolbyio_rest_apis.core.decode import STRING, ResponseDecodeError, decode, obj
from dolbyio_rest_apis.media.authentication import get_access_token


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestHostnames:
    def test_defaults(self):
        hostnames = Hostnames()
        assert hostnames.api == "api.dolby.io"
        assert hostnames.comms() == "comms.api.dolby.io"
        assert hostnames.comms_legacy == "api.voxeet.com"
        assert hostnames.rts == "api.millicast.com"
        assert hostnames.mapi == "api.dolby.com"

    def test_only_hosts_in_use_are_configurable(self):
        names = [f.name for f in dataclasses.fields(Hostnames)]
        assert names == ["api", "comms_base", "comms_legacy", "rts", "mapi"]

    def test_region_prefix(self):
        assert Hostnames().comms("eu") == "eu.comms.api.dolby.io"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DOLBYIO_COMMS_LEGACY_HOSTNAME", "staging.voxeet.com")
        monkeypatch.setenv("DOLBYIO_MAPI_HOSTNAME", "localhost:8443")
        hostnames = Hostnames.from_env()
        assert hostnames.comms_legacy == "staging.voxeet.com"
        assert hostnames.mapi == "localhost:8443"
        assert hostnames.api == "api.dolby.io"

    def test_hostnames_are_immutable(self):
        with pytest.raises(AttributeError):
            Hostnames().api = "elsewhere"

    def test_listing_defaults(self):
        assert DEFAULT_FROM == 0
        assert DEFAULT_TO == 9999999999999
        assert DEFAULT_PAGE_SIZE == 100


class TestCredentialLoading:
    def test_app_credentials(self, monkeypatch):
        monkeypatch.setenv("DOLBYIO_APP_KEY", "key")
        monkeypatch.setenv("DOLBYIO_APP_SECRET", "secret")
        assert load_app_credentials() == ("key", "secret")

    def test_missing_variable_is_named(self, monkeypatch):
        monkeypatch.setenv("DOLBYIO_APP_KEY", "key")
        monkeypatch.delenv("DOLBYIO_APP_SECRET", raising=False)
        with pytest.raises(ValueError, match="DOLBYIO_APP_SECRET"):
            load_app_credentials()

    def test_blank_streaming_secret_is_missing(self, monkeypatch):
        monkeypatch.setenv("DOLBYIO_RTS_API_SECRET", "   ")
        with pytest.raises(ValueError, match="DOLBYIO_RTS_API_SECRET"):
            load_streaming_api_secret()


# ---------------------------------------------------------------------------
# Credentials and decoding
# ---------------------------------------------------------------------------


class TestCredentials:
    def test_bearer_token_uses_token_type(self):
        credential = BearerTokenCredential(JwtToken(access_token="abc", token_type="bearer"))
        assert credential.authorization_header() == "bearer abc"

    def test_api_key(self):
        assert ApiKeyCredential("s3cr3t").authorization_header() == "Bearer s3cr3t"

    def test_basic(self):
        header = BasicCredential("app", "pw").authorization_header()
        assert header == "Basic " + base64.b64encode(b"app:pw").decode("ascii")

    def test_auth_headers_json(self):
        headers = auth_headers(ApiKeyCredential("k"), json_body=True)
        assert headers == {
            "Accept": "application/json",
            "Authorization": "Bearer k",
            "Content-Type": "application/json",
        }

    def test_auth_headers_without_body(self):
        assert "Content-Type" not in auth_headers(ApiKeyCredential("k"))


class TestDecode:
    def test_valid_payload_is_returned_unchanged(self):
        data = {"id": "x", "extra": 1}
        assert decode(data, obj({"id": STRING}), "thing") is data

    def test_missing_required_field(self):
        with pytest.raises(ResponseDecodeError, match="Unexpected thing payload"):
            decode({}, obj({"id": STRING}), "thing")

    def test_wrong_type_reports_location(self):
        with pytest.raises(ResponseDecodeError, match="at id"):
            decode({"id": 3}, obj({"id": STRING}), "thing")

    def test_optional_field_accepts_null(self):
        decode({"id": "x", "alias": None}, obj({"id": STRING}, {"alias": STRING}), "thing")

    def test_decode_error_is_value_error(self):
        assert issubclass(ResponseDecodeError, ValueError)

    def test_jwt_from_dict_defaults(self):
        token = JwtToken.from_dict({"access_token": "abc", "expires_in": 1800})
        assert token.token_type == "Bearer"
        assert token.expires_in == 1800

    def test_jwt_without_access_token_is_rejected(self):
        with pytest.raises(ResponseDecodeError):
            JwtToken.from_dict({"token_type": "Bearer"})


# ---------------------------------------------------------------------------
# Token endpoints
# ---------------------------------------------------------------------------

_TOKEN = {"access_token": "jwt-1", "token_type": "Bearer", "expires_in": 3600}


class TestTokenEndpoints:
    def test_api_access_token(self, fake_api):
        api = fake_api(_TOKEN)

        token = api.run(
            lambda t: get_api_access_token(
                t, "app", "pw", expires_in=600, scope=["comms:*", "media:*"]
            )
        )

        assert token.access_token == "jwt-1"
        request = api.last
        assert request.method == "POST"
        assert request.url.host == "api.dolby.io"
        assert request.url.path == "/v1/auth/token"
        assert request.headers["Authorization"] == BasicCredential("app", "pw").authorization_header()
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        form = parse_qs(request.content.decode("ascii"))
        assert form == {
            "grant_type": ["client_credentials"],
            "expires_in": ["600"],
            "scope": ["comms:* media:*"],
        }

    def test_api_access_token_minimal_form(self, fake_api):
        api = fake_api(_TOKEN)
        api.run(lambda t: get_api_access_token(t, "app", "pw"))
        assert api.last.content == b"grant_type=client_credentials"

    def test_client_access_token(self, fake_api, bearer):
        api = fake_api(_TOKEN)

        api.run(
            lambda t: get_client_access_token(
                t, bearer, ["conf:create", "notifications:set"], external_id="user-1", expires_in=300
            )
        )

        request = api.last
        assert request.url.host == "comms.api.dolby.io"
        assert request.url.path == "/v2/client-access-token"
        assert request.headers["Authorization"] == "Bearer jwt-abc"
        assert api.json_body() == {
            "sessionScope": "conf:create notifications:set",
            "externalId": "user-1",
            "expiresIn": 300,
        }

    def test_media_access_token(self, fake_api):
        api = fake_api(_TOKEN)
        api.run(lambda t: get_access_token(t, "key", "secret"))
        request = api.last
        assert request.url.host == "api.dolby.com"
        assert request.url.path == "/media/oauth2/token"
        assert request.content == b"grant_type=client_credentials"
        assert request.headers["Authorization"].startswith("Basic ")
