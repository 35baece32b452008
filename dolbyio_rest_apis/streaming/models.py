"""Streaming API envelope handling and response dataclasses.

RULES:
- unwrap() is applied to every response before decoding the data
- Token and webhook IDs are integers on the wire
- Publish and subscribe tokens share the stream-name shape (PublishTokenStream)
- Request dataclasses only serialize the fields that are set
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dolbyio_rest_apis.core.decode import (
    ARRAY,
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    decode,
    obj,
)

_ENVELOPE_SCHEMA = obj({"data": {}}, {"status": STRING})


def unwrap(response: Any, what: str) -> Any:
    """Return the data of a {"status", "data"} response envelope.

    Raises:
        ResponseDecodeError: If the response is not an envelope.
    """
    decode(response, _ENVELOPE_SCHEMA, what)
    return response["data"]


# ---------------------------------------------------------------------------
# Cluster
# ---------------------------------------------------------------------------


@dataclass
class Cluster:
    id: str
    name: Optional[str] = None
    rtmp: Optional[str] = None


_CLUSTER_SCHEMA = obj(
    {"defaultCluster": STRING, "availableClusters": ARRAY},
)
_CLUSTER_ITEM_SCHEMA = obj({"id": STRING}, {"name": STRING, "rtmp": STRING})


@dataclass
class ClusterResponse:
    """The account's default cluster and the clusters it may use."""

    default_cluster: str
    available_clusters: List[Cluster] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ClusterResponse:
        decode(data, _CLUSTER_SCHEMA, "cluster")
        clusters = []
        for item in data["availableClusters"]:
            decode(item, _CLUSTER_ITEM_SCHEMA, "cluster")
            clusters.append(Cluster(id=item["id"], name=item.get("name"), rtmp=item.get("rtmp")))
        return cls(default_cluster=data["defaultCluster"], available_clusters=clusters)


# ---------------------------------------------------------------------------
# Publish tokens
# ---------------------------------------------------------------------------


@dataclass
class PublishTokenStream:
    """A stream name a publish token may publish to.

    RULES:
    - is_regex=True makes stream_name a regular expression
    - An empty stream_name with is_regex=True allows any stream
    """

    stream_name: str
    is_regex: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"streamName": self.stream_name, "isRegex": self.is_regex}


def _streams_payload(streams: List[PublishTokenStream]) -> List[Dict[str, Any]]:
    return [s.to_payload() for s in streams]


_ID = {"type": ["integer", "string"]}

_PUBLISH_TOKEN_SCHEMA = obj(
    {"id": _ID},
    {
        "label": STRING,
        "token": STRING,
        "addedOn": STRING,
        "expiresOn": STRING,
        "isActive": BOOLEAN,
        "streams": ARRAY,
        "allowedOrigins": ARRAY,
        "allowedIpAddresses": ARRAY,
        "bindIpsOnUsage": NUMBER,
        "allowedCountries": ARRAY,
        "deniedCountries": ARRAY,
        "originCluster": STRING,
        "subscribeRequiresAuth": BOOLEAN,
        "record": BOOLEAN,
        "multisource": BOOLEAN,
    },
)


@dataclass
class PublishToken:
    """A publish token as returned by the API.

    RULES:
    - token is the secret value the publisher presents
    - added_on/expires_on are ISO 8601 strings (expires_on None = never)
    """

    id: int
    label: Optional[str] = None
    token: Optional[str] = None
    added_on: Optional[str] = None
    expires_on: Optional[str] = None
    is_active: Optional[bool] = None
    streams: List[PublishTokenStream] = field(default_factory=list)
    allowed_origins: List[str] = field(default_factory=list)
    allowed_ip_addresses: List[str] = field(default_factory=list)
    bind_ips_on_usage: Optional[int] = None
    allowed_countries: List[str] = field(default_factory=list)
    denied_countries: List[str] = field(default_factory=list)
    origin_cluster: Optional[str] = None
    subscribe_requires_auth: Optional[bool] = None
    record: Optional[bool] = None
    multisource: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict) -> PublishToken:
        decode(data, _PUBLISH_TOKEN_SCHEMA, "publish token")
        return cls(
            id=int(data["id"]),
            label=data.get("label"),
            token=data.get("token"),
            added_on=data.get("addedOn"),
            expires_on=data.get("expiresOn"),
            is_active=data.get("isActive"),
            streams=[
                PublishTokenStream(
                    stream_name=s.get("streamName", ""), is_regex=bool(s.get("isRegex"))
                )
                for s in data.get("streams") or []
            ],
            allowed_origins=list(data.get("allowedOrigins") or []),
            allowed_ip_addresses=list(data.get("allowedIpAddresses") or []),
            bind_ips_on_usage=data.get("bindIpsOnUsage"),
            allowed_countries=list(data.get("allowedCountries") or []),
            denied_countries=list(data.get("deniedCountries") or []),
            origin_cluster=data.get("originCluster"),
            subscribe_requires_auth=data.get("subscribeRequiresAuth"),
            record=data.get("record"),
            multisource=data.get("multisource"),
        )


@dataclass
class CreatePublishToken:
    """Body of a publish token creation request."""

    label: str
    streams: List[PublishTokenStream]
    expires_on: Optional[str] = None
    allowed_origins: Optional[List[str]] = None
    allowed_ip_addresses: Optional[List[str]] = None
    bind_ips_on_usage: Optional[int] = None
    allowed_countries: Optional[List[str]] = None
    denied_countries: Optional[List[str]] = None
    origin_cluster: Optional[str] = None
    subscribe_requires_auth: Optional[bool] = None
    record: Optional[bool] = None
    multisource: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "label": self.label,
            "streams": _streams_payload(self.streams),
        }
        optional = {
            "expiresOn": self.expires_on,
            "allowedOrigins": self.allowed_origins,
            "allowedIpAddresses": self.allowed_ip_addresses,
            "bindIpsOnUsage": self.bind_ips_on_usage,
            "allowedCountries": self.allowed_countries,
            "deniedCountries": self.denied_countries,
            "originCluster": self.origin_cluster,
            "subscribeRequiresAuth": self.subscribe_requires_auth,
            "record": self.record,
            "multisource": self.multisource,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        return payload


@dataclass
class UpdatePublishToken:
    """Changes to apply to a publish token; fields left None are unchanged."""

    label: Optional[str] = None
    refresh_token: Optional[bool] = None
    is_active: Optional[bool] = None
    add_token_streams: Optional[List[PublishTokenStream]] = None
    remove_token_streams: Optional[List[PublishTokenStream]] = None
    update_allowed_origins: Optional[List[str]] = None
    update_allowed_ip_addresses: Optional[List[str]] = None
    update_bind_ips_on_usage: Optional[int] = None
    update_allowed_countries: Optional[List[str]] = None
    update_denied_countries: Optional[List[str]] = None
    update_origin_cluster: Optional[str] = None
    subscribe_requires_auth: Optional[bool] = None
    record: Optional[bool] = None
    multisource: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        fields = {
            "label": self.label,
            "refreshToken": self.refresh_token,
            "isActive": self.is_active,
            "addTokenStreams": _streams_payload(self.add_token_streams)
            if self.add_token_streams is not None
            else None,
            "removeTokenStreams": _streams_payload(self.remove_token_streams)
            if self.remove_token_streams is not None
            else None,
            "updateAllowedOrigins": self.update_allowed_origins,
            "updateAllowedIpAddresses": self.update_allowed_ip_addresses,
            "updateBindIpsOnUsage": self.update_bind_ips_on_usage,
            "updateAllowedCountries": self.update_allowed_countries,
            "updateDeniedCountries": self.update_denied_countries,
            "updateOriginCluster": self.update_origin_cluster,
            "subscribeRequiresAuth": self.subscribe_requires_auth,
            "record": self.record,
            "multisource": self.multisource,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass
class FailedToken:
    token_id: int
    error_message: Optional[str] = None


_DISABLE_SCHEMA = obj({}, {"successfulTokens": ARRAY, "failedTokens": ARRAY})
_FAILED_TOKEN_SCHEMA = obj({"tokenId": INTEGER}, {"errorMessage": STRING})


@dataclass
class DisablePublishTokenResponse:
    successful_tokens: List[int] = field(default_factory=list)
    failed_tokens: List[FailedToken] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> DisablePublishTokenResponse:
        decode(data, _DISABLE_SCHEMA, "disable publish token")
        failed = []
        for item in data.get("failedTokens") or []:
            decode(item, _FAILED_TOKEN_SCHEMA, "failed token")
            failed.append(
                FailedToken(token_id=item["tokenId"], error_message=item.get("errorMessage"))
            )
        return cls(
            successful_tokens=list(data.get("successfulTokens") or []),
            failed_tokens=failed,
        )


_ACTIVE_TOKEN_SCHEMA = obj({"tokenIds": {"type": "array", "items": INTEGER}})


@dataclass
class ActivePublishToken:
    """IDs of the publish tokens currently used by live streams."""

    token_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ActivePublishToken:
        decode(data, _ACTIVE_TOKEN_SCHEMA, "active publish token")
        return cls(token_ids=list(data["tokenIds"]))


# ---------------------------------------------------------------------------
# Subscribe tokens
# ---------------------------------------------------------------------------

# Subscribe tokens name their streams with the same {streamName, isRegex} shape.
SubscribeTokenStream = PublishTokenStream

_SUBSCRIBE_TOKEN_SCHEMA = obj(
    {"id": _ID},
    {
        "label": STRING,
        "token": STRING,
        "addedOn": STRING,
        "expiresOn": STRING,
        "isActive": BOOLEAN,
        "streams": ARRAY,
        "allowedOrigins": ARRAY,
        "allowedIpAddresses": ARRAY,
        "bindIpsOnUsage": NUMBER,
        "allowedCountries": ARRAY,
        "deniedCountries": ARRAY,
        "originCluster": STRING,
        "effectiveSettings": {"type": "object"},
        "tracking": {"type": "object"},
    },
)


@dataclass
class SubscribeToken:
    """A subscribe token, required by viewers of streams that need authentication.

    RULES:
    - effective_settings holds the account defaults the token inherits
      (originCluster, allowed/deniedCountries, geoCascade), as sent by the API
    - tracking_id is the Stream Syndication identifier, None when unset
    """

    id: int
    label: Optional[str] = None
    token: Optional[str] = None
    added_on: Optional[str] = None
    expires_on: Optional[str] = None
    is_active: Optional[bool] = None
    streams: List[SubscribeTokenStream] = field(default_factory=list)
    allowed_origins: List[str] = field(default_factory=list)
    allowed_ip_addresses: List[str] = field(default_factory=list)
    bind_ips_on_usage: Optional[int] = None
    allowed_countries: List[str] = field(default_factory=list)
    denied_countries: List[str] = field(default_factory=list)
    origin_cluster: Optional[str] = None
    effective_settings: Dict[str, Any] = field(default_factory=dict)
    tracking_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> SubscribeToken:
        decode(data, _SUBSCRIBE_TOKEN_SCHEMA, "subscribe token")
        return cls(
            id=int(data["id"]),
            label=data.get("label"),
            token=data.get("token"),
            added_on=data.get("addedOn"),
            expires_on=data.get("expiresOn"),
            is_active=data.get("isActive"),
            streams=[
                SubscribeTokenStream(
                    stream_name=s.get("streamName", ""), is_regex=bool(s.get("isRegex"))
                )
                for s in data.get("streams") or []
            ],
            allowed_origins=list(data.get("allowedOrigins") or []),
            allowed_ip_addresses=list(data.get("allowedIpAddresses") or []),
            bind_ips_on_usage=data.get("bindIpsOnUsage"),
            allowed_countries=list(data.get("allowedCountries") or []),
            denied_countries=list(data.get("deniedCountries") or []),
            origin_cluster=data.get("originCluster"),
            effective_settings=dict(data.get("effectiveSettings") or {}),
            tracking_id=(data.get("tracking") or {}).get("trackingId"),
        )


@dataclass
class CreateSubscribeToken:
    """Body of a subscribe token creation request.

    RULES:
    - expires is a lifetime in seconds; None means the token never expires
    - Set allowed_countries or denied_countries, not both
    """

    label: str
    streams: List[SubscribeTokenStream]
    expires: Optional[int] = None
    allowed_origins: Optional[List[str]] = None
    allowed_ip_addresses: Optional[List[str]] = None
    bind_ips_on_usage: Optional[int] = None
    allowed_countries: Optional[List[str]] = None
    denied_countries: Optional[List[str]] = None
    origin_cluster: Optional[str] = None
    tracking_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "label": self.label,
            "streams": _streams_payload(self.streams),
        }
        optional = {
            "expires": self.expires,
            "allowedOrigins": self.allowed_origins,
            "allowedIpAddresses": self.allowed_ip_addresses,
            "bindIpsOnUsage": self.bind_ips_on_usage,
            "allowedCountries": self.allowed_countries,
            "deniedCountries": self.denied_countries,
            "originCluster": self.origin_cluster,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        if self.tracking_id is not None:
            payload["tracking"] = {"trackingId": self.tracking_id}
        return payload


@dataclass
class UpdateSubscribeToken:
    """Changes to apply to a subscribe token; fields left None are unchanged."""

    label: Optional[str] = None
    refresh_token: Optional[bool] = None
    is_active: Optional[bool] = None
    add_token_streams: Optional[List[SubscribeTokenStream]] = None
    remove_token_streams: Optional[List[SubscribeTokenStream]] = None
    update_allowed_origins: Optional[List[str]] = None
    update_allowed_ip_addresses: Optional[List[str]] = None
    update_bind_ips_on_usage: Optional[int] = None
    update_allowed_countries: Optional[List[str]] = None
    update_denied_countries: Optional[List[str]] = None
    update_origin_cluster: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        fields = {
            "label": self.label,
            "refreshToken": self.refresh_token,
            "isActive": self.is_active,
            "addTokenStreams": _streams_payload(self.add_token_streams)
            if self.add_token_streams is not None
            else None,
            "removeTokenStreams": _streams_payload(self.remove_token_streams)
            if self.remove_token_streams is not None
            else None,
            "updateAllowedOrigins": self.update_allowed_origins,
            "updateAllowedIpAddresses": self.update_allowed_ip_addresses,
            "updateBindIpsOnUsage": self.update_bind_ips_on_usage,
            "updateAllowedCountries": self.update_allowed_countries,
            "updateDeniedCountries": self.update_denied_countries,
            "updateOriginCluster": self.update_origin_cluster,
        }
        return {k: v for k, v in fields.items() if v is not None}


# ---------------------------------------------------------------------------
# Webhooks
# ---------------------------------------------------------------------------

_HOOK_FLAGS = {
    "isFeedHooks": "is_feed_hooks",
    "isRecordingHooks": "is_recording_hooks",
    "isThumbnailHooks": "is_thumbnail_hooks",
    "isTranscoderHooks": "is_transcoder_hooks",
    "isClipHooks": "is_clip_hooks",
}

_WEBHOOK_SCHEMA = obj(
    {"id": INTEGER},
    dict({"url": STRING, "secret": STRING}, **{k: BOOLEAN for k in _HOOK_FLAGS}),
)


@dataclass
class Webhook:
    """A Streaming webhook and the event families it receives.

    RULES:
    - secret signs the webhook payloads (HMAC); keep it server-side
    """

    id: int
    url: Optional[str] = None
    secret: Optional[str] = None
    is_feed_hooks: bool = False
    is_recording_hooks: bool = False
    is_thumbnail_hooks: bool = False
    is_transcoder_hooks: bool = False
    is_clip_hooks: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> Webhook:
        decode(data, _WEBHOOK_SCHEMA, "streaming webhook")
        flags = {attr: bool(data.get(key)) for key, attr in _HOOK_FLAGS.items()}
        return cls(id=data["id"], url=data.get("url"), secret=data.get("secret"), **flags)


def hook_flags_payload(**flags: Optional[bool]) -> Dict[str, bool]:
    """Map is_*_hooks keyword arguments to their camelCase body keys, skipping None."""
    by_attr = {attr: key for key, attr in _HOOK_FLAGS.items()}
    return {by_attr[name]: value for name, value in flags.items() if value is not None}
