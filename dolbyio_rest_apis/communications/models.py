"""Communications API request options and response dataclasses.

WHY: The Communications and Monitor endpoints exchange camelCase JSON
objects. Typed dataclasses make those structures explicit, give snake_case
names to callers, and catch field mismatches at the boundary.

HOW: Response dataclasses expose from_dict(), which validates the payload
against a minimal JSON schema (core.decode) and then maps fields. Request
side objects expose to_payload() producing the JSON the endpoint expects.

RULES:
- Response fields that the server omits for live conferences are Optional
- Monitor paged responses carry "first" and "next" cursors (None when absent)
- Participant payloads are keyed by external ID:
  {externalId: {"permissions": [...], "notification": bool}}
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dolbyio_rest_apis.core.decode import (
    ARRAY,
    BOOLEAN,
    NUMBER,
    OBJECT,
    STRING,
    decode,
    obj,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Permission(str, enum.Enum):
    """Conference permissions granted to a participant."""

    INVITE = "INVITE"
    JOIN = "JOIN"
    SEND_AUDIO = "SEND_AUDIO"
    SEND_VIDEO = "SEND_VIDEO"
    SHARE_SCREEN = "SHARE_SCREEN"
    SHARE_VIDEO = "SHARE_VIDEO"
    SHARE_FILE = "SHARE_FILE"
    SEND_MESSAGE = "SEND_MESSAGE"
    RECORD = "RECORD"
    STREAM = "STREAM"
    KICK = "KICK"
    UPDATE_PERMISSIONS = "UPDATE_PERMISSIONS"


class RTCPMode(str, enum.Enum):
    """Bandwidth estimation mode for a conference."""

    WORST = "worst"
    AVERAGE = "average"
    MAX = "max"


class VideoCodec(str, enum.Enum):
    H264 = "H264"
    VP8 = "VP8"


# ---------------------------------------------------------------------------
# Conference management
# ---------------------------------------------------------------------------


@dataclass
class Participant:
    """A participant to invite, or whose permissions to update."""

    external_id: str
    permissions: List[Permission] = field(default_factory=list)
    notify: bool = False


def participants_payload(participants: List[Participant]) -> Dict[str, Any]:
    """Serialize participants into the object keyed by external ID."""
    return {
        p.external_id: {
            "permissions": [Permission(perm).value for perm in p.permissions],
            "notification": p.notify,
        }
        for p in participants
    }


@dataclass
class CreateConferenceOptions:
    """Options for POST /v2/conferences/create.

    RULES:
    - owner_external_id is required
    - dolby_voice defaults to True, live_recording to False,
      rtcp_mode to RTCPMode.AVERAGE
    - pin_code, ttl, video_codec, alias are only sent when set
    """

    owner_external_id: str
    alias: Optional[str] = None
    pin_code: Optional[str] = None
    dolby_voice: bool = True
    live_recording: bool = False
    rtcp_mode: RTCPMode = RTCPMode.AVERAGE
    ttl: Optional[int] = None
    video_codec: Optional[VideoCodec] = None
    participants: List[Participant] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        parameters: Dict[str, Any] = {
            "dolbyVoice": self.dolby_voice,
            "liveRecording": self.live_recording,
            "rtcpMode": RTCPMode(self.rtcp_mode).value,
        }
        if self.pin_code:
            parameters["pincode"] = self.pin_code
        if self.ttl:
            parameters["ttl"] = self.ttl
        if self.video_codec:
            parameters["videoCodec"] = VideoCodec(self.video_codec).value

        body: Dict[str, Any] = {
            "ownerExternalId": self.owner_external_id,
            "parameters": parameters,
        }
        if self.alias:
            body["alias"] = self.alias
        if self.participants:
            body["participants"] = participants_payload(self.participants)
        return body


_CONFERENCE_SCHEMA = obj(
    {"conferenceId": STRING},
    {
        "conferenceAlias": STRING,
        "conferencePincode": STRING,
        "isProtected": BOOLEAN,
        "ownerToken": STRING,
        "usersTokens": OBJECT,
    },
)


@dataclass
class Conference:
    """A conference returned by the create endpoint."""

    conference_id: str
    conference_alias: Optional[str] = None
    conference_pincode: Optional[str] = None
    is_protected: bool = False
    owner_token: Optional[str] = None
    users_tokens: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Conference:
        decode(data, _CONFERENCE_SCHEMA, "conference")
        return cls(
            conference_id=data["conferenceId"],
            conference_alias=data.get("conferenceAlias"),
            conference_pincode=data.get("conferencePincode"),
            is_protected=bool(data.get("isProtected")),
            owner_token=data.get("ownerToken"),
            users_tokens=dict(data.get("usersTokens") or {}),
        )


_REMIX_STATUS_SCHEMA = obj(
    {"status": STRING},
    {"region": STRING, "alias": STRING},
)


@dataclass
class RemixStatus:
    """Status of a remix job: status is e.g. "IN_PROGRESS" or "COMPLETED"."""

    status: str
    region: Optional[str] = None
    alias: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> RemixStatus:
        decode(data, _REMIX_STATUS_SCHEMA, "remix status")
        return cls(
            status=data["status"],
            region=data.get("region"),
            alias=data.get("alias"),
        )


# ---------------------------------------------------------------------------
# Monitor: conferences
# ---------------------------------------------------------------------------


def _paged(required: Dict[str, Any]) -> Dict[str, Any]:
    return obj(required, {"first": STRING, "next": STRING})


_MONITOR_CONFERENCE_SCHEMA = obj(
    {"confId": STRING},
    {
        "alias": STRING,
        "region": STRING,
        "dolbyVoice": BOOLEAN,
        "start": NUMBER,
        "live": BOOLEAN,
        "end": NUMBER,
        "duration": NUMBER,
        "type": STRING,
        "nbUsers": NUMBER,
        "nbListeners": NUMBER,
        "nbPstn": NUMBER,
        "owner": OBJECT,
        "statistics": OBJECT,
    },
)


@dataclass
class ConferenceSummary:
    """Monitor summary of a conference.

    WHY: Ongoing conferences only report confId, alias, region, dolbyVoice,
    start, live and owner; the remaining fields appear once the conference
    has terminated.

    RULES:
    - start/end are epoch milliseconds
    - owner and statistics are kept as the raw JSON objects
    """

    conf_id: str
    alias: Optional[str] = None
    region: Optional[str] = None
    dolby_voice: Optional[bool] = None
    start: Optional[int] = None
    live: Optional[bool] = None
    end: Optional[int] = None
    duration: Optional[int] = None
    type: Optional[str] = None
    nb_users: Optional[int] = None
    nb_listeners: Optional[int] = None
    nb_pstn: Optional[int] = None
    owner: Optional[Dict[str, Any]] = None
    statistics: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: dict) -> ConferenceSummary:
        decode(data, _MONITOR_CONFERENCE_SCHEMA, "conference summary")
        return cls(
            conf_id=data["confId"],
            alias=data.get("alias"),
            region=data.get("region"),
            dolby_voice=data.get("dolbyVoice"),
            start=data.get("start"),
            live=data.get("live"),
            end=data.get("end"),
            duration=data.get("duration"),
            type=data.get("type"),
            nb_users=data.get("nbUsers"),
            nb_listeners=data.get("nbListeners"),
            nb_pstn=data.get("nbPstn"),
            owner=data.get("owner"),
            statistics=data.get("statistics"),
        )


@dataclass
class ListConferencesResponse:
    conferences: List[ConferenceSummary]
    first: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> ListConferencesResponse:
        decode(data, _paged({"conferences": ARRAY}), "conference list")
        return cls(
            conferences=[ConferenceSummary.from_dict(c) for c in data["conferences"]],
            first=data.get("first"),
            next=data.get("next"),
        )


_STATISTICS_SCHEMA = obj({}, {"maxParticipants": OBJECT, "network": OBJECT})


@dataclass
class Statistics:
    """Peak participant counts and network totals of a terminated conference."""

    max_participants: Dict[str, int] = field(default_factory=dict)
    network: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Statistics:
        decode(data, _STATISTICS_SCHEMA, "conference statistics")
        return cls(
            max_participants=dict(data.get("maxParticipants") or {}),
            network=dict(data.get("network") or {}),
        )


_PARTICIPANT_ACTIVITY_SCHEMA = obj({}, {"connections": ARRAY, "stats": OBJECT})


@dataclass
class ParticipantActivity:
    """Connection history and statistics of one participant in a conference."""

    connections: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> ParticipantActivity:
        decode(data, _PARTICIPANT_ACTIVITY_SCHEMA, "participant")
        return cls(
            connections=list(data.get("connections") or []),
            stats=dict(data.get("stats") or {}),
        )


@dataclass
class ParticipantsResponse:
    participants: Dict[str, ParticipantActivity]
    first: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> ParticipantsResponse:
        decode(data, _paged({"participants": OBJECT}), "participant list")
        return cls(
            participants={
                user_id: ParticipantActivity.from_dict(p)
                for user_id, p in data["participants"].items()
            },
            first=data.get("first"),
            next=data.get("next"),
        )


# ---------------------------------------------------------------------------
# Monitor: recordings
# ---------------------------------------------------------------------------

_RECORDING_SCHEMA = obj(
    {},
    {
        "conference": obj({"confId": STRING}, {"confAlias": STRING}),
        "region": STRING,
        "url": STRING,
        "createdAt": NUMBER,
        "recordingType": STRING,
        "duration": NUMBER,
        "filename": STRING,
        "size": NUMBER,
        "startTime": NUMBER,
        "mediaType": STRING,
        "mix": OBJECT,
    },
)


@dataclass
class Recording:
    """Metadata of a conference recording.

    RULES:
    - url is pre-signed and expires 10 minutes after created_at
    - duration is in milliseconds, size in bytes
    - media_type is "audio/mpeg" or "video/mp4"
    """

    conf_id: Optional[str] = None
    conf_alias: Optional[str] = None
    region: Optional[str] = None
    url: Optional[str] = None
    created_at: Optional[int] = None
    recording_type: Optional[str] = None
    duration: Optional[int] = None
    filename: Optional[str] = None
    size: Optional[int] = None
    start_time: Optional[int] = None
    media_type: Optional[str] = None
    mix: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: dict) -> Recording:
        decode(data, _RECORDING_SCHEMA, "recording")
        conference = data.get("conference") or {}
        return cls(
            conf_id=conference.get("confId"),
            conf_alias=conference.get("confAlias"),
            region=data.get("region"),
            url=data.get("url"),
            created_at=data.get("createdAt"),
            recording_type=data.get("recordingType"),
            duration=data.get("duration"),
            filename=data.get("filename"),
            size=data.get("size"),
            start_time=data.get("startTime"),
            media_type=data.get("mediaType"),
            mix=data.get("mix"),
        )


@dataclass
class RecordingsResponse:
    recordings: List[Recording]
    first: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> RecordingsResponse:
        decode(data, _paged({"recordings": ARRAY}), "recording list")
        return cls(
            recordings=[Recording.from_dict(r) for r in data["recordings"]],
            first=data.get("first"),
            next=data.get("next"),
        )


# ---------------------------------------------------------------------------
# Monitor: webhooks
# ---------------------------------------------------------------------------

_WEBHOOK_EVENT_SCHEMA = obj(
    {"id": STRING},
    {
        "webhook": STRING,
        "url": STRING,
        "confId": STRING,
        "thirdPartyId": STRING,
        "ts": NUMBER,
        "response": OBJECT,
    },
)


@dataclass
class WebhookEvent:
    """A webhook event sent by the platform, with the endpoint's response.

    RULES:
    - webhook is the JSON body that was posted, as a string
    - response_status is e.g. "200 OK"
    """

    id: str
    webhook: Optional[str] = None
    url: Optional[str] = None
    conf_id: Optional[str] = None
    third_party_id: Optional[str] = None
    ts: Optional[int] = None
    response_status: Optional[str] = None
    response_headers: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> WebhookEvent:
        decode(data, _WEBHOOK_EVENT_SCHEMA, "webhook event")
        response = data.get("response") or {}
        return cls(
            id=data["id"],
            webhook=data.get("webhook"),
            url=data.get("url"),
            conf_id=data.get("confId"),
            third_party_id=data.get("thirdPartyId"),
            ts=data.get("ts"),
            response_status=response.get("status"),
            response_headers=dict(response.get("headers") or {}),
        )


@dataclass
class WebhookEventsResponse:
    webhooks: List[WebhookEvent]
    first: Optional[str] = None
    next: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> WebhookEventsResponse:
        decode(data, _paged({"webhooks": ARRAY}), "webhook event list")
        return cls(
            webhooks=[WebhookEvent.from_dict(w) for w in data["webhooks"]],
            first=data.get("first"),
            next=data.get("next"),
        )
