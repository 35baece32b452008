"""Conference management: create, invite, kick, update permissions, terminate.

WHY: A backend creates conferences and controls who may join them before
handing tokens to the client applications.

HOW: Each function builds a JSON POST (or DELETE) against the conference
endpoints on the legacy Communications host and decodes the response.

RULES:
- Participants are sent keyed by external ID (see models.participants_payload)
- invite() returns {external_id: conference_access_token}
- update_permissions() uses the invite endpoint; already-joined participants
  receive their new token through the SDK instead of an invitation
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional

from dolbyio_rest_apis.communications.models import (
    Conference,
    CreateConferenceOptions,
    Participant,
    participants_payload,
)
from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.decode import OBJECT, decode
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions


def _options(
    transport: HttpTransport, credential: Credential, path: str, body: Optional[dict] = None
) -> RequestOptions:
    return RequestOptions(
        hostname=transport.hostnames.comms_legacy,
        path=path,
        headers=auth_headers(credential, json_body=True),
        body=json.dumps(body) if body is not None else None,
    )


async def create_conference(
    transport: HttpTransport,
    credential: Credential,
    options: CreateConferenceOptions,
) -> Conference:
    """Create a conference and return its identifiers and tokens."""
    request = _options(transport, credential, "/v2/conferences/create", options.to_payload())
    response = await transport.send_post(request)
    return Conference.from_dict(response)


async def invite(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    participants: List[Participant],
) -> Dict[str, str]:
    """Invite participants to an ongoing conference.

    Participants already in the conference get neither a new token nor an
    invitation.

    Returns:
        Conference access token per external ID.
    """
    request = _options(
        transport,
        credential,
        "/v2/conferences/{}/invite".format(conference_id),
        {"participants": participants_payload(participants)},
    )
    response = await transport.send_post(request)
    if response is None:
        return {}
    return dict(decode(response, OBJECT, "invite response"))


async def kick(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    external_ids: List[str],
) -> None:
    """Remove participants from an ongoing conference."""
    request = _options(
        transport,
        credential,
        "/v2/conferences/{}/kick".format(conference_id),
        {"externalIds": list(external_ids)},
    )
    await transport.send_post(request)


async def update_permissions(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    participants: List[Participant],
) -> None:
    """Replace the permissions of participants in a conference."""
    request = _options(
        transport,
        credential,
        "/v2/conferences/{}/invite".format(conference_id),
        {"participants": participants_payload(participants)},
    )
    await transport.send_post(request)


async def terminate(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> None:
    """End an ongoing conference and remove every remaining participant."""
    request = _options(transport, credential, "/v2/conferences/{}".format(conference_id))
    await transport.send_delete(request)
