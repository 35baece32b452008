"""Monitor conferences: summaries, statistics and participant activity."""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.communications.models import (
    ConferenceSummary,
    ListConferencesResponse,
    ParticipantActivity,
    ParticipantsResponse,
    Statistics,
)
from dolbyio_rest_apis.communications.monitor import flag, monitor_request, range_params
from dolbyio_rest_apis.config import DEFAULT_FROM, DEFAULT_PAGE_SIZE, DEFAULT_TO
from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.core.pagination import get_all, get_all_mapping

_CONFERENCES_PATH = "/v1/monitor/conferences"


def _conference_filters(
    params: Dict[str, str],
    active: bool,
    livestats: bool,
    alias: Optional[str],
    external_id: Optional[str],
) -> Dict[str, str]:
    params["active"] = flag(active)
    params["livestats"] = flag(livestats)
    if alias:
        params["alias"] = alias
    if external_id:
        params["exid"] = external_id
    return params


def _participants_path(conference_id: str, user_id: Optional[str]) -> str:
    path = "{}/{}/participants".format(_CONFERENCES_PATH, conference_id)
    if user_id:
        path += "/{}".format(user_id)
    return path


async def list_conferences(
    transport: HttpTransport,
    credential: Credential,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
    active: bool = False,
    livestats: bool = False,
    alias: Optional[str] = None,
    external_id: Optional[str] = None,
) -> ListConferencesResponse:
    """Get one page of conferences that started or ended in [from_, to].

    Args:
        active: Only return ongoing conferences.
        livestats: Include live statistics of ongoing conferences.
        alias: Filter on the conference alias (regular expression).
        external_id: Filter on the external ID of a participant.

    Returns:
        The page, with the ``next`` cursor to pass as ``start``.
    """
    params = _conference_filters(
        range_params(from_, to, max_, start), active, livestats, alias, external_id
    )
    request = monitor_request(transport, credential, _CONFERENCES_PATH, params)
    response = await transport.send_get(request)
    return ListConferencesResponse.from_dict(response)


async def list_all_conferences(
    transport: HttpTransport,
    credential: Credential,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    page_size: int = DEFAULT_PAGE_SIZE,
    active: bool = False,
    livestats: bool = False,
    alias: Optional[str] = None,
    external_id: Optional[str] = None,
) -> List[ConferenceSummary]:
    """Get every conference in [from_, to], following the page cursor."""
    params = _conference_filters(
        range_params(from_, to, page_size), active, livestats, alias, external_id
    )
    request = monitor_request(transport, credential, _CONFERENCES_PATH, params)
    items = await get_all(transport, request, "conferences")
    return [ConferenceSummary.from_dict(item) for item in items]


async def get_conference(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    livestats: bool = False,
) -> ConferenceSummary:
    request = monitor_request(
        transport,
        credential,
        "{}/{}".format(_CONFERENCES_PATH, conference_id),
        {"livestats": flag(livestats)},
    )
    response = await transport.send_get(request)
    return ConferenceSummary.from_dict(response)


async def get_conference_statistics(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> Statistics:
    """Get the statistics of a terminated conference."""
    request = monitor_request(
        transport, credential, "{}/{}/statistics".format(_CONFERENCES_PATH, conference_id)
    )
    response = await transport.send_get(request)
    return Statistics.from_dict(response)


async def get_conference_participants(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    user_id: Optional[str] = None,
    participant_type: Optional[str] = None,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
) -> ParticipantsResponse:
    """Get one page of participant activity for a conference.

    Args:
        user_id: Restrict the result to one participant.
        participant_type: Participant type filter, e.g. "USER" or "LISTENER".
    """
    params = range_params(from_, to, max_, start)
    if participant_type:
        params["type"] = participant_type
    request = monitor_request(
        transport, credential, _participants_path(conference_id, user_id), params
    )
    response = await transport.send_get(request)
    return ParticipantsResponse.from_dict(response)


async def get_all_conference_participants(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    user_id: Optional[str] = None,
    participant_type: Optional[str] = None,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Dict[str, ParticipantActivity]:
    """Get the activity of every participant, keyed by user ID."""
    params = range_params(from_, to, page_size)
    if participant_type:
        params["type"] = participant_type
    request = monitor_request(
        transport, credential, _participants_path(conference_id, user_id), params
    )
    entries = await get_all_mapping(transport, request, "participants")
    return {
        user: ParticipantActivity.from_dict(activity) for user, activity in entries.items()
    }
