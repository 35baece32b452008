"""Monitor webhooks: the events the platform posted to your webhook endpoint."""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.communications.models import WebhookEvent, WebhookEventsResponse
from dolbyio_rest_apis.communications.monitor import monitor_request, range_params
from dolbyio_rest_apis.config import DEFAULT_FROM, DEFAULT_PAGE_SIZE, DEFAULT_TO
from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.core.pagination import get_all


def _events_path(conference_id: Optional[str]) -> str:
    if conference_id:
        return "/v1/monitor/conferences/{}/webhooks".format(conference_id)
    return "/v1/monitor/webhooks"


def _with_type(params: Dict[str, str], event_type: Optional[str]) -> Dict[str, str]:
    if event_type:
        params["type"] = event_type
    return params


async def get_events(
    transport: HttpTransport,
    credential: Credential,
    conference_id: Optional[str] = None,
    event_type: Optional[str] = None,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
) -> WebhookEventsResponse:
    """Get one page of webhook events.

    Args:
        conference_id: Only return the events of this conference.
        event_type: Event type filter, e.g. "Conference.Created".
    """
    request = monitor_request(
        transport,
        credential,
        _events_path(conference_id),
        _with_type(range_params(from_, to, max_, start), event_type),
    )
    response = await transport.send_get(request)
    return WebhookEventsResponse.from_dict(response)


async def get_all_events(
    transport: HttpTransport,
    credential: Credential,
    conference_id: Optional[str] = None,
    event_type: Optional[str] = None,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[WebhookEvent]:
    request = monitor_request(
        transport,
        credential,
        _events_path(conference_id),
        _with_type(range_params(from_, to, page_size), event_type),
    )
    items = await get_all(transport, request, "webhooks")
    return [WebhookEvent.from_dict(item) for item in items]
