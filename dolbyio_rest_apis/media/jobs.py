"""List and cancel Media API jobs.

RULES:
- /media/jobs pages with next_token, both in the response and the query
- Filters (submitted_after, submitted_before, status) are only sent when set
"""

from __future__ import annotations

from typing import Dict, List, Optional

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions
from dolbyio_rest_apis.core.pagination import get_all
from dolbyio_rest_apis.media.models import Job, JobsResponse

_NEXT_TOKEN = "next_token"


def _filters(
    submitted_after: Optional[str],
    submitted_before: Optional[str],
    status: Optional[str],
) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if submitted_after:
        params["submitted_after"] = submitted_after
    if submitted_before:
        params["submitted_before"] = submitted_before
    if status:
        params["status"] = status
    return params


async def list_jobs(
    transport: HttpTransport,
    credential: Credential,
    submitted_after: Optional[str] = None,
    submitted_before: Optional[str] = None,
    status: Optional[str] = None,
    next_token: Optional[str] = None,
) -> JobsResponse:
    """Get one page of jobs.

    Args:
        submitted_after: ISO 8601 lower bound on the submission time.
        submitted_before: ISO 8601 upper bound on the submission time.
        status: Only jobs with this status (e.g. "Running").
        next_token: Cursor from a previous page.
    """
    params = _filters(submitted_after, submitted_before, status)
    if next_token:
        params[_NEXT_TOKEN] = next_token
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path="/media/jobs",
        headers=auth_headers(credential),
        params=params,
    )
    response = await transport.send_get(options)
    return JobsResponse.from_dict(response)


async def list_all_jobs(
    transport: HttpTransport,
    credential: Credential,
    submitted_after: Optional[str] = None,
    submitted_before: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Job]:
    """Get every job matching the filters, following next_token."""
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path="/media/jobs",
        headers=auth_headers(credential),
        params=_filters(submitted_after, submitted_before, status),
    )
    items = await get_all(
        transport, options, "jobs", cursor_field=_NEXT_TOKEN, cursor_param=_NEXT_TOKEN
    )
    return [Job.from_dict(item) for item in items]


async def cancel(
    transport: HttpTransport,
    credential: Credential,
    job_id: str,
) -> None:
    """Request cancellation of a pending or running job."""
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path="/media/jobs/cancel",
        headers=auth_headers(credential, json_body=True),
        params={"job_id": job_id},
    )
    await transport.send_post(options)
