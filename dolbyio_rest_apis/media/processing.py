"""Start processing jobs and poll their results.

WHY: Analyze, diagnose, enhance, mastering and transcode all share the same
two calls: POST the job description to start it, GET with the job ID to
poll it. Only the path differs.

HOW: MediaApi enumerates the job paths; start() and get_results() take
the API as a parameter.

RULES:
- job_content is the JSON job description, sent verbatim
- start() returns None when the response carries no job_id
- Poll get_results() until status is Success, Failed or Cancelled
"""

from __future__ import annotations

import enum
from typing import Optional

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions
from dolbyio_rest_apis.media.models import JobResult

TERMINAL_STATUSES = frozenset({"Success", "Failed", "Cancelled"})


class MediaApi(str, enum.Enum):
    """Paths of the Media processing APIs."""

    ANALYZE = "/media/analyze"
    ANALYZE_SPEECH = "/media/analyze/speech"
    ANALYZE_MUSIC = "/media/analyze/music"
    DIAGNOSE = "/media/diagnose"
    ENHANCE = "/media/enhance"
    MASTERING = "/media/master"
    MASTERING_PREVIEW = "/media/master/preview"
    TRANSCODE = "/media/transcode"


async def start(
    transport: HttpTransport,
    credential: Credential,
    api: MediaApi,
    job_content: str,
) -> Optional[str]:
    """Start a job and return its job ID."""
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=MediaApi(api).value,
        headers=auth_headers(credential, json_body=True),
        body=job_content,
    )
    response = await transport.send_post(options)
    if isinstance(response, dict):
        return response.get("job_id")
    return None


async def get_results(
    transport: HttpTransport,
    credential: Credential,
    api: MediaApi,
    job_id: str,
) -> JobResult:
    """Get the status, and once finished the result, of a job."""
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=MediaApi(api).value,
        headers=auth_headers(credential),
        params={"job_id": job_id},
    )
    response = await transport.send_get(options)
    return JobResult.from_dict(response)


def is_finished(result: JobResult) -> bool:
    return result.status in TERMINAL_STATUSES
