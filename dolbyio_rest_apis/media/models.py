"""Media API response dataclasses.

HOW: Same pattern as the Communications models: a minimal JSON schema per
payload, validated by from_dict() before the fields are mapped.

RULES:
- Field names already use snake_case on the wire, so they map one to one
- JobResult.result is the API-specific result object, kept as raw JSON
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dolbyio_rest_apis.core.decode import ARRAY, NUMBER, OBJECT, STRING, decode, obj

_JOB_SCHEMA = obj(
    {"job_id": STRING},
    {
        "api_version": STRING,
        "path": STRING,
        "status": STRING,
        "progress": NUMBER,
        "duration": NUMBER,
        "time_submitted": STRING,
        "time_started": STRING,
        "time_completed": STRING,
        "expiry": STRING,
    },
)


@dataclass
class Job:
    """A Media API job as listed by /media/jobs.

    RULES:
    - status is one of Pending, Running, Success, Failed, Cancelled
    - progress is a percentage (0-100)
    - time_* and expiry are ISO 8601 strings
    """

    job_id: str
    api_version: Optional[str] = None
    path: Optional[str] = None
    status: Optional[str] = None
    progress: Optional[float] = None
    duration: Optional[float] = None
    time_submitted: Optional[str] = None
    time_started: Optional[str] = None
    time_completed: Optional[str] = None
    expiry: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> Job:
        decode(data, _JOB_SCHEMA, "media job")
        return cls(
            job_id=data["job_id"],
            api_version=data.get("api_version"),
            path=data.get("path"),
            status=data.get("status"),
            progress=data.get("progress"),
            duration=data.get("duration"),
            time_submitted=data.get("time_submitted"),
            time_started=data.get("time_started"),
            time_completed=data.get("time_completed"),
            expiry=data.get("expiry"),
        )


@dataclass
class JobsResponse:
    jobs: List[Job]
    next_token: Optional[str] = None
    count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> JobsResponse:
        decode(
            data,
            obj({"jobs": ARRAY}, {"next_token": STRING, "count": NUMBER}),
            "media job list",
        )
        return cls(
            jobs=[Job.from_dict(j) for j in data["jobs"]],
            next_token=data.get("next_token"),
            count=data.get("count"),
        )


_JOB_RESULT_SCHEMA = obj(
    {"status": STRING},
    {
        "api_version": STRING,
        "path": STRING,
        "progress": NUMBER,
        "result": OBJECT,
        "error": obj({}, {"type": STRING, "title": STRING, "details": STRING}),
    },
)


@dataclass
class JobError:
    type: Optional[str] = None
    title: Optional[str] = None
    details: Optional[str] = None


@dataclass
class JobResult:
    """Status and result of a processing job.

    RULES:
    - result is only populated once status is "Success"
    - error is only populated when status is "Failed"
    """

    status: str
    api_version: Optional[str] = None
    path: Optional[str] = None
    progress: Optional[float] = None
    result: Dict[str, Any] = field(default_factory=dict)
    error: Optional[JobError] = None

    @classmethod
    def from_dict(cls, data: dict) -> JobResult:
        decode(data, _JOB_RESULT_SCHEMA, "job result")
        error = data.get("error")
        return cls(
            status=data["status"],
            api_version=data.get("api_version"),
            path=data.get("path"),
            progress=data.get("progress"),
            result=dict(data.get("result") or {}),
            error=JobError(
                type=error.get("type"),
                title=error.get("title"),
                details=error.get("details"),
            )
            if error
            else None,
        )


_WEBHOOK_SCHEMA = obj(
    {"webhook_id": STRING, "callback": obj({"url": STRING}, {"headers": OBJECT})},
)


@dataclass
class Webhook:
    """A registered Media API webhook."""

    webhook_id: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Webhook:
        decode(data, _WEBHOOK_SCHEMA, "media webhook")
        callback = data["callback"]
        return cls(
            webhook_id=data["webhook_id"],
            url=callback["url"],
            headers=dict(callback.get("headers") or {}),
        )
