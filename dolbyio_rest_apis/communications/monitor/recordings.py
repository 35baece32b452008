"""Monitor recordings: list, delete and download conference recordings.

RULES:
- Recording URLs returned by the listings expire after 10 minutes
- download_* stream straight to disk through HttpTransport.download()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from dolbyio_rest_apis.communications.models import Recording, RecordingsResponse
from dolbyio_rest_apis.communications.monitor import monitor_request, range_params
from dolbyio_rest_apis.config import DEFAULT_FROM, DEFAULT_PAGE_SIZE, DEFAULT_TO
from dolbyio_rest_apis.core.auth import Credential
from dolbyio_rest_apis.core.decode import OBJECT, decode
from dolbyio_rest_apis.core.http import HttpTransport
from dolbyio_rest_apis.core.pagination import get_all

_RECORDINGS_PATH = "/v1/monitor/recordings"


def _conference_recordings_path(conference_id: str) -> str:
    return "/v1/monitor/conferences/{}/recordings".format(conference_id)


async def get_recordings(
    transport: HttpTransport,
    credential: Credential,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
) -> RecordingsResponse:
    """Get one page of recordings created in [from_, to]."""
    request = monitor_request(
        transport, credential, _RECORDINGS_PATH, range_params(from_, to, max_, start)
    )
    response = await transport.send_get(request)
    return RecordingsResponse.from_dict(response)


async def get_all_recordings(
    transport: HttpTransport,
    credential: Credential,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Recording]:
    request = monitor_request(
        transport, credential, _RECORDINGS_PATH, range_params(from_, to, page_size)
    )
    items = await get_all(transport, request, "recordings")
    return [Recording.from_dict(item) for item in items]


async def get_conference_recordings(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    from_: int = DEFAULT_FROM,
    to: int = DEFAULT_TO,
    max_: int = DEFAULT_PAGE_SIZE,
    start: Optional[str] = None,
) -> RecordingsResponse:
    """Get one page of the recordings of a single conference."""
    request = monitor_request(
        transport,
        credential,
        _conference_recordings_path(conference_id),
        range_params(from_, to, max_, start),
    )
    response = await transport.send_get(request)
    return RecordingsResponse.from_dict(response)


async def delete_recording(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> None:
    """Delete every recording of a conference."""
    request = monitor_request(transport, credential, _conference_recordings_path(conference_id))
    await transport.send_delete(request)


async def get_dolby_voice_recording(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
) -> Dict[str, Any]:
    """Get the details of a Dolby Voice audio recording.

    The payload layout varies with the recording settings, so it is
    returned as the validated JSON object.
    """
    request = monitor_request(
        transport, credential, _conference_recordings_path(conference_id) + "/audio"
    )
    response = await transport.send_get(request)
    return dict(decode(response, OBJECT, "Dolby Voice recording"))


async def download_mp4_recording(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    file_path: Path,
) -> None:
    """Download the MP4 recording of a conference to ``file_path``."""
    request = monitor_request(
        transport,
        credential,
        _conference_recordings_path(conference_id) + "/mp4",
        accept="video/mp4",
    )
    await transport.download(request, file_path)


async def download_mp3_recording(
    transport: HttpTransport,
    credential: Credential,
    conference_id: str,
    file_path: Path,
) -> None:
    """Download the MP3 recording of a conference to ``file_path``."""
    request = monitor_request(
        transport,
        credential,
        _conference_recordings_path(conference_id) + "/mp3",
        accept="video/mpeg",
    )
    await transport.download(request, file_path)
