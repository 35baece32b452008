"""Move files in and out of Dolby temporary storage (dlb:// URLs).

WHY: Processing jobs read and write dlb:// locations. Files get there (and
back) through pre-signed URLs that the /media/input and /media/output
endpoints hand out.

HOW: get_upload_url()/get_download_url() exchange a dlb:// URL for a
pre-signed HTTPS URL; upload_file()/download_file() chain that exchange
with HttpTransport.upload()/download().

RULES:
- Pre-signed URLs are used as-is; no Authorization header is sent to them
- get_*_url() return None when the response carries no url
- upload_file()/download_file() raise ValueError if no URL was returned
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from dolbyio_rest_apis.core.auth import Credential, auth_headers
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions

logger = logging.getLogger(__name__)


async def _get_url(
    transport: HttpTransport, credential: Credential, path: str, dlb_url: str
) -> Optional[str]:
    options = RequestOptions(
        hostname=transport.hostnames.mapi,
        path=path,
        headers=auth_headers(credential, json_body=True),
        body=json.dumps({"url": dlb_url}),
    )
    response = await transport.send_post(options)
    if isinstance(response, dict):
        return response.get("url")
    return None


async def get_upload_url(
    transport: HttpTransport, credential: Credential, dlb_url: str
) -> Optional[str]:
    """Get a pre-signed URL to upload a file to ``dlb_url``."""
    return await _get_url(transport, credential, "/media/input", dlb_url)


async def get_download_url(
    transport: HttpTransport, credential: Credential, dlb_url: str
) -> Optional[str]:
    """Get a pre-signed URL to download the file stored at ``dlb_url``."""
    return await _get_url(transport, credential, "/media/output", dlb_url)


async def upload_file(
    transport: HttpTransport,
    credential: Credential,
    dlb_url: str,
    file_path: Path,
) -> None:
    """Upload a local file to Dolby temporary storage."""
    upload_url = await get_upload_url(transport, credential, dlb_url)
    if not upload_url:
        raise ValueError("No upload URL returned for {}".format(dlb_url))
    logger.info("Uploading %s to %s", file_path, dlb_url)
    await transport.upload(file_path, upload_url)


async def download_file(
    transport: HttpTransport,
    credential: Credential,
    dlb_url: str,
    file_path: Path,
) -> None:
    """Download a file from Dolby temporary storage to ``file_path``."""
    download_url = await get_download_url(transport, credential, dlb_url)
    if not download_url:
        raise ValueError("No download URL returned for {}".format(dlb_url))

    parts = urlsplit(download_url)
    path = parts.path
    if parts.query:
        path += "?" + parts.query

    logger.info("Downloading %s to %s", dlb_url, file_path)
    await transport.download(RequestOptions(hostname=parts.netloc, path=path), file_path)
