"""Configuration: hostnames, listing defaults, and .env credential loading.

WHY: Every endpoint needs a hostname, and several of them differ per
platform (Communications, Media, Streaming). Keeping them in one explicit
configuration object makes it easy to point the client at a staging
environment or at a fake server in tests, without touching global state.

HOW: python-dotenv loads the .env file on import. Hostname defaults can
be overridden through environment variables; Hostnames.from_env() reads
them into a frozen dataclass that the HttpTransport receives at
construction. Credential loaders raise a clear error when a key is missing.

RULES:
- Hostnames is immutable; build a new one to change a host
- Hostnames are bare host names (no scheme, no path)
- Credentials are loaded from the environment, never hardcoded
- Listing defaults (time range, page size) match the Monitor API defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Hostname defaults
# ---------------------------------------------------------------------------

DEFAULT_API_HOSTNAME = "api.dolby.io"
DEFAULT_COMMS_HOSTNAME = "comms.api.dolby.io"
DEFAULT_COMMS_LEGACY_HOSTNAME = "api.voxeet.com"
DEFAULT_RTS_HOSTNAME = "api.millicast.com"
DEFAULT_MAPI_HOSTNAME = "api.dolby.com"

HTTP_TIMEOUT_S = float(os.getenv("DOLBYIO_HTTP_TIMEOUT_S", "60"))

# ---------------------------------------------------------------------------
# Listing defaults
# ---------------------------------------------------------------------------

DEFAULT_FROM = 0
DEFAULT_TO = 9999999999999
"""Upper bound of the Monitor API time range, in epoch milliseconds."""

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class Hostnames:
    """Host names used to build request URLs, one per platform endpoint.

    WHY: The platforms live on different hosts, and the Communications API
    can additionally be pinned to a region (``us.comms.api.dolby.io``).

    HOW: Plain frozen dataclass with defaults. ``from_env`` reads overrides
    from ``DOLBYIO_*_HOSTNAME`` variables.

    RULES:
    - api: authentication (api.dolby.io)
    - comms: Communications v2 endpoints, optionally region-prefixed
    - comms_legacy: Monitor, conference and remix endpoints (api.voxeet.com)
    - rts: Streaming (Millicast) REST host
    - mapi: Media APIs (api.dolby.com)
    """

    api: str = DEFAULT_API_HOSTNAME
    comms_base: str = DEFAULT_COMMS_HOSTNAME
    comms_legacy: str = DEFAULT_COMMS_LEGACY_HOSTNAME
    rts: str = DEFAULT_RTS_HOSTNAME
    mapi: str = DEFAULT_MAPI_HOSTNAME

    def comms(self, region: Optional[str] = None) -> str:
        """Return the Communications host, prefixed with ``region`` if given."""
        if region:
            return "{}.{}".format(region, self.comms_base)
        return self.comms_base

    @classmethod
    def from_env(cls) -> Hostnames:
        """Build a Hostnames object, applying any DOLBYIO_*_HOSTNAME overrides."""
        return cls(
            api=os.getenv("DOLBYIO_API_HOSTNAME", DEFAULT_API_HOSTNAME),
            comms_base=os.getenv("DOLBYIO_COMMS_HOSTNAME", DEFAULT_COMMS_HOSTNAME),
            comms_legacy=os.getenv(
                "DOLBYIO_COMMS_LEGACY_HOSTNAME", DEFAULT_COMMS_LEGACY_HOSTNAME
            ),
            rts=os.getenv("DOLBYIO_RTS_HOSTNAME", DEFAULT_RTS_HOSTNAME),
            mapi=os.getenv("DOLBYIO_MAPI_HOSTNAME", DEFAULT_MAPI_HOSTNAME),
        )


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(
            "{} not configured. Add it to the environment or the .env file.".format(name)
        )
    return value


def load_app_credentials() -> Tuple[str, str]:
    """Load the Dolby.io app key and secret from the environment.

    WHY: Token acquisition needs both values. Loading them from the
    environment (via .env) keeps them out of source code.

    RULES:
    - Reads DOLBYIO_APP_KEY and DOLBYIO_APP_SECRET
    - Raises ValueError naming the first missing variable
    """
    return _require_env("DOLBYIO_APP_KEY"), _require_env("DOLBYIO_APP_SECRET")


def load_streaming_api_secret() -> str:
    """Load the Streaming (Millicast) account API secret from DOLBYIO_RTS_API_SECRET."""
    return _require_env("DOLBYIO_RTS_API_SECRET")
