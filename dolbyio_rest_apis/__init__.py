"""Dolby.io REST APIs: async Python client for Communications, Media and Streaming.

WHY: The Dolby.io platforms expose plain REST endpoints. Calling them by
hand means rebuilding hostnames, auth headers, query strings and paging
loops in every script. This package wraps each endpoint as an async
function that returns typed dataclasses.

HOW: One shared HttpTransport (httpx) performs requests against the
hostnames in a Hostnames configuration object. Each platform package
(communications, media, streaming) builds RequestOptions, sends them
through the transport and decodes the JSON response at the boundary.

RULES:
- All HTTP goes through core.http.HttpTransport
- Credentials are explicit objects (core.auth), never bare strings
- Paginated "list all" helpers go through core.pagination
"""

__version__ = "1.0.0"
