"""Paginated collection fetcher: follow a cursor until the last page.

WHY: The Monitor and Media listing endpoints return one page of items plus
an opaque cursor. Callers that want "everything in this time range" should
not have to write the loop each time.

HOW: get_all() sends GET requests one after the other. Each page's
collection field is appended to a list; the response cursor ("next") is
copied verbatim into the request's query parameters ("start") for the next
call. An absent or empty cursor ends the loop. get_all_mapping() runs the
same loop but merges object-valued pages into a dict.

RULES:
- Pages are fetched strictly in sequence (page N+1 needs page N's cursor)
- request.params is created if missing and mutated in place; only the
  cursor key is written, every other filter is sent unchanged on each page
- A page without the collection field contributes nothing (not an error);
  a field of the wrong shape raises ResponseDecodeError
- Transport errors propagate untouched; partial results are discarded
- A cursor that was already sent in this fetch raises PaginationError
  instead of looping forever; max_pages optionally bounds the page count
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Set

from dolbyio_rest_apis.core.decode import ResponseDecodeError
from dolbyio_rest_apis.core.http import HttpTransport, RequestOptions

logger = logging.getLogger(__name__)

CURSOR_FIELD = "next"
CURSOR_PARAM = "start"


class PaginationError(Exception):
    """Raised when a paginated endpoint would never signal its last page."""


async def _follow_pages(
    transport: HttpTransport,
    request: RequestOptions,
    on_page: Callable[[Dict[str, Any]], int],
    cursor_field: str,
    cursor_param: str,
    max_pages: Optional[int],
) -> int:
    """Drive the page loop; returns the number of pages fetched."""
    if request.params is None:
        request.params = {}

    sent_cursors: Set[str] = set()
    pages = 0

    while True:
        response = await transport.send_get(request)
        pages += 1

        page = response if isinstance(response, dict) else {}
        count = on_page(page)
        logger.debug("%s page %d: %d item(s)", request.path, pages, count)

        cursor = page.get(cursor_field)
        if not cursor:
            return pages

        if cursor in sent_cursors:
            raise PaginationError(
                "{} returned cursor {!r} twice; stopping after {} page(s)".format(
                    request.path, cursor, pages
                )
            )
        if max_pages is not None and pages >= max_pages:
            raise PaginationError(
                "{} still had more pages after the limit of {}".format(
                    request.path, max_pages
                )
            )

        sent_cursors.add(cursor)
        request.params[cursor_param] = cursor


async def get_all(
    transport: HttpTransport,
    request: RequestOptions,
    property_name: str,
    cursor_field: str = CURSOR_FIELD,
    cursor_param: str = CURSOR_PARAM,
    max_pages: Optional[int] = None,
) -> List[Any]:
    """Fetch every item of a paginated collection.

    Args:
        transport: Open HttpTransport.
        request: Request for the first page. Its ``params`` are mutated.
        property_name: Response field holding the page's items (an array).
        cursor_field: Response field holding the next-page cursor.
        cursor_param: Query parameter that carries the cursor back.
        max_pages: Optional upper bound on the number of requests.

    Returns:
        All items, in page order then intra-page order.

    Raises:
        TransportError: From the transport, unmodified.
        PaginationError: If the server repeats a cursor or max_pages is hit.
        ResponseDecodeError: If the collection field is not an array.
    """
    result: List[Any] = []

    def on_page(page: Dict[str, Any]) -> int:
        items = page.get(property_name)
        if items is None:
            return 0
        if not isinstance(items, list):
            raise ResponseDecodeError(
                "{} field {!r} should be an array, got {}".format(
                    request.path, property_name, type(items).__name__
                )
            )
        result.extend(items)
        return len(items)

    pages = await _follow_pages(
        transport, request, on_page, cursor_field, cursor_param, max_pages
    )
    logger.info(
        "Fetched %d %s from %s in %d page(s)", len(result), property_name, request.path, pages
    )
    return result


async def get_all_mapping(
    transport: HttpTransport,
    request: RequestOptions,
    property_name: str,
    cursor_field: str = CURSOR_FIELD,
    cursor_param: str = CURSOR_PARAM,
    max_pages: Optional[int] = None,
) -> Dict[str, Any]:
    """Fetch every entry of a paginated collection keyed by identifier.

    Same loop as get_all(), but ``property_name`` holds an object per page.
    Entries are merged into one dict; a key seen on a later page replaces
    the earlier value.
    """
    result: Dict[str, Any] = {}

    def on_page(page: Dict[str, Any]) -> int:
        entries = page.get(property_name)
        if entries is None:
            return 0
        if not isinstance(entries, dict):
            raise ResponseDecodeError(
                "{} field {!r} should be an object, got {}".format(
                    request.path, property_name, type(entries).__name__
                )
            )
        result.update(entries)
        return len(entries)

    pages = await _follow_pages(
        transport, request, on_page, cursor_field, cursor_param, max_pages
    )
    logger.info(
        "Fetched %d %s from %s in %d page(s)", len(result), property_name, request.path, pages
    )
    return result
