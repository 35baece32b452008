"""Tests for the paginated collection fetcher (core/pagination.py).

WHY: get_all() and get_all_mapping() back every "list all" helper. They
must follow the cursor exactly, keep the caller's filters, and stop on
the last page, or the listings silently lose or duplicate data.

HOW: A small in-memory transport double returns queued page dicts from
send_get() and snapshots the query parameters of each call (the helper
mutates one params dict in place, so the snapshot has to be taken at call
time).

RULES:
- No HTTP at all: the transport double stands in for HttpTransport
- Each test states the pages it serves and the requests it expects
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import pytest

from dolbyio_rest_apis.core.decode import ResponseDecodeError
from dolbyio_rest_apis.core.http import DolbyIoAPIError, RequestOptions
from dolbyio_rest_apis.core.pagination import PaginationError, get_all, get_all_mapping


class _PagedTransport:
    """Returns one queued page per send_get() and records the params sent."""

    def __init__(self, *pages: Any) -> None:
        self.pages = list(pages)
        self.sent_params: List[Dict[str, str]] = []

    async def send_get(self, options: RequestOptions) -> Any:
        self.sent_params.append(dict(options.params or {}))
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


def _make_request(**params: str) -> RequestOptions:
    return RequestOptions(
        hostname="api.voxeet.com",
        path="/v1/monitor/conferences",
        headers={"Accept": "application/json"},
        params=dict(params) if params else None,
    )


# ---------------------------------------------------------------------------
# get_all
# ---------------------------------------------------------------------------


class TestGetAll:
    """Flat-sequence accumulation across pages."""

    def test_worked_example(self):
        """Two pages with max=2: three items, two GETs, start=tok1 on the second."""
        transport = _PagedTransport(
            {"items": [{"id": "a"}, {"id": "b"}], "next": "tok1"},
            {"items": [{"id": "c"}], "next": ""},
        )
        request = _make_request(max="2")

        result = asyncio.run(get_all(transport, request, "items"))

        assert result == [{"id": "a"}, {"id": "b"}, {"id": "c"}]
        assert transport.sent_params == [{"max": "2"}, {"max": "2", "start": "tok1"}]

    def test_items_keep_page_then_intra_page_order(self):
        transport = _PagedTransport(
            {"items": [1, 2, 3], "next": "p2"},
            {"items": [4], "next": "p3"},
            {"items": [5, 6]},
        )
        result = asyncio.run(get_all(transport, _make_request(), "items"))
        assert result == [1, 2, 3, 4, 5, 6]

    def test_absent_cursor_stops_after_first_page(self):
        transport = _PagedTransport({"items": ["only"]})
        result = asyncio.run(get_all(transport, _make_request(), "items"))
        assert result == ["only"]
        assert len(transport.sent_params) == 1

    def test_empty_cursor_stops_loop(self):
        """Page k with next == "" means exactly k requests."""
        transport = _PagedTransport(
            {"items": [1], "next": "a"},
            {"items": [2], "next": "b"},
            {"items": [3], "next": ""},
        )
        asyncio.run(get_all(transport, _make_request(), "items"))
        assert len(transport.sent_params) == 3

    def test_cursor_is_echoed_verbatim(self):
        """Opaque cursors are sent back unchanged, whatever they look like."""
        cursor = "eyJ0cyI6MTcwMDAwMDAwMH0=/+ &x"
        transport = _PagedTransport(
            {"items": [], "next": cursor},
            {"items": []},
        )
        asyncio.run(get_all(transport, _make_request(), "items"))
        assert transport.sent_params[1]["start"] == cursor

    def test_page_without_collection_field_contributes_nothing(self):
        transport = _PagedTransport(
            {"items": ["a"], "next": "1"},
            {"next": "2"},
            {"items": ["b"]},
        )
        result = asyncio.run(get_all(transport, _make_request(), "items"))
        assert result == ["a", "b"]
        assert len(transport.sent_params) == 3

    def test_base_filters_sent_unchanged_on_every_page(self):
        transport = _PagedTransport(
            {"items": [], "next": "c1"},
            {"items": [], "next": "c2"},
            {"items": []},
        )
        request = _make_request(**{"from": "0", "to": "9999999999999", "max": "100"})
        asyncio.run(get_all(transport, request, "items"))

        for params in transport.sent_params:
            assert params["from"] == "0"
            assert params["to"] == "9999999999999"
            assert params["max"] == "100"
        assert "start" not in transport.sent_params[0]
        assert [p.get("start") for p in transport.sent_params[1:]] == ["c1", "c2"]

    def test_missing_params_are_initialized(self):
        transport = _PagedTransport({"items": [1], "next": "n"}, {"items": [2]})
        request = _make_request()
        assert request.params is None

        asyncio.run(get_all(transport, request, "items"))

        assert request.params == {"start": "n"}

    def test_none_response_is_an_empty_final_page(self):
        transport = _PagedTransport(None)
        assert asyncio.run(get_all(transport, _make_request(), "items")) == []

    def test_custom_cursor_field_and_param(self):
        """The Media jobs listing uses next_token on both sides."""
        transport = _PagedTransport(
            {"jobs": ["j1"], "next_token": "t1"},
            {"jobs": ["j2"]},
        )
        result = asyncio.run(
            get_all(
                transport,
                _make_request(),
                "jobs",
                cursor_field="next_token",
                cursor_param="next_token",
            )
        )
        assert result == ["j1", "j2"]
        assert transport.sent_params[1] == {"next_token": "t1"}


class TestGetAllErrors:
    """Failure propagation and the loop guards."""

    def test_transport_error_propagates_without_partial_result(self):
        transport = _PagedTransport(
            {"items": ["a"], "next": "1"},
            DolbyIoAPIError(500, "boom"),
        )
        with pytest.raises(DolbyIoAPIError) as exc_info:
            asyncio.run(get_all(transport, _make_request(), "items"))
        assert exc_info.value.status_code == 500

    def test_repeated_cursor_raises(self):
        transport = _PagedTransport(
            {"items": [1], "next": "same"},
            {"items": [2], "next": "same"},
        )
        with pytest.raises(PaginationError, match="same"):
            asyncio.run(get_all(transport, _make_request(), "items"))
        assert len(transport.sent_params) == 2

    def test_max_pages_bounds_requests(self):
        transport = _PagedTransport(
            {"items": [1], "next": "a"},
            {"items": [2], "next": "b"},
            {"items": [3], "next": "c"},
        )
        with pytest.raises(PaginationError, match="limit of 2"):
            asyncio.run(get_all(transport, _make_request(), "items", max_pages=2))
        assert len(transport.sent_params) == 2

    def test_max_pages_not_hit_when_last_page_arrives(self):
        transport = _PagedTransport(
            {"items": [1], "next": "a"},
            {"items": [2]},
        )
        result = asyncio.run(get_all(transport, _make_request(), "items", max_pages=2))
        assert result == [1, 2]


# ---------------------------------------------------------------------------
# get_all_mapping
# ---------------------------------------------------------------------------


class TestGetAllMapping:
    """Keyed accumulation used for Monitor participants."""

    def test_pages_are_merged_by_key(self):
        transport = _PagedTransport(
            {"participants": {"u1": {"n": 1}, "u2": {"n": 2}}, "next": "p2"},
            {"participants": {"u3": {"n": 3}}},
        )
        result = asyncio.run(get_all_mapping(transport, _make_request(), "participants"))
        assert result == {"u1": {"n": 1}, "u2": {"n": 2}, "u3": {"n": 3}}

    def test_later_page_wins_on_duplicate_key(self):
        transport = _PagedTransport(
            {"participants": {"u1": "old", "u2": "keep"}, "next": "p2"},
            {"participants": {"u1": "new"}},
        )
        result = asyncio.run(get_all_mapping(transport, _make_request(), "participants"))
        assert result == {"u1": "new", "u2": "keep"}

    def test_cursor_handling_matches_get_all(self):
        transport = _PagedTransport(
            {"next": "p2"},
            {"participants": {"u1": 1}, "next": ""},
        )
        request = _make_request(max="50")
        result = asyncio.run(get_all_mapping(transport, request, "participants"))
        assert result == {"u1": 1}
        assert transport.sent_params == [{"max": "50"}, {"max": "50", "start": "p2"}]


# ---------------------------------------------------------------------------
# Collection field shape
# ---------------------------------------------------------------------------


class TestCollectionShape:
    """A collection field of the wrong JSON type is rejected, not coerced."""

    def test_get_all_rejects_object_field(self):
        transport = _PagedTransport({"conferences": {"c1": {}, "c2": {}}})
        with pytest.raises(ResponseDecodeError, match="'conferences' should be an array"):
            asyncio.run(get_all(transport, _make_request(), "conferences"))

    def test_get_all_rejects_string_field(self):
        transport = _PagedTransport({"conferences": "c1,c2"})
        with pytest.raises(ResponseDecodeError, match="got str"):
            asyncio.run(get_all(transport, _make_request(), "conferences"))

    @pytest.mark.parametrize("entries", [["ab", "cd"], [{"u1": 1}], "u1"])
    def test_get_all_mapping_rejects_non_object_field(self, entries):
        transport = _PagedTransport({"participants": entries})
        with pytest.raises(ResponseDecodeError, match="'participants' should be an object"):
            asyncio.run(get_all_mapping(transport, _make_request(), "participants"))

    def test_null_field_counts_as_absent(self):
        transport = _PagedTransport({"conferences": None, "next": "p2"}, {"conferences": [1]})
        assert asyncio.run(get_all(transport, _make_request(), "conferences")) == [1]

    def test_bad_shape_on_later_page_discards_earlier_items(self):
        transport = _PagedTransport(
            {"conferences": [1, 2], "next": "p2"},
            {"conferences": {"oops": 3}},
        )
        with pytest.raises(ResponseDecodeError):
            asyncio.run(get_all(transport, _make_request(), "conferences"))
