"""Tests for the Monitor endpoints: conferences, recordings and webhook events.

WHY: Monitor listings are where pagination and query parameters matter:
the time window, page size and cursor must be sent exactly as the API
expects, and the "all" variants must walk every page.

HOW: FakeApi serves the pages; tests check the query string of each
request and the decoded dataclasses.

RULES:
- Single-page calls send max and start; "all" calls send page_size as max
- Booleans are sent as lowercase "true"/"false"
"""

from __future__ import annotations

import httpx
import pytest

from dolbyio_rest_apis.communications.monitor import conferences, recordings, webhooks
from dolbyio_rest_apis.core.decode import ResponseDecodeError

_LIVE_CONFERENCE = {
    "confId": "conf-1",
    "alias": "daily",
    "region": "eu",
    "dolbyVoice": True,
    "start": 1700000000000,
    "live": True,
    "owner": {"userId": "u1"},
}

_ENDED_CONFERENCE = {
    "confId": "conf-2",
    "alias": "weekly",
    "start": 1690000000000,
    "live": False,
    "end": 1690000360000,
    "duration": 360000,
    "type": "RECORDED",
    "nbUsers": 3,
    "nbListeners": 0,
    "nbPstn": None,
}

_RECORDING = {
    "conference": {"confId": "conf-2", "confAlias": "weekly"},
    "region": "eu",
    "url": "https://bucket/rec.mp4",
    "createdAt": 1690000400000,
    "recordingType": "MP4",
    "duration": 360000,
    "filename": "rec.mp4",
    "size": 123456,
    "mediaType": "video/mp4",
}


# ---------------------------------------------------------------------------
# Conferences
# ---------------------------------------------------------------------------


class TestListConferences:
    def test_single_page_with_default_window(self, fake_api, bearer):
        api = fake_api({"conferences": [_LIVE_CONFERENCE], "first": "f", "next": "n1"})

        page = api.run(lambda t: conferences.list_conferences(t, bearer))

        assert page.next == "n1"
        assert page.conferences[0].conf_id == "conf-1"
        assert page.conferences[0].end is None
        assert api.last.url.host == "api.voxeet.com"
        assert api.last.url.path == "/v1/monitor/conferences"
        assert api.params() == {
            "from": "0",
            "to": "9999999999999",
            "max": "100",
            "active": "false",
            "livestats": "false",
        }

    def test_filters_and_cursor(self, fake_api, bearer):
        api = fake_api({"conferences": []})

        api.run(
            lambda t: conferences.list_conferences(
                t,
                bearer,
                from_=10,
                to=20,
                max_=5,
                start="cursor-x",
                active=True,
                livestats=True,
                alias="^daily",
                external_id="user-7",
            )
        )

        assert api.params() == {
            "from": "10",
            "to": "20",
            "max": "5",
            "start": "cursor-x",
            "active": "true",
            "livestats": "true",
            "alias": "^daily",
            "exid": "user-7",
        }

    def test_list_all_follows_pages(self, fake_api, bearer):
        api = fake_api(
            {"conferences": [_LIVE_CONFERENCE], "next": "page-2"},
            {"conferences": [_ENDED_CONFERENCE], "next": ""},
        )

        result = api.run(lambda t: conferences.list_all_conferences(t, bearer, page_size=1))

        assert [c.conf_id for c in result] == ["conf-1", "conf-2"]
        assert result[1].duration == 360000
        assert result[1].nb_pstn is None
        assert "start" not in api.params(0)
        assert api.params(0)["max"] == "1"
        assert api.params(1)["start"] == "page-2"
        assert api.params(1)["max"] == "1"

    def test_malformed_item_is_rejected(self, fake_api, bearer):
        api = fake_api({"conferences": [{"alias": "no id"}]})
        with pytest.raises(ResponseDecodeError, match="conference summary"):
            api.run(lambda t: conferences.list_all_conferences(t, bearer))


class TestConferenceDetails:
    def test_get_conference(self, fake_api, bearer):
        api = fake_api(_ENDED_CONFERENCE)
        result = api.run(lambda t: conferences.get_conference(t, bearer, "conf-2", livestats=True))
        assert result.type == "RECORDED"
        assert api.last.url.path == "/v1/monitor/conferences/conf-2"
        assert api.params() == {"livestats": "true"}

    def test_statistics(self, fake_api, bearer):
        api = fake_api(
            {
                "maxParticipants": {"USER": 3, "LISTENER": 0},
                "network": {"rx": {"audio": 10}, "tx": {"audio": 12}},
            }
        )
        stats = api.run(lambda t: conferences.get_conference_statistics(t, bearer, "conf-2"))
        assert stats.max_participants["USER"] == 3
        assert stats.network["tx"] == {"audio": 12}
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/statistics"

    def test_participants_page_for_one_user(self, fake_api, bearer):
        api = fake_api(
            {
                "participants": {"u1": {"connections": [{"ts": 1}], "stats": {"rx": 1}}},
                "next": "p2",
            }
        )

        page = api.run(
            lambda t: conferences.get_conference_participants(
                t, bearer, "conf-2", user_id="u1", participant_type="USER"
            )
        )

        assert page.participants["u1"].connections == [{"ts": 1}]
        assert page.next == "p2"
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/participants/u1"
        assert api.params()["type"] == "USER"

    def test_all_participants_merged_by_user(self, fake_api, bearer):
        api = fake_api(
            {"participants": {"u1": {"connections": []}, "u2": {}}, "next": "p2"},
            {"participants": {"u1": {"connections": [{"ts": 2}]}}},
        )

        result = api.run(lambda t: conferences.get_all_conference_participants(t, bearer, "conf-2"))

        assert set(result) == {"u1", "u2"}
        assert result["u1"].connections == [{"ts": 2}]
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/participants"
        assert api.params(1)["start"] == "p2"


# ---------------------------------------------------------------------------
# Recordings
# ---------------------------------------------------------------------------


class TestRecordings:
    def test_get_recordings_page(self, fake_api, bearer):
        api = fake_api({"recordings": [_RECORDING], "next": "r2"})

        page = api.run(lambda t: recordings.get_recordings(t, bearer, max_=1, start="r1"))

        recording = page.recordings[0]
        assert recording.conf_id == "conf-2"
        assert recording.conf_alias == "weekly"
        assert recording.size == 123456
        assert page.next == "r2"
        assert api.last.url.path == "/v1/monitor/recordings"
        assert api.params()["start"] == "r1"

    def test_get_all_recordings(self, fake_api, bearer):
        api = fake_api(
            {"recordings": [_RECORDING], "next": "r2"},
            {"recordings": [_RECORDING]},
        )
        result = api.run(lambda t: recordings.get_all_recordings(t, bearer))
        assert len(result) == 2
        assert len(api.requests) == 2

    def test_conference_recordings(self, fake_api, bearer):
        api = fake_api({"recordings": []})
        api.run(lambda t: recordings.get_conference_recordings(t, bearer, "conf-2"))
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/recordings"

    def test_delete_recording(self, fake_api, bearer):
        api = fake_api(httpx.Response(204))
        api.run(lambda t: recordings.delete_recording(t, bearer, "conf-2"))
        assert api.last.method == "DELETE"
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/recordings"

    def test_dolby_voice_recording(self, fake_api, bearer):
        api = fake_api({"region": "eu", "mix": {"mp3": "https://bucket/a.mp3"}})
        result = api.run(lambda t: recordings.get_dolby_voice_recording(t, bearer, "conf-2"))
        assert result["mix"]["mp3"] == "https://bucket/a.mp3"
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/recordings/audio"

    @pytest.mark.parametrize(
        "download, suffix, accept",
        [
            (recordings.download_mp4_recording, "mp4", "video/mp4"),
            (recordings.download_mp3_recording, "mp3", "video/mpeg"),
        ],
    )
    def test_downloads(self, fake_api, bearer, tmp_path, download, suffix, accept):
        api = fake_api(httpx.Response(200, content=b"media-bytes"))
        target = tmp_path / "rec.{}".format(suffix)

        api.run(lambda t: download(t, bearer, "conf-2", target))

        assert target.read_bytes() == b"media-bytes"
        assert api.last.url.path == "/v1/monitor/conferences/conf-2/recordings/{}".format(suffix)
        assert api.last.headers["Accept"] == accept
        assert api.last.headers["Authorization"] == "Bearer jwt-abc"


# ---------------------------------------------------------------------------
# Webhook events
# ---------------------------------------------------------------------------

_EVENT = {
    "id": "evt-1",
    "webhook": '{"eventType":"Conference.Created"}',
    "url": "https://hooks.example.com",
    "confId": "conf-1",
    "thirdPartyId": "tp",
    "ts": 1700000000000,
    "response": {"status": "200 OK", "headers": {"Content-Type": "text/plain"}},
}


class TestWebhookEvents:
    def test_account_events_page(self, fake_api, bearer):
        api = fake_api({"webhooks": [_EVENT], "next": "w2"})

        page = api.run(
            lambda t: webhooks.get_events(t, bearer, event_type="Conference.Created")
        )

        event = page.webhooks[0]
        assert event.response_status == "200 OK"
        assert event.response_headers == {"Content-Type": "text/plain"}
        assert api.last.url.path == "/v1/monitor/webhooks"
        assert api.params()["type"] == "Conference.Created"

    def test_conference_events_all_pages(self, fake_api, bearer):
        api = fake_api(
            {"webhooks": [_EVENT], "next": "w2"},
            {"webhooks": [dict(_EVENT, id="evt-2")]},
        )

        result = api.run(lambda t: webhooks.get_all_events(t, bearer, conference_id="conf-1"))

        assert [e.id for e in result] == ["evt-1", "evt-2"]
        assert api.last.url.path == "/v1/monitor/conferences/conf-1/webhooks"
        assert api.params(1)["start"] == "w2"
