import math

import pytest
import requests

from core.errors import DecodeFailure, NetworkFailure
from core.liquidsoap_client import LibraryClient, StatusClient, decode_library, decode_status
from core.models import SourceMode
from tests.fakes import FakeHttp, FakeResponse

BASE = "https://radio.test/config"


class TestDecodeStatus:
    def test_full_payload_as_pairs(self):
        status = decode_status([
            ["queue", '["/music/a.mp3", "/music/b.mp3"]'],
            ["source", "queue"],
            ["elapsed", "30.5"],
            ["remaining", "89.5"],
            ["duration", "120"],
        ])
        assert status.queue == ("/music/a.mp3", "/music/b.mp3")
        assert status.source_mode is SourceMode.QUEUE
        assert status.elapsed_s == 30.5
        assert status.remaining_s == 89.5
        assert status.duration_s == 120.0

    def test_missing_fields_default_safely(self):
        status = decode_status([])
        assert status.queue == ()
        assert status.source_mode is SourceMode.RANDOM
        assert (status.elapsed_s, status.remaining_s, status.duration_s) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("raw", ["abc", "", None, "nan", "inf", "-4", [], {}, True])
    def test_garbage_numbers_become_zero(self, raw):
        status = decode_status([["elapsed", raw], ["duration", raw], ["remaining", raw]])
        for value in (status.elapsed_s, status.duration_s, status.remaining_s):
            assert value == 0.0
            assert not math.isnan(value)

    def test_unknown_source_is_random(self):
        assert decode_status([["source", "live"]]).source_mode is SourceMode.RANDOM

    def test_elapsed_beyond_duration_is_kept(self):
        status = decode_status({"elapsed": "200", "duration": "100"})
        assert status.elapsed_s == 200.0

    def test_undecodable_queue_only_fails_that_field(self, caplog):
        status = decode_status([["queue", "[not json"], ["elapsed", "12"], ["duration", "60"]])
        assert status.queue is None
        assert status.elapsed_s == 12.0
        assert status.duration_s == 60.0
        assert "queue" in caplog.text

    def test_queue_of_non_strings_is_rejected(self):
        assert decode_status([["queue", "[1, 2]"]]).queue is None

    def test_malformed_pairs_raise(self):
        with pytest.raises(DecodeFailure):
            decode_status([["queue"]])
        with pytest.raises(DecodeFailure):
            decode_status("queue=1")


class TestDecodeLibrary:
    def test_first_entry_second_element(self):
        assert decode_library([["files", '["/a/X.mp3", "/a/Y.mp3"]']]) == ("/a/X.mp3", "/a/Y.mp3")

    def test_empty_container(self):
        assert decode_library([]) == ()

    def test_bad_inner_payload(self):
        with pytest.raises(DecodeFailure):
            decode_library([["files", "nope"]])


class TestClients:
    def test_status_fetch_hits_status_endpoint_without_cache(self):
        http = FakeHttp({f"{BASE}/status": FakeResponse(payload=[["elapsed", "1"]])})
        status = StatusClient(BASE + "/", session=http).fetch()
        assert status.elapsed_s == 1.0
        call = http.calls[0]
        assert call["url"] == f"{BASE}/status"
        assert "no-cache" in call["headers"]["Cache-Control"]

    def test_http_error_is_network_failure(self):
        http = FakeHttp({f"{BASE}/status": FakeResponse(503, "down")})
        with pytest.raises(NetworkFailure):
            StatusClient(BASE, session=http).fetch()

    def test_connection_error_is_network_failure(self):
        http = FakeHttp({f"{BASE}/status": requests.ConnectionError("refused")})
        with pytest.raises(NetworkFailure):
            StatusClient(BASE, session=http).fetch()

    def test_non_json_body_is_decode_failure(self):
        http = FakeHttp({f"{BASE}/library": FakeResponse(200, "<html>")})
        with pytest.raises(DecodeFailure):
            LibraryClient(BASE, session=http).fetch()
