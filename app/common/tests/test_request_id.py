import logging

import pytest
from common.logging import RequestIdFilter
from common.request_id import get_request_id, set_request_id


def test_filter_attaches_current_request_id():
    set_request_id("req-1")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "req-1"
    assert get_request_id() == "req-1"


@pytest.mark.django_db
class TestRequestIdMiddleware:
    def test_echoes_incoming_header(self, client):
        resp = client.get("/health/", HTTP_X_REQUEST_ID="abc-123")
        assert resp.status_code == 200
        assert resp["X-Request-ID"] == "abc-123"

    def test_generates_id_when_missing(self, client):
        resp = client.get("/health/")
        assert len(resp["X-Request-ID"]) == 32

    def test_caps_header_length(self, client):
        resp = client.get("/health/", HTTP_X_REQUEST_ID="a" * 500)
        assert resp["X-Request-ID"] == "a" * 128
