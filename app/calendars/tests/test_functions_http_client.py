import io
import json
import urllib.error

import pytest
from calendars.adapters import functions_http_client
from calendars.adapters.functions_http_client import CalendarFunctionsHttpClient
from calendars.domain.errors import TokenSubmissionError
from calendars.domain.oauth import TokenSubmission

ENDPOINT = "https://functions.example.com/store-token"


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _submission() -> TokenSubmission:
    return TokenSubmission(
        provider="google",
        access_token="tok123",
        scope="a b",
        expires_in="3600",
    )


class TestCalendarFunctionsHttpClient:
    def test_posts_camel_case_body_with_forwarded_auth(self, monkeypatch):
        captured = {}

        def fake_urlopen(req, timeout):
            captured["req"] = req
            captured["timeout"] = timeout
            return _FakeResponse(json.dumps({"success": True}).encode())

        monkeypatch.setattr(
            functions_http_client.urllib.request, "urlopen", fake_urlopen
        )

        client = CalendarFunctionsHttpClient(
            endpoint=ENDPOINT,
            timeout_seconds=5,
            auth_headers={"Authorization": "Bearer jwt"},
        )
        assert client.submit(_submission()) == {"success": True}

        req = captured["req"]
        assert req.full_url == ENDPOINT
        assert req.get_method() == "POST"
        assert req.get_header("Authorization") == "Bearer jwt"
        assert captured["timeout"] == 5
        assert json.loads(req.data) == {
            "provider": "google",
            "accessToken": "tok123",
            "scope": "a b",
            "expiresIn": "3600",
        }

    def test_http_error_hides_response_body(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise urllib.error.HTTPError(
                ENDPOINT, 500, "err", {}, io.BytesIO(b"access_token=tok123")
            )

        monkeypatch.setattr(
            functions_http_client.urllib.request, "urlopen", fake_urlopen
        )

        with pytest.raises(TokenSubmissionError) as exc:
            CalendarFunctionsHttpClient(endpoint=ENDPOINT).submit(_submission())
        assert "http_500" in str(exc.value)
        assert "tok123" not in str(exc.value)

    def test_network_failure(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise urllib.error.URLError("connection refused")

        monkeypatch.setattr(
            functions_http_client.urllib.request, "urlopen", fake_urlopen
        )

        with pytest.raises(TokenSubmissionError):
            CalendarFunctionsHttpClient(endpoint=ENDPOINT).submit(_submission())

    def test_rejected_payload(self, monkeypatch):
        monkeypatch.setattr(
            functions_http_client.urllib.request,
            "urlopen",
            lambda req, timeout: _FakeResponse(b'{"success": false}'),
        )

        with pytest.raises(TokenSubmissionError, match="rejected"):
            CalendarFunctionsHttpClient(endpoint=ENDPOINT).submit(_submission())
