"""Тесты dependency functions: authorize и get_client_ip."""

from starlette.requests import Request

from oxidized_wrapper.api.dependencies import authorize, get_client_ip


def _request(headers=None, client=("192.0.2.10", 50000)):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/devices",
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in (headers or {}).items()
        ],
        "client": client,
    }
    return Request(scope)


class TestAuthorize:

    def test_match(self):
        assert authorize("Token RIGHT", "RIGHT") is True

    def test_mismatch(self):
        assert authorize("Token WRONG", "RIGHT") is False

    def test_missing_header(self):
        assert authorize(None, "RIGHT") is False

    def test_empty_header(self):
        assert authorize("", "RIGHT") is False

    def test_unicode_header(self):
        assert authorize("Token ПРАВО", "RIGHT") is False

    def test_empty_configured_token(self):
        """Пустой WRAPPER_TOKEN принимает только "Token "."""
        assert authorize("Token ", "") is True
        assert authorize("Token x", "") is False


class TestClientIP:

    def test_forwarded_for_first_entry(self):
        request = _request({"X-Forwarded-For": " 203.0.113.7 , 10.0.0.1"})
        assert get_client_ip(request) == "203.0.113.7"

    def test_real_ip(self):
        request = _request({"X-Real-IP": "198.51.100.4"})
        assert get_client_ip(request) == "198.51.100.4"

    def test_forwarded_for_wins(self):
        request = _request({"X-Forwarded-For": "203.0.113.7", "X-Real-IP": "198.51.100.4"})
        assert get_client_ip(request) == "203.0.113.7"

    def test_peer_address(self):
        assert get_client_ip(_request()) == "192.0.2.10"

    def test_no_client(self):
        assert get_client_ip(_request(client=None)) == ""
