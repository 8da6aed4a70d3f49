"""
BlockNotes — Middleware Unit Tests
====================================

What:  Rate limiter window arithmetic, request id sanitizing and access log
       levels, without going through HTTP.
"""

import logging
from unittest.mock import MagicMock

from blocknotes.middleware.logging import level_for_status
from blocknotes.middleware.rate_limit import RateLimitMiddleware
from blocknotes.middleware.request_id import _client_request_id


class TestRateLimitWindow:

    def setup_method(self):
        self.limiter = RateLimitMiddleware(app=MagicMock(), max_requests=2, window_seconds=60)

    def test_requests_under_limit_pass(self):
        assert self.limiter._register("1.2.3.4", 0.0) is None
        assert self.limiter._register("1.2.3.4", 1.0) is None

    def test_over_limit_returns_retry_after(self):
        self.limiter._register("1.2.3.4", 0.0)
        self.limiter._register("1.2.3.4", 1.0)

        assert self.limiter._register("1.2.3.4", 2.0) == 59

    def test_window_slides(self):
        self.limiter._register("1.2.3.4", 0.0)
        self.limiter._register("1.2.3.4", 30.0)

        assert self.limiter._register("1.2.3.4", 60.5) is None
        assert self.limiter._register("1.2.3.4", 61.0) is not None

    def test_clients_are_independent(self):
        self.limiter._register("1.1.1.1", 0.0)
        self.limiter._register("1.1.1.1", 0.0)

        assert self.limiter._register("2.2.2.2", 0.0) is None

    def test_idle_clients_are_swept(self):
        self.limiter._register("1.1.1.1", 0.0)

        self.limiter._sweep(cutoff=100.0)

        assert "1.1.1.1" not in self.limiter._hits


class TestRequestId:

    def _request(self, value=None):
        request = MagicMock()
        request.headers = {} if value is None else {"X-Request-ID": value}
        return request

    def test_sane_client_id_is_kept(self):
        assert _client_request_id(self._request("abc-123")) == "abc-123"

    def test_missing_or_oversized_id_is_dropped(self):
        assert _client_request_id(self._request()) == ""
        assert _client_request_id(self._request("x" * 65)) == ""
        assert _client_request_id(self._request("bad\nid")) == ""


def test_log_level_follows_status_class():
    assert level_for_status(200) == logging.INFO
    assert level_for_status(404) == logging.WARNING
    assert level_for_status(503) == logging.ERROR
