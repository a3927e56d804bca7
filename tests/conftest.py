import json

import pytest

from airparif import AirParif


class DummyResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def json(self):
        return json.loads(self.text)


class DummySession:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.last_url = None
        self.last_headers = None
        self.last_timeout = None
        self.calls = 0

    def get(self, url, headers=None, timeout=None):
        self.calls += 1
        self.last_url = url
        self.last_headers = headers or {}
        self.last_timeout = timeout
        if self._error is not None:
            raise self._error
        return self._response


@pytest.fixture
def make_client():
    """Build a client wired to a dummy session answering ``body``."""

    def _make(body="[]", status_code=200, error=None):
        if not isinstance(body, str):
            body = json.dumps(body)
        session = DummySession(DummyResponse(body, status_code), error=error)
        client = AirParif("dummy", base_url="https://api.test", session=session)
        return client, session

    return _make
