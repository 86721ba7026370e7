"""Test fixtures for fbgraph tests."""

from collections.abc import Callable

import httpx
import pytest

from fbgraph.session import FacebookSession
from fbgraph.transport import TransportOptions

Outcome = Callable[[httpx.Request], httpx.Response] | Exception


class FakeGraph:
    """Stands in for the network: every transport built replays the next queued outcome.

    The last outcome is repeated once the queue runs dry.
    """

    def __init__(self):
        self.options: list[TransportOptions] = []
        self.requests: list[httpx.Request] = []
        self._outcomes: list[Outcome] = []

    def respond(self, status_code: int = 200, **kwargs) -> "FakeGraph":
        self._outcomes.append(lambda request: httpx.Response(status_code, **kwargs))
        return self

    def fail(self, exc: Exception) -> "FakeGraph":
        self._outcomes.append(exc)
        return self

    def build_transport(self, options: TransportOptions) -> httpx.BaseTransport:
        self.options.append(options)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome(request)

        return httpx.MockTransport(handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def graph(monkeypatch) -> FakeGraph:
    """Route every Graph API call made by fbgraph to a FakeGraph."""
    fake = FakeGraph()
    monkeypatch.setattr("fbgraph.transport.build_transport", fake.build_transport)
    return fake


@pytest.fixture
def session() -> FacebookSession:
    return FacebookSession("user-token")
