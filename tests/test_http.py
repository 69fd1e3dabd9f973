"""
tests/test_http.py

Pytest unit tests for HtmlFetcher retry and backoff behaviour.

No network: responses come from a scripted session and sleeps are recorded
instead of taken.

Coverage
--------
- Retryable statuses retried up to max_retries with exponential backoff
- Recovery when a later attempt succeeds
- Non-retryable HTTP errors raised on the first attempt
- Connection errors retried like retryable statuses
- Single attempt with the default max_retries of 0
"""

from __future__ import annotations

import dataclasses

import pytest
import requests

from app.crawler.http import HtmlFetcher
from tests.fakes import make_response

URL = "https://downtownhonda.test/"


class ScriptedSession:
    """
    Returns (or raises) the scripted items in order, repeating the last one.
    """

    def __init__(self, *items: requests.Response | Exception) -> None:
        self._items = list(items)
        self.calls = 0

    def get(self, url: str, **kwargs) -> requests.Response:
        item = self._items[min(self.calls, len(self._items) - 1)]
        self.calls += 1
        if isinstance(item, Exception):
            raise item
        return item


def _fetcher(settings, session: ScriptedSession, sleeps: list[float], *, max_retries: int) -> HtmlFetcher:
    return HtmlFetcher(
        settings=dataclasses.replace(settings, max_retries=max_retries),
        session=session,
        sleep=sleeps.append,
    )


class TestHtmlFetcherRetry:
    def test_retryable_status_exhausts_retries_with_backoff(self, settings) -> None:
        session = ScriptedSession(make_response(URL, "busy", status_code=503))
        sleeps: list[float] = []

        with pytest.raises(requests.RequestException, match="after retries"):
            _fetcher(settings, session, sleeps, max_retries=2).fetch(URL)

        assert session.calls == 3
        assert sleeps == [0.5, 1.0]

    def test_later_success_returns_body(self, settings) -> None:
        session = ScriptedSession(
            make_response(URL, "slow down", status_code=429),
            make_response(URL, "<a href='/new'>New</a>"),
        )
        sleeps: list[float] = []

        html = _fetcher(settings, session, sleeps, max_retries=2).fetch(URL)

        assert html == "<a href='/new'>New</a>"
        assert session.calls == 2
        assert sleeps == [0.5]

    def test_not_found_is_not_retried(self, settings) -> None:
        session = ScriptedSession(make_response(URL, "missing", status_code=404))
        sleeps: list[float] = []

        with pytest.raises(requests.HTTPError):
            _fetcher(settings, session, sleeps, max_retries=2).fetch(URL)

        assert session.calls == 1
        assert sleeps == []

    def test_connection_errors_are_retried(self, settings) -> None:
        session = ScriptedSession(requests.ConnectionError("reset"), make_response(URL, "<p>ok</p>"))
        sleeps: list[float] = []

        assert _fetcher(settings, session, sleeps, max_retries=1).fetch(URL) == "<p>ok</p>"
        assert sleeps == [0.5]

    def test_default_makes_a_single_attempt(self, settings) -> None:
        session = ScriptedSession(make_response(URL, "busy", status_code=503))
        sleeps: list[float] = []

        with pytest.raises(requests.RequestException):
            _fetcher(settings, session, sleeps, max_retries=0).fetch(URL)

        assert session.calls == 1
        assert sleeps == []
