"""
HTTP fetch mechanics shared by homepage discovery and static rendering.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import requests

from app.crawler.config.models import CrawlerSettings

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class NonHTMLResponseError(requests.RequestException):
    """Raised when a page responds with something other than HTML."""


class HtmlFetcher:
    """
    GET pages with a bounded timeout, a fixed client identity and optional
    retries for transient statuses.
    """

    def __init__(
        self,
        *,
        settings: CrawlerSettings,
        session: requests.Session,
        timeout_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._session = session
        self._timeout_seconds = timeout_seconds or settings.discovery_timeout_seconds
        self._sleep = sleep
        self.request_headers = {
            "User-Agent": settings.user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        }

    def fetch(self, url: str) -> str:
        """
        Return the HTML body of `url`.

        Raises `requests.RequestException` (including `NonHTMLResponseError`)
        or `ValueError` for URLs requests cannot handle.
        """

        response = self._request_with_retry(url)
        content_type = response.headers.get("Content-Type", "").lower()
        if content_type and not any(kind in content_type for kind in HTML_CONTENT_TYPES):
            raise NonHTMLResponseError(f"Unexpected content type '{content_type}' for {url}")
        return response.text

    def _request_with_retry(self, url: str) -> requests.Response:
        last_error: Exception | None = None

        for attempt in range(self._settings.max_retries + 1):
            try:
                response = self._session.get(
                    url,
                    headers=self.request_headers,
                    timeout=self._timeout_seconds,
                    allow_redirects=True,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable status={response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except (requests.Timeout, requests.ConnectionError, requests.HTTPError) as exc:
                last_error = exc
                if isinstance(exc, requests.HTTPError):
                    status_code = exc.response.status_code if exc.response is not None else None
                    if status_code not in RETRYABLE_STATUS_CODES:
                        raise

            if attempt >= self._settings.max_retries:
                break

            backoff_seconds = self._settings.backoff_initial_seconds * (
                self._settings.backoff_multiplier**attempt
            )
            self._sleep(backoff_seconds)

        raise requests.RequestException(f"Failed to fetch {url} after retries: {last_error}")
