"""
Short-lived rendering sessions for inventory pages.

Every `open()` call owns its own session and tears it down on exit, so a
rendered page is never shared between dealers.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

import requests
from bs4 import BeautifulSoup, Tag
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import ElementHandle, Page, sync_playwright

from app.crawler.config.models import CrawlerSettings, RendererKind
from app.crawler.errors import RenderError
from app.crawler.http import HtmlFetcher
from app.crawler.logging_utils import log_event

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
]
VIEWPORT = {"width": 1366, "height": 768}


class PageElement(Protocol):
    def select_one(self, selector: str) -> "PageElement | None":
        ...

    def text(self) -> str:
        ...


class RenderedPage(Protocol):
    def select(self, selector: str) -> list[PageElement]:
        ...


class PageRenderer(ABC):
    """
    Opens an inventory URL and exposes its rendered DOM for querying.
    """

    @abstractmethod
    def open(self, url: str) -> AbstractContextManager[RenderedPage]:
        """
        Context manager yielding the rendered page; raises `RenderError`.
        """


class _SoupElement:
    def __init__(self, node: Tag) -> None:
        self._node = node

    def select_one(self, selector: str) -> "_SoupElement | None":
        found = self._node.select_one(selector)
        return _SoupElement(found) if found is not None else None

    def text(self) -> str:
        return re.sub(r"\s+", " ", self._node.get_text(" ")).strip()


class _SoupPage:
    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    def select(self, selector: str) -> list[PageElement]:
        return [_SoupElement(node) for node in self._soup.select(selector)]


class StaticPageRenderer(PageRenderer):
    """
    Fetches the raw HTML and parses it without running scripts.
    """

    def __init__(
        self,
        *,
        settings: CrawlerSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._fetcher = HtmlFetcher(
            settings=settings,
            session=session or requests.Session(),
            timeout_seconds=settings.render_timeout_seconds,
        )

    @contextmanager
    def open(self, url: str) -> Iterator[RenderedPage]:
        try:
            html = self._fetcher.fetch(url)
        except (requests.RequestException, ValueError) as exc:
            raise RenderError(f"url={url} error={exc}") from exc
        yield _SoupPage(BeautifulSoup(html, "html.parser"))


class _PlaywrightElement:
    def __init__(self, handle: ElementHandle) -> None:
        self._handle = handle

    def select_one(self, selector: str) -> "_PlaywrightElement | None":
        found = self._handle.query_selector(selector)
        return _PlaywrightElement(found) if found is not None else None

    def text(self) -> str:
        raw = self._handle.text_content() or self._handle.inner_text() or ""
        return raw.strip()


class _PlaywrightPage:
    def __init__(self, page: Page) -> None:
        self._page = page

    def select(self, selector: str) -> list[PageElement]:
        return [_PlaywrightElement(handle) for handle in self._page.query_selector_all(selector)]


class PlaywrightRenderer(PageRenderer):
    """
    Renders pages in headless Chromium, one browser per call.
    """

    def __init__(self, *, settings: CrawlerSettings) -> None:
        self._settings = settings

    @contextmanager
    def open(self, url: str) -> Iterator[RenderedPage]:
        timeout_ms = self._settings.render_timeout_seconds * 1000
        playwright = None
        browser = None
        context = None
        try:
            try:
                playwright = sync_playwright().start()
                browser = playwright.chromium.launch(
                    headless=self._settings.headless,
                    args=CHROMIUM_ARGS,
                    timeout=timeout_ms,
                )
                context = browser.new_context(
                    user_agent=self._settings.user_agent,
                    viewport=VIEWPORT,
                )
                page = context.new_page()
                page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                page.wait_for_timeout(self._settings.settle_delay_seconds * 1000)
            except PlaywrightError as exc:
                raise RenderError(f"url={url} error={exc}") from exc
            yield _PlaywrightPage(page)
        finally:
            if context is not None:
                self._close_quietly(context.close, url=url, resource="context")
            if browser is not None:
                self._close_quietly(browser.close, url=url, resource="browser")
            if playwright is not None:
                self._close_quietly(playwright.stop, url=url, resource="playwright")

    @staticmethod
    def _close_quietly(close: Callable[[], None], *, url: str, resource: str) -> None:
        try:
            close()
        except PlaywrightError as exc:
            log_event(
                logger,
                logging.WARNING,
                "render_session_close_failed",
                url=url,
                resource=resource,
                error=str(exc),
            )


def build_renderer(
    *,
    settings: CrawlerSettings,
    session: requests.Session | None = None,
) -> PageRenderer:
    if settings.renderer == RendererKind.STATIC:
        return StaticPageRenderer(settings=settings, session=session)
    return PlaywrightRenderer(settings=settings)
