"""
BeautifulSoup-based parsing helpers for dealer homepages.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from app.crawler.types import HomepageLink

_WEB_SCHEMES = frozenset({"http", "https"})


class HTMLParsingLayer:
    """
    Deterministic link extraction for homepage documents.
    """

    @classmethod
    def extract_links(cls, *, html: str, base_url: str) -> list[HomepageLink]:
        soup = BeautifulSoup(html, "html.parser")
        links: list[HomepageLink] = []
        for node in soup.find_all("a", href=True):
            href = str(node.get("href", "")).strip()
            if not href:
                continue
            url = cls.resolve_url(href=href, base_url=base_url)
            if url is None:
                continue
            links.append(
                HomepageLink(
                    href=href,
                    url=url,
                    anchor_text=cls.clean_text(node.get_text(" ", strip=True)),
                )
            )
        return links

    @staticmethod
    def resolve_url(*, href: str, base_url: str) -> str | None:
        try:
            resolved = href if href.lower().startswith("http") else urljoin(base_url, href)
            parsed = urlparse(resolved)
        except ValueError:
            return None
        if parsed.scheme.lower() not in _WEB_SCHEMES or not parsed.netloc:
            return None
        return resolved

    @staticmethod
    def clean_text(value: str) -> str:
        return re.sub(r"\s+", " ", value).strip()
