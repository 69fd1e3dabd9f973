"""
Inventory-page discovery from a dealer homepage.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import requests

from app.crawler.config.models import CrawlerSettings
from app.crawler.errors import DiscoveryFetchError
from app.crawler.http import HtmlFetcher
from app.crawler.logging_utils import log_event
from app.crawler.parsing import HTMLParsingLayer
from app.crawler.patterns import INVENTORY_PATH_RULES, InventoryPathRule
from app.crawler.types import InventoryCandidate

logger = logging.getLogger(__name__)


def rank_candidates(
    *,
    html: str,
    homepage_url: str,
    rules: Sequence[InventoryPathRule] = INVENTORY_PATH_RULES,
) -> list[InventoryCandidate]:
    """
    Score every homepage link against every rule, best first.

    Each (link, rule) pair with a positive score is its own candidate. The
    sort is stable, so equal scores keep link traversal order.
    """

    candidates: list[InventoryCandidate] = []
    for link in HTMLParsingLayer.extract_links(html=html, base_url=homepage_url):
        for rule in rules:
            score = rule.score_link(href=link.href, anchor_text=link.anchor_text)
            if score <= 0:
                continue
            candidates.append(
                InventoryCandidate(
                    url=link.url,
                    confidence_score=score,
                    matched_pattern=rule.path,
                    anchor_text=link.anchor_text.lower(),
                )
            )
    candidates.sort(key=lambda candidate: candidate.confidence_score, reverse=True)
    return candidates


class PageDiscovery:
    """
    Finds the most likely inventory page linked from a dealer homepage.
    """

    def __init__(
        self,
        *,
        settings: CrawlerSettings,
        session: requests.Session | None = None,
        rules: Sequence[InventoryPathRule] = INVENTORY_PATH_RULES,
    ) -> None:
        self._rules = tuple(rules)
        self._fetcher = HtmlFetcher(
            settings=settings,
            session=session or requests.Session(),
            timeout_seconds=settings.discovery_timeout_seconds,
        )

    def discover(self, homepage_url: str) -> InventoryCandidate | None:
        """
        Return the best inventory candidate, or None when nothing matched or
        the homepage could not be fetched.
        """

        try:
            html = self.fetch_homepage(homepage_url)
        except DiscoveryFetchError as exc:
            log_event(
                logger,
                logging.WARNING,
                "homepage_fetch_failed",
                homepage_url=homepage_url,
                error=str(exc),
            )
            return None

        candidates = rank_candidates(html=html, homepage_url=homepage_url, rules=self._rules)
        if not candidates:
            log_event(logger, logging.INFO, "inventory_page_not_found", homepage_url=homepage_url)
            return None

        best = candidates[0]
        log_event(
            logger,
            logging.INFO,
            "inventory_page_discovered",
            homepage_url=homepage_url,
            inventory_url=best.url,
            confidence_score=best.confidence_score,
            matched_pattern=best.matched_pattern,
            candidates=len(candidates),
        )
        return best

    def fetch_homepage(self, homepage_url: str) -> str:
        try:
            return self._fetcher.fetch(homepage_url)
        except (requests.RequestException, ValueError) as exc:
            raise DiscoveryFetchError(f"homepage={homepage_url} error={exc}") from exc
