"""
Run one dealer inventory crawl from the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging

from app.config import get_app_settings
from app.crawler.errors import CatalogPersistenceError, CrawlAlreadyRunningError
from app.domain.dealer_inventory import CrawlSummary
from app.services.inventory_crawl_service import get_crawl_orchestrator


def _summary_payload(summary: CrawlSummary) -> dict[str, object]:
    return {
        "totalDealers": summary.total_dealers,
        "successCount": summary.success_count,
        "failCount": summary.fail_count,
        "totalVehicles": summary.total_vehicles,
        "timestamp": summary.timestamp.isoformat(),
        "error": summary.error,
        "results": [
            {
                "dealer": outcome.dealer,
                "status": outcome.status,
                "count": len(outcome.vehicles),
                "inventoryUrl": outcome.inventory_url,
                "error": outcome.error,
            }
            for outcome in summary.outcomes
        ],
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Crawl dealer websites for vehicle inventory.")
    parser.add_argument(
        "--max-dealers",
        dest="max_dealers",
        type=int,
        default=None,
        help="Only crawl the first N dealers of the roster.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, get_app_settings().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    orchestrator = get_crawl_orchestrator()
    try:
        summary = orchestrator.run(max_dealers=args.max_dealers)
    except CrawlAlreadyRunningError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 1
    except CatalogPersistenceError as exc:
        failed = orchestrator.status().last_summary
        payload = _summary_payload(failed) if failed is not None else {"error": str(exc)}
        print(json.dumps(payload, indent=2))
        return 1

    print(json.dumps(_summary_payload(summary), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
