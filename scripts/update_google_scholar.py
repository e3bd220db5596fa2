#!/usr/bin/env python3
"""Update the Google Scholar metrics JSON file for the website.

Writes:
  - data/scholar.json (see scholar_metrics.py for the shape)

Sources:
  - profile totals and citations per year: the community 'scholarly' library
  - "Since <year>" totals: scraped from the public profile page, because
    scholarly's windowed indices are not what the site shows

Notes:
  - Google Scholar has no official public API and may block requests (CAPTCHA).
  - The "since" scrape is best effort: if it fails the file is still written
    with null 'since2020' values. Any other failure aborts without writing.
  - The stats table is read by cell position; if Scholar changes its markup
    the "since" values come back null.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests
from bs4 import BeautifulSoup
from scholarly import scholarly

from scholar_metrics import (
    MetricsReport,
    ProfileSummary,
    WindowedMetrics,
    citation_points,
    parse_since_cells,
    write_report,
)
from site_config import SCHOLAR_ID, configure_logging, profile_url

ROOT = Path(__file__).resolve().parents[1]
OUT_PATH = ROOT / "data" / "scholar.json"

STATS_CELL_SELECTOR = "#gsc_rsb_st td.gsc_rsb_std"
REQUEST_TIMEOUT = 60

logger = logging.getLogger(__name__)


def extract_stats_cells(html: str) -> List[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [td.get_text() for td in soup.select(STATS_CELL_SELECTOR)]


def scrape_since_metrics(scholar_id: str) -> Optional[WindowedMetrics]:
    """Scrape the "Since <year>" column from the profile page.

    Returns None (all three values unavailable) instead of raising.
    """
    url = profile_url(scholar_id)
    logger.debug("Scraping URL: %s", url)
    try:
        r = requests.get(url, timeout=REQUEST_TIMEOUT)
        r.raise_for_status()
        return parse_since_cells(extract_stats_cells(r.text))
    except Exception as e:
        logger.error("Failed to scrape Google Scholar: %s", e)
        return None


def fetch_profile(scholar_id: str) -> Tuple[ProfileSummary, Dict[str, Any]]:
    """Fetch the author record with its all-time totals and per-year counts.

    search_author_id fills 'basics'; the single fill() below loads the
    profile page once more for both 'indices' and 'counts'.
    """
    author = scholarly.search_author_id(scholar_id)
    author = scholarly.fill(author, sections=["indices", "counts"])

    summary = ProfileSummary(
        citations=int(author.get("citedby") or 0),
        h_index=int(author.get("hindex") or 0),
        i10_index=int(author.get("i10index") or 0),
    )
    return summary, author


def fetch_citation_history(author: Dict[str, Any]) -> Dict[Any, Any]:
    # Citations received per year, already loaded by fetch_profile
    return author.get("cites_per_year") or {}


def build_report(scholar_id: str, today: Optional[date] = None) -> MetricsReport:
    logger.info("Fetching profile data...")
    profile, author = fetch_profile(scholar_id)
    logger.info("Profile loaded: %s (%s)", author.get("name"), author.get("affiliation"))

    logger.info("Fetching citation history...")
    history = fetch_citation_history(author)
    logger.info("Citation history: %d years of data", len(history))

    logger.info(
        "All-time metrics: citations=%d, h-index=%d, i10-index=%d",
        profile.citations,
        profile.h_index,
        profile.i10_index,
    )

    logger.info("Scraping 'Since' metrics from Google Scholar...")
    since = scrape_since_metrics(scholar_id)
    if since is None:
        logger.warning("'since' metrics unavailable - check Google Scholar accessibility")
    else:
        logger.info(
            "Since metrics: citations=%d, h-index=%d, i10-index=%d",
            since.citations,
            since.h_index,
            since.i10_index,
        )

    points = citation_points(history)
    if points:
        logger.info("Citations by year: %d to %d", points[0].year, points[-1].year)

    last_updated = (today or date.today()).strftime("%Y%m%d")
    logger.info("Last updated timestamp: %s", last_updated)

    return MetricsReport(
        last_updated=last_updated,
        profile=profile,
        since=since,
        citations_by_year=points,
    )


def main() -> None:
    configure_logging()

    logger.info("Starting Google Scholar metrics scrape")
    logger.info("Scholar ID: %s", SCHOLAR_ID)
    logger.info("Output file: %s", OUT_PATH)

    try:
        report = build_report(SCHOLAR_ID)
    except Exception as e:
        logger.error("Aborting, nothing written: %s", e)
        raise

    logger.info("Writing JSON to: %s", OUT_PATH)
    write_report(report, OUT_PATH)
    logger.info("Done! Metrics saved successfully")

    print("✅ Updated:")
    print(f" - {OUT_PATH.relative_to(ROOT)}")


if __name__ == "__main__":
    main()
