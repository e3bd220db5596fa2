#!/usr/bin/env python3
"""
Publications Page Builder

Renders the publications page from structured records and the Google
Scholar metrics file written by update_google_scholar.py.

READS:
    data/publications.yml    → publication records
    data/scholar.json        → citation metrics (stats table + chart)

WRITES:
    docs/publications.html

TEMPLATE:
    templates/publications.html

USAGE:
    python scripts/build_publications.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from scholar_metrics import MetricsReport, iter_year_counts, read_report
from site_config import SCHOLAR_ID, configure_logging, profile_url


# ============================================================================
# CONFIGURATION
# ============================================================================

BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "templates"
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = BASE_DIR / "docs"

PUBLICATIONS_PATH = DATA_DIR / "publications.yml"
SCHOLAR_PATH = DATA_DIR / "scholar.json"
OUTPUT_PATH = OUTPUT_DIR / "publications.html"

AUTHOR_NAME = "Brandon Monier"

TYPE_LABELS = {
    "journal_article": "Journal Article",
    "review": "Review",
    "phd_dissertation": "PhD Dissertation",
    "master_thesis": "Master's Thesis",
    "book_chapter": "Book Chapter",
}
THESIS_TYPES = {"phd_dissertation", "master_thesis"}

logger = logging.getLogger(__name__)

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)


@dataclass
class Publication:
    title: str
    year: int
    authors: List[str] = field(default_factory=list)
    journal: str = ""
    volume: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None


# ============================================================================
# UTILITIES
# ============================================================================

def load_publications(path: Path) -> List[Publication]:
    """Load publication records from a YAML list."""
    records = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    pubs = []
    for i, rec in enumerate(records):
        if not rec.get("title") or rec.get("year") is None:
            raise ValueError(f"{path.name}: record {i} needs 'title' and 'year'")
        pubs.append(Publication(
            title=str(rec["title"]).strip(),
            year=int(rec["year"]),
            authors=[str(a) for a in rec.get("authors") or []],
            journal=str(rec.get("journal") or ""),
            volume=_optional_str(rec.get("volume")),
            pages=_optional_str(rec.get("pages")),
            doi=_optional_str(rec.get("doi")),
            url=_optional_str(rec.get("url")),
            type=_optional_str(rec.get("type")),
        ))
    return pubs


def _optional_str(value) -> Optional[str]:
    if value is None or str(value).strip() == "":
        return None
    return str(value).strip()


def format_date(yyyymmdd: str) -> str:
    """'20250107' -> 'January 7, 2025'. Falls back to the input string."""
    try:
        d = date(int(yyyymmdd[0:4]), int(yyyymmdd[4:6]), int(yyyymmdd[6:8]))
    except (TypeError, ValueError):
        return yyyymmdd
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_type_label(pub_type: str) -> str:
    label = TYPE_LABELS.get(pub_type.lower())
    if label:
        return label
    return " ".join(w.capitalize() for w in pub_type.replace("_", " ").split(" "))


def highlight_author(authors: List[str], name: str = AUTHOR_NAME) -> Markup:
    """Comma-join authors and bold every occurrence of `name`."""
    parts = ", ".join(authors).split(name)
    bold = Markup("<b>{}</b>").format(name)
    return bold.join(escape(part) for part in parts)


def publication_link(pub: Publication) -> Optional[Tuple[str, str]]:
    """(href, link text) for the card's action button, if any."""
    if pub.url:
        href = pub.url
    elif pub.doi:
        href = f"https://doi.org/{pub.doi}"
    else:
        return None
    text = "View Article" if (pub.type or "").lower() in THESIS_TYPES else "View Paper"
    return href, text


def journal_line(pub: Publication) -> str:
    line = pub.journal
    if pub.volume:
        line += f", {pub.volume}"
    if pub.pages:
        line += f": {pub.pages}"
    return line


def group_by_year(pubs: List[Publication]) -> List[Tuple[int, List[Publication]]]:
    """Newest year first; publications keep their input order."""
    grouped: Dict[int, List[Publication]] = {}
    for pub in pubs:
        grouped.setdefault(pub.year, []).append(pub)
    return [(year, grouped[year]) for year in sorted(grouped, reverse=True)]


def publication_types(pubs: List[Publication]) -> List[str]:
    return sorted({pub.type for pub in pubs if pub.type})


# ============================================================================
# PAGE BUILDER
# ============================================================================

env.filters["type_label"] = format_type_label
env.filters["highlight_author"] = highlight_author
env.filters["publication_link"] = publication_link
env.filters["journal_line"] = journal_line


def render_publications_page(pubs: List[Publication], report: MetricsReport) -> str:
    template = env.get_template("publications.html")
    since = report.since
    stats = [
        ("Citations", report.profile.citations, since.citations if since else None),
        ("h-index", report.profile.h_index, since.h_index if since else None),
        ("i10-index", report.profile.i10_index, since.i10_index if since else None),
    ]
    years, counts = [], []
    for year, count in iter_year_counts(report):
        years.append(year)
        counts.append(count)

    return template.render(
        stats=stats,
        chart={"years": years, "counts": counts},
        last_updated=format_date(report.last_updated),
        scholar_url=profile_url(SCHOLAR_ID),
        types=publication_types(pubs),
        years=group_by_year(pubs),
        total=len(pubs),
    )


def build_publications():
    print("Building publications page...")
    pubs = load_publications(PUBLICATIONS_PATH)
    report = read_report(SCHOLAR_PATH)
    if report.since is None:
        logger.warning("scholar.json has no 'since2020' values")

    html = render_publications_page(pubs, report)
    OUTPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    OUTPUT_PATH.write_text(html, encoding="utf-8")
    print(f"  → {OUTPUT_PATH.relative_to(BASE_DIR)} ({len(pubs)} publications)")


def main():
    configure_logging()
    build_publications()


if __name__ == "__main__":
    main()
