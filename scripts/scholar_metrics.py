"""Google Scholar metrics report: data model and JSON encoding.

The report is the only file shared between the scraper
(update_google_scholar.py) and the page builder (build_publications.py):

  {
    "lastUpdated": "YYYYMMDD",
    "citations": {"all": int, "since2020": int|null},
    "hIndex": {"all": int, "since2020": int|null},
    "i10Index": {"all": int, "since2020": int|null},
    "citationsByYear": [ { "year": int, "count": int }, ... ]
  }

Notes:
  - 'since2020' holds Google Scholar's trailing "Since <year>" column, which
    counts citations RECEIVED in that period (not papers published).
  - The three 'since2020' values are either all present or all null.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Matches a pretty-printed {"year": Y, "count": C} object spread over lines
_YEAR_ENTRY_RE = re.compile(
    r'\{\n\s+"year":\s*(-?\d+),\n\s+"count":\s*(-?\d+)\n\s+\}'
)

STATS_CELL_COUNT = 6


@dataclass(frozen=True)
class ProfileSummary:
    """All-time totals."""

    citations: int
    h_index: int
    i10_index: int


@dataclass(frozen=True)
class WindowedMetrics:
    """Totals restricted to the trailing "Since <year>" window."""

    citations: int
    h_index: int
    i10_index: int


@dataclass(frozen=True)
class CitationYearPoint:
    year: int
    count: int


@dataclass(frozen=True)
class MetricsReport:
    last_updated: str
    profile: ProfileSummary
    since: Optional[WindowedMetrics]
    citations_by_year: Tuple[CitationYearPoint, ...]

    def to_dict(self) -> Dict[str, Any]:
        since = self.since
        return {
            "lastUpdated": self.last_updated,
            "citations": {
                "all": self.profile.citations,
                "since2020": since.citations if since else None,
            },
            "hIndex": {
                "all": self.profile.h_index,
                "since2020": since.h_index if since else None,
            },
            "i10Index": {
                "all": self.profile.i10_index,
                "since2020": since.i10_index if since else None,
            },
            "citationsByYear": [
                {"year": p.year, "count": p.count} for p in self.citations_by_year
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MetricsReport":
        profile = ProfileSummary(
            citations=int(data["citations"]["all"]),
            h_index=int(data["hIndex"]["all"]),
            i10_index=int(data["i10Index"]["all"]),
        )
        since_values = [
            data["citations"].get("since2020"),
            data["hIndex"].get("since2020"),
            data["i10Index"].get("since2020"),
        ]
        since = None
        if all(v is not None for v in since_values):
            since = WindowedMetrics(*(int(v) for v in since_values))
        elif any(v is not None for v in since_values):
            logger.warning("Partial 'since2020' values in report, treating all as missing")

        points = citation_points(
            {row["year"]: row["count"] for row in data.get("citationsByYear") or []}
        )
        return cls(
            last_updated=str(data["lastUpdated"]),
            profile=profile,
            since=since,
            citations_by_year=points,
        )


def citation_points(history: Mapping[Any, Any]) -> Tuple[CitationYearPoint, ...]:
    """Per-year citation counts, ascending by year.

    Keys may be ints or numeric strings (scholarly and JSON disagree on this);
    anything else is skipped.
    """
    by_year: Dict[int, int] = {}
    for y, c in history.items():
        if not str(y).strip().isdecimal():
            logger.debug("Skipping non-numeric year key: %r", y)
            continue
        by_year[int(y)] = int(c or 0)
    return tuple(CitationYearPoint(y, by_year[y]) for y in sorted(by_year))


def parse_since_cells(cells: List[str]) -> Optional[WindowedMetrics]:
    """Read the windowed values out of the profile stats table cells.

    The table cells come in row order:
      Citations  | all-time | since-year
      h-index    | all-time | since-year
      i10-index  | all-time | since-year
    so the windowed values sit at 0-based indices 1, 3 and 5.
    """
    if len(cells) < STATS_CELL_COUNT:
        logger.warning(
            "Could not parse stats table - expected %d cells, got %d",
            STATS_CELL_COUNT,
            len(cells),
        )
        return None

    try:
        values = [int(cells[i].strip()) for i in (1, 3, 5)]
    except ValueError as e:
        logger.warning("Non-numeric value in stats table: %s", e)
        return None

    result = WindowedMetrics(*values)
    logger.debug(
        "Parsed 'since' metrics: cites=%d, h=%d, i10=%d",
        result.citations,
        result.h_index,
        result.i10_index,
    )
    return result


def dumps_report(report: MetricsReport) -> str:
    text = json.dumps(report.to_dict(), ensure_ascii=False, indent=2)
    # Keep one citationsByYear entry per line so diffs stay readable
    text = _YEAR_ENTRY_RE.sub(r'{ "year": \1, "count": \2 }', text)
    return text + "\n"


def write_report(report: MetricsReport, p: Path) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dumps_report(report), encoding="utf-8")


def read_report(p: Path) -> MetricsReport:
    return MetricsReport.from_dict(json.loads(p.read_text(encoding="utf-8")))


def iter_year_counts(report: MetricsReport) -> Iterable[Tuple[int, int]]:
    for point in report.citations_by_year:
        yield point.year, point.count
