import pytest

from scholar_metrics import CitationYearPoint, MetricsReport, ProfileSummary, WindowedMetrics


STATS_TABLE_HTML = """
<html><body>
<table id="gsc_rsb_st">
  <thead><tr><th></th><th class="gsc_rsb_sth">All</th><th class="gsc_rsb_sth">Since 2020</th></tr></thead>
  <tbody>
    <tr><td class="gsc_rsb_sc1">Citations</td><td class="gsc_rsb_std">{0}</td><td class="gsc_rsb_std">{1}</td></tr>
    <tr><td class="gsc_rsb_sc1">h-index</td><td class="gsc_rsb_std">{2}</td><td class="gsc_rsb_std">{3}</td></tr>
    <tr><td class="gsc_rsb_sc1">i10-index</td><td class="gsc_rsb_std">{4}</td><td class="gsc_rsb_std">{5}</td></tr>
  </tbody>
</table>
<td class="gsc_rsb_std">999</td>
</body></html>
"""

SHORT_TABLE_HTML = """
<html><body>
<table id="gsc_rsb_st">
  <tbody>
    <tr><td class="gsc_rsb_sc1">Citations</td><td class="gsc_rsb_std">412</td><td class="gsc_rsb_std">318</td></tr>
    <tr><td class="gsc_rsb_sc1">h-index</td><td class="gsc_rsb_std">9</td><td class="gsc_rsb_std">8</td></tr>
  </tbody>
</table>
</body></html>
"""


@pytest.fixture
def stats_html():
    return STATS_TABLE_HTML.format(412, 318, 9, 8, 9, 7)


@pytest.fixture
def short_stats_html():
    return SHORT_TABLE_HTML


@pytest.fixture
def report():
    return MetricsReport(
        last_updated="20250107",
        profile=ProfileSummary(citations=412, h_index=9, i10_index=9),
        since=WindowedMetrics(citations=318, h_index=8, i10_index=7),
        citations_by_year=(
            CitationYearPoint(2019, 2),
            CitationYearPoint(2020, 0),
            CitationYearPoint(2021, 5),
        ),
    )
