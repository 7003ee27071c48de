import pytest

from abcalc.charts import confidence_interval_figure, distribution_figure, page_style
from abcalc.density import density_for_result
from abcalc.statistics import TrialInput, compute_trial_result


@pytest.fixture
def result():
    return compute_trial_result(TrialInput(1000, 35, 1000, 58, 0.95))


def test_distribution_figure_has_one_area_per_variant(result):
    fig = distribution_figure(density_for_result(result), result)
    assert [t.name for t in fig.data] == ["Variant A", "Variant B"]
    assert all(t.fill == "tozeroy" for t in fig.data)
    assert len(fig.data[0].x) == 101
    # dashed reference lines at both conversion rates
    assert len(fig.layout.shapes) == 2
    assert sorted(s.x0 for s in fig.layout.shapes) == pytest.approx([3.5, 5.8])


def test_confidence_interval_figure_ranges(result):
    fig = confidence_interval_figure(result)
    a_low, _ = result.ci_a.as_percent()
    _, b_high = result.ci_b.as_percent()

    assert len(fig.data) == 4
    assert list(fig.layout.xaxis.range) == pytest.approx([a_low - 0.5, b_high + 0.5])
    segment_a = fig.data[0]
    assert list(segment_a.x) == pytest.approx(list(result.ci_a.as_percent()))


def test_theme_switches_template(result):
    light = confidence_interval_figure(result, theme="light")
    dark = confidence_interval_figure(result, theme="dark")
    assert light.layout.template != dark.layout.template


def test_page_style_follows_theme():
    light = page_style("light")
    dark = page_style("dark")
    assert light.startswith("<style>") and light.endswith("</style>")
    assert "#111827" in dark and ".stApp" in dark
    assert light != dark
    # unknown themes fall back to light
    assert page_style("sepia") == light
