import pytest

from abcalc.density import density_for_result, sample_density
from abcalc.statistics import TrialInput, compute_trial_result


@pytest.fixture
def reference_result():
    return compute_trial_result(TrialInput(1000, 35, 1000, 58, 0.95))


def test_grid_spans_four_sigma_around_both_means(reference_result):
    res = reference_result
    series = density_for_result(res)

    lower = min(res.rate_a - 4 * res.se_a, res.rate_b - 4 * res.se_b)
    upper = max(res.rate_a + 4 * res.se_a, res.rate_b + 4 * res.se_b)

    assert len(series) == 101
    assert series.lower == pytest.approx(lower)
    assert series.upper == pytest.approx(upper)
    assert series.step == pytest.approx((upper - lower) / 100)
    xs = [p.x for p in series]
    assert xs[0] == pytest.approx(lower * 100)
    assert xs[-1] == pytest.approx(upper * 100)
    assert xs == sorted(xs)


def test_series_can_be_iterated_twice(reference_result):
    series = density_for_result(reference_result)
    assert list(series) == list(series)


def test_each_curve_integrates_to_about_one(reference_result):
    """Undo the display scaling and integrate with the rectangle rule."""
    series = density_for_result(reference_result)
    area_a = sum(p.density_a / series.scale for p in series) * series.step
    area_b = sum(p.density_b / series.scale for p in series) * series.step
    assert area_a == pytest.approx(1.0, rel=0.05)
    assert area_b == pytest.approx(1.0, rel=0.05)


def test_taller_curve_reaches_display_height(reference_result):
    series = density_for_result(reference_result)
    peak_a = max(p.density_a for p in series)
    peak_b = max(p.density_b for p in series)

    # A has the smaller standard error, so its peak is the taller one
    assert peak_a == pytest.approx(60.0, rel=0.01)
    assert peak_a <= 60.0 + 1e-9
    assert peak_b < peak_a


def test_display_height_is_configurable():
    series = sample_density(0.1, 0.01, 0.12, 0.01, display_height=100.0)
    assert max(max(p.density_a, p.density_b) for p in series) == pytest.approx(100.0, rel=0.01)


def test_swapping_inputs_swaps_curves():
    forward = sample_density(0.03, 0.004, 0.05, 0.007)
    backward = sample_density(0.05, 0.007, 0.03, 0.004)
    for f, b in zip(forward, backward):
        assert f.x == pytest.approx(b.x)
        assert f.density_a == pytest.approx(b.density_b)
        assert f.density_b == pytest.approx(b.density_a)


def test_zero_variance_variant_is_a_spike():
    series = sample_density(0.0, 0.0, 0.05, 0.01)

    spike = [p for p in series if p.density_a > 0]
    assert len(spike) == 1
    assert spike[0].density_a == 60.0
    assert spike[0].x == pytest.approx(0.0)

    # the other curve is scaled on its own
    assert max(p.density_b for p in series) == pytest.approx(60.0, rel=0.01)


def test_both_zero_variance_at_same_rate_widens_the_range():
    series = sample_density(0.1, 0.0, 0.1, 0.0)
    assert series.lower == pytest.approx(0.095)
    assert series.upper == pytest.approx(0.105)
    assert len(series) == 101

    spikes_a = [i for i, p in enumerate(series) if p.density_a > 0]
    spikes_b = [i for i, p in enumerate(series) if p.density_b > 0]
    assert spikes_a == spikes_b == [50]


def test_density_for_degenerate_trial():
    res = compute_trial_result(TrialInput(1000, 0, 1000, 0))
    series = density_for_result(res)
    assert len(series) == 101
    assert sum(1 for p in series if p.density_a > 0) == 1


def test_to_frame(reference_result):
    df = density_for_result(reference_result).to_frame()
    assert list(df.columns) == ["x", "A", "B"]
    assert len(df) == 101
    assert df["x"].is_monotonic_increasing


def test_invalid_arguments():
    with pytest.raises(ValueError):
        sample_density(0.1, 0.01, 0.1, 0.01, steps=0)
    with pytest.raises(ValueError):
        sample_density(0.1, -0.01, 0.1, 0.01)
