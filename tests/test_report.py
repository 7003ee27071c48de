from abcalc.report import (
    calculations_frame,
    details_frame,
    fmt_ci,
    fmt_float,
    fmt_pct,
    interpretation_text,
    results_frame,
    summary_message,
)
from abcalc.statistics import TrialInput, compute_trial_result


def _run(*counts, level=0.95):
    trial = TrialInput(*counts, confidence_level=level)
    return trial, compute_trial_result(trial)


def test_formatters():
    assert fmt_pct(0.035) == "3.50%"
    assert fmt_pct(None) == "n/a"
    assert fmt_float(0.01444, 3) == "0.014"
    assert fmt_float(None) == "n/a"
    assert fmt_ci(0.02, 0.05) == "2.00% - 5.00%"


def test_summary_for_significant_result():
    trial, res = _run(1000, 35, 1000, 58)
    summary = summary_message(trial, res)
    assert summary.is_significant
    assert summary.headline == "Significant result!"
    assert "65.71% higher" in summary.message
    assert "5.80%" in summary.message and "3.50%" in summary.message
    assert "95% confident" in summary.message


def test_summary_for_non_significant_result():
    trial, res = _run(500, 50, 500, 52)
    summary = summary_message(trial, res)
    assert not summary.is_significant
    assert summary.headline == "Result not significant"
    assert "4.00% higher" in summary.message
    assert "due to chance" in summary.message


def test_summary_says_lower_when_b_is_worse():
    trial, res = _run(1000, 58, 1000, 35)
    assert "lower" in summary_message(trial, res).message


def test_summary_when_rates_are_equal():
    trial, res = _run(1000, 50, 1000, 50)
    message = summary_message(trial, res).message
    assert "was the same as variant A's (5.00%)" in message
    assert "lower" not in message
    assert "higher" not in message


def test_summary_when_relative_uplift_is_undefined():
    trial, res = _run(1000, 0, 1000, 20)
    assert "undefined" in summary_message(trial, res).message


def test_results_frame():
    _, res = _run(1000, 35, 1000, 58)
    df = results_frame(res)
    assert list(df.columns) == ["metric", "value"]
    values = dict(zip(df["metric"], df["value"]))
    assert values["Conversion rate A"] == "3.50%"
    assert values["Relative uplift"] == "65.71%"
    assert values["Result"] == "Significant"


def test_details_frame():
    trial, res = _run(1000, 35, 1000, 58)
    df = details_frame(trial, res)
    assert df.shape == (5, 3)
    visitors = df[df["metric"] == "Visitors"].iloc[0]
    assert visitors["variant_a"] == "1000"
    assert visitors["variant_b"] == "1000"
    assert df["metric"].iloc[-1] == "Confidence interval (95%)"


def test_calculations_frame_shows_na_for_degenerate_values():
    _, res = _run(100, 0, 100, 0)
    df = calculations_frame(res)
    values = dict(zip(df["calculation"], df["value"]))
    assert values["z-score"] == "n/a"
    assert values["p-value (two-tailed)"] == "n/a"
    assert values["Statistical power"] == "n/a"
    assert values["Relative uplift"] == "n/a"


def test_interpretation_text_uses_level():
    text = interpretation_text(0.99)
    assert "0.01" in text
    assert "99%" in text
