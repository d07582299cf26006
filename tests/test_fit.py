import warnings
from pathlib import Path

import numpy as np
import pytest

from FishCatchgrowthmodel import fit_logistic, load_catch_csv, predict, seeds_from_exponential_phase
from FishCatchgrowthmodel.models import logistic_curve, logistic_inflection, logistic_initial_value
from FishCatchgrowthmodel import core
from FishCatchgrowthmodel.dataset import clean_catch_table
from FishCatchgrowthmodel.solvers import fit_curve, fit_line

from conftest import A_TRUE, K_TRUE, k_TRUE, synthetic_table


@pytest.fixture
def exact_df(exact_csv: Path):
    return load_catch_csv(exact_csv)


@pytest.fixture
def noisy_df(noisy_csv: Path):
    return load_catch_csv(noisy_csv)


def test_logistic_curve_closed_forms():
    assert logistic_curve(0.0, 100.0, 4.0, 0.1) == pytest.approx(20.0)
    assert logistic_initial_value(100.0, 4.0) == pytest.approx(20.0)
    t_star, p_star = logistic_inflection(100.0, 4.0, 0.1)
    assert t_star == pytest.approx(np.log(4.0) / 0.1)
    assert logistic_curve(t_star, 100.0, 4.0, 0.1) == pytest.approx(p_star)


def test_fit_line_recovers_exact_line():
    line = fit_line([0, 1, 2, 3], [1.0, 3.0, 5.0, 7.0])
    assert line["slope"] == pytest.approx(2.0)
    assert line["intercept"] == pytest.approx(1.0)
    assert line["r2"] == pytest.approx(1.0)


def test_fit_line_rejects_degenerate_input():
    with pytest.raises(ValueError):
        fit_line([1, 1, 1], [1, 2, 3])
    with pytest.raises(ValueError):
        fit_line([1], [1])


def test_seeds_from_early_years(exact_df):
    seeds = seeds_from_exponential_phase(exact_df, n_years=40)
    assert seeds["n_points"] == 40
    assert 0 < seeds["k"] < k_TRUE
    assert seeds["K"] == pytest.approx(exact_df["Wild_Catch_Mt"].max())
    assert seeds["A"] == pytest.approx(seeds["K"] / np.exp(seeds["intercept"]) - 1.0)


def test_seed_cutoff_is_tunable(exact_df):
    short = seeds_from_exponential_phase(exact_df, n_years=15)
    long = seeds_from_exponential_phase(exact_df, n_years=50)
    assert short["n_points"] == 15 and long["n_points"] == 50
    # the logistic decelerates, so a longer window flattens the slope
    assert short["k"] > long["k"]


def test_seeds_reject_declining_series(exact_df):
    declining = exact_df.copy()
    declining["Log_Wild_Catch"] = declining["Log_Wild_Catch"].to_numpy()[::-1]
    with pytest.raises(ValueError, match="not positive"):
        seeds_from_exponential_phase(declining, n_years=40)


def test_fit_recovers_reference_parameters(exact_df):
    res = fit_logistic(exact_df, n_years=40)
    p = res["params"]
    assert p["K"] == pytest.approx(K_TRUE, rel=1e-4)
    assert p["A"] == pytest.approx(A_TRUE, rel=1e-4)
    assert p["k"] == pytest.approx(k_TRUE, rel=1e-4)
    assert p["base_year"] == 1950 and p["n_obs"] == 63


def test_fit_with_noise_is_close(noisy_df):
    res = fit_logistic(noisy_df)
    p = res["params"]
    assert p["K"] == pytest.approx(K_TRUE, abs=3.0)
    assert p["A"] == pytest.approx(A_TRUE, abs=0.3)
    assert p["k"] == pytest.approx(k_TRUE, abs=0.005)
    coef = res["coefficients"]
    assert coef["Parameter"].tolist() == ["K", "A", "k"]
    assert (coef["Std_Error"] > 0).all()
    assert (coef["p_value"] < 1e-6).all()


def test_refit_with_same_seeds_is_reproducible(noisy_df):
    first = fit_logistic(noisy_df)
    second = fit_logistic(noisy_df, seeds=first["seeds"])
    for name in ("K", "A", "k"):
        assert second["params"][name] == pytest.approx(first["params"][name], rel=1e-6)


def test_prediction_at_t0_matches_first_observation(noisy_df):
    res = fit_logistic(noisy_df)
    first = noisy_df["Wild_Catch_Mt"].iloc[0]
    assert res["yearly"]["Fitted_Mt"].iloc[0] == pytest.approx(first, abs=2.0)
    assert res["summary"]["P0_Mt"].iloc[0] == pytest.approx(first, abs=2.0)


def test_predictions_increase_and_approach_capacity(noisy_df):
    res = fit_logistic(noisy_df)
    K = res["params"]["K"]
    curve = predict(res["params"], range(1950, 2151))["Fitted_Mt"].to_numpy()
    assert np.all(np.diff(curve) > 0)
    assert np.all(curve < K)
    far = predict(res["params"], [2600])["Fitted_Mt"].iloc[0]
    assert far == pytest.approx(K, rel=1e-9)


def test_summary_reports_inflection_and_fit_quality(exact_df):
    s = fit_logistic(exact_df)["summary"].iloc[0]
    assert s["Inflection_year"] == pytest.approx(1950 + np.log(A_TRUE) / k_TRUE, abs=1e-2)
    assert s["Inflection_Mt"] == pytest.approx(K_TRUE / 2, rel=1e-4)
    assert s["R2"] > 0.9999
    assert s["dof"] == 60


def test_non_convergence_is_reported(exact_df):
    with pytest.raises(ValueError, match="did not converge"):
        fit_logistic(exact_df, seeds={"K": 1000.0, "A": 50.0, "k": 0.5}, maxfev=2)


def test_incomplete_seeds_are_rejected(exact_df):
    with pytest.raises(ValueError, match="seeds missing"):
        fit_logistic(exact_df, seeds={"K": 100.0, "k": 0.05})


def test_fit_line_standard_errors_match_closed_form():
    x = np.arange(10.0)
    y = 0.5 * x + 2.0 + np.array([0.1, -0.2, 0.05, 0.0, -0.1, 0.15, -0.05, 0.2, -0.15, 0.0])
    line = fit_line(x, y)
    resid = y - (line["slope"] * x + line["intercept"])
    sxx = np.sum((x - x.mean()) ** 2)
    s2 = np.sum(resid ** 2) / (x.size - 2)
    assert line["se_slope"] == pytest.approx(np.sqrt(s2 / sxx))
    assert line["se_intercept"] == pytest.approx(np.sqrt(s2 * (1 / x.size + x.mean() ** 2 / sxx)))


def test_fit_curve_passes_on_solver_warnings():
    def noisy_line(x, a, b):
        warnings.warn("overflow encountered in exp", RuntimeWarning)
        return a * x + b

    with pytest.warns(RuntimeWarning, match="overflow"):
        popt, _, caught = fit_curve(noisy_line, [0, 1, 2, 3], [1.0, 3.0, 5.0, 7.0], [1.0, 0.0])
    assert popt == pytest.approx([2.0, 1.0])
    assert caught == []


def test_fit_curve_reports_inestimable_covariance():
    popt, pcov, caught = fit_curve(lambda x, a, b: a * x + b, [0.0, 1.0], [1.0, 3.0], [1.0, 0.0])
    assert popt == pytest.approx([2.0, 1.0])
    assert np.isinf(pcov).all()
    assert len(caught) == 1 and "Covariance" in caught[0]


def test_overflowing_seeds_finish_with_error_or_warnings(exact_df):
    with warnings.catch_warnings():
        warnings.simplefilter("always")
        try:
            res = fit_logistic(exact_df, seeds={"K": 100.0, "A": 4.0, "k": -30.0}, maxfev=500)
        except ValueError as exc:
            assert "Try different seed values" in str(exc)
        else:
            assert res["warnings"]


def test_overflowing_seeds_with_short_budget_raise(exact_df):
    with pytest.raises(ValueError, match="did not converge"):
        fit_logistic(exact_df, seeds={"K": 100.0, "A": 4.0, "k": -30.0}, maxfev=3)


def test_reference_fit_has_no_warnings(exact_df):
    assert fit_logistic(exact_df)["warnings"] == []


def test_weak_seed_regression_is_collected(noisy_df):
    with pytest.warns(UserWarning, match="weak"):
        res = fit_logistic(noisy_df, min_seed_r2=0.99999)
    assert any("Early-phase log-linear fit is weak" in w for w in res["warnings"])


def test_inestimable_covariance_is_collected(exact_df, monkeypatch):
    def singular_fit(f, x, y, p0, maxfev):
        return np.array([K_TRUE, A_TRUE, k_TRUE]), np.full((3, 3), np.inf), [
            "Covariance of the parameters could not be estimated"]

    monkeypatch.setattr(core, "fit_curve", singular_fit)
    with pytest.warns(UserWarning, match="Covariance"):
        res = fit_logistic(exact_df)
    assert any(w.startswith("Covariance of the fit could not be estimated") for w in res["warnings"])
    assert res["coefficients"]["t_value"].isna().all()


def test_declining_series_flags_nonpositive_rate():
    raw = synthetic_table()
    t = raw["Year"] - 1950
    raw["Wild Catch"] = np.round(100.0 / (1.0 + 0.2 * np.exp(0.05 * t)) * 1e6)
    df = clean_catch_table(raw.astype(str))
    with pytest.warns(UserWarning, match="not positive"):
        res = fit_logistic(df, seeds={"K": 95.0, "A": 0.25, "k": -0.04})
    assert res["params"]["k"] == pytest.approx(-0.05, rel=1e-3)
    assert any("not positive" in w for w in res["warnings"])
    assert np.isnan(res["summary"]["Inflection_year"].iloc[0])


def test_fit_far_from_seeds_is_flagged(exact_df):
    with pytest.warns(UserWarning, match="far from its seeds"):
        res = fit_logistic(exact_df, seeds={"K": 100.0, "A": 4.0, "k": 0.02})
    assert res["params"]["k"] == pytest.approx(k_TRUE, rel=1e-3)
    assert any("k: seed 0.02" in w for w in res["warnings"])
