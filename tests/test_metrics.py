import warnings

import numpy as np
import pytest
from scipy import stats

from distrank.core import FittedModel, GoodnessOfFit
from distrank.distfit import empirical_cdf, evaluate
from distrank.distfit.metrics import degenerate_points, describe_degeneracy
from distrank.distributions import get_distribution


def _model(name: str, **params: float) -> FittedModel:
    return FittedModel(distribution=get_distribution(name), parameters=dict(params))


def test_empirical_cdf_uses_distinct_sorted_values() -> None:
    xs, ecdf = empirical_cdf([3.0, 1.0, 2.0, 2.0])
    np.testing.assert_allclose(xs, [1.0, 2.0, 3.0])
    np.testing.assert_allclose(ecdf, [0.25, 0.75, 1.0])


def test_evaluate_matches_reference_formulas() -> None:
    data = np.array([-1.0, 0.0, 0.5, 1.0, 1.0])
    gof = evaluate(data, _model("Normal", mu=0.0, sigma=1.0))

    xs = np.array([-1.0, 0.0, 0.5, 1.0])
    f = np.array([0.2, 0.4, 0.6, 1.0])
    fhat = stats.norm.cdf(xs)
    ss_fit = np.sum((fhat - fhat.mean()) ** 2)
    ss_resid = np.sum((f - fhat) ** 2)

    assert gof.nll == pytest.approx(-np.sum(stats.norm.logpdf(data)))
    assert gof.kse == pytest.approx(np.max(np.abs(fhat - f)))
    assert gof.r2 == pytest.approx(ss_fit / (ss_fit + ss_resid))
    assert gof.chi_square == pytest.approx(np.sum((f - fhat) ** 2 / np.abs(fhat)))
    assert gof.rmse == pytest.approx(np.sqrt(np.mean((f - fhat) ** 2)))


def test_r2_is_not_the_conventional_coefficient_of_determination() -> None:
    data = np.array([0.2, 0.9, 1.7, 2.4, 3.8])
    gof = evaluate(data, _model("Exponential", mu=1.5))
    xs, f = empirical_cdf(data)
    fhat = stats.expon.cdf(xs, scale=1.5)
    conventional = 1 - np.sum((f - fhat) ** 2) / np.sum((f - f.mean()) ** 2)
    assert gof.r2 != pytest.approx(conventional)


def test_metrics_are_bounded_for_well_behaved_fit() -> None:
    rng = np.random.default_rng(42)
    data = rng.gamma(shape=2.0, scale=3.0, size=500)
    gof = evaluate(data, _model("Gamma", a=2.0, b=3.0))
    assert 0.0 <= gof.kse <= 1.0
    assert 0.0 <= gof.r2 <= 1.0
    assert np.isfinite(gof.chi_square)
    assert gof.chi_square >= 0.0
    assert gof.rmse >= 0.0


def test_zero_fitted_cdf_propagates_non_finite_chi_square() -> None:
    # k > 0 gives a lower support bound of mu - sigma / k = -2.
    model = _model("GeneralizedExtremeValue", k=0.5, sigma=1.0, mu=0.0)
    data = np.array([-3.0, 0.0, 1.0])
    gof = evaluate(data, model)
    assert not np.isfinite(gof.chi_square)
    assert np.isinf(gof.nll)
    assert 0.0 <= gof.kse <= 1.0
    assert degenerate_points(model, data) == {
        "zero_cdf": 1,
        "undefined_cdf": 0,
        "undefined_density": 1,
    }
    message = describe_degeneracy(model, data, gof)
    assert message.startswith("non-finite nll, chi_square;")
    assert "fitted CDF is zero at 1 sample point(s)" in message
    assert "undefined" not in message


def test_degenerate_points_is_zero_inside_support() -> None:
    model = _model("Normal", mu=0.0, sigma=1.0)
    assert degenerate_points(model, [-1.0, 0.0, 2.0]) == {
        "zero_cdf": 0,
        "undefined_cdf": 0,
        "undefined_density": 0,
    }


def test_zero_scale_model_is_reported_as_undefined_without_warnings() -> None:
    model = _model("Normal", mu=5.0, sigma=0.0)
    data = np.array([5.0, 5.0, 5.0])
    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        gof = evaluate(data, model)
        counts = degenerate_points(model, data)
    assert all(np.isnan(value) for value in gof.as_dict().values())
    assert counts == {"zero_cdf": 0, "undefined_cdf": 1, "undefined_density": 3}
    message = describe_degeneracy(model, data, gof)
    assert message.startswith("non-finite nll, kse, r2, chi_square, rmse;")
    assert "fitted CDF is undefined at 1 sample point(s)" in message
    assert "is zero" not in message
    assert "sigma=0" in message


def test_degeneracy_without_bad_points_says_so() -> None:
    model = _model("Normal", mu=0.0, sigma=1.0)
    gof = GoodnessOfFit(nll=1.0, kse=0.1, r2=float("nan"), chi_square=0.2, rmse=0.1)
    message = describe_degeneracy(model, [-1.0, 0.5], gof)
    assert message.startswith("non-finite r2;")
    assert "finite and non-zero at every point" in message
