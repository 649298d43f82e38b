"""Empirical CDF and goodness-of-fit statistics."""

from __future__ import annotations

import math

import numpy as np

from ..core import ArrayLike, FittedModel, GoodnessOfFit

__all__ = ["empirical_cdf", "evaluate", "degenerate_points", "describe_degeneracy"]


def empirical_cdf(data: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Return the distinct sorted values and the empirical CDF evaluated at them.

    ``F_i`` is the fraction of observations less than or equal to ``x_i``. There
    is no leading ``(min(x), 0)`` step point, so every statistic compares the
    fitted CDF only at observed values.
    """
    values = np.sort(np.asarray(data, dtype=float).ravel())
    if values.size == 0:
        return values, values.copy()
    xs = np.unique(values)
    counts = np.searchsorted(values, xs, side="right")
    return xs, counts / float(values.size)


def degenerate_points(model: FittedModel, data: ArrayLike) -> dict[str, int]:
    """Count the sample points that make a fitted model's statistics non-finite.

    ``zero_cdf`` and ``undefined_cdf`` count ECDF abscissae where the fitted
    CDF is exactly zero or not finite; ``undefined_density`` counts
    observations whose log-density is not finite.
    """
    values = np.asarray(data, dtype=float).ravel()
    xs, _ = empirical_cdf(values)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        fhat = model.cdf(xs)
        logpdf = model.logpdf(values)
    finite = np.isfinite(fhat)
    return {
        "zero_cdf": int(np.count_nonzero(finite & (fhat == 0.0))),
        "undefined_cdf": int(np.count_nonzero(~finite)),
        "undefined_density": int(np.count_nonzero(~np.isfinite(logpdf))),
    }


def describe_degeneracy(model: FittedModel, data: ArrayLike, gof: GoodnessOfFit) -> str:
    """Explain which statistics are non-finite and what in the fit caused it."""
    bad = [name for name, value in gof.as_dict().items() if not math.isfinite(value)]
    counts = degenerate_points(model, data)
    causes: list[str] = []
    if counts["undefined_cdf"]:
        causes.append(f"fitted CDF is undefined at {counts['undefined_cdf']} sample point(s)")
    if counts["zero_cdf"]:
        causes.append(f"fitted CDF is zero at {counts['zero_cdf']} sample point(s)")
    if counts["undefined_density"]:
        causes.append(
            f"log-density is not finite at {counts['undefined_density']} observation(s)"
        )
    if not causes:
        causes.append("fitted CDF and log-density are finite and non-zero at every point")
    params = ", ".join(f"{name}={value:.6g}" for name, value in model.parameters.items())
    return f"non-finite {', '.join(bad)}; {'; '.join(causes)} ({params})"


def evaluate(data: ArrayLike, model: FittedModel) -> GoodnessOfFit:
    """Score ``model`` against ``data``.

    R2 is the fitted-CDF variance over itself plus the residual sum of
    squares, not ``1 - SS_res / SS_tot``. Chi-square divides by ``|fhat|``
    and becomes non-finite where the fitted CDF is zero; the value is
    returned as is.
    """
    values = np.asarray(data, dtype=float).ravel()
    xs, ecdf = empirical_cdf(values)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        fhat = model.cdf(xs)
        nll = float(-np.sum(model.logpdf(values)))
        residuals = ecdf - fhat
        squared = np.square(residuals)
        kse = float(np.max(np.abs(residuals)))
        ss_fit = float(np.sum(np.square(fhat - np.mean(fhat))))
        ss_resid = float(np.sum(squared))
        r2 = ss_fit / (ss_fit + ss_resid) if ss_fit + ss_resid != 0 else float("nan")
        chi_square = float(np.sum(squared / np.abs(fhat)))
        rmse = float(np.sqrt(np.mean(squared)))
    return GoodnessOfFit(nll=nll, kse=kse, r2=r2, chi_square=chi_square, rmse=rmse)
