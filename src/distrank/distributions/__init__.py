"""Distribution registry and the fixed candidate catalog."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import numpy as np
from scipy import stats

from .base import (
    Distribution,
    Estimator,
    Freezer,
    candidate_distributions,
    get_distribution,
    list_distributions,
    register_distribution,
)

__all__ = [
    "Distribution",
    "Estimator",
    "Freezer",
    "CATALOG",
    "REAL_LINE_DISTRIBUTIONS",
    "candidate_distributions",
    "get_distribution",
    "list_distributions",
]


def _scipy_family(
    name: str,
    rv: Any,
    parameters: tuple[str, ...],
    descriptions: tuple[str, ...],
    *,
    supports_all_reals: bool,
    to_native: Callable[[tuple[float, ...]], tuple[float, ...]],
    to_scipy: Callable[[Mapping[str, float]], tuple[tuple[float, ...], float, float]],
    fit_kwargs: Mapping[str, float] | None = None,
    notes: str | None = None,
) -> Distribution:
    """Wrap a ``scipy.stats`` family in the catalog's parameterisation."""
    kwargs = dict(fit_kwargs or {})

    def estimator(data: np.ndarray) -> tuple[float, ...]:
        return to_native(tuple(float(p) for p in rv.fit(data, **kwargs)))

    def freeze(params: Mapping[str, float]) -> Any:
        shapes, loc, scale = to_scipy(params)
        return rv(*shapes, loc=loc, scale=scale)

    return Distribution(
        name=name,
        parameters=parameters,
        descriptions=descriptions,
        supports_all_reals=supports_all_reals,
        estimator=estimator,
        freeze=freeze,
        notes=notes,
    )


CATALOG = [
    _scipy_family(
        "ExtremeValue",
        stats.gumbel_l,
        ("mu", "sigma"),
        ("location", "scale"),
        supports_all_reals=True,
        to_native=lambda p: (p[0], p[1]),
        to_scipy=lambda q: ((), q["mu"], q["sigma"]),
        notes="Type I extreme value distribution for minima (Gumbel, left-skewed).",
    ),
    _scipy_family(
        "GeneralizedExtremeValue",
        stats.genextreme,
        ("k", "sigma", "mu"),
        ("shape", "scale", "location"),
        supports_all_reals=True,
        # scipy's shape parameter has the opposite sign convention.
        to_native=lambda p: (-p[0], p[2], p[1]),
        to_scipy=lambda q: ((-q["k"],), q["mu"], q["sigma"]),
        notes="Generalized extreme value distribution (Frechet, Gumbel and Weibull limits).",
    ),
    _scipy_family(
        "Logistic",
        stats.logistic,
        ("mu", "sigma"),
        ("mean", "scale"),
        supports_all_reals=True,
        to_native=lambda p: (p[0], p[1]),
        to_scipy=lambda q: ((), q["mu"], q["sigma"]),
        notes="Logistic distribution.",
    ),
    _scipy_family(
        "Normal",
        stats.norm,
        ("mu", "sigma"),
        ("mean", "std"),
        supports_all_reals=True,
        to_native=lambda p: (p[0], p[1]),
        to_scipy=lambda q: ((), q["mu"], q["sigma"]),
        notes="Normal (Gaussian) distribution.",
    ),
    _scipy_family(
        "Exponential",
        stats.expon,
        ("mu",),
        ("mean",),
        supports_all_reals=False,
        to_native=lambda p: (p[1],),
        to_scipy=lambda q: ((), 0.0, q["mu"]),
        fit_kwargs={"floc": 0.0},
        notes="Exponential distribution parameterised by its mean.",
    ),
    _scipy_family(
        "Gamma",
        stats.gamma,
        ("a", "b"),
        ("shape", "scale"),
        supports_all_reals=False,
        to_native=lambda p: (p[0], p[2]),
        to_scipy=lambda q: ((q["a"],), 0.0, q["b"]),
        fit_kwargs={"floc": 0.0},
        notes="Two-parameter gamma distribution.",
    ),
    _scipy_family(
        "InverseGaussian",
        stats.invgauss,
        ("mu", "lambda"),
        ("scale", "shape"),
        supports_all_reals=False,
        # scipy: mean = m * s and shape lambda = s.
        to_native=lambda p: (p[0] * p[2], p[2]),
        to_scipy=lambda q: ((q["mu"] / q["lambda"],), 0.0, q["lambda"]),
        fit_kwargs={"floc": 0.0},
        notes="Inverse Gaussian (Wald) distribution.",
    ),
    _scipy_family(
        "LogLogistic",
        stats.fisk,
        ("mu", "sigma"),
        ("log location", "log scale"),
        supports_all_reals=False,
        to_native=lambda p: (float(np.log(p[2])), 1.0 / p[0]),
        to_scipy=lambda q: ((1.0 / q["sigma"],), 0.0, float(np.exp(q["mu"]))),
        fit_kwargs={"floc": 0.0},
        notes="Log-logistic distribution; the log of the data is logistic(mu, sigma).",
    ),
    _scipy_family(
        "LogNormal",
        stats.lognorm,
        ("mu", "sigma"),
        ("log location", "log scale"),
        supports_all_reals=False,
        to_native=lambda p: (float(np.log(p[2])), p[0]),
        to_scipy=lambda q: ((q["sigma"],), 0.0, float(np.exp(q["mu"]))),
        fit_kwargs={"floc": 0.0},
        notes="Log-normal distribution; the log of the data is normal(mu, sigma).",
    ),
    _scipy_family(
        "Weibull",
        stats.weibull_min,
        ("A", "B"),
        ("scale", "shape"),
        supports_all_reals=False,
        to_native=lambda p: (p[2], p[0]),
        to_scipy=lambda q: ((q["B"],), 0.0, q["A"]),
        fit_kwargs={"floc": 0.0},
        notes="Two-parameter Weibull distribution.",
    ),
]

REAL_LINE_DISTRIBUTIONS = tuple(dist.name for dist in CATALOG if dist.supports_all_reals)


def _register_builtin() -> None:
    for dist in CATALOG:
        register_distribution(dist, overwrite=True)


_register_builtin()
