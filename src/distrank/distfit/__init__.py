"""Fit the candidate catalog to a dataset and rank the results."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import numpy as np

from ..config import FitOptions, resolve_options
from ..core import (
    AllFamiliesFailed,
    ArrayLike,
    Diagnostic,
    EmptyDataset,
    EstimationFailure,
    FittedModel,
    GoodnessOfFit,
    InvalidDataset,
    RankedEntry,
    RankedResult,
)
from ..distributions import candidate_distributions
from .estimation import estimate
from .metrics import describe_degeneracy, empirical_cdf, evaluate
from .ranking import Metric, metric_value, parse_metric, rank

logger = logging.getLogger(__name__)


def as_dataset(data: ArrayLike) -> np.ndarray:
    """Flatten ``data`` to a read-only 1-D float array, rejecting bad input."""
    try:
        values = np.array(data, dtype=float).ravel()
    except (TypeError, ValueError) as exc:
        raise InvalidDataset(f"Data must be numeric: {exc}") from exc
    if values.size == 0:
        raise EmptyDataset("Cannot fit distributions to an empty dataset.")
    if not np.all(np.isfinite(values)):
        bad = values[~np.isfinite(values)]
        raise InvalidDataset(f"Data contains {bad.size} non-finite value(s), e.g. {bad[0]!r}.")
    values.setflags(write=False)
    return values


def support_sign(data: np.ndarray) -> str:
    return "positive" if bool(np.all(data > 0)) else "real"


def fit_candidates(
    data: np.ndarray,
) -> tuple[list[FittedModel], list[GoodnessOfFit], list[Diagnostic]]:
    """Estimate and evaluate every compatible family in catalog order."""
    models: list[FittedModel] = []
    scores: list[GoodnessOfFit] = []
    diagnostics: list[Diagnostic] = []
    for dist in candidate_distributions(data):
        logger.debug("Fitting %s", dist.name)
        try:
            model = estimate(data, dist)
        except EstimationFailure as exc:
            logger.warning("Dropping %s: %s", dist.name, exc.reason)
            diagnostics.append(Diagnostic(dist.name, "failure", exc.reason))
            continue
        diagnostics.extend(model.diagnostics)
        gof = evaluate(data, model)
        if not all(np.isfinite(value) for value in gof.as_dict().values()):
            message = describe_degeneracy(model, data, gof)
            logger.info("%s: %s", dist.name, message)
            diagnostics.append(Diagnostic(dist.name, "degenerate", message))
        models.append(model)
        scores.append(gof)
    return models, scores, diagnostics


def fit(
    data: ArrayLike,
    options: FitOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> RankedResult:
    """Fit the candidate catalog to ``data`` and rank the fits.

    Options are resolved and validated before any fitting work. Families whose
    estimation fails are dropped and reported in ``RankedResult.diagnostics``.

    Raises:
        InvalidOption: unknown metric, option name or non-numeric counts.
        EmptyDataset: ``data`` has no values.
        InvalidDataset: ``data`` is not numeric or has non-finite values.
        AllFamiliesFailed: no family produced a fitted model.
    """
    resolved = resolve_options(options, **overrides)
    values = as_dataset(data)
    sign = support_sign(values)
    logger.info("Running data distribution fitter (%s)", resolved.summary())
    logger.info("Data set: %s (n=%d)", sign, values.size)

    models, scores, diagnostics = fit_candidates(values)
    if not models:
        raise AllFamiliesFailed(
            "No distribution could be fitted to the data: "
            + "; ".join(f"{diag.distribution}: {diag.message}" for diag in diagnostics)
        )

    order = rank(scores, resolved.sort_metric)
    entries = [RankedEntry(model=models[i], gof=scores[i]) for i in order]
    result = RankedResult(
        entries=entries,
        metric=resolved.sort_metric.value,
        options=resolved,
        diagnostics=diagnostics,
    )
    logger.info(
        "Fitted %d distribution(s); the closest distribution is %s (%s=%.6g)",
        len(entries),
        result.best.name,
        resolved.sort_metric.label,
        metric_value(result.best.gof, resolved.sort_metric),
    )
    return result


__all__ = [
    "Metric",
    "as_dataset",
    "empirical_cdf",
    "estimate",
    "evaluate",
    "fit",
    "fit_candidates",
    "parse_metric",
    "rank",
    "support_sign",
]
