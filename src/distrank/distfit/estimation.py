"""Maximum-likelihood parameter estimation with captured solver warnings."""

from __future__ import annotations

import logging
import math
import warnings

import numpy as np

from ..core import ArrayLike, Diagnostic, EstimationFailure, FittedModel
from ..distributions import Distribution

logger = logging.getLogger(__name__)

_SOLVER_ERRORS = (ValueError, RuntimeError, FloatingPointError, OverflowError, ZeroDivisionError)

__all__ = ["estimate"]


def estimate(data: ArrayLike, distribution: Distribution) -> FittedModel:
    """Fit ``distribution`` to ``data`` by maximum likelihood.

    Warnings raised by the solver (convergence, domain, numpy runtime) are
    attached to the returned model as ``warning`` diagnostics instead of
    aborting the run. Raises :class:`EstimationFailure` when the solver errors
    out or yields non-finite parameters.
    """
    values = np.asarray(data, dtype=float).ravel()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            params = distribution.estimate(values)
        except _SOLVER_ERRORS as exc:
            raise EstimationFailure(distribution.name, f"solver failed: {exc}") from exc

    bad = [name for name, value in params.items() if not math.isfinite(value)]
    if bad:
        raise EstimationFailure(
            distribution.name,
            f"non-finite parameter estimates for {', '.join(bad)}",
        )

    diagnostics: list[Diagnostic] = []
    seen: set[str] = set()
    for record in caught:
        message = f"{record.category.__name__}: {record.message}"
        if message in seen:
            continue
        seen.add(message)
        diagnostics.append(Diagnostic(distribution.name, "warning", message))
        logger.warning("%s estimation warning: %s", distribution.name, message)

    return FittedModel(distribution=distribution, parameters=params, diagnostics=diagnostics)
