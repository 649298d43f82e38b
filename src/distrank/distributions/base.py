"""Core distribution registry infrastructure."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core import as_parameter_mapping

Estimator = Callable[[np.ndarray], tuple[float, ...]]
Freezer = Callable[[Mapping[str, float]], Any]

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Distribution:
    """Describe a candidate family with metadata and its fitting capabilities.

    ``estimator`` maps raw data to maximum-likelihood parameter values ordered
    as ``parameters``; ``freeze`` binds a parameter mapping to a frozen
    ``scipy.stats`` distribution used for density and CDF evaluation.
    """

    name: str
    parameters: tuple[str, ...]
    descriptions: tuple[str, ...]
    supports_all_reals: bool
    estimator: Estimator
    freeze: Freezer
    notes: str | None = None

    def __post_init__(self) -> None:
        if len(self.parameters) != len(self.descriptions):
            raise ValueError(
                f"Distribution '{self.name}' declares {len(self.parameters)} parameters "
                f"but {len(self.descriptions)} descriptions."
            )

    @property
    def support(self) -> str:
        return "real" if self.supports_all_reals else "positive"

    def supports(self, data: np.ndarray) -> bool:
        """Return whether every value lies inside this family's support."""
        if self.supports_all_reals:
            return True
        values = np.asarray(data, dtype=float)
        return bool(values.size) and bool(np.all(values > 0))

    def estimate(self, data: np.ndarray) -> dict[str, float]:
        return as_parameter_mapping(self.parameters, self.estimator(data))

    def pdf(self, x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
        return np.asarray(self.freeze(params).pdf(x), dtype=float)

    def cdf(self, x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
        return np.asarray(self.freeze(params).cdf(x), dtype=float)

    def logpdf(self, x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
        return np.asarray(self.freeze(params).logpdf(x), dtype=float)


_REGISTRY: dict[str, Distribution] = {}


def _key(name: str) -> str:
    # "Log logistic", "log-logistic" and "LogLogistic" resolve to the same family.
    return re.sub(r"[^a-z0-9]", "", name.lower())


def list_distributions() -> list[str]:
    """Return registered distribution names in catalog order."""
    return [dist.name for dist in _REGISTRY.values()]


def get_distribution(name: str) -> Distribution:
    """Retrieve a distribution by name."""
    key = _key(name)
    if key not in _REGISTRY:
        raise KeyError(f"Unknown distribution '{name}'.")
    return _REGISTRY[key]


def register_distribution(distribution: Distribution, *, overwrite: bool = False) -> None:
    """Add a distribution to the catalog."""
    key = _key(distribution.name)
    if key in _REGISTRY and not overwrite:
        raise ValueError(f"Distribution '{distribution.name}' already registered.")
    _REGISTRY[key] = distribution
    logger.debug("Registered distribution %s (%s support)", distribution.name, distribution.support)


def candidate_distributions(data: np.ndarray) -> list[Distribution]:
    """Select the families to run for ``data``.

    Positivity is judged over the whole dataset: strictly positive data
    runs the full catalog, anything else only the families defined on the
    whole real line.
    """
    values = np.asarray(data, dtype=float)
    selected = [dist for dist in _REGISTRY.values() if dist.supports(values)]
    chosen = {dist.name for dist in selected}
    skipped = [name for name in list_distributions() if name not in chosen]
    if skipped:
        logger.info(
            "Data set contains non-positive values; skipping %s",
            ", ".join(skipped),
        )
    return selected


__all__ = [
    "Distribution",
    "Estimator",
    "Freezer",
    "list_distributions",
    "get_distribution",
    "register_distribution",
    "candidate_distributions",
]
