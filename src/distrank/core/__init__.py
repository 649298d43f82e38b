"""Core dataclasses, error types and shared type aliases for distrank modules."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

import numpy as np
import pandas as pd

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import FitOptions
    from ..distributions import Distribution

ArrayLike: TypeAlias = np.ndarray | Sequence[float]
DiagnosticKind: TypeAlias = Literal["warning", "failure", "degenerate"]


class DistrankError(ValueError):
    """Base class for all distrank errors."""


class InvalidOption(DistrankError):
    """An option failed validation before any fitting was attempted."""


class InvalidMetric(InvalidOption):
    """The requested ranking metric is not recognised."""


class InvalidDataset(DistrankError):
    """The input data cannot be used as a one-dimensional real dataset."""


class EmptyDataset(InvalidDataset):
    """The input data contains no values."""


class EstimationFailure(DistrankError):
    """A family's maximum-likelihood solver did not produce finite parameters."""

    def __init__(self, distribution: str, message: str) -> None:
        super().__init__(f"{distribution}: {message}")
        self.distribution = distribution
        self.reason = message


class AllFamiliesFailed(DistrankError):
    """No candidate family could be fitted to the dataset."""


class Metric(str, Enum):
    """Goodness-of-fit statistic used to rank candidates."""

    NLL = "nll"
    KSE = "kse"
    R2 = "r2"
    CHI_SQUARE = "chi_square"
    RMSE = "rmse"

    @property
    def descending(self) -> bool:
        """Whether larger values are better."""
        return self is Metric.R2

    @property
    def label(self) -> str:
        return _METRIC_LABELS[self]


_METRIC_LABELS = {
    Metric.NLL: "NLogL",
    Metric.KSE: "KSE",
    Metric.R2: "R2",
    Metric.CHI_SQUARE: "Chi^2",
    Metric.RMSE: "RMSE",
}

_METRIC_ALIASES = {
    "nll": Metric.NLL,
    "nlogl": Metric.NLL,
    "negloglik": Metric.NLL,
    "kse": Metric.KSE,
    "ks": Metric.KSE,
    "r2": Metric.R2,
    "rsquare": Metric.R2,
    "chisquare": Metric.CHI_SQUARE,
    "chi2": Metric.CHI_SQUARE,
    "x2": Metric.CHI_SQUARE,
    "rmse": Metric.RMSE,
}


def parse_metric(value: Metric | str | None) -> Metric:
    """Resolve a metric name or one of its common abbreviations."""
    if value is None:
        return Metric.NLL
    if isinstance(value, Metric):
        return value
    if not isinstance(value, str):
        raise InvalidMetric(f"Sort metric must be a string, got {value!r}.")
    key = value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")
    if key not in _METRIC_ALIASES:
        choices = ", ".join(label for label in _METRIC_LABELS.values())
        raise InvalidMetric(f"Unknown sort metric {value!r}; try one of {choices}.")
    return _METRIC_ALIASES[key]


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """Non-fatal note recorded while fitting a single family."""

    distribution: str
    kind: DiagnosticKind
    message: str


@dataclass(slots=True)
class FittedModel:
    """A registered distribution bound to fitted parameter values."""

    distribution: Distribution
    parameters: dict[str, float]
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.distribution.name

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return self.distribution.parameters

    @property
    def parameter_descriptions(self) -> tuple[str, ...]:
        return self.distribution.descriptions

    @property
    def params(self) -> tuple[float, ...]:
        """Parameter values ordered as the distribution declares them."""
        return tuple(self.parameters[name] for name in self.distribution.parameters)

    def pdf(self, x: ArrayLike) -> np.ndarray:
        return self.distribution.pdf(np.asarray(x, dtype=float), self.parameters)

    def cdf(self, x: ArrayLike) -> np.ndarray:
        return self.distribution.cdf(np.asarray(x, dtype=float), self.parameters)

    def logpdf(self, x: ArrayLike) -> np.ndarray:
        return self.distribution.logpdf(np.asarray(x, dtype=float), self.parameters)


@dataclass(slots=True, frozen=True)
class GoodnessOfFit:
    """Five goodness-of-fit statistics for one fitted model."""

    nll: float
    kse: float
    r2: float
    chi_square: float
    rmse: float

    def as_dict(self) -> dict[str, float]:
        return {
            "nll": self.nll,
            "kse": self.kse,
            "r2": self.r2,
            "chi_square": self.chi_square,
            "rmse": self.rmse,
        }


@dataclass(slots=True, frozen=True)
class RankedEntry:
    """One row of a ranked result."""

    model: FittedModel
    gof: GoodnessOfFit

    @property
    def name(self) -> str:
        return self.model.name


@dataclass(slots=True)
class RankedResult:
    """Fitted candidates ordered by the active metric; entry 0 is the best fit."""

    entries: list[RankedEntry]
    metric: str
    options: FitOptions
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RankedEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RankedEntry:
        return self.entries[index]

    @property
    def best(self) -> RankedEntry:
        return self.entries[0]

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def top(self, n: int | None = None) -> list[RankedEntry]:
        """Return the entries a plotting collaborator should render."""
        count = self.options.result_count if n is None else n
        return self.entries[: max(int(count), 0)]

    def diagnostics_for(self, distribution: str) -> list[Diagnostic]:
        return [diag for diag in self.diagnostics if diag.distribution == distribution]

    def to_frame(self) -> pd.DataFrame:
        """Return a tidy data frame summarising the ranked candidates."""
        records: list[dict[str, Any]] = []
        for rank, entry in enumerate(self.entries, start=1):
            record: dict[str, Any] = {"rank": rank, "distribution": entry.name}
            record.update(entry.gof.as_dict())
            record["parameters"] = ", ".join(entry.model.parameter_names)
            record.update({f"param_{k}": v for k, v in entry.model.parameters.items()})
            records.append(record)
        return pd.DataFrame.from_records(records)


def as_parameter_mapping(
    names: Sequence[str], values: Sequence[float] | Mapping[str, float]
) -> dict[str, float]:
    """Bind positional parameter values to names, preserving declaration order."""
    if isinstance(values, Mapping):
        missing = [name for name in names if name not in values]
        if missing:
            raise KeyError(f"Missing parameters: {', '.join(missing)}")
        return {name: float(values[name]) for name in names}
    if len(values) != len(names):
        raise ValueError(f"Expected {len(names)} parameters, got {len(values)}.")
    return {name: float(value) for name, value in zip(names, values, strict=True)}


__all__ = [
    "ArrayLike",
    "DiagnosticKind",
    "DistrankError",
    "InvalidOption",
    "InvalidMetric",
    "InvalidDataset",
    "EmptyDataset",
    "EstimationFailure",
    "AllFamiliesFailed",
    "Metric",
    "parse_metric",
    "Diagnostic",
    "FittedModel",
    "GoodnessOfFit",
    "RankedEntry",
    "RankedResult",
    "as_parameter_mapping",
]
