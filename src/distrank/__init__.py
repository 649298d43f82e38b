"""Top-level package exports for distrank."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("distrank")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distfit as distfit  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .config import FitOptions, load_options, resolve_options  # noqa: F401
from .core import (  # noqa: F401
    AllFamiliesFailed,
    Diagnostic,
    DistrankError,
    EmptyDataset,
    EstimationFailure,
    FittedModel,
    GoodnessOfFit,
    InvalidDataset,
    InvalidMetric,
    InvalidOption,
    Metric,
    RankedEntry,
    RankedResult,
)
from .distfit import estimate, evaluate, fit, rank  # noqa: F401
from .workflows import fit_file, load_dataset  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "distfit",
    "fit",
    "fit_file",
    "load_dataset",
    "estimate",
    "evaluate",
    "rank",
    "FitOptions",
    "load_options",
    "resolve_options",
    "Metric",
    "Diagnostic",
    "FittedModel",
    "GoodnessOfFit",
    "RankedEntry",
    "RankedResult",
    "DistrankError",
    "InvalidOption",
    "InvalidMetric",
    "InvalidDataset",
    "EmptyDataset",
    "EstimationFailure",
    "AllFamiliesFailed",
]
