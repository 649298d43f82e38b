"""Fit option resolution and YAML loading."""

from __future__ import annotations

import logging
import numbers
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .core import InvalidOption, Metric, parse_metric

logger = logging.getLogger(__name__)

PLOT_MODES = ("pdf", "cdf")

# Short option names and camelCase spellings accepted alongside the field names.
_ALIASES = {
    "sortby": "sort_metric",
    "sort_by": "sort_metric",
    "sortmetric": "sort_metric",
    "metric": "sort_metric",
    "result": "result_count",
    "resultcount": "result_count",
    "nbins": "histogram_bins",
    "bins": "histogram_bins",
    "histogrambins": "histogram_bins",
    "graph": "plot",
}


@dataclass(slots=True, frozen=True)
class FitOptions:
    """Fully populated, validated options for one fitting run.

    ``result_count`` and ``histogram_bins`` are only consumed by plotting
    collaborators; the engine validates them and passes them through.
    """

    sort_metric: Metric = Metric.NLL
    result_count: int = 4
    histogram_bins: int = 50
    plot: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_metric", parse_metric(self.sort_metric))
        object.__setattr__(self, "result_count", _positive_int("result_count", self.result_count))
        object.__setattr__(
            self, "histogram_bins", _positive_int("histogram_bins", self.histogram_bins)
        )
        if self.plot is not None:
            mode = str(self.plot).lower()
            if mode in {"", "none", "no plot"}:
                object.__setattr__(self, "plot", None)
            elif mode in PLOT_MODES:
                object.__setattr__(self, "plot", mode)
            else:
                raise InvalidOption(f"plot must be one of {PLOT_MODES}, got {self.plot!r}.")

    def summary(self) -> str:
        return (
            f"sort by={self.sort_metric.value}, graph={self.plot or 'no plot'}, "
            f"result on graph={self.result_count}, empiric bins={self.histogram_bins}"
        )


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidOption(f"{name} must be a number, got {value!r}.")
    if not float(value).is_integer() or value <= 0:
        raise InvalidOption(f"{name} must be a positive integer, got {value!r}.")
    return int(value)


def _normalise_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(FitOptions)}
    resolved: dict[str, Any] = {}
    for raw_key, value in options.items():
        key = str(raw_key)
        compact = key.replace("_", "").replace("-", "").lower()
        name = _ALIASES.get(compact, _ALIASES.get(key.lower(), key.lower().replace("-", "_")))
        if name not in known:
            raise InvalidOption(f"Unknown option {raw_key!r}; expected one of {sorted(known)}.")
        if name in resolved:
            raise InvalidOption(f"Option {name!r} supplied more than once (via {raw_key!r}).")
        resolved[name] = value
    return resolved


def resolve_options(
    options: FitOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> FitOptions:
    """Return validated options with every default filled in.

    Accepts ``None``, an existing :class:`FitOptions` or a mapping using either
    the Python field names or the aliases above. Keyword overrides win.
    """
    if options is None:
        base = FitOptions()
    elif isinstance(options, FitOptions):
        base = options
    elif isinstance(options, Mapping):
        base = FitOptions(**_normalise_keys(options))
    else:
        raise InvalidOption(
            f"Options must be a mapping or FitOptions, got {type(options).__name__}."
        )
    if overrides:
        base = replace(base, **_normalise_keys(overrides))
    return base


def load_options(path: str | os.PathLike[str]) -> FitOptions:
    """Load fit options from a YAML file.

    The mapping may sit at the top level or under a ``fit:`` key.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise InvalidOption(f"Options file {path} must contain a mapping.")
    if "fit" in data and isinstance(data["fit"], Mapping):
        data = data["fit"]
    logger.debug("Loaded options from %s: %s", path, dict(data))
    return resolve_options(data)


__all__ = ["FitOptions", "PLOT_MODES", "load_options", "resolve_options"]
