"""Ordering of fitted candidates by a goodness-of-fit metric."""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..core import GoodnessOfFit, Metric, parse_metric

__all__ = ["Metric", "parse_metric", "metric_value", "rank"]


def metric_value(gof: GoodnessOfFit, metric: Metric | str) -> float:
    return float(getattr(gof, parse_metric(metric).value))


def rank(goodness: Sequence[GoodnessOfFit], metric: Metric | str = Metric.NLL) -> list[int]:
    """Return indices into ``goodness`` ordered best first.

    Lower is better for every metric except R2. The sort is stable, so equal
    values keep their catalog order, and non-finite values always come last
    whichever direction applies.
    """
    chosen = parse_metric(metric)
    sign = -1.0 if chosen.descending else 1.0

    def key(index: int) -> tuple[bool, float]:
        value = metric_value(goodness[index], chosen)
        if not math.isfinite(value):
            return True, 0.0
        return False, sign * value

    return sorted(range(len(goodness)), key=key)
