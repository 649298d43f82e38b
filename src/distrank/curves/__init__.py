"""Curve tables for plotting ranked fits against the data.

Nothing here renders; the frames are meant for whatever plotting layer
consumes a :class:`~distrank.core.RankedResult`.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import pandas as pd

from ..core import ArrayLike, InvalidOption, RankedResult
from ..distfit.metrics import empirical_cdf

__all__ = [
    "MAX_CURVES",
    "empirical_histogram",
    "empirical_cdf_frame",
    "fitted_curves",
]

MAX_CURVES = 5


def empirical_histogram(data: ArrayLike, bins: int) -> pd.DataFrame:
    """Return a unit-area histogram with ``bins`` evenly spaced centres over the data range."""
    values = np.asarray(data, dtype=float).ravel()
    if bins <= 0:
        raise InvalidOption(f"bins must be positive, got {bins!r}.")
    lo, hi = float(values.min()), float(values.max())
    if hi <= lo:
        # A constant sample collapses to a single unit-width bar.
        centres = np.array([lo])
        width = 1.0
    elif bins == 1:
        centres = np.array([(lo + hi) / 2.0])
        width = hi - lo
    else:
        centres = np.linspace(lo, hi, int(bins))
        width = float(np.mean(np.diff(centres)))
    edges = np.concatenate((centres - width / 2.0, [centres[-1] + width / 2.0]))
    counts, _ = np.histogram(values, bins=edges)
    density = counts / (counts.sum() * width)
    return pd.DataFrame({"x": centres, "density": density})


def empirical_cdf_frame(data: ArrayLike) -> pd.DataFrame:
    xs, ecdf = empirical_cdf(data)
    return pd.DataFrame({"x": xs, "ecdf": ecdf})


def fitted_curves(
    result: RankedResult,
    data: ArrayLike,
    mode: Literal["pdf", "cdf"] | None = None,
    *,
    points: int = 100,
) -> pd.DataFrame:
    """Evaluate the top ranked fits for overlaying on the empirical curves.

    At most ``min(result_count, 5, len(result))`` curves are produced. PDF
    curves use ``points`` evenly spaced abscissae between the data extremes;
    CDF curves use the empirical CDF abscissae.
    """
    chosen = mode or result.options.plot or "pdf"
    if chosen not in ("pdf", "cdf"):
        raise InvalidOption(f"mode must be 'pdf' or 'cdf', got {chosen!r}.")
    values = np.asarray(data, dtype=float).ravel()
    if chosen == "pdf":
        xs = np.linspace(float(values.min()), float(values.max()), int(points))
    else:
        xs, _ = empirical_cdf(values)

    count = min(result.options.result_count, MAX_CURVES, len(result))
    frames: list[pd.DataFrame] = []
    for rank, entry in enumerate(result.top(count), start=1):
        ys = entry.model.pdf(xs) if chosen == "pdf" else entry.model.cdf(xs)
        frames.append(
            pd.DataFrame(
                {
                    "distribution": entry.name,
                    "rank": rank,
                    "x": xs,
                    "y": ys,
                }
            )
        )
    if not frames:
        return pd.DataFrame(columns=["distribution", "rank", "x", "y"])
    return pd.concat(frames, ignore_index=True)
