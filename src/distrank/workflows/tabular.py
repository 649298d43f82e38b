"""Load a one-dimensional dataset from CSV or whitespace-delimited text and fit it."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..config import FitOptions
from ..core import EmptyDataset, InvalidDataset, RankedResult
from ..distfit import fit

logger = logging.getLogger(__name__)


def _read_table(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in {".txt", ".dat"}:
        return pd.read_csv(path, sep=r"\s+", header=None)
    frame = pd.read_csv(path)
    # Headerless numeric CSVs promote the first row to column names.
    if all(_is_number(col) for col in frame.columns):
        frame = pd.read_csv(path, header=None)
    return frame


def _is_number(value: Any) -> bool:
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def load_dataset(path: str | os.PathLike[str], column: str | None = None) -> np.ndarray:
    """Return the values stored in ``path`` as a flat float array.

    With ``column`` only that column is used; otherwise every numeric column
    is flattened row by row. Missing values are dropped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    frame = _read_table(path)
    if column is not None:
        if column not in frame.columns:
            raise InvalidDataset(
                f"Column {column!r} not found in {path}; "
                f"available: {list(map(str, frame.columns))}"
            )
        selected = pd.to_numeric(frame[column], errors="coerce").to_frame()
    else:
        selected = frame.select_dtypes(include="number")
    values = selected.to_numpy(dtype=float).ravel()
    values = values[~np.isnan(values)]
    if values.size == 0:
        raise EmptyDataset(f"No numeric values found in {path}.")
    logger.debug("Loaded %d values from %s", values.size, path)
    return values


def fit_file(
    path: str | os.PathLike[str],
    *,
    column: str | None = None,
    options: FitOptions | Mapping[str, Any] | None = None,
) -> RankedResult:
    """Load ``path`` and fit the candidate catalog to its values."""
    return fit(load_dataset(path, column=column), options)
