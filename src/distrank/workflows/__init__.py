"""Workflow shortcuts for fitting tabular data files."""

from __future__ import annotations

from .tabular import fit_file, load_dataset

__all__ = ["fit_file", "load_dataset"]
