from __future__ import annotations

import importlib.metadata
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

project = "distrank"
author = "distrank contributors"
copyright = f"{datetime.now():%Y}, {author}"

try:
    release = importlib.metadata.version("distrank")
except importlib.metadata.PackageNotFoundError:  # pragma: no cover - docs build
    release = "0.1.0"

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx_autodoc_typehints",
]

exclude_patterns: list[str] = ["_build"]
html_theme = "sphinx_rtd_theme"

autosummary_generate = True
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
    "pandas": ("https://pandas.pydata.org/docs/", None),
}
