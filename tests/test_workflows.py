from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from distrank.core import EmptyDataset, InvalidDataset, Metric
from distrank.workflows import fit_file, load_dataset


def test_load_dataset_reads_named_column(tmp_path: Path) -> None:
    path = tmp_path / "sample.csv"
    pd.DataFrame({"label": ["a", "b", "c"], "value": [1.5, 2.5, 3.5]}).to_csv(path, index=False)
    values = load_dataset(path, column="value")
    np.testing.assert_allclose(values, [1.5, 2.5, 3.5])


def test_load_dataset_flattens_numeric_columns(tmp_path: Path) -> None:
    path = tmp_path / "matrix.csv"
    path.write_text("a,b,name\n1,2,x\n3,,y\n", encoding="utf-8")
    np.testing.assert_allclose(load_dataset(path), [1.0, 2.0, 3.0])


def test_load_dataset_headerless_csv_keeps_first_row(tmp_path: Path) -> None:
    path = tmp_path / "raw.csv"
    path.write_text("1.0\n2.0\n3.0\n", encoding="utf-8")
    np.testing.assert_allclose(load_dataset(path), [1.0, 2.0, 3.0])


def test_load_dataset_whitespace_text(tmp_path: Path) -> None:
    path = tmp_path / "raw.txt"
    path.write_text("1.0 2.0\n3.0   4.0\n", encoding="utf-8")
    np.testing.assert_allclose(load_dataset(path), [1.0, 2.0, 3.0, 4.0])


def test_load_dataset_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "missing.csv")

    path = tmp_path / "sample.csv"
    path.write_text("value\n1\n2\n", encoding="utf-8")
    with pytest.raises(InvalidDataset, match="height"):
        load_dataset(path, column="height")

    empty = tmp_path / "names.csv"
    empty.write_text("name\nx\ny\n", encoding="utf-8")
    with pytest.raises(EmptyDataset):
        load_dataset(empty)


def test_fit_file_ranks_with_options(tmp_path: Path) -> None:
    rng = np.random.default_rng(3)
    path = tmp_path / "gamma.csv"
    pd.DataFrame({"x": rng.gamma(2.0, 1.5, size=300)}).to_csv(path, index=False)
    result = fit_file(path, column="x", options={"sortby": "KSE"})
    assert result.options.sort_metric is Metric.KSE
    kse = [entry.gof.kse for entry in result]
    assert kse == sorted(kse)
