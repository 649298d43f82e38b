from pathlib import Path

import numpy as np
import pandas as pd
import pytest
from typer.testing import CliRunner

from distrank import __version__
from distrank.cli import _format_metric, app

runner = CliRunner()


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    rng = np.random.default_rng(8)
    path = tmp_path / "sample.csv"
    pd.DataFrame({"value": rng.normal(5.0, 1.0, size=200)}).to_csv(path, index=False)
    return path


def test_registry_command_lists_distributions() -> None:
    result = runner.invoke(app, ["registry"])
    assert result.exit_code == 0
    assert "Normal" in result.stdout
    assert "Weibull" in result.stdout


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_fit_command_reports_closest_distribution(data_file: Path) -> None:
    result = runner.invoke(app, ["fit", str(data_file), "--column", "value"])
    assert result.exit_code == 0, result.stdout
    assert "sorted by NLogL" in result.stdout
    assert "The closest distribution is" in result.stdout


def test_fit_command_rejects_unknown_metric(data_file: Path) -> None:
    result = runner.invoke(app, ["fit", str(data_file), "--sort-by", "bogus"])
    assert result.exit_code == 1
    assert "Unknown sort metric" in result.stdout


def test_fit_command_rejects_missing_column(data_file: Path) -> None:
    result = runner.invoke(app, ["fit", str(data_file), "--column", "height"])
    assert result.exit_code == 1
    assert "height" in result.stdout


def test_fit_command_reads_yaml_config(data_file: Path, tmp_path: Path) -> None:
    config = tmp_path / "options.yaml"
    config.write_text("fit:\n  sortby: RMSE\n  result: 2\n", encoding="utf-8")
    result = runner.invoke(app, ["fit", str(data_file), "--config", str(config)])
    assert result.exit_code == 0, result.stdout
    assert "sorted by RMSE" in result.stdout


def test_flags_override_config(data_file: Path, tmp_path: Path) -> None:
    config = tmp_path / "options.yaml"
    config.write_text("sortby: RMSE\n", encoding="utf-8")
    result = runner.invoke(
        app, ["fit", str(data_file), "--config", str(config), "--sort-by", "KSE"]
    )
    assert result.exit_code == 0, result.stdout
    assert "sorted by KSE" in result.stdout


def test_fit_command_writes_curve_table(data_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "curves.csv"
    result = runner.invoke(
        app,
        [
            "fit",
            str(data_file),
            "--graph",
            "cdf",
            "--result",
            "2",
            "--curves-output",
            str(output),
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert "Fitted CDF Curves" in result.stdout
    curves = pd.read_csv(output)
    assert list(curves.columns) == ["distribution", "rank", "x", "y"]
    assert "Empirical" in set(curves["distribution"])
    assert sorted(curves["rank"].unique().tolist()) == [0, 1, 2]


def test_fit_command_shows_parameters_and_diagnostics(data_file: Path) -> None:
    result = runner.invoke(
        app, ["fit", str(data_file), "--show-parameters", "--show-diagnostics"]
    )
    assert result.exit_code == 0, result.stdout
    assert "Parameter Estimates" in result.stdout
    assert "sigma" in result.stdout


def test_format_metric_renders_non_finite_values() -> None:
    assert _format_metric(float("nan")) == "NaN"
    assert _format_metric(float("inf")) == "Inf"
    assert _format_metric(float("-inf")) == "-Inf"
    assert _format_metric(0.123456) == "0.1235"
    assert _format_metric(None) == "-"
