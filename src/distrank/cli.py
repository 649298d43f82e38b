"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from pathlib import Path
from typing import Any

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import FitOptions, load_options, resolve_options
from .core import DistrankError, RankedResult
from .curves import empirical_cdf_frame, empirical_histogram, fitted_curves
from .distfit import fit
from .distributions import get_distribution, list_distributions
from .workflows import load_dataset

app = typer.Typer(help="Rank parametric distributions by how well they fit a dataset.")
console = Console()

DATA_FILE_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    readable=True,
    dir_okay=False,
    help="CSV (or whitespace-delimited .txt) file holding the sample.",
)

COLUMN_OPTION = typer.Option(
    None,
    "--column",
    "-c",
    help="Column to fit (default: flatten every numeric column).",
    show_default=False,
)

SORT_OPTION = typer.Option(
    None,
    "--sort-by",
    "-s",
    help="Ranking metric: NLogL (default), KSE, R2, X2 or RMSE.",
    show_default=False,
)

RESULT_OPTION = typer.Option(
    None,
    "--result",
    "-n",
    help="Number of top fits to report curves for (default 4, at most 5 are drawn).",
    show_default=False,
)

BINS_OPTION = typer.Option(
    None,
    "--bins",
    help="Number of empirical histogram bins (default 50).",
    show_default=False,
)

GRAPH_OPTION = typer.Option(
    None,
    "--graph",
    "-g",
    help="Curve table to emit for the top fits: pdf or cdf.",
    show_default=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    exists=True,
    readable=True,
    dir_okay=False,
    help="YAML file with fit options; command-line flags take precedence.",
    show_default=False,
)

CURVES_OUTPUT_OPTION = typer.Option(
    None,
    "--curves-output",
    "-o",
    help="Write the empirical and fitted curve tables to this CSV (requires --graph).",
    show_default=False,
)

SHOW_PARAMETERS_OPTION = typer.Option(
    False,
    "--show-parameters/--hide-parameters",
    help="Include fitted parameter values in the output.",
    show_default=False,
)

SHOW_DIAGNOSTICS_OPTION = typer.Option(
    False,
    "--show-diagnostics/--hide-diagnostics",
    help="List estimator warnings, dropped families and degenerate metrics.",
    show_default=False,
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose or version:
        console.print(f"[bold green]distrank {__version__}[/bold green]")
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    if version:
        raise typer.Exit()
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List the candidate distributions in catalog order."""
    table = Table(title="Candidate Distributions")
    table.add_column("Name")
    table.add_column("Support")
    table.add_column("Parameters")
    table.add_column("Description", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        params = ", ".join(
            f"{param} ({desc})"
            for param, desc in zip(dist.parameters, dist.descriptions, strict=True)
        )
        table.add_row(dist.name, dist.support, params, dist.notes or "")
    console.print(table)


@app.command("fit")
def fit_command(  # noqa: B008
    data_file: Path = DATA_FILE_ARGUMENT,
    column: str | None = COLUMN_OPTION,
    sort_by: str | None = SORT_OPTION,
    result: int | None = RESULT_OPTION,
    bins: int | None = BINS_OPTION,
    graph: str | None = GRAPH_OPTION,
    config: Path | None = CONFIG_OPTION,
    curves_output: Path | None = CURVES_OUTPUT_OPTION,
    show_parameters: bool = SHOW_PARAMETERS_OPTION,
    show_diagnostics: bool = SHOW_DIAGNOSTICS_OPTION,
) -> None:
    """Fit the candidate catalog to a data file and print the ranking."""
    overrides: dict[str, Any] = {}
    if sort_by is not None:
        overrides["sort_metric"] = sort_by
    if result is not None:
        overrides["result_count"] = result
    if bins is not None:
        overrides["histogram_bins"] = bins
    if graph is not None:
        overrides["plot"] = graph
    try:
        base: FitOptions | None = load_options(config) if config is not None else None
        options = resolve_options(base, **overrides)
        data = load_dataset(data_file, column=column)
        ranked = fit(data, options)
    except (DistrankError, KeyError, FileNotFoundError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(_metrics_table(ranked))
    if show_parameters:
        console.print(_parameter_table(ranked))
    if show_diagnostics:
        _print_diagnostics(ranked)
    console.print(f"The closest distribution is [bold green]{ranked.best.name}[/bold green]")

    if ranked.options.plot is not None:
        curves = fitted_curves(ranked, data)
        summary = Table(title=f"Fitted {ranked.options.plot.upper()} Curves")
        summary.add_column("Rank", justify="right")
        summary.add_column("Distribution", no_wrap=True)
        summary.add_column("Points", justify="right")
        for (rank, name), group in curves.groupby(["rank", "distribution"], sort=True):
            summary.add_row(str(rank), str(name), str(len(group)))
        console.print(summary)
        if curves_output is not None:
            if ranked.options.plot == "pdf":
                empirical = empirical_histogram(data, ranked.options.histogram_bins)
                empirical = empirical.rename(columns={"density": "y"})
            else:
                empirical = empirical_cdf_frame(data).rename(columns={"ecdf": "y"})
            empirical.insert(0, "distribution", "Empirical")
            empirical.insert(1, "rank", 0)
            pd.concat([empirical, curves], ignore_index=True).to_csv(curves_output, index=False)
            console.print(f"[green]Curve table written[/green] {curves_output}")
    elif curves_output is not None:
        console.print("[yellow]--curves-output ignored without --graph.[/yellow]")


def _metrics_table(ranked: RankedResult) -> Table:
    title = f"Distribution Fits (sorted by {ranked.options.sort_metric.label})"
    table = Table(title=title, expand=True)
    table.add_column("Rank", justify="right", no_wrap=True)
    table.add_column("Distribution", no_wrap=True)
    table.add_column("NLogL", justify="right", no_wrap=True)
    table.add_column("KSE", justify="right", no_wrap=True)
    table.add_column("R2", justify="right", no_wrap=True)
    table.add_column("Chi^2", justify="right", no_wrap=True)
    table.add_column("RMSE", justify="right", no_wrap=True)
    for rank, entry in enumerate(ranked, start=1):
        gof = entry.gof
        table.add_row(
            str(rank),
            entry.name,
            _format_metric(gof.nll),
            _format_metric(gof.kse),
            _format_metric(gof.r2),
            _format_metric(gof.chi_square),
            _format_metric(gof.rmse),
        )
    return table


def _parameter_table(ranked: RankedResult) -> Table:
    table = Table(title="Parameter Estimates", expand=True)
    table.add_column("Distribution", no_wrap=True)
    table.add_column("Parameter", no_wrap=True)
    table.add_column("Description")
    table.add_column("Value", justify="right", no_wrap=True)
    for entry in ranked:
        model = entry.model
        for name, desc in zip(model.parameter_names, model.parameter_descriptions, strict=True):
            table.add_row(model.name, name, desc, _format_metric(model.parameters[name]))
    return table


def _print_diagnostics(ranked: RankedResult) -> None:
    if not ranked.diagnostics:
        console.print("[green]No diagnostics reported.[/green]")
        return
    colours = {"warning": "yellow", "failure": "red", "degenerate": "magenta"}
    for diag in ranked.diagnostics:
        colour = colours.get(diag.kind, "white")
        console.print(
            f"[{colour}]{diag.kind}[/{colour}] {diag.distribution}: {escape(diag.message)}"
        )


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val):
            return "NaN"
        if math.isinf(val):
            return "Inf" if val > 0 else "-Inf"
        return f"{val:.4f}"
    return str(value)


def main_entry() -> None:
    app()


def main() -> None:  # pragma: no cover - console entry
    main_entry()
