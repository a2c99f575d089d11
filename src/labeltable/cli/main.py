"""Main CLI entrypoint using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer

from labeltable import __version__
from labeltable.config import AnalysisConfig
from labeltable.errors import LabeledTableError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="labeltable",
    help="Labeled numeric tables: reductions, grouping, correlations and normality tests.",
    add_completion=False,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"labeltable {__version__}")
        raise typer.Exit()


def _fail(err: Exception):
    typer.secho(f"Error: {err}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """labeltable: labeled numeric table analysis."""
    pass


@app.command()
def describe(
    data: Path = typer.Option(..., "--data", help="Path to table (.csv, .parquet)."),
    label_col: Optional[str] = typer.Option(None, "--label-col", help="Column holding row labels"),
):
    """Print shape, label status and per-column summaries."""
    from labeltable.io import load_table
    from labeltable.reduce import column_extrema, column_quantile, column_sum, grand_sum

    try:
        table = load_table(data, label_col=label_col)
    except (LabeledTableError, ValueError, FileNotFoundError) as e:
        _fail(e)

    typer.echo(f"Rows: {table.n_rows}")
    typer.echo(f"Columns: {table.n_cols}")
    typer.echo(f"Fully row-labeled: {table.has_row_labels()}")
    typer.echo(f"Fully column-labeled: {table.has_column_labels()}")
    typer.echo(f"Grand sum: {grand_sum(table):.6g}")
    for j, label in enumerate(table.extract_column_labels()):
        lo, hi = column_extrema(table, j)
        typer.echo(
            f"  {label}: sum={column_sum(table, j):.6g} min={lo:.6g} "
            f"median={column_quantile(table, j, 0.5):.6g} max={hi:.6g}"
        )


@app.command()
def means(
    data: Path = typer.Option(..., "--data", help="Path to table (.csv, .parquet)."),
    label_col: Optional[str] = typer.Option(None, "--label-col", help="Column holding row labels"),
    outdir: Path = typer.Option(Path("derived"), "--outdir", help="Output directory"),
    expand: bool = typer.Option(False, "--expand", help="One output row per input row"),
    medians: bool = typer.Option(False, "--medians", help="Aggregate with medians"),
):
    """Aggregate rows that share a row label."""
    from labeltable.grouping import means_by_row_labels
    from labeltable.io import load_table, save_table

    try:
        config = AnalysisConfig(
            data_path=data, label_col=label_col, outdir=outdir, expand=expand, use_medians=medians
        )
        table = load_table(config.data_path, label_col=config.label_col)
        result = means_by_row_labels(table, expand=config.expand, use_medians=config.use_medians)
        name = "medians_by_label.csv" if config.use_medians else "means_by_label.csv"
        out = save_table(result, config.outdir / name)
    except (LabeledTableError, ValueError, FileNotFoundError) as e:
        _fail(e)

    typer.secho(f"✓ {result.n_rows} rows written to {out}", fg=typer.colors.GREEN)


@app.command()
def normality(
    data: Path = typer.Option(..., "--data", help="Path to table (.csv, .parquet)."),
    label_col: Optional[str] = typer.Option(None, "--label-col", help="Column holding row labels"),
    smoothing: Optional[float] = typer.Option(None, "--h", help="BHEP smoothing (default: data-driven)"),
):
    """Run the BHEP multivariate normality test."""
    from labeltable.io import load_table
    from labeltable.normality import normality_test_bhep

    try:
        config = AnalysisConfig(data_path=data, label_col=label_col, smoothing=smoothing)
        table = load_table(config.data_path, label_col=config.label_col)
    except (LabeledTableError, ValueError, FileNotFoundError) as e:
        _fail(e)

    result = normality_test_bhep(table, h=config.smoothing)
    typer.echo(f"Probability: {result.probability:.6g}")
    typer.echo(f"h: {result.h:.6g}")
    typer.echo(f"tnb: {result.tnb:.6g}")
    typer.echo(f"lnmu: {result.lnmu:.6g}")
    typer.echo(f"lnvar: {result.lnvar:.6g}")
    if result.singular:
        typer.secho("Covariance matrix is singular; tnb set to 4n.", fg=typer.colors.YELLOW)


@app.command()
def correlate(
    first: Path = typer.Option(..., "--first", help="First table"),
    second: Path = typer.Option(..., "--second", help="Second table"),
    label_col: Optional[str] = typer.Option(None, "--label-col", help="Column holding row labels"),
    by_columns: bool = typer.Option(False, "--by-columns", help="Correlate columns instead of rows"),
    no_centre: bool = typer.Option(False, "--no-centre", help="Skip centering"),
    no_normalize: bool = typer.Option(False, "--no-normalize", help="Skip normalization"),
    out: Path = typer.Option(Path("derived/correlations.csv"), "--out", help="Output file"),
):
    """Correlate the rows (or columns) of two tables."""
    from labeltable.correlation import cross_correlations
    from labeltable.io import load_table, save_table

    try:
        a = load_table(first, label_col=label_col)
        b = load_table(second, label_col=label_col)
        result = cross_correlations(
            a, b, by_columns=by_columns, centre=not no_centre, normalize=not no_normalize
        )
        save_table(result, out)
    except (LabeledTableError, ValueError, FileNotFoundError) as e:
        _fail(e)

    typer.secho(f"✓ {result.n_rows} x {result.n_cols} correlations written to {out}", fg=typer.colors.GREEN)


@app.command()
def bootstrap(
    data: Path = typer.Option(..., "--data", help="Path to table (.csv, .parquet)."),
    label_col: Optional[str] = typer.Option(None, "--label-col", help="Column holding row labels"),
    outdir: Path = typer.Option(Path("derived"), "--outdir", help="Output directory"),
    n: int = typer.Option(1, "--n", help="Number of replicates"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Write bootstrap replicates of a table."""
    from labeltable.io import load_table, save_table
    from labeltable.transform import bootstrap as bootstrap_table

    try:
        config = AnalysisConfig(
            data_path=data, label_col=label_col, outdir=outdir, seed=seed, n_bootstrap=n
        )
        table = load_table(config.data_path, label_col=config.label_col)
    except (LabeledTableError, ValueError, FileNotFoundError) as e:
        _fail(e)

    rng = np.random.default_rng(config.seed)
    for i in range(config.n_bootstrap):
        path = save_table(bootstrap_table(table, rng=rng), config.outdir / f"bootstrap_{i + 1:03d}.csv")
        logger.info(f"Replicate {i + 1}/{config.n_bootstrap}: {path}")

    typer.secho(f"✓ {config.n_bootstrap} replicates written to {config.outdir}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
