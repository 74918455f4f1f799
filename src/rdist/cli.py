"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .distributions import get_distribution, list_distributions, rmultinom
from .errors import MathlibWarning
from .evaluation import evaluate

app = typer.Typer(help="rdist distribution functions CLI.")
console = Console()

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")

DISTRIBUTION_ARGUMENT = typer.Argument(..., help="Registered distribution name (see `registry`).")
KIND_ARGUMENT = typer.Argument(..., help="Function to evaluate: density, cdf or quantile.")

ARGUMENTS_OPTION = typer.Option(
    None,
    "--arg",
    "-a",
    help="Argument as name=value[,value...]; repeat for each argument. Values are recycled.",
    show_default=False,
)

LOG_OPTION = typer.Option(
    False,
    "--log/--no-log",
    help="Return densities on the log scale.",
    show_default=True,
)

LOWER_TAIL_OPTION = typer.Option(
    True,
    "--lower-tail/--upper-tail",
    help="Use P[X <= x] (lower tail) or P[X > x] (upper tail).",
    show_default=True,
)

LOG_P_OPTION = typer.Option(
    False,
    "--log-p/--no-log-p",
    help="Probabilities are given or returned on the log scale.",
    show_default=True,
)

OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="Optional path to write the evaluation table as CSV.",
    show_default=False,
)

SIZE_ARGUMENT = typer.Argument(..., help="Number of trials per draw.")

PROB_OPTION = typer.Option(
    ...,
    "--prob",
    "-p",
    help="Bucket probability; repeat once per bucket.",
    show_default=False,
)

DRAWS_OPTION = typer.Option(1, "--draws", "-n", help="Number of count vectors to draw.")

SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="Seed for the random generator (default: fresh entropy).",
    show_default=False,
)


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if verbose or version:
        console.print(f"[bold green]rdist {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List registered distributions."""
    table = Table(title="Registered Distributions")
    table.add_column("Name")
    table.add_column("Parameters")
    table.add_column("Functions")
    table.add_column("Description", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        table.add_row(
            dist.name,
            ", ".join(dist.parameters),
            ", ".join(dist.functions),
            dist.notes or "",
        )
    console.print(table)


@app.command("evaluate")
def evaluate_command(  # noqa: B008
    distribution: str = DISTRIBUTION_ARGUMENT,
    kind: str = KIND_ARGUMENT,
    arguments: list[str] | None = ARGUMENTS_OPTION,
    log: bool = LOG_OPTION,
    lower_tail: bool = LOWER_TAIL_OPTION,
    log_p: bool = LOG_P_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Evaluate a density, distribution or quantile function over recycled arguments."""
    flags = {"log": log} if kind == "density" else {"lower_tail": lower_tail, "log_p": log_p}
    try:
        parsed = _parse_arguments(arguments or [])
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", MathlibWarning)
            result = evaluate(distribution, kind, parsed, **flags)
    except (KeyError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    _report_warnings(caught)

    frame = result.to_frame()
    table = Table(title=f"{result.distribution} {result.kind}")
    for column in frame.columns:
        table.add_column(str(column), justify="right", no_wrap=True)
    for row in frame.itertuples(index=False):
        table.add_row(*(_format_value(value) for value in row))
    console.print(table)

    if output is not None:
        frame.to_csv(output, index=False)
        console.print(f"[green]Evaluation written[/green] {output} (rows={len(frame)})")


@app.command()
def multinom(  # noqa: B008
    size: int = SIZE_ARGUMENT,
    probs: list[float] = PROB_OPTION,
    draws: int = DRAWS_OPTION,
    seed: int | None = SEED_OPTION,
) -> None:
    """Draw multinomial count vectors."""
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", MathlibWarning)
            matrix = rmultinom(size, probs, n=draws, random_state=seed)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    _report_warnings(caught)

    table = Table(title=f"Multinomial draws (size={size})")
    table.add_column("Draw", justify="right")
    for index in range(len(probs)):
        table.add_column(f"k={index + 1}", justify="right")
    table.add_column("Total", justify="right")
    for index, row in enumerate(matrix, start=1):
        table.add_row(str(index), *(str(int(count)) for count in row), str(int(row.sum())))
    console.print(table)


def main() -> None:  # pragma: no cover - console entry
    app()


def _parse_arguments(items: Iterable[str]) -> dict[str, list[float]]:
    parsed: dict[str, list[float]] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name or not raw.strip():
            raise ValueError(f"Invalid argument '{item}'. Expected name=value[,value...].")
        try:
            parsed[name] = [float(value) for value in raw.split(",")]
        except ValueError as exc:
            raise ValueError(f"Invalid numeric value in argument '{item}'.") from exc
    return parsed


def _report_warnings(caught: Iterable[warnings.WarningMessage]) -> None:
    for record in caught:
        console.print(f"[yellow]{record.category.__name__}:[/yellow] {record.message}")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val):
            return "NaN"
        if math.isinf(val):
            return "Inf" if val > 0 else "-Inf"
        return f"{val:.6g}"
    return str(value)
