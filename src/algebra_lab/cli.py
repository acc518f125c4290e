"""
Command-line interface for Algebra Lab.

Usage:
    algebra-lab info           Show available decimal formats
    algebra-lab compare        Compare decimal format properties
    algebra-lab sqrt VALUE     Heron square root with explicit convergence control
    algebra-lab inspect M      Structure, determinant and norms of a matrix
    algebra-lab random         Summarize a reproducible random matrix
"""

import decimal
import logging
from decimal import Decimal
from typing import Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from algebra_lab import __version__
from algebra_lab.algorithms.matrices import (
    DEFAULT_SEED,
    MatrixSummary,
    create_random_decimal_matrix,
    create_random_integer_complex_matrix,
    create_random_integer_matrix,
    summarize,
)
from algebra_lab.algorithms.square_root import sqrt as heron_sqrt
from algebra_lab.data import (
    DEFAULT_SQUARE_ROOT_CONTEXT,
    DecimalFormat,
    SquareRootContext,
    get_spec,
    list_formats,
)
from algebra_lab.errors import AlgebraError
from algebra_lab.linear import Matrix
from algebra_lab.scalars import DECIMAL, INTEGER, INTEGER_COMPLEX, Domain, get_domain

app = typer.Typer(
    name="algebra-lab",
    help="Arbitrary-precision vectors, matrices and square roots",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"algebra-lab version {__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log square root and determinant steps."),
    ] = False,
) -> None:
    """Algebra Lab - exact and context-rounded linear algebra."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


@app.command()  # type: ignore[misc]
def info() -> None:
    """Display information about available decimal formats."""
    table = Table(title="Available Decimal Formats")

    table.add_column("Format", style="cyan", no_wrap=True)
    table.add_column("Digits", justify="right")
    table.add_column("Rounding")
    table.add_column("Exponent range", justify="right")
    table.add_column("Exact", justify="center")

    for fmt in list_formats():
        spec = get_spec(fmt)
        exponents = "unbounded" if spec.exact else f"[{spec.emin}, {spec.emax}]"
        table.add_row(
            fmt.value.upper(),
            spec.digits,
            spec.rounding,
            exponents,
            "✓" if spec.exact else "✗",
        )

    console.print(table)


@app.command()  # type: ignore[misc]
def compare(
    formats: Annotated[
        list[str] | None,
        typer.Argument(help="Formats to compare (e.g., decimal32 decimal128)"),
    ] = None,
    value: Annotated[
        str,
        typer.Option("--value", help="Radicand whose square root is compared"),
    ] = "2",
) -> None:
    """Compare square roots computed in several decimal formats."""
    if formats is None:
        formats = ["decimal32", "decimal64", "decimal128"]

    try:
        specs = [get_spec(f) for f in formats]
        radicand = _parse_number(value)
        contexts = [SquareRootContext.from_format(s.format) for s in specs]
        roots = [heron_sqrt(radicand, c) for c in contexts]
    except (AlgebraError, ValueError) as e:
        _fail(e)

    table = Table(title=f"Square root of {value} by format")

    table.add_column("Property", style="bold")
    for fmt in formats:
        table.add_column(fmt.upper(), justify="right")

    table.add_row("Digits", *[s.digits for s in specs])
    table.add_row("Rounding", *[s.rounding for s in specs])
    table.add_row("sqrt", *[str(r) for r in roots])

    console.print(table)


@app.command()  # type: ignore[misc]
def sqrt(
    value: Annotated[str, typer.Argument(help="Non-negative integer or decimal")],
    abort_criterion: Annotated[
        str,
        typer.Option("--abort-criterion", "-e", help="Stop when steps differ by at most this"),
    ] = str(DEFAULT_SQUARE_ROOT_CONTEXT.abort_criterion),
    max_iterations: Annotated[
        int,
        typer.Option("--max-iterations", "-i", help="Iteration budget"),
    ] = DEFAULT_SQUARE_ROOT_CONTEXT.max_iterations,
    scale: Annotated[
        int,
        typer.Option("--scale", "-s", help="Scale the radicand is rounded to"),
    ] = DEFAULT_SQUARE_ROOT_CONTEXT.initial_scale,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Decimal format of every Heron step"),
    ] = DecimalFormat.DECIMAL128.value,
) -> None:
    """Compute a square root with Heron's method."""
    try:
        context = SquareRootContext.from_format(
            fmt,
            abort_criterion=Decimal(abort_criterion),
            max_iterations=max_iterations,
            initial_scale=scale,
        )
        result = heron_sqrt(_parse_number(value), context)
    except (AlgebraError, ValueError, decimal.InvalidOperation) as e:
        _fail(e)
    console.print(str(result))


@app.command()  # type: ignore[misc]
def inspect(
    matrix: Annotated[
        str,
        typer.Argument(help="Rows separated by ';', cells by ',', complex cells as re:im"),
    ],
    domain: Annotated[
        str,
        typer.Option("--domain", "-d", help="integer, decimal, integer-complex, decimal-complex"),
    ] = INTEGER.name,
    fmt: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Round every step to this decimal format"),
    ] = None,
) -> None:
    """Show structure, determinant and norms of a matrix."""
    try:
        resolved = get_domain(domain)
        parsed = parse_matrix(matrix, resolved)
        summary = summarize(parsed, context=_context(fmt))
    except (AlgebraError, ValueError) as e:
        _fail(e)
    _print_summary(parsed, summary)


@app.command()  # type: ignore[misc]
def random(
    size: Annotated[int, typer.Option("--size", "-n", help="Matrix dimension")] = 3,
    domain: Annotated[
        str,
        typer.Option("--domain", "-d", help="integer, decimal or integer-complex"),
    ] = INTEGER.name,
    seed: Annotated[int, typer.Option("--seed", help="Random seed")] = DEFAULT_SEED,
) -> None:
    """Summarize a reproducible random square matrix."""
    factories = {
        INTEGER: create_random_integer_matrix,
        DECIMAL: create_random_decimal_matrix,
        INTEGER_COMPLEX: create_random_integer_complex_matrix,
    }
    try:
        resolved = get_domain(domain)
        if resolved not in factories:
            msg = f"Unsupported domain for random matrices: '{domain}'"
            raise ValueError(msg)
        generated = factories[resolved](size, size, seed=seed)
        summary = summarize(generated)
    except (AlgebraError, ValueError) as e:
        _fail(e)
    _print_summary(generated, summary)


def parse_matrix(text: str, domain: Domain[Any]) -> Matrix[Any]:
    """Parse ``"1,2;3,4"`` into a matrix; complex cells are ``re:im``.

    Example:
        >>> parse_matrix("1,2;3,4", INTEGER).determinant()
        -2
    """
    rows = []
    for row in text.split(";"):
        cells = []
        for cell in row.split(","):
            real, separator, imaginary = cell.strip().partition(":")
            cells.append((real, imaginary) if separator else real)
        rows.append(cells)
    return Matrix.of(rows, domain)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _parse_number(text: str) -> int | Decimal:
    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return Decimal(stripped)
    except decimal.InvalidOperation as e:
        msg = f"expected a number but actual {text!r}"
        raise ValueError(msg) from e


def _context(fmt: str | None) -> decimal.Context | None:
    if fmt is None:
        return None
    spec = get_spec(fmt)
    return None if spec.exact else spec.to_context()


def _print_summary(matrix: Matrix[Any], summary: MatrixSummary) -> None:
    grid = Table(title=f"{matrix.row_size} x {matrix.column_size} {summary.domain} matrix")
    for j in matrix.column_indexes:
        grid.add_column(str(j), justify="right")
    for i in matrix.row_indexes:
        grid.add_row(*[str(e) for e in matrix.row(i).values()])
    console.print(grid)

    table = Table(title="Summary")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    for key, value in summary.to_dict().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error:[/] {error}")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
