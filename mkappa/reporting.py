"""Diagnostic reporters for kappa computations.

The engine never prints. It hands descriptives, results and failures to a
reporter, which decides where (if anywhere) they go.

Examples
--------
>>> from mkappa import compute_kappa
>>> from mkappa.reporting import ConsoleReporter
>>> result = compute_kappa([[1, 1], [1, 0]], reporter=ConsoleReporter())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Literal, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mkappa.errors import KappaError
from mkappa.preprocessing import PreparedRatings
from mkappa.results import KappaResult

type ReporterKind = Literal["logging", "console", "none"]


def format_values(values: Iterable[float]) -> str:
    """Format category values as a compact bracketed list.

    Examples
    --------
    >>> format_values([0.0, 1.0, 2.5])
    '[0 1 2.5]'
    """
    return "[" + " ".join(f"{value:g}" for value in values) + "]"


def describe(prepared: PreparedRatings) -> dict[str, str]:
    """Summarize prepared ratings as label/value pairs."""
    return {
        "Number of items": str(prepared.n_items),
        "Number of raters": str(prepared.n_raters),
        "Possible categories": format_values(prepared.categories),
        "Observed categories": format_values(prepared.observed),
        "Scale of measurement": str(prepared.scale),
    }


class Reporter(Protocol):
    """Receiver for the diagnostic output of a kappa computation."""

    def report_descriptives(self, prepared: PreparedRatings) -> None: ...

    def report_result(self, result: KappaResult) -> None: ...

    def report_error(self, error: KappaError) -> None: ...


class NullReporter:
    """Reporter that discards everything."""

    def report_descriptives(self, prepared: PreparedRatings) -> None:
        pass

    def report_result(self, result: KappaResult) -> None:
        pass

    def report_error(self, error: KappaError) -> None:
        pass


class LoggingReporter:
    """Reporter that writes through the standard logging module.

    Parameters
    ----------
    logger : logging.Logger | None
        Logger to write to. Defaults to the ``mkappa.engine`` logger.
    precision : int
        Decimal places for agreement values.
    """

    def __init__(
        self, logger: logging.Logger | None = None, precision: int = 3
    ) -> None:
        self.logger = logger or logging.getLogger("mkappa.engine")
        self.precision = precision

    def report_descriptives(self, prepared: PreparedRatings) -> None:
        for label, value in describe(prepared).items():
            self.logger.info(f"{label} = {value}")
        if prepared.n_dropped:
            self.logger.info(f"Items without ratings dropped = {prepared.n_dropped}")

    def report_result(self, result: KappaResult) -> None:
        p = self.precision
        self.logger.info(f"Percent observed agreement = {result.p_o:.{p}f}")
        self.logger.info(f"Percent chance agreement = {result.p_c:.{p}f}")
        self.logger.info(
            f"{result.coefficient_name} kappa coefficient = {result.kappa:.{p}f}"
        )

    def report_error(self, error: KappaError) -> None:
        self.logger.error(f"ERROR: {error}")


class ConsoleReporter:
    """Reporter that prints rich tables and messages to the terminal.

    Parameters
    ----------
    console : Console | None
        Rich console to print to. A new console on stdout by default.
    precision : int
        Decimal places for agreement values.
    """

    def __init__(self, console: Console | None = None, precision: int = 3) -> None:
        self.console = console or Console()
        self.precision = precision

    def _table(self, data: dict[str, str], title: str | None = None) -> Table:
        table = Table(show_header=False, title=title)
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right", style="green")
        for key, value in data.items():
            table.add_row(key, escape(value))
        return table

    def report_descriptives(self, prepared: PreparedRatings) -> None:
        data = describe(prepared)
        if prepared.n_dropped:
            data["Items without ratings dropped"] = str(prepared.n_dropped)
        self.console.print(self._table(data, title="Descriptives"))

    def report_result(self, result: KappaResult) -> None:
        p = self.precision
        self.console.print(
            self._table(
                {
                    "Percent observed agreement": f"{result.p_o:.{p}f}",
                    "Percent chance agreement": f"{result.p_c:.{p}f}",
                }
            )
        )
        self.console.print(
            f"[bold]{result.coefficient_name} kappa coefficient = "
            f"{result.kappa:.{p}f}[/bold]"
        )

    def report_error(self, error: KappaError) -> None:
        self.console.print(f"[red]✗[/red] ERROR: {escape(str(error))}")


def make_reporter(kind: ReporterKind = "logging", precision: int = 3) -> Reporter:
    """Build a reporter by name.

    Parameters
    ----------
    kind : {"logging", "console", "none"}
        Reporter type.
    precision : int
        Decimal places for agreement values.

    Returns
    -------
    Reporter
        The requested reporter.

    Raises
    ------
    ValueError
        If ``kind`` is not a known reporter type.
    """
    match kind:
        case "logging":
            return LoggingReporter(precision=precision)
        case "console":
            return ConsoleReporter(precision=precision)
        case "none":
            return NullReporter()
        case _:
            raise ValueError(
                f"Unknown reporter: {kind}. Must be one of: 'logging', 'console', 'none'"
            )
