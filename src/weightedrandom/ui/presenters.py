from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from ..core.models import export_value
from ..core.schemas import DistributionPayload

__all__ = ["RichPresenter"]


def _fmt(value: float | None, digits: int = 4) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


class RichPresenter:
    def __init__(self, *, no_color: bool = False, console: Console | None = None):
        if console is not None:
            self.console = console
        elif no_color:
            self.console = Console(force_terminal=False, color_system=None)
        else:
            self.console = Console()

    def show_draws(self, results: Sequence[Any], *, mode: str) -> None:
        table = Table(title=f"{len(results)} draw(s) ({mode})", box=box.SIMPLE_HEAVY)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Value", style="bold cyan")
        for idx, value in enumerate(results, start=1):
            table.add_row(str(idx), str(export_value(value)))
        self.console.print(table)

    def show_distribution(self, payload: DistributionPayload) -> None:
        table = Table(title="Distribution", box=box.SIMPLE_HEAVY)
        table.add_column("Value", style="bold cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Probability", justify="right", style="green")
        for row in payload.rows:
            table.add_row(str(row.value), _fmt(row.weight, 3), f"{row.probability:.2%}")
        self.console.print(table)

        stats = Table.grid(padding=(0, 1))
        stats.add_column(style="bold", justify="right")
        stats.add_column(justify="left")
        stats.add_row("Total weight", _fmt(payload.total_weight, 3))
        stats.add_row("Entropy (bits)", _fmt(payload.entropy))
        stats.add_row("Expected value", _fmt(payload.expected_value))
        stats.add_row("Variance", _fmt(payload.variance))
        stats.add_row("Std deviation", _fmt(payload.standard_deviation))
        self.console.print(stats)

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/] {message}")
