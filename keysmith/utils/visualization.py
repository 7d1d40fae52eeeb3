"""Console rendering of generation statistics."""

from typing import Any

from rich.console import Console
from rich.table import Table


def build_summary_table(stats: dict[str, Any]) -> Table:
    """Build a rich table from ``generation_statistics`` output."""
    table = Table(title="Generation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    if not stats.get("count"):
        table.add_row("Passwords", "0")
        return table

    table.add_row("Passwords", str(stats["count"]))
    table.add_row(
        "Length",
        f"{stats['mean_length']:.1f} ± {stats['std_length']:.1f} "
        f"({stats['min_length']}-{stats['max_length']})",
    )
    table.add_row("Within Bounds", f"{stats['within_bounds_rate']:.1%}")
    table.add_row(
        "Attempts",
        f"mean {stats['mean_attempts']:.1f}, max {stats['max_attempts']} "
        f"of {stats['attempt_budget']}",
    )
    table.add_row("Constraints Satisfied", f"{stats['satisfaction_rate']:.1%}")

    for name, share in stats["class_distribution"].items():
        table.add_row(f"  {name}", f"{share:.1%}")

    return table


def print_generation_summary(
    stats: dict[str, Any], console: Console | None = None
) -> None:
    """Print a generation summary table, to stderr unless a console is given."""
    console = console or Console(stderr=True)
    console.print(build_summary_table(stats))
