#!/usr/bin/env python3
"""Demonstration of constraint-driven password generation."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keysmith import (
    CharacterStrategy,
    Constraint,
    DictionaryStrategy,
    GenerationConfig,
    PasswordGenerator,
)
from keysmith.generators.base import make_rng
from keysmith.generators.dictionary import check_word_list, filter_words
from keysmith.utils.diagnostics import RecordingDiagnostics
from keysmith.utils.metrics import generation_statistics
from keysmith.utils.visualization import build_summary_table

console = Console()

SAMPLE_WORDS = [
    "anchor",
    "breeze",
    "candle",
    "don't",
    "ember",
    "fjord",
    "glacier",
    "harbor",
    "isle",
    "juniper",
    "kestrel",
    "lantern",
    "meadow",
    "nectar",
    "orchid",
    "pebble",
]


def demonstrate_character_generation():
    """Show single-letter generation and its attempt statistics."""
    console.print("\n[bold cyan]Character Generation Demo[/bold cyan]\n")

    config = GenerationConfig(min=12, max=16, symbols="!@#$%", seed=2024)
    generator = PasswordGenerator(CharacterStrategy())

    console.print("[yellow]Setup:[/yellow]")
    console.print(f"  • Length: {config.min}-{config.max}")
    console.print(
        f"  • Required: {', '.join(str(c) for c in config.effective_required)}"
    )
    console.print(f"  • Symbols: {config.symbols}\n")

    results = generator.generate_many(config, 8)

    table = Table(title="Generated Passwords")
    table.add_column("Password", style="green")
    table.add_column("Length", style="white")
    table.add_column("Attempts", style="cyan")
    for result in results:
        table.add_row(result.password, str(len(result.password)), str(result.attempts))
    console.print(table)

    console.print(build_summary_table(generation_statistics(results, config)))


def demonstrate_dictionary_generation():
    """Show word-based generation and where attempts get rejected."""
    console.print("\n[bold cyan]Dictionary Generation Demo[/bold cyan]\n")

    config = GenerationConfig(min=6, max=10, excluded={Constraint.SYMBOL}, seed=7)
    words = filter_words(SAMPLE_WORDS, config.max)
    check_word_list(words, config.min, config.max)

    diagnostics = RecordingDiagnostics()
    generator = PasswordGenerator(DictionaryStrategy(words), diagnostics)
    rng = make_rng(config.seed)

    for _ in range(5):
        diagnostics.clear()
        result = generator.generate(config, rng=rng)
        console.print(
            f"  [green]{result.password}[/green] after {result.attempts} attempts "
            f"({diagnostics.count('rejected')} rejected, "
            f"{diagnostics.count('aborted')} aborted)"
        )

    console.print(
        Panel.fit(
            f"[bold]Dictionary Summary[/bold]\n\n"
            f"Usable Words: {len(words)} of {len(SAMPLE_WORDS)}\n"
            f"Draws per Pick: {generator.strategy.resample_limit}\n"
            f"Required: {', '.join(str(c) for c in config.effective_required)}",
            title="Summary",
            border_style="green",
        )
    )


if __name__ == "__main__":
    demonstrate_character_generation()
    demonstrate_dictionary_generation()
