"""Utility functions for evaluating generated passwords."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import torch

from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import ALL_CONSTRAINTS, Constraint

if TYPE_CHECKING:
    from keysmith.generators.base import GenerationResult


def satisfaction_matrix(
    passwords: Sequence[str], constraints: Sequence[Constraint], symbols: str
) -> torch.Tensor:
    """
    Evaluate every constraint against every password.

    Args:
        passwords: Passwords to evaluate
        constraints: Constraints to check
        symbols: Symbol alphabet for the ``SYMBOL`` constraint

    Returns:
        Tensor of shape ``[len(constraints), len(passwords)]`` with 1.0 where
        a constraint holds
    """
    if not constraints:
        return torch.empty((0, len(passwords)))

    return torch.stack([c.satisfaction(passwords, symbols) for c in constraints])


def satisfaction_rate(
    passwords: Sequence[str], constraints: Sequence[Constraint], symbols: str
) -> float:
    """Fraction of passwords satisfying all ``constraints`` at once."""
    if not passwords:
        return 0.0
    if not constraints:
        return 1.0

    matrix = satisfaction_matrix(passwords, constraints, symbols)
    return matrix.min(dim=0)[0].mean().item()


def class_distribution(passwords: Sequence[str], symbols: str) -> dict[str, float]:
    """
    Share of characters falling into each constraint class.

    Characters matching no class (such as ``z`` or non-ASCII letters from a
    dictionary) are counted under ``"other"``.
    """
    counts = {str(c): 0 for c in ALL_CONSTRAINTS}
    counts["other"] = 0

    for password in passwords:
        for char in password:
            for constraint in ALL_CONSTRAINTS:
                if char in constraint.alphabet(symbols):
                    counts[str(constraint)] += 1
                    break
            else:
                counts["other"] += 1

    total = sum(counts.values())
    if total == 0:
        return {name: 0.0 for name in counts}
    return {name: count / total for name, count in counts.items()}


def generation_statistics(
    results: Sequence[GenerationResult], config: GenerationConfig
) -> dict[str, Any]:
    """
    Summarize a batch of generation results.

    Args:
        results: Accepted passwords with their attempt counts
        config: Configuration the results were produced with

    Returns:
        Dictionary with length and attempt statistics, the rate of passwords
        within the configured bounds, constraint satisfaction and the
        character-class distribution
    """
    if not results:
        return {"count": 0}

    passwords = [r.password for r in results]
    lengths = np.array([len(p) for p in passwords])
    attempts = np.array([r.attempts for r in results])
    required = config.effective_required

    return {
        "count": len(results),
        "mean_length": float(np.mean(lengths)),
        "std_length": float(np.std(lengths)),
        "min_length": int(np.min(lengths)),
        "max_length": int(np.max(lengths)),
        "within_bounds_rate": float(
            np.mean((lengths >= config.min) & (lengths <= config.max))
        ),
        "mean_attempts": float(np.mean(attempts)),
        "max_attempts": int(np.max(attempts)),
        "attempt_budget": config.tries,
        "satisfaction_rate": satisfaction_rate(passwords, required, config.symbols),
        "class_distribution": class_distribution(passwords, config.symbols),
    }
