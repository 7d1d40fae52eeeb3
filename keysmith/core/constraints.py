"""Character-class constraints and the effective required set."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

import torch

from keysmith.core.types import (
    LOWERCASE_LETTERS,
    NUMBERS,
    UPPERCASE_LETTERS,
    ConfigurationError,
)


class Constraint(enum.Enum):
    """
    A character class a password must contain at least once.

    Each constraint doubles as a generation directive (which class to sample
    next) and a verification predicate over a finished candidate.
    """

    LOWERCASE_LETTER = "lower-case-letter"
    UPPERCASE_LETTER = "upper-case-letter"
    NUMBER = "number"
    SYMBOL = "symbol"

    @classmethod
    def parse(cls, name: str | Constraint) -> Constraint:
        """
        Parse a constraint from its name, ignoring case and separators.

        Args:
            name: Constraint name such as ``"number"``, ``"Lower-Case-Letter"``
                or ``"UPPERCASE_LETTER"``

        Returns:
            The matching constraint
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower().replace("-", "").replace("_", "")
        try:
            return _ALIASES[key]
        except KeyError:
            choices = ", ".join(c.value for c in cls)
            raise ConfigurationError(
                f"Unknown constraint {name!r}, expected one of: {choices}"
            ) from None

    def alphabet(self, symbols: str) -> str:
        """Characters this constraint samples from and accepts."""
        if self is Constraint.LOWERCASE_LETTER:
            return LOWERCASE_LETTERS
        if self is Constraint.UPPERCASE_LETTER:
            return UPPERCASE_LETTERS
        if self is Constraint.NUMBER:
            return NUMBERS
        return symbols

    def verify(self, candidate: str, symbols: str) -> bool:
        """True iff ``candidate`` holds at least one character of this class."""
        alphabet = self.alphabet(symbols)
        return any(c in alphabet for c in candidate)

    def satisfaction(self, candidates: Sequence[str], symbols: str) -> torch.Tensor:
        """
        Evaluate the constraint over a batch of candidates.

        Args:
            candidates: Passwords to check
            symbols: Symbol alphabet used for ``SYMBOL``

        Returns:
            Float tensor of shape ``[len(candidates)]`` holding 1.0 where the
            constraint holds and 0.0 elsewhere
        """
        return torch.tensor(
            [1.0 if self.verify(c, symbols) else 0.0 for c in candidates],
            dtype=torch.float32,
        )

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, Constraint] = {
    "lowercaseletter": Constraint.LOWERCASE_LETTER,
    "lowercase": Constraint.LOWERCASE_LETTER,
    "lower": Constraint.LOWERCASE_LETTER,
    "uppercaseletter": Constraint.UPPERCASE_LETTER,
    "uppercase": Constraint.UPPERCASE_LETTER,
    "upper": Constraint.UPPERCASE_LETTER,
    "number": Constraint.NUMBER,
    "digit": Constraint.NUMBER,
    "symbol": Constraint.SYMBOL,
}


ALL_CONSTRAINTS: tuple[Constraint, ...] = tuple(Constraint)


def effective_required(
    required: Iterable[Constraint], excluded: Iterable[Constraint] = ()
) -> tuple[Constraint, ...]:
    """
    Compute the constraints a password must satisfy.

    An empty ``required`` means every constraint. Exclusions are removed
    afterwards, so they override both the default and explicit requirements.
    Duplicates in ``required`` are kept and bias sampling towards them.

    Raises:
        ConfigurationError: if nothing is left after exclusion
    """
    base = tuple(required) or ALL_CONSTRAINTS
    removed = set(excluded)
    result = tuple(c for c in base if c not in removed)

    if not result:
        raise ConfigurationError(
            "No constraints left to satisfy after applying exclusions"
        )

    return result


def verify_all(
    constraints: Iterable[Constraint], candidate: str, symbols: str
) -> list[tuple[Constraint, bool]]:
    """Verification result of every constraint, in order."""
    return [(c, c.verify(candidate, symbols)) for c in constraints]
