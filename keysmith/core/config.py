"""Generation configuration with validation."""

from dataclasses import dataclass, field

from keysmith.core.constraints import Constraint, effective_required
from keysmith.core.types import (
    DEFAULT_SYMBOLS,
    ConfigurationError,
    validate_alphabet,
    validate_length_bounds,
    validate_positive,
)


@dataclass(frozen=True)
class GenerationConfig:
    """
    Immutable parameters of one password generation run.

    Attributes:
        min: Minimum password length; candidates grow until they reach it
        max: Maximum accepted password length
        symbols: Characters used for the ``SYMBOL`` constraint
        tries: Attempt budget for rejection sampling
        required: Constraints to satisfy; empty means all of them
        excluded: Constraints removed from the required set
        seed: Optional seed for reproducible generation
    """

    min: int = 10
    max: int = 20
    symbols: str = DEFAULT_SYMBOLS
    tries: int = 1000
    required: tuple[Constraint, ...] = ()
    excluded: frozenset[Constraint] = field(default_factory=frozenset)
    seed: int | None = None

    def __post_init__(self) -> None:
        """Normalize collections and validate configuration parameters."""
        object.__setattr__(
            self, "required", tuple(Constraint.parse(c) for c in self.required)
        )
        object.__setattr__(
            self, "excluded", frozenset(Constraint.parse(c) for c in self.excluded)
        )

        validate_length_bounds(self.min, self.max)
        validate_positive("tries", self.tries)

        required = self.effective_required
        if self.min <= len(required):
            raise ConfigurationError(
                f"min must exceed the number of required constraints "
                f"({len(required)}), got {self.min}"
            )

        if Constraint.SYMBOL in required:
            validate_alphabet("symbols", self.symbols)

        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {self.seed}")

    @property
    def effective_required(self) -> tuple[Constraint, ...]:
        """Required constraints after applying exclusions."""
        return effective_required(self.required, self.excluded)
