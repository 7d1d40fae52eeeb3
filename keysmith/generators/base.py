"""Rejection-sampling password generator and letter-picking interface."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

import torch

from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import Constraint, verify_all
from keysmith.core.types import (
    NUMBERS,
    ConfigurationError,
    SamplingExhaustion,
    StrategyExhaustion,
    validate_alphabet,
    validate_positive,
)
from keysmith.utils.diagnostics import Diagnostics, LoggingDiagnostics

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_rng(seed: int | None = None) -> torch.Generator:
    """Create a CPU random source, seeded deterministically if ``seed`` is given."""
    rng = torch.Generator()
    if seed is None:
        rng.seed()
    else:
        rng.manual_seed(seed)
    return rng


def choose(options: Sequence[T], rng: torch.Generator) -> T:
    """Pick one element of ``options`` uniformly at random."""
    if len(options) == 0:
        raise ValueError("Cannot choose from an empty sequence")
    index = int(torch.randint(len(options), (1,), generator=rng).item())
    return options[index]


@dataclass(frozen=True)
class GenerationResult:
    """An accepted password and the number of attempts it took."""

    password: str
    attempts: int

    def __str__(self) -> str:
        return self.password


class LetterStrategy(ABC):
    """
    Policy supplying the letter portion of a password.

    Called whenever the generator draws a letter constraint. Implementations
    return the text to append and raise ``StrategyExhaustion`` when nothing
    fits, which abandons the current attempt.
    """

    @abstractmethod
    def pick(
        self,
        candidate: str,
        lowercase: bool,
        rng: torch.Generator,
        config: GenerationConfig,
    ) -> str:
        """
        Produce the next addition to ``candidate``.

        Args:
            candidate: Password built so far in this attempt
            lowercase: Whether the addition must start with a lowercase letter
            rng: Random source owned by the current generation run
            config: Active generation configuration

        Returns:
            Non-empty text to append
        """
        pass


class PasswordGenerator:
    """
    Generates passwords by bounded rejection sampling.

    Each attempt grows a fresh candidate until it reaches ``config.min``,
    drawing one required constraint per step, then accepts it only if it
    fits within ``config.max`` and satisfies every required constraint.
    The generator holds no state between calls.
    """

    def __init__(
        self,
        strategy: LetterStrategy,
        diagnostics: Diagnostics | None = None,
    ):
        self.strategy = strategy
        self.diagnostics = (
            diagnostics if diagnostics is not None else LoggingDiagnostics()
        )

    def generate(
        self,
        config: GenerationConfig,
        required: Sequence[Constraint] | None = None,
        rng: torch.Generator | None = None,
    ) -> GenerationResult:
        """
        Generate one password.

        Args:
            config: Generation configuration
            required: Constraints to sample and verify; defaults to the
                config's effective required set
            rng: Random source to use; a fresh one seeded from
                ``config.seed`` is created when omitted

        Returns:
            The accepted password with its 1-based attempt count

        Raises:
            ConfigurationError: if ``required`` cannot be satisfied by design
            SamplingExhaustion: if no candidate is accepted in ``config.tries``
        """
        required = self._check_required(config, required)
        rng = rng if rng is not None else make_rng(config.seed)
        logger.debug(
            "Sampling up to %d candidates with %r for %s",
            config.tries,
            self.strategy,
            [str(c) for c in required],
        )

        for attempt in range(1, config.tries + 1):
            try:
                candidate = self._build_candidate(config, required, rng)
            except StrategyExhaustion as e:
                self.diagnostics.aborted(attempt, e.candidate, str(e))
                continue

            if self._accept(config, required, candidate, attempt):
                self.diagnostics.accepted(attempt, candidate)
                return GenerationResult(candidate, attempt)

        raise SamplingExhaustion(config.tries)

    def generate_many(
        self,
        config: GenerationConfig,
        count: int,
        required: Sequence[Constraint] | None = None,
        rng: torch.Generator | None = None,
    ) -> list[GenerationResult]:
        """Generate ``count`` independent passwords from one random source."""
        validate_positive("count", count)
        rng = rng if rng is not None else make_rng(config.seed)
        return [self.generate(config, required, rng) for _ in range(count)]

    def _check_required(
        self, config: GenerationConfig, required: Sequence[Constraint] | None
    ) -> tuple[Constraint, ...]:
        if required is None:
            return config.effective_required

        required = tuple(Constraint.parse(c) for c in required)
        if not required:
            raise ConfigurationError("At least one constraint must be required")

        if config.min <= len(required):
            raise ConfigurationError(
                f"min must exceed the number of required constraints "
                f"({len(required)}), got {config.min}"
            )

        if Constraint.SYMBOL in required:
            validate_alphabet("symbols", config.symbols)

        return required

    def _build_candidate(
        self,
        config: GenerationConfig,
        required: tuple[Constraint, ...],
        rng: torch.Generator,
    ) -> str:
        candidate = ""
        while len(candidate) < config.min:
            constraint = choose(required, rng)

            if constraint is Constraint.LOWERCASE_LETTER:
                candidate += self._pick_letters(candidate, True, rng, config)
            elif constraint is Constraint.UPPERCASE_LETTER:
                candidate += self._pick_letters(candidate, False, rng, config)
            elif constraint is Constraint.NUMBER:
                candidate += choose(NUMBERS, rng)
            else:
                candidate += choose(config.symbols, rng)

        return candidate

    def _pick_letters(
        self,
        candidate: str,
        lowercase: bool,
        rng: torch.Generator,
        config: GenerationConfig,
    ) -> str:
        try:
            addition = self.strategy.pick(candidate, lowercase, rng, config)
        except StrategyExhaustion as e:
            e.candidate = candidate
            raise

        if not addition:
            raise StrategyExhaustion("strategy produced no text", candidate)
        return addition

    def _accept(
        self,
        config: GenerationConfig,
        required: tuple[Constraint, ...],
        candidate: str,
        attempt: int,
    ) -> bool:
        checks = verify_all(required, candidate, config.symbols)
        if len(candidate) <= config.max and all(ok for _, ok in checks):
            return True

        self.diagnostics.rejected(attempt, candidate, config.max, checks)
        return False
