"""Core type definitions, character ranges and runtime validation."""

from collections.abc import Sequence


def char_range(start: str, stop: str) -> str:
    """Characters from ``start`` up to, but not including, ``stop``."""
    return "".join(chr(code) for code in range(ord(start), ord(stop)))


# Upper bounds are exclusive: 'z', 'Z' and '9' are never sampled and never
# count towards a constraint.
LOWERCASE_LETTERS = char_range("a", "z")
UPPERCASE_LETTERS = char_range("A", "Z")
NUMBERS = char_range("0", "9")
DEFAULT_SYMBOLS = "-_/[]{}()*&^%$#@.!?=+:;|~"


class KeysmithError(Exception):
    """Base class for all password generation errors."""

    pass


class ConfigurationError(KeysmithError, ValueError):
    """Raised when generation parameters violate an invariant."""

    pass


class StrategyExhaustion(KeysmithError):
    """Raised when a letter-picking strategy cannot extend a candidate."""

    def __init__(self, message: str, candidate: str = ""):
        super().__init__(message)
        self.candidate = candidate


class SamplingExhaustion(KeysmithError):
    """Raised when no candidate was accepted within the attempt budget."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not find a satisfactory string in {attempts} tries")
        self.attempts = attempts


class WordSourceError(KeysmithError):
    """Raised when the dictionary word source fails."""

    pass


def validate_positive(name: str, value: int) -> int:
    """Validate that an integer parameter is at least one."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {type(value)}")

    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")

    return value


def validate_length_bounds(min_length: int, max_length: int) -> None:
    """Validate that the minimum length does not exceed the maximum."""
    validate_positive("min", min_length)
    validate_positive("max", max_length)

    if min_length > max_length:
        raise ConfigurationError(
            f"min must not exceed max, got min={min_length} max={max_length}"
        )


def validate_alphabet(name: str, alphabet: Sequence[str]) -> Sequence[str]:
    """Validate that an alphabet to sample from is non-empty."""
    if len(alphabet) == 0:
        raise ConfigurationError(f"{name} alphabet must not be empty")

    return alphabet
