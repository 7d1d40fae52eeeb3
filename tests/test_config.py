"""Tests for generation configuration validation."""

import dataclasses

import pytest

from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import ALL_CONSTRAINTS, Constraint
from keysmith.core.types import (
    DEFAULT_SYMBOLS,
    ConfigurationError,
    KeysmithError,
    SamplingExhaustion,
)


class TestGenerationConfig:
    """Test GenerationConfig defaults and validation."""

    def test_defaults(self):
        """Defaults match the command-line defaults."""
        config = GenerationConfig()

        assert config.min == 10
        assert config.max == 20
        assert config.tries == 1000
        assert config.symbols == DEFAULT_SYMBOLS
        assert config.effective_required == ALL_CONSTRAINTS
        assert config.seed is None

    def test_is_immutable(self):
        """Configs cannot be modified after creation."""
        config = GenerationConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.min = 5

    def test_constraint_names_are_parsed(self):
        """Required and excluded entries may be given by name."""
        config = GenerationConfig(required=("number", "Symbol"), excluded={"symbol"})

        assert config.required == (Constraint.NUMBER, Constraint.SYMBOL)
        assert config.excluded == frozenset({Constraint.SYMBOL})
        assert config.effective_required == (Constraint.NUMBER,)

    def test_min_greater_than_max(self):
        with pytest.raises(ConfigurationError, match="min must not exceed max"):
            GenerationConfig(min=12, max=8)

    def test_min_equal_to_max_is_allowed(self):
        config = GenerationConfig(min=8, max=8)
        assert config.min == config.max == 8

    def test_min_must_exceed_required_count(self):
        """Four default constraints need min of at least five."""
        with pytest.raises(ConfigurationError, match="must exceed the number"):
            GenerationConfig(min=4, max=10)

        assert GenerationConfig(min=5, max=10).min == 5

    def test_min_checked_against_effective_set(self):
        """Exclusions lower the minimum length requirement."""
        config = GenerationConfig(min=4, max=10, excluded={Constraint.NUMBER})
        assert len(config.effective_required) == 3

        with pytest.raises(ConfigurationError):
            GenerationConfig(min=4, max=10)
        with pytest.raises(ConfigurationError):
            GenerationConfig(min=3, max=10, excluded={Constraint.NUMBER})

    def test_empty_effective_set(self):
        with pytest.raises(ConfigurationError, match="No constraints left"):
            GenerationConfig(excluded=frozenset(ALL_CONSTRAINTS))

    def test_empty_symbols_with_symbol_required(self):
        with pytest.raises(ConfigurationError, match="symbols alphabet"):
            GenerationConfig(symbols="")

    def test_empty_symbols_when_symbol_excluded(self):
        """An empty symbol alphabet is fine if symbols are not required."""
        config = GenerationConfig(symbols="", excluded={Constraint.SYMBOL})
        assert Constraint.SYMBOL not in config.effective_required

    @pytest.mark.parametrize("field, value", [("tries", 0), ("min", 0), ("max", -1)])
    def test_non_positive_values(self, field, value):
        with pytest.raises(ConfigurationError, match="must be positive"):
            GenerationConfig(**{field: value})

    def test_negative_seed(self):
        with pytest.raises(ConfigurationError, match="seed must be non-negative"):
            GenerationConfig(seed=-1)


class TestErrors:
    """Test the error hierarchy."""

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(ConfigurationError, KeysmithError)

    def test_sampling_exhaustion_carries_attempts(self):
        error = SamplingExhaustion(7)

        assert error.attempts == 7
        assert "7 tries" in str(error)


if __name__ == "__main__":
    pytest.main([__file__])
