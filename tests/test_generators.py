"""Tests for the rejection-sampling generator and character strategy."""

import pytest
import torch

from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import ALL_CONSTRAINTS, Constraint
from keysmith.core.types import (
    LOWERCASE_LETTERS,
    NUMBERS,
    UPPERCASE_LETTERS,
    ConfigurationError,
    SamplingExhaustion,
    StrategyExhaustion,
)
from keysmith.generators.base import (
    GenerationResult,
    LetterStrategy,
    PasswordGenerator,
    choose,
    make_rng,
)
from keysmith.generators.chars import CharacterStrategy
from keysmith.utils.diagnostics import LoggingDiagnostics, RecordingDiagnostics


class FixedStrategy(LetterStrategy):
    """Always appends the same text."""

    def __init__(self, text: str):
        self.text = text

    def pick(self, candidate, lowercase, rng, config):
        return self.text


class FailingStrategy(LetterStrategy):
    """Fails the first ``failures`` picks, then appends 'a' or 'A'."""

    def __init__(self, failures: int | None = None):
        self.failures = failures
        self.calls = 0

    def pick(self, candidate, lowercase, rng, config):
        self.calls += 1
        if self.failures is None or self.calls <= self.failures:
            raise StrategyExhaustion("nothing fits")
        return "a" if lowercase else "A"


class TestRandomHelpers:
    """Test random source helpers."""

    def test_seeded_rng_is_reproducible(self):
        values1 = [choose("abcdef", make_rng(7)) for _ in range(3)]
        values2 = [choose("abcdef", make_rng(7)) for _ in range(3)]
        assert values1 == values2

        rng_a, rng_b = make_rng(11), make_rng(11)
        assert [choose(range(100), rng_a) for _ in range(20)] == [
            choose(range(100), rng_b) for _ in range(20)
        ]

    def test_unseeded_rng(self):
        """Unseeded sources still produce valid choices."""
        rng = make_rng()
        assert isinstance(rng, torch.Generator)
        assert choose("xyz", rng) in "xyz"

    def test_choose_covers_all_options(self):
        rng = make_rng(0)
        seen = {choose("abc", rng) for _ in range(200)}
        assert seen == {"a", "b", "c"}

    def test_choose_from_empty(self):
        with pytest.raises(ValueError, match="empty sequence"):
            choose("", make_rng(0))


class TestCharacterStrategy:
    """Test single-letter picking."""

    def test_picks_requested_case(self):
        strategy = CharacterStrategy()
        rng = make_rng(3)
        config = GenerationConfig()

        for _ in range(100):
            assert strategy.pick("", True, rng, config) in LOWERCASE_LETTERS
            assert strategy.pick("", False, rng, config) in UPPERCASE_LETTERS

    def test_never_picks_z(self):
        """The exclusive upper bound keeps 'z' and 'Z' out of passwords."""
        strategy = CharacterStrategy()
        rng = make_rng(5)
        config = GenerationConfig()

        picks = {
            strategy.pick("", lower, rng, config)
            for lower in (True, False)
            for _ in range(500)
        }

        assert "z" not in picks
        assert "Z" not in picks
        assert len(picks) == 50


class TestPasswordGenerator:
    """Test the rejection-sampling loop."""

    def test_basic_generation(self):
        """Accepted passwords respect bounds and all default constraints."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(min=10, max=20, seed=42)

        result = generator.generate(config)

        assert isinstance(result, GenerationResult)
        assert 10 <= len(result.password) <= 20
        assert 1 <= result.attempts <= config.tries
        for constraint in ALL_CONSTRAINTS:
            assert constraint.verify(result.password, config.symbols)

    def test_many_outputs_satisfy_constraints(self):
        """Every output of a batch meets length and class requirements."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(min=6, max=9, symbols="#%", seed=1)

        results = generator.generate_many(config, 50)

        assert len(results) == 50
        for result in results:
            assert 6 <= len(result.password) <= 9
            for constraint in config.effective_required:
                assert constraint.verify(result.password, config.symbols)
            assert "z" not in result.password
            assert "Z" not in result.password
            assert "9" not in result.password

    def test_reproducible_generation(self):
        """Same seed gives the same password and attempt count."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(seed=123)

        assert generator.generate(config) == generator.generate(config)

    def test_explicit_rng_overrides_seed(self):
        """A caller-supplied source is used instead of the config seed."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(seed=1)

        result1 = generator.generate(config, rng=make_rng(99))
        result2 = generator.generate(config, rng=make_rng(99))

        assert result1 == result2

    def test_number_only_example(self):
        """min=max=8 with only NUMBER required gives eight digits at once."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(
            min=8, max=8, required=(Constraint.NUMBER,), symbols="!", seed=0
        )

        for result in generator.generate_many(config, 20):
            assert len(result.password) == 8
            assert all(c in NUMBERS for c in result.password)
            assert result.attempts == 1

    def test_required_argument_overrides_config(self):
        """An explicit required list replaces the config's effective set."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(min=5, max=5, seed=3)

        result = generator.generate(config, required=[Constraint.SYMBOL])

        assert all(c in config.symbols for c in result.password)

    def test_duplicates_bias_sampling(self):
        """Listing a constraint several times makes it more frequent."""
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(
            min=20,
            max=20,
            symbols="!",
            required=(Constraint.NUMBER,) * 3 + (Constraint.SYMBOL,),
            seed=8,
        )

        passwords = "".join(r.password for r in generator.generate_many(config, 50))
        digit_share = sum(c in NUMBERS for c in passwords) / len(passwords)

        assert 0.6 < digit_share < 0.9

    def test_empty_required_argument(self):
        generator = PasswordGenerator(CharacterStrategy())

        with pytest.raises(ConfigurationError, match="At least one constraint"):
            generator.generate(GenerationConfig(), required=[])

    def test_required_argument_checked_against_min(self):
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(min=5, max=10)

        with pytest.raises(ConfigurationError, match="must exceed the number"):
            generator.generate(config, required=[Constraint.NUMBER] * 5)

    def test_required_symbols_need_alphabet(self):
        generator = PasswordGenerator(CharacterStrategy())
        config = GenerationConfig(symbols="", excluded={Constraint.SYMBOL})

        with pytest.raises(ConfigurationError, match="symbols alphabet"):
            generator.generate(config, required=[Constraint.SYMBOL])

    def test_generate_many_rejects_bad_count(self):
        generator = PasswordGenerator(CharacterStrategy())

        with pytest.raises(ConfigurationError, match="count must be positive"):
            generator.generate_many(GenerationConfig(), 0)


class TestRejectionAndExhaustion:
    """Test rejection, attempt counting and budget exhaustion."""

    def test_strategy_failure_exhausts_single_try(self):
        """One aborted attempt with tries=1 fails with attempt count 1."""
        diagnostics = RecordingDiagnostics()
        generator = PasswordGenerator(FailingStrategy(), diagnostics)
        config = GenerationConfig(
            min=3,
            max=5,
            tries=1,
            required=(Constraint.LOWERCASE_LETTER, Constraint.UPPERCASE_LETTER),
        )

        with pytest.raises(SamplingExhaustion) as exc_info:
            generator.generate(config, rng=make_rng(0))

        assert exc_info.value.attempts == 1
        assert diagnostics.count("aborted") == 1
        assert diagnostics.events[0].reason == "nothing fits"
        assert diagnostics.events[0].candidate == ""

    def test_aborted_attempts_are_counted(self):
        """Attempts abandoned by the strategy still consume the budget."""
        diagnostics = RecordingDiagnostics()
        generator = PasswordGenerator(FailingStrategy(failures=2), diagnostics)
        config = GenerationConfig(
            min=2, max=5, required=(Constraint.LOWERCASE_LETTER,), seed=0
        )

        result = generator.generate(config)

        assert result == GenerationResult("aa", 3)
        assert diagnostics.count("aborted") == 2
        assert diagnostics.count("accepted") == 1

    def test_unsatisfied_constraint_rejects(self):
        """Candidates of only 'z' never satisfy LOWERCASE_LETTER."""
        diagnostics = RecordingDiagnostics()
        generator = PasswordGenerator(FixedStrategy("zz"), diagnostics)
        config = GenerationConfig(
            min=2, max=4, tries=5, required=(Constraint.LOWERCASE_LETTER,)
        )

        with pytest.raises(SamplingExhaustion) as exc_info:
            generator.generate(config, rng=make_rng(0))

        assert exc_info.value.attempts == 5
        assert diagnostics.count("rejected") == 5
        for event in diagnostics.events:
            assert event.candidate == "zz"
            assert event.checks == [(Constraint.LOWERCASE_LETTER, False)]

    def test_overlong_candidate_rejects(self):
        """Candidates overshooting max are rejected even if constraints hold."""
        diagnostics = RecordingDiagnostics()
        generator = PasswordGenerator(FixedStrategy("abcdef"), diagnostics)
        config = GenerationConfig(
            min=2, max=4, tries=3, required=(Constraint.LOWERCASE_LETTER,)
        )

        with pytest.raises(SamplingExhaustion):
            generator.generate(config, rng=make_rng(0))

        assert diagnostics.count("rejected") == 3
        assert diagnostics.events[0].to_dict()["length"] == 6
        assert diagnostics.events[0].checks == [(Constraint.LOWERCASE_LETTER, True)]

    def test_empty_addition_aborts_attempt(self):
        """A strategy returning nothing abandons the attempt."""
        diagnostics = RecordingDiagnostics()
        generator = PasswordGenerator(FixedStrategy(""), diagnostics)
        config = GenerationConfig(
            min=2, max=4, tries=2, required=(Constraint.UPPERCASE_LETTER,)
        )

        with pytest.raises(SamplingExhaustion):
            generator.generate(config, rng=make_rng(0))

        assert diagnostics.count("aborted") == 2

    def test_default_diagnostics_log_rejections(self, caplog):
        """Rejections are logged at DEBUG level by default."""
        generator = PasswordGenerator(FixedStrategy("zz"))
        assert isinstance(generator.diagnostics, LoggingDiagnostics)
        config = GenerationConfig(
            min=2, max=4, tries=1, required=(Constraint.LOWERCASE_LETTER,)
        )

        with caplog.at_level("DEBUG", logger="keysmith"):
            with pytest.raises(SamplingExhaustion):
                generator.generate(config, rng=make_rng(0))

        assert "Rejecting zz: 2 < 4" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__])
