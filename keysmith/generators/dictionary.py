"""Letter strategy sampling whole dictionary words."""

from collections.abc import Iterable, Sequence

import torch

from keysmith.core.config import GenerationConfig
from keysmith.core.types import ConfigurationError, StrategyExhaustion
from keysmith.generators.base import LetterStrategy, choose


def filter_words(words: Iterable[str], max_length: int) -> list[str]:
    """
    Prepare a raw word list for dictionary sampling.

    Drops empty entries, entries containing an apostrophe and entries longer
    than ``max_length``. Order is kept and repeated words are collapsed to
    their first occurrence.

    Args:
        words: Raw words, e.g. from a spell-checker dump
        max_length: Maximum password length

    Returns:
        Filtered list of distinct words
    """
    seen: set[str] = set()
    result = []
    for word in words:
        if not word or "'" in word or len(word) > max_length or word in seen:
            continue
        seen.add(word)
        result.append(word)
    return result


def check_word_list(words: Sequence[str], min_length: int, max_length: int) -> None:
    """
    Reject word lists that can never produce an acceptable password.

    Raises:
        ConfigurationError: if the list is empty or holds no word with length
            in ``[min_length, max_length]``
    """
    if not words:
        raise ConfigurationError("Word list is empty")

    if not any(min_length <= len(w) <= max_length for w in words):
        raise ConfigurationError(
            f"Word list has no word with length between {min_length} "
            f"and {max_length}"
        )


class DictionaryStrategy(LetterStrategy):
    """
    Appends a random dictionary word whose first letter has the requested case.

    Words are drawn with replacement until one fits in the remaining length
    budget. Only the leading character is case-folded; the rest of the word
    is appended verbatim.
    """

    def __init__(self, words: Sequence[str], resample_factor: int = 10):
        """
        Args:
            words: Pre-filtered candidate words
            resample_factor: Draws allowed per pick, as a multiple of the
                word list size
        """
        if not words:
            raise ConfigurationError("Dictionary strategy needs at least one word")
        if resample_factor < 1:
            raise ConfigurationError(
                f"resample_factor must be positive, got {resample_factor}"
            )

        self.words = list(words)
        self.resample_factor = resample_factor

    @property
    def resample_limit(self) -> int:
        """Maximum number of draws for a single pick."""
        return self.resample_factor * len(self.words)

    def pick(
        self,
        candidate: str,
        lowercase: bool,
        rng: torch.Generator,
        config: GenerationConfig,
    ) -> str:
        budget = config.max - len(candidate)

        for _ in range(self.resample_limit):
            word = choose(self.words, rng)
            if len(word) <= budget:
                first = word[0].lower() if lowercase else word[0].upper()
                return first + word[1:]

        raise StrategyExhaustion(
            f"No word of length <= {budget} found in {self.resample_limit} draws"
        )

    def __repr__(self) -> str:
        return (
            f"DictionaryStrategy(words={len(self.words)}, "
            f"resample_factor={self.resample_factor})"
        )
