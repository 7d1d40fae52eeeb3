"""Letter strategy sampling single characters."""

import torch

from keysmith.core.config import GenerationConfig
from keysmith.core.types import LOWERCASE_LETTERS, UPPERCASE_LETTERS
from keysmith.generators.base import LetterStrategy, choose


class CharacterStrategy(LetterStrategy):
    """Appends one uniformly random ASCII letter of the requested case."""

    def pick(
        self,
        candidate: str,
        lowercase: bool,
        rng: torch.Generator,
        config: GenerationConfig,
    ) -> str:
        return choose(LOWERCASE_LETTERS if lowercase else UPPERCASE_LETTERS, rng)

    def __repr__(self) -> str:
        return "CharacterStrategy()"
