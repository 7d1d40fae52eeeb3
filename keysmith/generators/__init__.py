"""Generator and letter-picking strategy implementations."""

from keysmith.generators.base import GenerationResult, LetterStrategy, PasswordGenerator
from keysmith.generators.chars import CharacterStrategy
from keysmith.generators.dictionary import DictionaryStrategy

__all__ = [
    "PasswordGenerator",
    "GenerationResult",
    "LetterStrategy",
    "CharacterStrategy",
    "DictionaryStrategy",
]
