"""
Keysmith: constraint-driven password generation.

Builds passwords by rejection sampling over character-class constraints,
with the letter portion drawn either as single random letters or as whole
words sampled from a dictionary.
"""

__version__ = "0.1.0"

# Core exports
from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import Constraint, effective_required
from keysmith.core.types import (
    ConfigurationError,
    KeysmithError,
    SamplingExhaustion,
    StrategyExhaustion,
    WordSourceError,
)
from keysmith.generators.base import GenerationResult, PasswordGenerator
from keysmith.generators.chars import CharacterStrategy
from keysmith.generators.dictionary import DictionaryStrategy

__all__ = [
    "Constraint",
    "GenerationConfig",
    "effective_required",
    "PasswordGenerator",
    "GenerationResult",
    "CharacterStrategy",
    "DictionaryStrategy",
    "KeysmithError",
    "ConfigurationError",
    "StrategyExhaustion",
    "SamplingExhaustion",
    "WordSourceError",
]
