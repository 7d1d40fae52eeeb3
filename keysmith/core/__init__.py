"""Core constraint logic and types."""

from keysmith.core.config import GenerationConfig
from keysmith.core.constraints import Constraint, effective_required

__all__ = ["Constraint", "GenerationConfig", "effective_required"]
