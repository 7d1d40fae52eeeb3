"""Word sources for dictionary-backed generation."""

from keysmith.sources.aspell import aspell_words, split_words

__all__ = ["aspell_words", "split_words"]
