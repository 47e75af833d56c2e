# shell_autocompleter/core/protocols.py
"""
Protocol interfaces for the pluggable seams of the suggestion model.

Components depend on these rather than on concrete classes so tests can
inject a seeded random source or a stub ranking stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """
    Source of uniform random numbers for embedding initialisation.
    numpy.random.Generator satisfies this out of the box.
    """

    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        """Return `size` samples drawn uniformly from [low, high)."""
        ...


@dataclass(frozen=True)
class SuggestionQuery:
    """
    Parsed partial command line.
      last_word    - the word being typed ("" right after a space)
      context_word - the word before it ("" if there is none)
    """
    text: str
    last_word: str
    context_word: str


@runtime_checkable
class RankingStrategy(Protocol):
    """
    One stage of the suggestion pipeline.

    rank() returns the suffix to append, or None to defer to the next stage.
    An empty string is a real answer ("nothing left to type") and stops the chain.
    """

    name: str

    def rank(self, query: SuggestionQuery) -> Optional[str]:
        ...
