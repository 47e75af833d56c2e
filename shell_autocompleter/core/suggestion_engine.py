# suggestion_engine.py
# Read-only consumer of the vocabulary and transition table: partial command line in,
# completion suffix out.

from __future__ import annotations

from typing import List, Optional, Sequence
import logging

from .protocols import RankingStrategy
from .ranking import FrequencyStrategy, SimilarityStrategy, parse_partial
from .transition_table import TransitionTable
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """
    Runs the ranking stages in order and returns the first answer.
    The default chain is frequency first, embedding similarity second.
    """

    def __init__(self,
                 vocabulary: VocabularyStore,
                 transitions: TransitionTable,
                 strategies: Optional[Sequence[RankingStrategy]] = None) -> None:
        self.vocabulary = vocabulary
        self.transitions = transitions
        self.strategies: List[RankingStrategy] = list(strategies) if strategies is not None else [
            FrequencyStrategy(transitions),
            SimilarityStrategy(vocabulary, transitions),
        ]

    def get_suggestion(self, partial: str) -> str:
        """Text to append to `partial`; "" when there is nothing to suggest."""
        query = parse_partial(partial)
        for strategy in self.strategies:
            suffix = strategy.rank(query)
            if suffix is not None:
                logger.debug("%s stage answered %r for %r", strategy.name, suffix, partial)
                return suffix
        return ""
