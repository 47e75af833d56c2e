# trainer.py
"""
Trainer - turns a command history into transition counts and embedding updates.

Each call re-scans the whole history it is given. Pairs seen in earlier calls
are counted and pulled together again, so rankings drift towards commands that
have been in the history longest. Callers wanting incremental behaviour
pass only the new commands.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .tokenizer import split_command
from .transition_table import TransitionTable
from .vocabulary import VocabularyStore, normalize
from ..utils.logger_utils import Log

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.1


class Trainer:
    """Populates a VocabularyStore and a TransitionTable from adjacent word pairs."""

    def __init__(self,
                 vocabulary: VocabularyStore,
                 transitions: TransitionTable,
                 learning_rate: float = DEFAULT_LEARNING_RATE) -> None:
        self.vocabulary = vocabulary
        self.transitions = transitions
        self.learning_rate = float(learning_rate)

    def train(self, history: Sequence[str]) -> None:
        pairs = 0
        with Log.time_block("Trainer.train"):
            for command in history:
                words = split_command(command)
                for current, nxt in zip(words, words[1:]):
                    self.vocabulary.ensure_word(current)
                    self.vocabulary.ensure_word(nxt)
                    self.transitions.record_transition(current, nxt)
                    self.pull(current, nxt)
                    pairs += 1
        logger.debug(
            "trained on %d commands (%d pairs); vocab=%d predecessors=%d",
            len(history), pairs, len(self.vocabulary), len(self.transitions),
        )

    def pull(self, word1: str, word2: str) -> None:
        """
        Co-occurrence pull: move both embeddings towards each other by
        learning_rate of their difference, then re-normalise both.
        """
        v1 = self.vocabulary.ensure_word(word1)
        v2 = self.vocabulary.ensure_word(word2)
        delta = (v2 - v1) * self.learning_rate
        v1 += delta
        v2 -= delta
        normalize(v1)
        if v2 is not v1:
            normalize(v2)
