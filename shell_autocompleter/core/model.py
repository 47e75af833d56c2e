# model.py
"""
CommandModel - application facade over the suggestion core.

Owns one VocabularyStore and one TransitionTable and wires them into the
Trainer, the SuggestionEngine and the ModelSnapshot. Callers (the shell
session, tests) only need these four operations:
    train(history)
    get_suggestion(partial)
    save_model(path)
    load_model(path, replace=False)
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .protocols import RandomSource
from .suggestion_engine import SuggestionEngine
from .trainer import DEFAULT_LEARNING_RATE, Trainer
from .transition_table import TransitionTable
from .vocabulary import DEFAULT_VECTOR_SIZE, VocabularyStore
from ..utils.model_store import ModelSnapshot, PathLike

logger = logging.getLogger(__name__)


class CommandModel:
    def __init__(self,
                 vector_size: int = DEFAULT_VECTOR_SIZE,
                 learning_rate: float = DEFAULT_LEARNING_RATE,
                 rng: Optional[RandomSource] = None,
                 seed: Optional[int] = None) -> None:
        if rng is None:
            rng = np.random.default_rng(seed)
        self.vocabulary = VocabularyStore(vector_size, rng=rng)
        self.transitions = TransitionTable()
        self.trainer = Trainer(self.vocabulary, self.transitions, learning_rate)
        self.engine = SuggestionEngine(self.vocabulary, self.transitions)
        self.snapshot = ModelSnapshot(self.vocabulary, self.transitions)

    @classmethod
    def from_config(cls, config) -> "CommandModel":
        """Build from a Config (or any mapping with the same keys)."""
        return cls(
            vector_size=int(config.get("vector_size", DEFAULT_VECTOR_SIZE)),
            learning_rate=float(config.get("learning_rate", DEFAULT_LEARNING_RATE)),
            seed=config.get("seed"),
        )

    # Core operations ------------------------------------------------------
    def train(self, history: Sequence[str]) -> None:
        self.trainer.train(history)

    def get_suggestion(self, partial: str) -> str:
        return self.engine.get_suggestion(partial)

    def save_model(self, path: PathLike) -> None:
        self.snapshot.save(path)

    def load_model(self, path: PathLike, replace: bool = False) -> None:
        self.snapshot.load(path, replace=replace)

    # Introspection ---------------------------------------------------------
    def stats(self) -> dict:
        return {
            "words": len(self.vocabulary),
            "predecessors": len(self.transitions),
            "transitions": sum(
                count
                for prev in self.transitions.predecessors()
                for _, count in self.transitions.candidates_following(prev)
            ),
            "vector_size": self.vocabulary.dimension,
        }
