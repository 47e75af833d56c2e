"""
shell_autocompleter.core

The suggestion model:
 - per-word embeddings (VocabularyStore)
 - successor counts (TransitionTable)
 - history training with the co-occurrence pull update (Trainer)
 - two-stage ranking, frequency then similarity (SuggestionEngine)
"""

from .vocabulary import VocabularyStore, cosine_similarity, normalize
from .transition_table import TransitionTable
from .trainer import Trainer
from .ranking import FrequencyStrategy, SimilarityStrategy, parse_partial
from .suggestion_engine import SuggestionEngine

__all__ = [
    "VocabularyStore",
    "TransitionTable",
    "Trainer",
    "SuggestionEngine",
    "FrequencyStrategy",
    "SimilarityStrategy",
    "parse_partial",
    "cosine_similarity",
    "normalize",
]
