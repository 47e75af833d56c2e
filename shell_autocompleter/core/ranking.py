# shell_autocompleter/core/ranking.py
"""
Ranking stages for the suggestion engine.

Two stages run in order, each one either answers or defers (returns None):
 - FrequencyStrategy: successors of the context word seen in training, most frequent first.
 - SimilarityStrategy: vocabulary words completing the typed prefix, picked by
   cosine similarity to the context word's embedding.

Tie-breaking is always "first seen wins": sorts are stable over insertion order
and similarity only replaces the current best on a strictly greater score.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
import logging

from .protocols import SuggestionQuery
from .tokenizer import split_command
from .transition_table import TransitionTable
from .vocabulary import VocabularyStore, cosine_similarity

logger = logging.getLogger(__name__)


def parse_partial(text: str) -> SuggestionQuery:
    """
    Work out which word is being typed and which word precedes it.
      "cd b"  -> last_word="b",  context_word="cd"
      "cd "   -> last_word="",   context_word="cd"
      "ls"    -> last_word="ls", context_word=""
    """
    if text.endswith(" "):
        return SuggestionQuery(text, "", split_command(text.strip())[-1])

    last_word = split_command(text)[-1]
    before = text[: len(text) - len(last_word)]
    return SuggestionQuery(text, last_word, split_command(before.strip())[-1])


class FrequencyStrategy:
    """Most frequent observed successor of the context word that starts with the typed prefix."""

    name = "frequency"

    def __init__(self, transitions: TransitionTable) -> None:
        self.transitions = transitions

    def matches(self, query: SuggestionQuery) -> List[Tuple[str, int]]:
        """Prefix-matching successors, highest count first (stable on ties)."""
        if not query.context_word or query.context_word not in self.transitions:
            return []
        found = [
            (word, count)
            for word, count in self.transitions.candidates_following(query.context_word)
            if word.startswith(query.last_word)
        ]
        found.sort(key=lambda kv: kv[1], reverse=True)
        return found

    def rank(self, query: SuggestionQuery) -> Optional[str]:
        found = self.matches(query)
        if not found:
            return None
        best = found[0][0]
        return best[len(query.last_word):]


class SimilarityStrategy:
    """
    Fallback stage. Always answers (possibly with "").
     - nothing typed yet: the context word's most common successor, in full
     - otherwise: the vocabulary word that extends the prefix and whose embedding
       is closest to the context word's; first candidate when there is no context
    """

    name = "similarity"

    def __init__(self, vocabulary: VocabularyStore, transitions: TransitionTable) -> None:
        self.vocabulary = vocabulary
        self.transitions = transitions

    def candidates(self, prefix: str) -> List[str]:
        """Known words having `prefix` as a proper prefix, in vocabulary order."""
        return [w for w in self.vocabulary.keys() if w.startswith(prefix) and w != prefix]

    def rank(self, query: SuggestionQuery) -> Optional[str]:
        last, context = query.last_word, query.context_word

        if last == "":
            if context and context in self.transitions:
                return self.transitions.most_common(context) or ""
            return ""

        words = self.candidates(last)
        if not words:
            return ""
        if len(words) == 1:
            return words[0][len(last):]

        context_vec = self.vocabulary.get(context) if context else None
        if context_vec is None:
            return words[0][len(last):]

        best_word, best_sim = words[0], None
        for word in words:
            sim = cosine_similarity(context_vec, self.vocabulary.get(word))
            if best_sim is None or sim > best_sim:
                best_word, best_sim = word, sim
        logger.debug("similarity pick %r (%.4f) for context %r", best_word, best_sim, context)
        return best_word[len(last):]
