# transition_table.py
# first-order Markov count table: predecessor word -> Counter(successor word).

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

Word = str
Successors = List[Tuple[Word, int]]


class TransitionTable:
    """
    Raw successor counts per predecessor.

    Unlike a probabilistic Markov predictor this keeps integer counts only;
    the suggestion engine needs them for ordering, not for scoring.
    Counts only ever go up during training.
    """

    def __init__(self) -> None:
        # prev -> Counter(next); plain dict so lookups never create entries
        self._chain: Dict[Word, Counter] = {}

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def record_transition(self, prev: Word, nxt: Word) -> None:
        self._chain.setdefault(prev, Counter())[nxt] += 1

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def candidates_following(self, prev: Word) -> Successors:
        """(successor, count) pairs for `prev` in first-seen order; [] if unknown."""
        counter = self._chain.get(prev)
        if not counter:
            return []
        return list(counter.items())

    def most_common(self, prev: Word) -> Optional[Word]:
        """Successor with the highest count, earliest-seen on ties. None if nothing follows."""
        ranked = sorted(self.candidates_following(prev), key=lambda kv: kv[1], reverse=True)
        return ranked[0][0] if ranked else None

    def count(self, prev: Word, nxt: Word) -> int:
        counter = self._chain.get(prev)
        return counter.get(nxt, 0) if counter else 0

    # ------------------------------------------------------------------
    # Snapshot support
    # ------------------------------------------------------------------
    def replace(self, prev: Word, successors: Iterable[Tuple[Word, int]]) -> None:
        """Overwrite the whole successor map for `prev`."""
        self._chain[prev] = Counter(dict(successors))

    def predecessors(self) -> List[Word]:
        return list(self._chain)

    def clear(self) -> None:
        self._chain.clear()

    def __contains__(self, prev: object) -> bool:
        return prev in self._chain

    def __len__(self) -> int:
        return len(self._chain)
