# vocabulary.py
# Per-word embedding store plus the vector helpers (normalisation, cosine) used by
# training and the similarity fallback.

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple
import logging

import numpy as np

from .protocols import RandomSource

logger = logging.getLogger(__name__)

Word = str
Vector = np.ndarray

DEFAULT_VECTOR_SIZE = 10


def normalize(vector: Vector) -> Vector:
    """Scale `vector` in place to unit Euclidean length. Zero vectors are left alone."""
    magnitude = float(np.linalg.norm(vector))
    if magnitude > 0:
        vector /= magnitude
    return vector


def cosine_similarity(v1: Vector, v2: Vector) -> float:
    """Cosine similarity between two vectors, 0.0 if either has zero magnitude."""
    m1 = float(np.linalg.norm(v1))
    m2 = float(np.linalg.norm(v2))
    if m1 == 0 or m2 == 0:
        return 0.0
    return float(np.dot(v1, v2)) / (m1 * m2)


class VocabularyStore:
    """
    Owns one embedding per known word.
     - vectors are created lazily with components drawn uniformly from [-1, 1)
     - insertion order is preserved, so iteration is deterministic within a run
     - the random source is injected so tests can seed it
    """

    def __init__(self,
                 dimension: int = DEFAULT_VECTOR_SIZE,
                 rng: Optional[RandomSource] = None) -> None:
        if dimension < 1:
            raise ValueError(f"embedding dimension must be positive, got {dimension}")
        self.dimension = int(dimension)
        self._rng: RandomSource = rng if rng is not None else np.random.default_rng()
        self._vectors: Dict[Word, Vector] = {}

    # Creation/lookup --------------------------------------------------------
    def ensure_word(self, word: Word) -> Vector:
        """Return the embedding for `word`, creating a random one on first sight."""
        vec = self._vectors.get(word)
        if vec is None:
            vec = self._random_vector()
            self._vectors[word] = vec
            logger.debug("new word %r", word)
        return vec

    def get(self, word: Word) -> Optional[Vector]:
        return self._vectors.get(word)

    def set(self, word: Word, vector) -> None:
        """Install a vector directly (snapshot loading). Width must match the store."""
        vec = np.asarray(vector, dtype=np.float64)
        if vec.shape != (self.dimension,):
            raise ValueError(
                f"embedding for {word!r} has width {vec.size}, expected {self.dimension}"
            )
        self._vectors[word] = vec.copy()

    def _random_vector(self) -> Vector:
        return np.asarray(self._rng.uniform(-1.0, 1.0, self.dimension), dtype=np.float64)

    # Introspection ------------------------------------------------------------
    def keys(self) -> List[Word]:
        return list(self._vectors)

    def items(self) -> Iterator[Tuple[Word, Vector]]:
        return iter(self._vectors.items())

    def clear(self) -> None:
        self._vectors.clear()

    def __contains__(self, word: object) -> bool:
        return word in self._vectors

    def __len__(self) -> int:
        return len(self._vectors)
