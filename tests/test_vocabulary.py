# tests/test_vocabulary.py
import numpy as np
import pytest

from shell_autocompleter.core.protocols import RandomSource
from shell_autocompleter.core.vocabulary import VocabularyStore, cosine_similarity, normalize


class HalfSource:
    """Deterministic RandomSource: every component is 0.5."""

    def uniform(self, low, high, size):
        return np.full(size, 0.5)


def test_ensure_word_creates_vector_in_range():
    vocab = VocabularyStore(rng=np.random.default_rng(1))
    vec = vocab.ensure_word("git")
    assert vec.shape == (10,)
    assert np.all(vec >= -1.0) and np.all(vec < 1.0)
    assert "git" in vocab and len(vocab) == 1


def test_ensure_word_is_idempotent():
    vocab = VocabularyStore(rng=np.random.default_rng(1))
    first = vocab.ensure_word("ls")
    second = vocab.ensure_word("ls")
    assert first is second
    assert len(vocab) == 1


def test_get_unknown_returns_none():
    assert VocabularyStore().get("nope") is None


def test_keys_keep_insertion_order():
    vocab = VocabularyStore(rng=np.random.default_rng(0))
    for w in ["zsh", "awk", "make"]:
        vocab.ensure_word(w)
    assert vocab.keys() == ["zsh", "awk", "make"]


def test_seeded_sources_are_reproducible():
    a = VocabularyStore(rng=np.random.default_rng(42)).ensure_word("cd")
    b = VocabularyStore(rng=np.random.default_rng(42)).ensure_word("cd")
    np.testing.assert_array_equal(a, b)


def test_injected_random_source():
    src = HalfSource()
    assert isinstance(src, RandomSource)
    vocab = VocabularyStore(dimension=3, rng=src)
    np.testing.assert_array_equal(vocab.ensure_word("x"), [0.5, 0.5, 0.5])


def test_set_checks_width():
    vocab = VocabularyStore(dimension=3)
    vocab.set("ok", [1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        vocab.set("bad", [1.0, 0.0])


def test_invalid_dimension():
    with pytest.raises(ValueError):
        VocabularyStore(dimension=0)


def test_normalize_unit_length():
    v = np.array([3.0, 4.0])
    normalize(v)
    assert np.linalg.norm(v) == pytest.approx(1.0)
    np.testing.assert_allclose(v, [0.6, 0.8])


def test_normalize_leaves_zero_vector():
    v = np.zeros(4)
    normalize(v)
    np.testing.assert_array_equal(v, np.zeros(4))


def test_cosine_similarity_values():
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([2.0, 0.0])) == pytest.approx(1.0)
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 5.0])) == pytest.approx(0.0)
    assert cosine_similarity(np.array([1.0, 1.0]), np.array([-1.0, -1.0])) == pytest.approx(-1.0)


def test_cosine_similarity_zero_magnitude():
    assert cosine_similarity(np.zeros(3), np.array([1.0, 2.0, 3.0])) == 0.0
    assert cosine_similarity(np.array([1.0, 2.0, 3.0]), np.zeros(3)) == 0.0
