# tests/test_suggestion_engine.py
import numpy as np

from shell_autocompleter.core.suggestion_engine import SuggestionEngine
from shell_autocompleter.core.trainer import Trainer
from shell_autocompleter.core.transition_table import TransitionTable
from shell_autocompleter.core.vocabulary import VocabularyStore


class StubStrategy:
    def __init__(self, name, answer):
        self.name = name
        self.answer = answer
        self.calls = []

    def rank(self, query):
        self.calls.append(query)
        return self.answer


def build(history, seed=5):
    vocab = VocabularyStore(rng=np.random.default_rng(seed))
    table = TransitionTable()
    Trainer(vocab, table).train(history)
    return SuggestionEngine(vocab, table)


def test_frequency_stage_wins_over_similarity():
    engine = build(["cd foo", "cd bar", "cd bar"])
    assert engine.get_suggestion("cd b") == "ar"
    assert engine.get_suggestion("cd f") == "oo"


def test_falls_back_to_vocabulary_prefix():
    engine = build(["git checkout main"])
    # "main" never followed "ls", so only the similarity stage can answer
    assert engine.get_suggestion("ls ma") == "in"


def test_after_space_suggests_full_word():
    engine = build(["cd bar", "cd foo", "cd foo", "cd foo"])
    assert engine.get_suggestion("cd ") == "foo"


def test_nothing_known():
    engine = build([])
    for text in ["", "c", "cd", "cd ", "cd b", "   "]:
        assert engine.get_suggestion(text) == ""


def test_stages_run_in_order_and_stop_at_first_answer():
    first = StubStrategy("first", None)
    second = StubStrategy("second", "xyz")
    third = StubStrategy("third", "never")
    engine = SuggestionEngine(VocabularyStore(), TransitionTable(), strategies=[first, second, third])
    assert engine.get_suggestion("cd b") == "xyz"
    assert len(first.calls) == 1 and len(second.calls) == 1
    assert third.calls == []
    assert first.calls[0].last_word == "b"


def test_all_stages_defer_gives_empty():
    engine = SuggestionEngine(VocabularyStore(), TransitionTable(),
                              strategies=[StubStrategy("a", None)])
    assert engine.get_suggestion("anything") == ""
