# model_store.py — flat text snapshot of the suggestion model

# Layout (one value per line):
#   <vocab_count>
#   <word>
#   <comma-separated embedding components>      (vocab_count times)
#   <predecessor_count>
#   <predecessor_word>
#   <successor_count>
#   <successor_word>,<count>                     (successor_count times, per predecessor)
#
# Words are written raw. A word containing "," or a newline corrupts the file;
# that is a known limitation of the format.

from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import numpy as np

from ..core.transition_table import TransitionTable
from ..core.vocabulary import VocabularyStore
from ..errors import FormatError, NotFoundError
from .logger_utils import Log

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
FIELD_SEP = ","
_COUNT_RE = re.compile(r"[0-9]+")


@dataclass
class SnapshotState:
    """Parsed snapshot contents, held apart from the live stores until fully validated."""
    vectors: Dict[str, np.ndarray] = field(default_factory=dict)
    transitions: Dict[str, List[Tuple[str, int]]] = field(default_factory=dict)


# Encoding -------------------------------------------------------------
def render_snapshot(vocabulary: VocabularyStore, transitions: TransitionTable) -> str:
    lines: List[str] = [str(len(vocabulary))]
    for word, vec in vocabulary.items():
        lines.append(word)
        lines.append(FIELD_SEP.join(repr(float(x)) for x in vec))

    lines.append(str(len(transitions)))
    for prev in transitions.predecessors():
        successors = transitions.candidates_following(prev)
        lines.append(prev)
        lines.append(str(len(successors)))
        lines.extend(f"{word}{FIELD_SEP}{count}" for word, count in successors)
    return "\n".join(lines) + "\n"


# Decoding -------------------------------------------------------------
class _LineReader:
    """Sequential line cursor that reports 1-based line numbers in errors."""

    def __init__(self, text: str) -> None:
        self._lines = text.split("\n")
        if text.endswith("\n"):
            self._lines.pop()
        self._pos = 0

    @property
    def lineno(self) -> int:
        return self._pos

    def next(self, what: str) -> str:
        if self._pos >= len(self._lines):
            raise FormatError(f"unexpected end of file, expected {what}", self._pos + 1)
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def next_count(self, what: str) -> int:
        raw = self.next(what)
        return _parse_count(raw, what, self._pos)

    def remaining(self) -> List[str]:
        return self._lines[self._pos:]


def _parse_count(raw: str, what: str, lineno: int) -> int:
    """Plain decimal digits only: no sign, whitespace or underscores."""
    if not _COUNT_RE.fullmatch(raw):
        raise FormatError(f"{what} is not a non-negative integer: {raw!r}", lineno)
    return int(raw)


def _parse_vector(raw: str, dimension: int, lineno: int) -> np.ndarray:
    parts = raw.split(FIELD_SEP)
    if len(parts) != dimension:
        raise FormatError(f"embedding has {len(parts)} components, expected {dimension}", lineno)
    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise FormatError(f"non-numeric embedding component in {raw!r}", lineno) from None
    if not all(math.isfinite(v) for v in values):
        raise FormatError(f"non-finite embedding component in {raw!r}", lineno)
    return np.array(values, dtype=np.float64)


def _parse_successor(raw: str, lineno: int) -> Tuple[str, int]:
    parts = raw.split(FIELD_SEP)
    if len(parts) != 2:
        raise FormatError(f"malformed successor entry {raw!r}", lineno)
    word, count_raw = parts
    return word, _parse_count(count_raw, "successor count", lineno)


def parse_snapshot(text: str, dimension: int) -> SnapshotState:
    """Parse snapshot text. Raises FormatError on any structural problem."""
    reader = _LineReader(text)
    state = SnapshotState()

    for _ in range(reader.next_count("vocabulary count")):
        word = reader.next("vocabulary word")
        if word in state.vectors:
            raise FormatError(f"duplicate vocabulary word {word!r}", reader.lineno)
        raw = reader.next(f"embedding for {word!r}")
        state.vectors[word] = _parse_vector(raw, dimension, reader.lineno)

    for _ in range(reader.next_count("predecessor count")):
        prev = reader.next("predecessor word")
        if prev in state.transitions:
            raise FormatError(f"duplicate predecessor {prev!r}", reader.lineno)
        successors = []
        for _ in range(reader.next_count(f"successor count for {prev!r}")):
            raw = reader.next(f"successor entry for {prev!r}")
            word, count = _parse_successor(raw, reader.lineno)
            if any(word == seen for seen, _ in successors):
                raise FormatError(f"duplicate successor {word!r} for {prev!r}", reader.lineno)
            successors.append((word, count))
        state.transitions[prev] = successors

    if any(line.strip() for line in reader.remaining()):
        raise FormatError("unexpected content after the transition table", reader.lineno + 1)
    return state


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise FormatError(f"snapshot is not valid UTF-8: {e}") from None


# File persistence --------------------------------------------------------
class ModelSnapshot:
    """
    Saves/loads the combined VocabularyStore + TransitionTable state.

    load() parses everything first and only then touches the stores, so a bad
    file never leaves the model half-loaded.
    """

    def __init__(self, vocabulary: VocabularyStore, transitions: TransitionTable) -> None:
        self.vocabulary = vocabulary
        self.transitions = transitions

    def save(self, path: PathLike) -> None:
        path = os.fspath(path)
        with Log.time_block("ModelSnapshot.save"):
            text = render_snapshot(self.vocabulary, self.transitions)
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        logger.info("Saved model (%d words, %d predecessors) to %s",
                    len(self.vocabulary), len(self.transitions), path)

    def load(self, path: PathLike, replace: bool = False) -> None:
        """
        Load a snapshot into the stores.
        Default: colliding words/predecessors are overwritten, everything else stays.
        replace=True: both stores are emptied first.
        """
        path = os.fspath(path)
        if not os.path.exists(path):
            logger.warning("No snapshot at %s", path)
            raise NotFoundError(path)

        with Log.time_block("ModelSnapshot.load"):
            try:
                text = _read_text(path)
                state = parse_snapshot(text, self.vocabulary.dimension)
            except FormatError as e:
                logger.error("Rejected snapshot %s: %s", path, e)
                raise

            if replace:
                self.vocabulary.clear()
                self.transitions.clear()
            for word, vec in state.vectors.items():
                self.vocabulary.set(word, vec)
            for prev, successors in state.transitions.items():
                self.transitions.replace(prev, successors)

        logger.info("Loaded model (%d words, %d predecessors) from %s",
                    len(state.vectors), len(state.transitions), path)
