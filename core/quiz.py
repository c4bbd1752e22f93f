"""
Eitango – Quick test session
=============================
A capped, scored quiz over a random sample of the local vocabulary.

    Empty ──(start with entries)──► InProgress ──(answer on last card)──► Completed
      ▲                                                                      │
      └────────────────────────────── start() ◄──────────────────────────────┘

Calls that are not valid in the current state are silently ignored, so the
screen can wire buttons straight to these methods.
"""

from __future__ import annotations

import enum
import random
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_MAX_QUESTIONS = 10


class QuizState(enum.Enum):
    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# (threshold, grade): first match wins
_GRADES = (
    (1.0, "perfect"),
    (0.9, "excellent"),
    (0.7, "good"),
    (0.5, "fair"),
    (0.0, "review"),
)


class QuizSession(Generic[T]):
    """One run of the quiz, from start to completion or restart."""

    def __init__(self, rng: random.Random | None = None, *, allow_skip: bool = False) -> None:
        self._rng = rng or random.Random()
        self._allow_skip = allow_skip
        self._questions: List[T] = []
        self._cursor = 0
        self._revealed = False
        self._correct = 0
        self._state = QuizState.EMPTY

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> QuizState:
        return self._state

    @property
    def questions(self) -> List[T]:
        return list(self._questions)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def revealed(self) -> bool:
        return self._revealed

    @property
    def correct_count(self) -> int:
        return self._correct

    @property
    def current(self) -> Optional[T]:
        if self._state is not QuizState.IN_PROGRESS:
            return None
        return self._questions[self._cursor]

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def score(self) -> int:
        return self._correct

    @property
    def percentage(self) -> float:
        if not self._questions:
            return 0.0
        return self._correct / len(self._questions)

    @property
    def progress(self) -> float:
        """Fraction of the way through, counting the current card."""
        if not self._questions:
            return 0.0
        return (self._cursor + 1) / len(self._questions)

    def grade(self) -> str:
        pct = self.percentage
        for threshold, name in _GRADES:
            if pct >= threshold:
                return name
        return _GRADES[-1][1]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, pool: Sequence[T], max_questions: int = DEFAULT_MAX_QUESTIONS) -> QuizState:
        """Shuffle *pool* and take the first ``max_questions`` as the question list."""
        if max_questions < 1:
            raise ValueError(f"max_questions must be at least 1, got {max_questions}")
        self._cursor = 0
        self._correct = 0
        self._revealed = False

        if not pool:
            self._questions = []
            self._state = QuizState.EMPTY
            return self._state

        shuffled = list(pool)
        self._rng.shuffle(shuffled)
        self._questions = shuffled[:max_questions]
        self._state = QuizState.IN_PROGRESS
        return self._state

    def reveal(self) -> None:
        if self._state is QuizState.IN_PROGRESS and not self._revealed:
            self._revealed = True

    def mark_correct(self) -> None:
        if self._state is not QuizState.IN_PROGRESS or not self._revealed:
            return
        self._correct += 1
        self.advance()

    def mark_incorrect_or_next(self) -> None:
        """Move on without scoring; needs a revealed answer unless skipping is allowed."""
        if self._state is not QuizState.IN_PROGRESS:
            return
        if not self._revealed and not self._allow_skip:
            return
        self.advance()

    def advance(self) -> None:
        if self._state is not QuizState.IN_PROGRESS:
            return
        if self._cursor >= len(self._questions) - 1:
            self._state = QuizState.COMPLETED
            return
        self._cursor += 1
        self._revealed = False

    def previous(self) -> None:
        # scores already given stay counted
        if self._state is not QuizState.IN_PROGRESS or self._cursor == 0:
            return
        self._cursor -= 1
        self._revealed = False
