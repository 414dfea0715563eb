"""
Quiz Topology - Fixed partition of deck indices into the quiz round's zones.
"""

from dataclasses import dataclass
from typing import Iterator, List

from ..errors import TopologyError


@dataclass(frozen=True)
class BoardCell:
    """One clickable value on the category board."""
    category: int
    value: int
    index: int


@dataclass(frozen=True)
class QuizTopology:
    """
    Zone boundaries for the quiz round.

    The board comes first, then a contiguous run of question slides laid out
    column by column (one column per category, one row per value), then the
    post-quiz slide that resumes the linear show, then the credits.
    """
    board: int
    first_question: int
    last_question: int
    post_quiz: int
    credits: int
    categories: int = 5
    value_step: int = 100

    def __post_init__(self):
        if not (0 <= self.board < self.first_question <= self.last_question
                < self.post_quiz < self.credits):
            raise TopologyError(
                "Quiz zones must be ordered board < questions < post-quiz < credits"
            )
        if self.categories <= 0 or self.question_count % self.categories:
            raise TopologyError(
                f"{self.question_count} questions do not split into {self.categories} categories"
            )

    @property
    def question_count(self) -> int:
        return self.last_question - self.first_question + 1

    @property
    def rows(self) -> int:
        """Questions per category."""
        return self.question_count // self.categories

    def is_question(self, index: int) -> bool:
        return self.first_question <= index <= self.last_question

    def is_quiz_zone(self, index: int) -> bool:
        return self.board <= index <= self.post_quiz

    def validate(self, deck_length: int) -> None:
        """Check the topology fits a deck of ``deck_length`` slides."""
        if self.credits >= deck_length:
            raise TopologyError(
                f"Credits index {self.credits} is outside a deck of {deck_length} slides"
            )

    def question_index(self, category: int, row: int) -> int:
        """Deck index of the question at ``row`` in ``category``."""
        if not (0 <= category < self.categories and 0 <= row < self.rows):
            raise IndexError(f"No board cell at category {category}, row {row}")
        return self.first_question + category * self.rows + row

    def cells(self) -> Iterator[BoardCell]:
        """Yield every board cell, category by category."""
        for category in range(self.categories):
            for row in range(self.rows):
                yield BoardCell(
                    category=category,
                    value=(row + 1) * self.value_step,
                    index=self.question_index(category, row),
                )

    def values(self) -> List[int]:
        return [(row + 1) * self.value_step for row in range(self.rows)]
