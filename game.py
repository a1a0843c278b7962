#!/usr/bin/env python3
"""
Guess checking - game.py

Checks guesses and assigns ranks for a generated level.

Pure functions over a Puzzle and the set of words the player has already
found; the caller owns that set.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Tuple

from dictionary import MIN_WORD_LENGTH
from level import Puzzle, score_word

MAX_INPUT_LENGTH = 10

RANKS = (
    (3, 'Grumete'),
    (7, 'Marinero'),
)
TOP_RANK = 'Capitán'


class GuessStatus(Enum):
    ACCEPTED = 'accepted'
    ALREADY_FOUND = 'already_found'
    TOO_SHORT = 'too_short'
    TOO_LONG = 'too_long'
    MISSING_REQUIRED = 'missing_required'
    INVALID_LETTER = 'invalid_letter'
    NOT_IN_LIST = 'not_in_list'


@dataclass(frozen=True)
class GuessResult:
    word: str
    status: GuessStatus
    points: int = 0

    @property
    def accepted(self) -> bool:
        return self.status is GuessStatus.ACCEPTED


def check_guess(puzzle: Puzzle, guess: str, found: AbstractSet[str]) -> GuessResult:
    word = guess.strip().lower()
    if len(word) < MIN_WORD_LENGTH:
        return GuessResult(word, GuessStatus.TOO_SHORT)
    if len(word) > MAX_INPUT_LENGTH:
        return GuessResult(word, GuessStatus.TOO_LONG)
    if word in found:
        return GuessResult(word, GuessStatus.ALREADY_FOUND)
    if puzzle.required_letter.lower() not in word:
        return GuessResult(word, GuessStatus.MISSING_REQUIRED)
    if not set(word) <= set(''.join(puzzle.letters).lower()):
        return GuessResult(word, GuessStatus.INVALID_LETTER)
    if word not in puzzle.solutions:
        return GuessResult(word, GuessStatus.NOT_IN_LIST)
    return GuessResult(word, GuessStatus.ACCEPTED, score_word(word))


def progress_summary(puzzle: Puzzle, found: AbstractSet[str]) -> Tuple[int, int]:
    """(points earned so far, score ceiling). Words outside the solutions don't count."""
    points = sum(score_word(w) for w in found if w in puzzle.solutions)
    return points, puzzle.score_ceiling


def rank_for_level(level: int) -> str:
    for last_level, title in RANKS:
        if level <= last_level:
            return title
    return TOP_RANK
