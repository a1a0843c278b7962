#!/usr/bin/env python3
"""
Level generator - level.py

Builds one seven-letter level from a Corpus:
- Picks a random pangram and shuffles its 7 distinct letters
- The first letter becomes the required letter, the other six its companions
- Solutions are every corpus word that uses the required letter and nothing
  outside the 7 letters
- Retries up to MAX_ATTEMPTS times until a level has MIN_SOLUTIONS words,
  then gives up and returns the fixed FALLBACK_PUZZLE
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Tuple, Union
import logging
import random

from dictionary import Corpus, MAX_WORD_LENGTH, MIN_WORD_LENGTH, PANGRAM_LETTERS

logger = logging.getLogger(__name__)

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

MIN_SOLUTIONS = 10
MAX_ATTEMPTS = 100
COMPANION_LETTERS = 6

# Used when the corpus has no pangrams at all
DEFAULT_PANGRAM = 'marinos'


def score_word(word: str) -> int:
    """Points for a found word: its length minus two (3 letters = 1 point)."""
    return len(word) - 2


# ============================================================================ #
#                              PUZZLE                                          #
# ============================================================================ #

@dataclass(frozen=True)
class Puzzle:
    required_letter: str
    companion_letters: Tuple[str, ...]
    solutions: FrozenSet[str]
    score_ceiling: int

    def __post_init__(self):
        object.__setattr__(self, 'companion_letters', tuple(self.companion_letters))
        object.__setattr__(self, 'solutions', frozenset(self.solutions))

        if len(self.required_letter) != 1 or not self.required_letter.isupper():
            raise ValueError(f"required letter must be one uppercase letter, got {self.required_letter!r}")
        if len(self.companion_letters) != COMPANION_LETTERS:
            raise ValueError(f"expected {COMPANION_LETTERS} companion letters, got {len(self.companion_letters)}")
        if any(len(c) != 1 or not c.isupper() for c in self.companion_letters):
            raise ValueError(f"companion letters must be single uppercase letters: {self.companion_letters}")
        if len(set(self.letters)) != COMPANION_LETTERS + 1:
            raise ValueError(f"letters must be {COMPANION_LETTERS + 1} distinct: {self.letters}")

        for word in self.solutions:
            if not (MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH):
                raise ValueError(f"solution {word!r} must be {MIN_WORD_LENGTH}-{MAX_WORD_LENGTH} letters")
            if not self.is_spellable(word):
                raise ValueError(f"solution {word!r} is not spellable from {''.join(self.letters)}")

    @property
    def letters(self) -> Tuple[str, ...]:
        """The full alphabet, required letter first."""
        return (self.required_letter,) + self.companion_letters

    def is_spellable(self, word: str) -> bool:
        return word.islower() and spellable(word, self.required_letter.lower(), set(''.join(self.letters).lower()))

    def with_companions_shuffled(self, rng: random.Random = None) -> Puzzle:
        """Same level with the companion letters in a new order."""
        rng = rng or random.Random()
        companions = list(self.companion_letters)
        rng.shuffle(companions)
        return Puzzle(self.required_letter, tuple(companions), self.solutions, self.score_ceiling)


def spellable(word: str, required: str, alphabet) -> bool:
    """True if word contains required and only letters from alphabet."""
    return required in word and set(word) <= alphabet


def usable_letters(letters) -> bool:
    """A pangram alphabet must be 7 distinct lowercase letters that survive upper() and back."""
    return len(letters) == PANGRAM_LETTERS and all(
        c.isalpha() and c.upper() != c and len(c.upper()) == 1 and c.upper().lower() == c
        for c in letters
    )


def find_solutions(words: Iterable[str], required: str, alphabet) -> FrozenSet[str]:
    alphabet = set(alphabet)
    return frozenset(
        w for w in words
        if MIN_WORD_LENGTH <= len(w) <= MAX_WORD_LENGTH and spellable(w, required, alphabet)
    )


# Returned when no level reaches MIN_SOLUTIONS within MAX_ATTEMPTS
FALLBACK_SOLUTIONS = frozenset({'tesoro', 'meta'})
FALLBACK_PUZZLE = Puzzle(
    required_letter='E',
    companion_letters=('A', 'T', 'M', 'S', 'R', 'O'),
    solutions=FALLBACK_SOLUTIONS,
    score_ceiling=sum(score_word(w) for w in FALLBACK_SOLUTIONS),
)


# ============================================================================ #
#                              GENERATION                                      #
# ============================================================================ #

@dataclass(frozen=True)
class Generated:
    puzzle: Puzzle
    attempts: int

    is_fallback = False


@dataclass(frozen=True)
class FallbackUsed:
    puzzle: Puzzle
    attempts: int

    is_fallback = True


Outcome = Union[Generated, FallbackUsed]


def generate_level(
    corpus: Corpus,
    level: int,
    *,
    rng: random.Random = None,
    min_solutions: int = MIN_SOLUTIONS,
    max_attempts: int = MAX_ATTEMPTS,
    word_score: Callable[[str], int] = score_word,
) -> Outcome:
    """
    Rejection-sample a level from the corpus.

    `level` does not change difficulty yet; it is accepted so callers can
    pass the level number they are building.
    """
    rng = rng or random.Random()
    pangrams = corpus.pangrams or (DEFAULT_PANGRAM,)
    if not corpus.pangrams:
        logger.warning("Corpus has no pangrams, using default %r", DEFAULT_PANGRAM)

    for attempt in range(1, max_attempts + 1):
        pangram = rng.choice(pangrams)
        letters = sorted(set(pangram))
        if not usable_letters(letters):
            # Only possible with a hand-edited cache
            logger.debug("Skipping pangram %r: unusable letters", pangram)
            continue
        rng.shuffle(letters)
        required = letters[0]

        solutions = find_solutions(corpus.words, required, letters)
        if len(solutions) < min_solutions:
            continue

        puzzle = Puzzle(
            required_letter=required.upper(),
            companion_letters=tuple(c.upper() for c in letters[1:]),
            solutions=solutions,
            score_ceiling=sum(word_score(w) for w in solutions),
        )
        logger.info("Level %d: %s from %r, %d solutions after %d attempt(s)",
                    level, ''.join(puzzle.letters), pangram, len(solutions), attempt)
        return Generated(puzzle, attempt)

    logger.warning("Level %d: no pangram gave %d solutions in %d attempts, using fallback",
                   level, min_solutions, max_attempts)
    return FallbackUsed(FALLBACK_PUZZLE, max_attempts)


def generate(corpus: Corpus, level: int, **kwargs) -> Puzzle:
    return generate_level(corpus, level, **kwargs).puzzle
