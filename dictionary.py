#!/usr/bin/env python3
"""
Word corpus loading - dictionary.py

Turns a raw one-word-per-line list into a Corpus (all playable words plus the
pangrams that can seed a level) and keeps a JSON copy next to the game data so
later runs skip the parse:
- Words are trimmed, lowercased and kept when 3-10 letters long
- A pangram is any word with exactly 7 distinct letters
- The cache file name carries a hash of the schema version and settings,
  so a stale or corrupt cache is simply rebuilt
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Tuple, Union
from wordfreq import top_n_list
from tqdm import tqdm
import hashlib
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 10
PANGRAM_LETTERS = 7

# Bump whenever the JSON layout written by save_corpus changes
CACHE_SCHEMA_VERSION = 7

# Wordfreq defaults for building a corpus without a dictionary file
WORDFREQ_LANG = 'es'
WORDFREQ_N_WORDS = 80000

Source = Union[str, os.PathLike, Callable[[], Iterable[str]]]


# ============================================================================ #
#                              CORPUS                                          #
# ============================================================================ #

@dataclass(frozen=True)
class Corpus:
    words: FrozenSet[str] = field(default_factory=frozenset)
    pangrams: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store immutable containers
        object.__setattr__(self, 'words', frozenset(self.words))
        object.__setattr__(self, 'pangrams', tuple(self.pangrams))

    def __len__(self) -> int:
        return len(self.words)


def same_contents(a: Corpus, b: Corpus) -> bool:
    """Order-independent comparison of two corpora."""
    return a.words == b.words and set(a.pangrams) == set(b.pangrams)


def is_pangram(word: str) -> bool:
    return len(set(word)) == PANGRAM_LETTERS


# Used when the dictionary cannot be read at all
FALLBACK_CORPUS = Corpus(words=frozenset({'mar', 'tesoro', 'marinos'}), pangrams=('marinos',))


# ============================================================================ #
#                              HELPERS                                         #
# ============================================================================ #

def progress(iterable, desc=""):
    """Progress bar with a custom format."""
    return tqdm(iterable, desc=desc, ascii=" ▖▘▝▗▚▞█", bar_format='{desc}: |{bar:20}|')


def get_cache_key() -> str:
    """Generate cache file name based on schema version and configuration."""
    config_str = f"{CACHE_SCHEMA_VERSION}_{MIN_WORD_LENGTH}_{MAX_WORD_LENGTH}_{PANGRAM_LETTERS}"
    cache_hash = hashlib.md5(config_str.encode()).hexdigest()[:8]
    return f".cache_corpus_{cache_hash}.json"


def default_cache_path(directory: Union[str, os.PathLike] = ".") -> str:
    return os.path.join(directory, get_cache_key())


# ============================================================================ #
#                              NORMALIZER                                      #
# ============================================================================ #

def normalize(raw_lines: Iterable[str], *, desc: str = None) -> Corpus:
    """
    Build a Corpus from raw dictionary lines.

    Pangrams keep the order in which they were first seen so seeded runs
    pick the same levels.
    """
    if desc is not None:
        raw_lines = progress(raw_lines, desc=desc)

    words = set()
    pangrams = []
    for line in raw_lines:
        word = line.strip().lower()
        if not (MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH):
            continue
        if word in words:
            continue
        words.add(word)
        if is_pangram(word):
            pangrams.append(word)
    return Corpus(words=frozenset(words), pangrams=tuple(pangrams))


def read_source(source: Source) -> List[str]:
    """Read raw lines from a dictionary file, or call a source function."""
    if callable(source):
        return list(source())
    with open(source, 'r', encoding='utf-8') as f:
        return f.read().splitlines()


def wordfreq_source(lang: str = WORDFREQ_LANG, n_words: int = WORDFREQ_N_WORDS) -> Callable[[], List[str]]:
    """Source backed by the wordfreq frequency list for a language."""
    def load() -> List[str]:
        return [w for w in top_n_list(lang, n_words, wordlist='best') if w.isalpha()]
    return load


# ============================================================================ #
#                              CACHE                                           #
# ============================================================================ #

def corpus_to_json(corpus: Corpus) -> Dict[str, List[str]]:
    return {
        'words': sorted(corpus.words),
        'pangrams': list(corpus.pangrams),
    }


def corpus_from_json(data) -> Corpus:
    """Rebuild a Corpus from decoded JSON. Raises ValueError on a bad layout."""
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    for key in ('words', 'pangrams'):
        values = data.get(key)
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"'{key}' must be a list of strings")
    return Corpus(words=frozenset(data['words']), pangrams=tuple(data['pangrams']))


def save_corpus(cache_path: Union[str, os.PathLike], corpus: Corpus):
    """Write the corpus to cache via a temp file + rename, so readers never see half a file."""
    folder = os.path.dirname(os.fspath(cache_path)) or "."
    os.makedirs(folder, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".cache_corpus_", suffix=".tmp", dir=folder, text=True)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(corpus_to_json(corpus), f, ensure_ascii=False, separators=(',', ':'))
        os.replace(tmp_path, cache_path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
    logger.debug("Saved %d words to %s", len(corpus), cache_path)


def load_corpus(cache_path: Union[str, os.PathLike]) -> Corpus:
    with open(cache_path, 'r', encoding='utf-8') as f:
        return corpus_from_json(json.load(f))


def build_from_source(source: Source, *, desc: str = None) -> Corpus:
    """Read and normalize source, or return FALLBACK_CORPUS if it cannot be read."""
    try:
        corpus = normalize(read_source(source), desc=desc)
    except (OSError, ValueError, TypeError, AttributeError, LookupError) as e:
        # UnicodeDecodeError is a ValueError; wordfreq raises LookupError for unknown languages
        logger.warning("Dictionary source unreadable (%s), using fallback corpus", e)
        return FALLBACK_CORPUS
    logger.info("Built corpus: %d words, %d pangrams", len(corpus), len(corpus.pangrams))
    return corpus


def load_or_build(cache_path: Union[str, os.PathLike], source: Source, *, desc: str = None) -> Corpus:
    """
    Load the corpus from cache, rebuilding it from source on a miss.

    Never raises for I/O problems: a corrupt cache is deleted and rebuilt,
    a failed cache write is skipped, and an unreadable source yields
    FALLBACK_CORPUS.
    """
    if os.path.exists(cache_path):
        try:
            corpus = load_corpus(cache_path)
            logger.info("Loaded %d words (%d pangrams) from %s", len(corpus), len(corpus.pangrams), cache_path)
            return corpus
        except (OSError, ValueError) as e:
            logger.warning("Discarding unreadable cache %s: %s", cache_path, e)
            try:
                os.remove(cache_path)
            except OSError as e:
                logger.warning("Could not delete cache %s: %s", cache_path, e)

    corpus = build_from_source(source, desc=desc)
    if corpus is FALLBACK_CORPUS:
        return corpus

    try:
        save_corpus(cache_path, corpus)
    except OSError as e:
        logger.warning("Could not write cache %s: %s", cache_path, e)
    return corpus
