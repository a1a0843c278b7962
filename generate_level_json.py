#!/usr/bin/env python3
"""
Generate a level JSON for the word game.

Usage:
  python3 generate_level_json.py --dictionary dictionary_es.txt --level 1
  python3 generate_level_json.py --wordfreq es --level 4 --seed 1234 --output levels/
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import random

from dictionary import (
    build_from_source, default_cache_path, load_or_build, wordfreq_source,
    FALLBACK_CORPUS, WORDFREQ_N_WORDS,
)
from game import rank_for_level
from level import generate_level, MIN_SOLUTIONS

GREEN = '\033[92m'
RED = '\033[91m'
RESET = '\033[0m'


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a seven-letter level as JSON")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--dictionary', help='Word list file, one word per line (UTF-8)')
    source.add_argument('--wordfreq', metavar='LANG', help='Build the word list from wordfreq for LANG (e.g. es)')
    parser.add_argument('--n-words', type=int, default=WORDFREQ_N_WORDS,
                        help=f'Words to take from wordfreq (default: {WORDFREQ_N_WORDS})')
    parser.add_argument('--cache-dir', default='.', help='Directory for the corpus cache (default: .)')
    parser.add_argument('--no-cache', action='store_true', help='Always rebuild the corpus, never touch the cache')
    parser.add_argument('--level', type=int, default=1, help='Level number (default: 1)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducibility')
    parser.add_argument('--min-solutions', type=int, default=MIN_SOLUTIONS,
                        help=f'Minimum solutions for a level (default: {MIN_SOLUTIONS})')
    parser.add_argument('--output', default='levels/', help='Output directory (default: levels/)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    source = args.dictionary or wordfreq_source(args.wordfreq, args.n_words)

    print("Loading dictionary...")
    if args.no_cache:
        corpus = build_from_source(source, desc="Normalizing")
    else:
        corpus = load_or_build(default_cache_path(args.cache_dir), source, desc="Normalizing")
    if corpus is FALLBACK_CORPUS:
        print(f"{RED}Could not read dictionary, using fallback word list{RESET}")
    print(f"Words: {len(corpus.words)}, Pangrams: {len(corpus.pangrams)}")

    seed = args.seed if args.seed is not None else random.randint(0, 2**32 - 1)
    print(f"Seed: {seed}")
    outcome = generate_level(corpus, args.level, rng=random.Random(seed), min_solutions=args.min_solutions)
    puzzle = outcome.puzzle

    if outcome.is_fallback:
        print(f"{RED}No level with {args.min_solutions}+ solutions after {outcome.attempts} attempts, using fallback{RESET}")
    else:
        print(f"{GREEN}Found level after {outcome.attempts} attempt(s){RESET}")

    level = {
        'level': args.level,
        'rank': rank_for_level(args.level),
        'requiredLetter': puzzle.required_letter,
        'companionLetters': list(puzzle.companion_letters),
        'solutions': sorted(puzzle.solutions),
        'scoreCeiling': puzzle.score_ceiling,
        'fallback': outcome.is_fallback,
        'seed': seed,
    }

    os.makedirs(args.output, exist_ok=True)
    output_path = os.path.join(args.output, f"level_{args.level}.json")
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(level, f, indent=2, ensure_ascii=False)

    print(f"Written to {output_path}")
    print(f"  Letters: [{puzzle.required_letter}] {' '.join(puzzle.companion_letters)}")
    print(f"  Solutions: {len(puzzle.solutions)}, max score: {puzzle.score_ceiling}")


if __name__ == "__main__":
    main()
