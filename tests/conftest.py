import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so the top-level modules import without installing
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from dictionary import Corpus, normalize  # noqa: E402


# Letters a, e, l, p, r, s, t: "plaster" and "stapler" are pangrams
RICH_WORDS = [
    "plaster", "stapler", "pastel", "petals", "plates", "staple", "palest",
    "pleat", "petal", "plate", "leapt", "tales", "steal", "stale", "least",
    "slate", "pearl", "parse", "spare", "spear", "tapes", "paste", "peat",
    "tape", "pale", "leap", "seat", "east", "rest", "pest", "step", "star",
    "tar", "rat", "art", "sat", "pat", "tap", "apt", "ear", "era", "sea",
]


@pytest.fixture
def rich_lines():
    """Raw dictionary lines with casing and whitespace noise."""
    return [f"  {w.upper()} " if i % 3 == 0 else w for i, w in enumerate(RICH_WORDS)] + ["", "ab", "x" * 11, "Plaster\t"]


@pytest.fixture
def rich_corpus(rich_lines) -> Corpus:
    return normalize(rich_lines)


@pytest.fixture
def marinos_corpus() -> Corpus:
    return Corpus(words=frozenset({"mar", "tesoro", "marinos", "amor", "arte"}), pangrams=("marinos",))


@pytest.fixture
def dictionary_file(tmp_path: Path, rich_lines) -> Path:
    path = tmp_path / "dictionary_es.txt"
    path.write_text("\n".join(rich_lines) + "\n", encoding="utf-8")
    return path
