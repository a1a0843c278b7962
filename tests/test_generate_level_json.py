"""
Tests for the level JSON export script.
"""

import json

import dictionary
import generate_level_json
from dictionary import get_cache_key


def test_writes_level_json(tmp_path, dictionary_file, capsys):
    out_dir = tmp_path / "levels"
    generate_level_json.main([
        "--dictionary", str(dictionary_file),
        "--cache-dir", str(tmp_path),
        "--level", "5",
        "--seed", "1234",
        "--output", str(out_dir),
    ])

    level = json.loads((out_dir / "level_5.json").read_text(encoding="utf-8"))
    assert level["level"] == 5
    assert level["rank"] == "Marinero"
    assert level["seed"] == 1234
    assert level["fallback"] is False
    assert len(level["companionLetters"]) == 6
    assert set(level["companionLetters"] + [level["requiredLetter"]]) == set("APLSTER")
    assert len(level["solutions"]) >= 10
    assert level["solutions"] == sorted(level["solutions"])
    assert level["scoreCeiling"] == sum(len(w) - 2 for w in level["solutions"])

    assert (tmp_path / get_cache_key()).exists()
    assert "Seed: 1234" in capsys.readouterr().out


def test_same_seed_same_level(tmp_path, dictionary_file):
    for name in ("a", "b"):
        generate_level_json.main([
            "--dictionary", str(dictionary_file),
            "--cache-dir", str(tmp_path),
            "--seed", "77",
            "--output", str(tmp_path / name),
        ])
    a = json.loads((tmp_path / "a" / "level_1.json").read_text(encoding="utf-8"))
    b = json.loads((tmp_path / "b" / "level_1.json").read_text(encoding="utf-8"))
    assert a == b


def test_missing_dictionary_writes_fallback(tmp_path):
    generate_level_json.main([
        "--dictionary", str(tmp_path / "missing.txt"),
        "--no-cache",
        "--seed", "1",
        "--output", str(tmp_path),
    ])
    level = json.loads((tmp_path / "level_1.json").read_text(encoding="utf-8"))
    assert level["fallback"] is True
    assert level["requiredLetter"] == "E"
    assert level["solutions"] == ["meta", "tesoro"]
    assert not (tmp_path / get_cache_key()).exists()


def test_unknown_wordfreq_language_without_cache_writes_fallback(tmp_path, monkeypatch):
    def fake_top_n_list(lang, n, wordlist="best"):
        raise LookupError(f"No wordlist {wordlist!r} available for language {lang!r}")

    monkeypatch.setattr(dictionary, "top_n_list", fake_top_n_list)
    generate_level_json.main([
        "--wordfreq", "zz",
        "--no-cache",
        "--seed", "1",
        "--output", str(tmp_path),
    ])
    level = json.loads((tmp_path / "level_1.json").read_text(encoding="utf-8"))
    assert level["fallback"] is True
    assert level["requiredLetter"] == "E"
