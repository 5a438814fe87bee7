"""Tests for word bank loading and selection."""

import random
import tempfile
from collections import Counter
from pathlib import Path

import pytest
import yaml

from anagram.word_bank import ConfigurationError, WordBank, WordEntry, default_words_file


def write_words(records) -> Path:
    """Write a words YAML file to a fresh temp directory."""
    path = Path(tempfile.mkdtemp()) / "words.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(records, f)
    return path


class TestWordEntry:
    """Test cases for WordEntry parsing."""

    def test_canonical_form(self):
        entry = WordEntry.from_dict({"word": "  Planet ", "clue": " A body orbiting a star "})
        assert entry == WordEntry(word="planet", clue="A body orbiting a star")

    def test_entries_are_immutable(self):
        entry = WordEntry(word="planet", clue="clue")
        with pytest.raises(Exception):
            entry.word = "garden"

    @pytest.mark.parametrize("record", [
        {"word": "", "clue": "empty"},
        {"word": "two words", "clue": "space"},
        {"word": "abc1", "clue": "digit"},
        {"word": "planet"},
        {"word": None, "clue": "blank"},
        {"word": False, "clue": "YAML no"},
        {"word": "planet", "clue": None},
        {"word": "Straße", "clue": "non-ASCII letter"},
        {"word": "café", "clue": "accented letter"},
        "planet",
    ])
    def test_invalid_records(self, record):
        with pytest.raises(ConfigurationError):
            WordEntry.from_dict(record)


class TestWordBank:
    """Test cases for WordBank."""

    def setup_method(self):
        """Setup for each test."""
        self.entries = [
            WordEntry(word="planet", clue="A large body orbiting a star"),
            WordEntry(word="garden", clue="Where flowers grow"),
            WordEntry(word="tiger", clue="The largest striped cat"),
        ]
        self.bank = WordBank(self.entries, rng=random.Random(42))

    def test_pick_random_returns_entry(self):
        assert self.bank.pick_random() in self.entries

    def test_pick_random_covers_all_entries(self):
        """Test selection reaches every entry with roughly even frequency."""
        counts = Counter(self.bank.pick_random().word for _ in range(3000))
        assert set(counts) == {"planet", "garden", "tiger"}
        assert all(800 < count < 1200 for count in counts.values())

    def test_empty_bank(self):
        bank = WordBank([])
        with pytest.raises(ConfigurationError):
            bank.validate()
        with pytest.raises(ConfigurationError):
            bank.pick_random()

    def test_len_and_iteration(self):
        assert len(self.bank) == 3
        assert list(self.bank) == self.entries
        assert self.bank.words() == ["planet", "garden", "tiger"]


class TestWordBankFromYaml:
    """Test cases for loading word banks from YAML."""

    def test_load(self):
        path = write_words({"words": [
            {"word": "Harvest", "clue": "Gathering the crops"},
            {"word": "lantern", "clue": "A portable light"},
        ]})
        bank = WordBank.from_yaml(path)

        assert len(bank) == 2
        assert bank.entries[0] == WordEntry(word="harvest", clue="Gathering the crops")

    def test_load_is_cached(self):
        path = write_words({"words": [{"word": "honey", "clue": "Made by bees"}]})
        first = WordBank.from_yaml(path)
        path.write_text("words: []\n")
        second = WordBank.from_yaml(path)

        assert second.entries == first.entries

    def test_empty_list(self):
        path = write_words({"words": []})
        with pytest.raises(ConfigurationError):
            WordBank.from_yaml(path)

    def test_missing_words_key(self):
        path = write_words({"names": ["planet"]})
        with pytest.raises(ConfigurationError):
            WordBank.from_yaml(path)

    def test_invalid_word(self):
        path = write_words({"words": [{"word": "not ok", "clue": "two words"}]})
        with pytest.raises(ConfigurationError):
            WordBank.from_yaml(path)

    def test_invalid_yaml(self):
        path = Path(tempfile.mkdtemp()) / "broken.yaml"
        path.write_text("words: [unclosed\n")
        with pytest.raises(ConfigurationError):
            WordBank.from_yaml(path)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            WordBank.from_yaml("/nonexistent/words.yaml")

    def test_bundled_word_bank(self):
        """Test the packaged word list loads and is playable."""
        bank = WordBank.from_yaml(default_words_file())

        assert len(bank) >= 20
        for entry in bank:
            assert entry.word.isalpha()
            assert len(set(entry.word)) > 1

    def test_unquoted_yaml_boolean_word(self):
        """Test bare yes/no words parsed as booleans are rejected."""
        path = Path(tempfile.mkdtemp()) / "words.yaml"
        path.write_text("words:\n  - word: no\n    clue: Negative answer\n")
        with pytest.raises(ConfigurationError, match="must be a string"):
            WordBank.from_yaml(path)

    def test_blank_yaml_clue(self):
        """Test a clue left blank in YAML is rejected, not stored as 'None'."""
        path = Path(tempfile.mkdtemp()) / "words.yaml"
        path.write_text("words:\n  - word: planet\n    clue:\n")
        with pytest.raises(ConfigurationError):
            WordBank.from_yaml(path)
