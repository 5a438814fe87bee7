"""Word bank loading and random selection for Anagram Rush.

Word banks are YAML files of the form::

    words:
      - word: planet
        clue: A celestial body orbiting a star

Words are stored lowercase and must be ASCII letters only. Quote words YAML
would read as booleans, such as "no".
"""

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Cache for parsed word banks (keyed by resolved file path)
_ENTRIES_CACHE: Dict[str, Tuple["WordEntry", ...]] = {}


def is_plain_word(word: str) -> bool:
    """True for a non-empty word made only of the letters a-z / A-Z."""
    return bool(word) and word.isascii() and word.isalpha()


class ConfigurationError(ValueError):
    """Raised when the word bank cannot support a game session."""


@dataclass(frozen=True)
class WordEntry:
    """An immutable (word, clue) pair."""
    word: str
    clue: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordEntry":
        """Create a WordEntry from a YAML record, validating its fields."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Word entry must be a mapping, got: {data!r}")

        raw_word, raw_clue = data.get("word"), data.get("clue")
        # YAML turns bare no/yes/on/off into booleans and blanks into None
        for field_name, value in (("word", raw_word), ("clue", raw_clue)):
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"Field '{field_name}' must be a string, got {value!r} (quote it in the YAML file)"
                )

        word = raw_word.strip().lower()
        clue = raw_clue.strip()

        if not is_plain_word(word):
            raise ConfigurationError(f"Word must be non-empty and letters only: {data.get('word')!r}")
        if not clue:
            raise ConfigurationError(f"Missing clue for word: {word!r}")

        return cls(word=word, clue=clue)


def default_words_file() -> Path:
    """Path to the word bank bundled with the package."""
    return Path(__file__).parent / "inputs" / "words.yaml"


class WordBank:
    """Static, ordered collection of word entries."""

    def __init__(self, entries: Iterable[WordEntry], rng: Optional[Any] = None):
        self._entries: Tuple[WordEntry, ...] = tuple(entries)
        self.rng = rng or random

    @classmethod
    def from_yaml(cls, words_file, rng: Optional[Any] = None) -> "WordBank":
        """Load a word bank from YAML (cached for performance)."""
        key = str(Path(words_file).resolve())

        if key not in _ENTRIES_CACHE:
            try:
                with open(words_file, "r") as f:
                    data = yaml.safe_load(f) or {}
            except FileNotFoundError:
                logger.error(f"Words file not found: {words_file}")
                raise
            except yaml.YAMLError as e:
                logger.error(f"Error parsing words file {words_file}: {e}")
                raise ConfigurationError(f"Invalid YAML in {words_file}: {e}") from e

            records = data.get("words") if isinstance(data, dict) else None
            if not isinstance(records, list):
                raise ConfigurationError(f"Expected a 'words' list in {words_file}")

            entries = tuple(WordEntry.from_dict(record) for record in records)
            if not entries:
                raise ConfigurationError(f"No words found in {words_file}")

            _ENTRIES_CACHE[key] = entries
            logger.debug(f"Loaded and cached {len(entries)} words from {words_file}")

        return cls(_ENTRIES_CACHE[key], rng=rng)

    @property
    def entries(self) -> Tuple[WordEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def validate(self) -> None:
        """Fail fast when no session can be started from this bank."""
        if not self._entries:
            raise ConfigurationError("Word bank is empty; cannot start a session")

    def pick_random(self) -> WordEntry:
        """Return a uniformly random entry."""
        self.validate()
        return self.rng.choice(self._entries)

    def words(self) -> List[str]:
        return [entry.word for entry in self._entries]
