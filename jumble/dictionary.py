from __future__ import annotations
import logging
import random
import re
import threading
from bisect import bisect_left
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from . import config

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26
DEFAULT_MIN_LENGTH = 3

_LETTERS_ONLY = re.compile(r'[A-Za-z]+')

LetterCounts = Tuple[int, ...]


def letter_counts(word: str) -> Optional[LetterCounts]:
    """26-slot frequency vector of a lower-case word, or None if it has non a-z characters."""
    counts = [0] * ALPHABET_SIZE
    for ch in word:
        idx = ord(ch) - ord('a')
        if idx < 0 or idx >= ALPHABET_SIZE:
            return None
        counts[idx] += 1
    return tuple(counts)


def _contains(outer: LetterCounts, inner: LetterCounts) -> bool:
    return all(i <= o for o, i in zip(outer, inner))


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class WordEntry:
    text: str
    length: int = field(init=False)
    counts: Optional[LetterCounts] = field(init=False, repr=False)
    signature: str = field(init=False, repr=False)

    def __post_init__(self):
        # frozen dataclass: derived attributes are set once, here
        object.__setattr__(self, 'length', len(self.text))
        object.__setattr__(self, 'counts', letter_counts(self.text))
        object.__setattr__(self, 'signature', ''.join(sorted(self.text)))

    @classmethod
    def normalize(cls, raw: str) -> Optional['WordEntry']:
        text = raw.strip().lower()
        if not text:
            return None
        return cls(text)

    @property
    def is_palindrome(self) -> bool:
        return self.length >= 2 and self.text == self.text[::-1]


class DictionaryIndex:
    """Read-only word list with lookup buckets built once at construction.

    Buckets:
      - sorted word tuple, for prefix ranges by bisection
      - entries by length, first character and last character, for search()
      - anagram signatures grouped per length, for sub_words()
    """

    def __init__(self, entries: Iterable[WordEntry]):
        unique: Dict[str, WordEntry] = {}
        for entry in entries:
            unique.setdefault(entry.text, entry)
        self._entries: Dict[str, WordEntry] = unique
        self._sorted: Tuple[str, ...] = tuple(sorted(unique))

        by_length: Dict[int, List[str]] = {}
        by_first: Dict[str, List[str]] = {}
        by_last: Dict[str, List[str]] = {}
        signatures: Dict[int, Dict[str, List[str]]] = {}
        for text in self._sorted:
            entry = unique[text]
            by_length.setdefault(entry.length, []).append(text)
            by_first.setdefault(text[0], []).append(text)
            by_last.setdefault(text[-1], []).append(text)
            if entry.counts is not None:
                signatures.setdefault(entry.length, {}).setdefault(entry.signature, []).append(text)

        self._by_length: Dict[int, Tuple[str, ...]] = {k: tuple(v) for k, v in by_length.items()}
        self._by_first: Dict[str, FrozenSet[str]] = {k: frozenset(v) for k, v in by_first.items()}
        self._by_last: Dict[str, FrozenSet[str]] = {k: frozenset(v) for k, v in by_last.items()}
        # length -> [(signature counts, words sharing that signature)]
        self._signatures: Dict[int, Tuple[Tuple[LetterCounts, Tuple[str, ...]], ...]] = {
            length: tuple((unique[words[0]].counts, tuple(words)) for words in groups.values())
            for length, groups in signatures.items()
        }
        self._palindromes: FrozenSet[str] = frozenset(
            text for text, entry in unique.items() if entry.is_palindrome
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> 'DictionaryIndex':
        entries = (WordEntry.normalize(line) for line in lines)
        return cls(e for e in entries if e is not None)

    @classmethod
    def from_file(cls, path: Path) -> 'DictionaryIndex':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list file not found: {path}")
        with path.open('r', encoding='utf-8') as f:
            index = cls.from_lines(f)
        logger.info("Loaded %s words from %s", len(index), path)
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word) -> bool:
        return self.exists(word)

    def exists(self, word: Optional[str]) -> bool:
        if word is None or not word.strip():
            return False
        return word.lower() in self._entries

    def words_with_prefix(self, prefix: Optional[str]) -> FrozenSet[str]:
        if not prefix or not _LETTERS_ONLY.fullmatch(prefix):
            return frozenset()
        prefix = prefix.lower()
        matches = []
        for i in range(bisect_left(self._sorted, prefix), len(self._sorted)):
            word = self._sorted[i]
            if not word.startswith(prefix):
                break
            matches.append(word)
        return frozenset(matches)

    def search(
        self,
        start_char: Optional[str] = None,
        end_char: Optional[str] = None,
        length: Optional[int] = None,
    ) -> FrozenSet[str]:
        if start_char is None and end_char is None and length is None:
            return frozenset()
        for ch in (start_char, end_char):
            if ch is not None and not (isinstance(ch, str) and len(ch) == 1 and ch.isalpha()):
                return frozenset()
        if length is not None and not _is_positive_int(length):
            return frozenset()

        candidates: List[FrozenSet[str]] = []
        if start_char is not None:
            candidates.append(self._by_first.get(start_char.lower(), frozenset()))
        if end_char is not None:
            candidates.append(self._by_last.get(end_char.lower(), frozenset()))
        if length is not None:
            candidates.append(frozenset(self._by_length.get(length, ())))
        # intersect starting from the smallest bucket
        candidates.sort(key=len)
        result = candidates[0]
        for bucket in candidates[1:]:
            result = result & bucket
        return frozenset(result)

    def sub_words(self, word: Optional[str], min_length: Optional[int] = DEFAULT_MIN_LENGTH) -> List[str]:
        """Dictionary words spelled from a subset of `word`'s letters.

        Letter multiplicity is respected: "well" is a sub-word of "yellow" (two Ls)
        but "lolly" (three Ls) is not. The seed word itself is excluded. Invalid input gives [].
        """
        if not word or not _LETTERS_ONLY.fullmatch(word):
            return []
        if min_length is None:
            min_length = DEFAULT_MIN_LENGTH
        if not _is_positive_int(min_length) or min_length > len(word):
            return []

        seed = word.lower()
        seed_counts = letter_counts(seed)
        found = []
        for length in range(min_length, len(seed) + 1):
            for counts, words in self._signatures.get(length, ()):
                if _contains(seed_counts, counts):
                    found.extend(w for w in words if w != seed)
        return sorted(found)

    def palindromes(self) -> FrozenSet[str]:
        return self._palindromes

    def random_word(self, length: Optional[int] = None, rng: Optional[random.Random] = None) -> Optional[str]:
        rng = rng or random
        if length is None:
            pool = self._sorted
        else:
            pool = self._by_length.get(length, ())
        if not pool:
            return None
        return rng.choice(pool)


_index: Optional[DictionaryIndex] = None
_index_lock = threading.Lock()


def get_index() -> DictionaryIndex:
    """Process-wide index, loaded from config.WORDS_FILE on first use.

    Concurrent first callers block on the lock; only one of them reads the file.
    """
    global _index
    if _index is None:
        with _index_lock:
            if _index is None:
                _index = DictionaryIndex.from_file(config.WORDS_FILE)
    return _index
