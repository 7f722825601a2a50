from __future__ import annotations
import logging
import os
from typing import Dict, Iterable, List, Optional, Set

log = logging.getLogger("wordgame")


class DictionaryIndex:
    """Per-language sets of valid uppercase words.

    Word lists live in `<directory>/<language>.txt`, one word per line.
    Languages are loaded explicitly; a language that was never loaded
    rejects every word.
    """

    def __init__(self, directory: Optional[str] = None, words: Optional[Dict[str, Iterable[str]]] = None):
        self.directory = directory
        self._words: Dict[str, Set[str]] = {}
        for language, entries in (words or {}).items():
            self._words[language] = _normalize(entries)

    def load(self, language: str) -> Set[str]:
        """(Re)load a language from disk, replacing any previous set.

        A missing or unreadable file leaves an empty set behind.
        """
        path = self._path(language)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                words = _normalize(f)
        except OSError as exc:
            log.warning("Could not load dictionary for %s: %s", language, exc)
            words = set()
        else:
            log.info("Loaded %s words for language: %s", f"{len(words):,}", language)
        self._words[language] = words
        return words

    def load_all(self, languages: Iterable[str]) -> None:
        for language in languages:
            self.load(language)

    def reload(self, language: str) -> int:
        return len(self.load(language))

    def append(self, language: str, words: Iterable[str]) -> int:
        """Add words to a language at runtime. Returns how many were new."""
        current = self._words.setdefault(language, set())
        before = len(current)
        current.update(_normalize(words))
        return len(current) - before

    def is_loaded(self, language: str) -> bool:
        return language in self._words

    def languages(self) -> List[str]:
        return sorted(self._words)

    def count(self, language: str) -> int:
        return len(self._words.get(language, ()))

    def is_valid_word(self, word: str, language: str) -> bool:
        words = self._words.get(language)
        if words is None:
            log.warning("No dictionary loaded for language: %s", language)
            return False
        if not word:
            return False
        return word.upper() in words

    def _path(self, language: str) -> str:
        return os.path.join(self.directory or '.', f'{language}.txt')


def _normalize(entries: Iterable[str]) -> Set[str]:
    return {w.strip().upper() for w in entries if w.strip()}
