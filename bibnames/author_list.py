"""
Author List Parsing and Formatting Module

This module turns BibTeX ``author``/``editor`` fields into immutable, structured author lists
and renders them in the formats citation styles need.

## Overview

```python
from bibnames.author_list import AuthorList, fix_author_natbib

authors = AuthorList.parse("John von Neumann and Black Brown, Peter")
authors.size()                                   # 2
authors.get_author(0).name_prefix                # "von"
authors.get_as_natbib()                          # "von Neumann and Black Brown"
authors.get_as_first_last_names(True, False)     # "J. von Neumann and P. Black Brown"

fix_author_natbib("John Smith and Peter Black Brown and Jane Doe")  # "Smith et al."

# LaTeX markup resolved to Unicode
AuthorList.parse("K. G{\\\"{o}}del").latex_free().get_as_natbib()      # "Gödel"
```

## Architecture

- **AuthorListParser** (`bibnames.parser`): splitting on "and" and the three BibTeX name forms
- **Author** (`bibnames.author`): one person or institution, immutable
- **AuthorList**: ordered, immutable sequence of authors with memoized `latex_free()`
- **AuthorListCache**: process-wide parse cache; the same text returns the same instance while
  any caller still holds it

## Error Handling

Parsing never raises: unbalanced braces and odd comma counts are parsed best effort.
The only error is `AuthorIndexError`, raised by `AuthorList.get_author` for an index outside
the list.
"""

from __future__ import annotations

import logging
import threading
import time
import weakref
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union, overload

from bibnames import formatting
from bibnames.author import Author
from bibnames.parser import AuthorListParser


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS AND RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


class AuthorIndexError(IndexError):
    """Raised when an author is requested at a position outside the list."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Author index {index} out of range for list of {size} author(s)")
        self.index = index
        self.size = size


@dataclass(frozen=True)
class CacheInfo:
    """Immutable cache information structure."""

    cache_size: int
    hits: int
    misses: int


# ════════════════════════════════════════════════════════════════════════════════
# AUTHOR LIST
# ════════════════════════════════════════════════════════════════════════════════

# Guards creation of the memoized latex-free counterpart
_latex_free_lock = threading.Lock()


class AuthorList(Sequence[Author]):
    """
    Immutable, ordered list of :class:`Author`.

    Two lists are equal when they hold equal authors in the same order. Build one with
    :meth:`parse` (cached) or :meth:`of`. ``et_al_suffix`` is the natbib abbreviation of the
    parser that built the list; it does not take part in equality.
    """

    __slots__ = ("_authors", "_et_al_suffix", "_latex_free", "_source", "__weakref__")

    def __init__(self, authors: Iterable[Author] = (), et_al_suffix: str = formatting.ET_AL):
        entries = tuple(authors)
        for author in entries:
            if not isinstance(author, Author):
                raise TypeError(f"AuthorList entries must be Author instances, got {type(author).__name__}")
        self._authors: Tuple[Author, ...] = entries
        self._et_al_suffix = et_al_suffix
        self._latex_free: Optional[AuthorList] = None
        self._source: Optional[AuthorList] = None

    @classmethod
    def of(cls, *authors: Union[Author, Iterable[Author]]) -> "AuthorList":
        """``AuthorList.of(a, b)`` or ``AuthorList.of([a, b])``."""
        if len(authors) == 1 and not isinstance(authors[0], Author):
            return cls(authors[0])
        return cls(authors)  # type: ignore[arg-type]

    @classmethod
    def parse(cls, text: str) -> "AuthorList":
        """Parse an author field, returning the cached instance for text when one is still alive."""
        return _get_global_cache().get(text)

    # Sequence protocol and queries

    def size(self) -> int:
        return len(self._authors)

    def is_empty(self) -> bool:
        return not self._authors

    def get_author(self, index: int) -> Author:
        if not 0 <= index < len(self._authors):
            raise AuthorIndexError(index, len(self._authors))
        return self._authors[index]

    def get_authors(self) -> List[Author]:
        return list(self._authors)

    @property
    def authors(self) -> Tuple[Author, ...]:
        return self._authors

    @property
    def et_al_suffix(self) -> str:
        return self._et_al_suffix

    def __len__(self) -> int:
        return len(self._authors)

    def __iter__(self) -> Iterator[Author]:
        return iter(self._authors)

    @overload
    def __getitem__(self, index: int) -> Author: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Author, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._authors[index]
        if index < 0:
            index += len(self._authors)
        return self.get_author(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthorList):
            return NotImplemented
        return self._authors == other._authors

    def __hash__(self) -> int:
        return hash(self._authors)

    def __repr__(self) -> str:
        return f"AuthorList({list(self._authors)!r})"

    # Markup normalization

    def latex_free(self) -> "AuthorList":
        """
        Counterpart of this list with LaTeX commands resolved and protective braces removed.

        Computed once per instance. The result is its own latex-free form and keeps this list
        alive, so ``AuthorList.parse(s).latex_free()`` stays stable while the result is held.
        """
        cached = self._latex_free
        if cached is not None:
            return cached
        with _latex_free_lock:
            if self._latex_free is None:
                normalized = AuthorList((author.latex_free() for author in self._authors), self._et_al_suffix)
                normalized._latex_free = normalized
                normalized._source = self
                self._latex_free = normalized
            return self._latex_free

    # Rendering

    def get_as_natbib(self) -> str:
        """Natbib form: "Smith", "Smith and Brown" or "Smith et al."."""
        return formatting.format_natbib(self, self._et_al_suffix)

    def get_as_last_names(self, oxford_comma: bool) -> str:
        return formatting.format_last_names(self, oxford_comma)

    def get_as_last_first_names(self, abbreviate: bool, oxford_comma: bool) -> str:
        return formatting.format_last_first(self, abbreviate, oxford_comma)

    def get_as_last_first_names_with_and(self, abbreviate: bool) -> str:
        return formatting.format_last_first_with_and(self, abbreviate)

    def get_as_first_last_names(self, abbreviate: bool, oxford_comma: bool) -> str:
        return formatting.format_first_last(self, abbreviate, oxford_comma)

    def get_as_first_last_names_with_and(self, abbreviate: bool = False) -> str:
        return formatting.format_first_last_with_and(self, abbreviate)

    def get_for_alphabetization(self) -> str:
        return formatting.format_for_alphabetization(self)

    def get_as_last_first_first_last_names_with_and(self, abbreviate: bool) -> str:
        return formatting.format_last_first_first_last_with_and(self, abbreviate)


# ════════════════════════════════════════════════════════════════════════════════
# PARSE CACHE
# ════════════════════════════════════════════════════════════════════════════════


class AuthorListCache:
    """
    Maps field text to its parsed :class:`AuthorList`.

    Values are held weakly: an entry disappears once no caller references the list, and a
    later parse of the same text builds a new, equal instance. Parsing happens outside the
    lock; the first instance stored for a text wins any race.
    """

    def __init__(self, parser: Optional[AuthorListParser] = None):
        self._parser = parser or AuthorListParser()
        self._entries: "weakref.WeakValueDictionary[str, AuthorList]" = weakref.WeakValueDictionary()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def parser(self) -> AuthorListParser:
        return self._parser

    def get(self, text: str) -> AuthorList:
        with self._lock:
            cached = self._entries.get(text)
            if cached is not None:
                self._hits += 1
                return cached
            self._misses += 1

        parsed = AuthorList(self._parser.parse(text), self._parser.config.et_al_suffix)

        with self._lock:
            return self._entries.setdefault(text, parsed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(cache_size=len(self._entries), hits=self._hits, misses=self._misses)


# ════════════════════════════════════════════════════════════════════════════════
# PERFORMANCE CHECK
# ════════════════════════════════════════════════════════════════════════════════


def run_performance_test() -> None:
    """Compare parse throughput for distinct fields against repeated (cached) fields."""
    import random

    given_names = ["John", "Mary", "Peter", "Anna", "Kurt", "Corrado", "Tse-tung", "José María", "H{e}lene"]
    family_names = ["Smith", "von Neumann", "Black Brown", "G{\\\"{o}}del", "B{\\\"o}hm", "de la Cruz", "Mao"]

    def generate_fields(count: int) -> List[str]:
        fields = []
        for index in range(count):
            names = []
            for _ in range(random.randint(1, 5)):
                given = random.choice(given_names)
                family = random.choice(family_names)
                names.append(f"{family}, {given}" if random.random() < 0.5 else f"{given} {family}")
            # index keeps every field distinct
            names.append(f"Author{index}")
            fields.append(" and ".join(names))
        return fields

    distinct_fields = generate_fields(1000)
    held = []

    print(f"Testing with {len(distinct_fields)} distinct fields...")
    start = time.perf_counter()
    for field in distinct_fields:
        held.append(AuthorList.parse(field))
    distinct_time = time.perf_counter() - start
    distinct_rate = len(distinct_fields) / distinct_time
    print(f"Distinct data: {len(distinct_fields)} fields in {distinct_time:.3f}s ({distinct_rate:.0f} fields/second)")

    repeated_fields = distinct_fields[:8] * 125
    print(f"\nTesting with {len(repeated_fields)} repeated fields...")
    start = time.perf_counter()
    for field in repeated_fields:
        AuthorList.parse(field)
    repeated_time = time.perf_counter() - start
    repeated_rate = len(repeated_fields) / repeated_time
    print(f"Repeated data: {len(repeated_fields)} fields in {repeated_time:.3f}s ({repeated_rate:.0f} fields/second)")

    print(f"\nCache benefit: {repeated_rate / distinct_rate:.1f}x speedup with repeated data")
    print(f"Cache info: {get_cache_info()}")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global cache instance for module-level functions
_global_cache: Optional[AuthorListCache] = None
_global_cache_lock = threading.Lock()


def _get_global_cache() -> AuthorListCache:
    """Get or create the global parse cache."""
    global _global_cache
    if _global_cache is None:
        with _global_cache_lock:
            if _global_cache is None:
                _global_cache = AuthorListCache()
    return _global_cache


def parse(text: str) -> AuthorList:
    """Module-level shortcut for :meth:`AuthorList.parse`."""
    return _get_global_cache().get(text)


def clear_cache() -> None:
    """Drop every cached author list."""
    _get_global_cache().clear()
    logging.info("Author list cache cleared")


def get_cache_info() -> CacheInfo:
    return _get_global_cache().get_cache_info()


def fix_author_natbib(authors: str) -> str:
    """
    Natbib form of an author field.

    Examples:
        "John Smith" -> "Smith"
        "John Smith and Black Brown, Peter" -> "Smith and Black Brown"
        "John von Neumann and John Smith and Black Brown, Peter" -> "von Neumann et al."
    """
    return parse(authors).get_as_natbib()


def fix_author_first_name_first_commas(authors: str, abbreviate: bool, oxford_comma: bool) -> str:
    """First-last names joined with commas: "John von Neumann, John Smith and Peter Black Brown"."""
    return parse(authors).get_as_first_last_names(abbreviate, oxford_comma)


def fix_author_first_name_first(authors: str) -> str:
    """First-last names joined with "and"."""
    return parse(authors).get_as_first_last_names_with_and()


def fix_author_last_name_first_commas(authors: str, abbreviate: bool, oxford_comma: bool) -> str:
    """Last-first names joined with commas: "von Neumann, John, Smith, John and Black Brown, Peter"."""
    return parse(authors).get_as_last_first_names(abbreviate, oxford_comma)


def fix_author_last_name_first(authors: str, abbreviate: bool = False) -> str:
    """Last-first names joined with "and"."""
    return parse(authors).get_as_last_first_names_with_and(abbreviate)


def fix_author_last_name_only_commas(authors: str, oxford_comma: bool) -> str:
    """Family names only: "von Neumann, Smith and Black Brown"."""
    return parse(authors).get_as_last_names(oxford_comma)


def fix_author_for_alphabetization(authors: str) -> str:
    """Sort key of an author field: "Neumann, J. and Smith, J. and Black Brown, Jr., P."."""
    return parse(authors).get_for_alphabetization()


# CLI entry point
if __name__ == "__main__":
    run_performance_test()
