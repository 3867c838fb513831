"""
Parsing of BibTeX author and editor fields.

A field such as ``"John von Neumann and Black Brown, Peter"`` is split on the top-level word
"and", and each name is read in one of the three BibTeX forms, chosen by its top-level comma
count:

- 0 commas: ``First von Last``
- 1 comma: ``von Last, First``
- 2 or more commas: ``von Last, Jr, First``

A name wrapped as a whole in braces (``{JabRef Developers}``) is an institution and is kept
as one literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import FrozenSet, List, Optional, Sequence

from bibnames.author import Author
from bibnames.latex_data import TEX_LETTER_NAMES
from bibnames.scanner import ScanResult, scan
from bibnames.tokenizer import COMMA, NameToken, join_tokens, tokenize


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NameParserConfig:
    """Immutable parser settings."""

    # Commands such as \L or \aa that spell a letter and so decide the case of a word
    tex_letter_names: FrozenSet[str]

    # Han ideographs have no case; treat them as capitals so they can start a family name
    han_is_upper_case: bool

    # Remove braces that only protect a part, e.g. "{van den Bergen}" -> "van den Bergen"
    strip_protective_braces: bool

    # Appended to the first family name when natbib abbreviates three or more authors
    et_al_suffix: str

    @classmethod
    def create_default(cls) -> "NameParserConfig":
        return cls(
            tex_letter_names=TEX_LETTER_NAMES,
            han_is_upper_case=True,
            strip_protective_braces=True,
            et_al_suffix=" et al.",
        )

    def with_han_is_upper_case(self, han_is_upper_case: bool) -> "NameParserConfig":
        return replace(self, han_is_upper_case=han_is_upper_case)

    def with_strip_protective_braces(self, strip_protective_braces: bool) -> "NameParserConfig":
        return replace(self, strip_protective_braces=strip_protective_braces)

    def with_et_al_suffix(self, et_al_suffix: str) -> "NameParserConfig":
        return replace(self, et_al_suffix=et_al_suffix)


# ════════════════════════════════════════════════════════════════════════════════
# BRACE HELPERS
# ════════════════════════════════════════════════════════════════════════════════


def has_proper_brackets(text: str) -> bool:
    """True when every closing brace in text matches an earlier opening brace and none stay open."""
    return scan(text).balanced


def _unwrap(text: str) -> str:
    if len(text) > 2 and text.startswith("{") and text.endswith("}"):
        inner = text[1:-1]
        if has_proper_brackets(inner):
            return inner
    return text


def remove_start_and_end_braces(name: Optional[str]) -> Optional[str]:
    """
    Remove braces that wrap a whole word or the whole part.

    "{Vall{\\'e}e} {Poussin}" -> "Vall{\\'e}e Poussin", while "{A}bbb{c}" is left alone because
    stripping its outer characters would unbalance it.
    """
    if not name:
        return name
    words = [_unwrap(word) for word in name.split(" ")]
    return _unwrap(" ".join(words))


# ════════════════════════════════════════════════════════════════════════════════
# PARSER
# ════════════════════════════════════════════════════════════════════════════════


class AuthorListParser:
    """Splits an author field into names and parses each name into an :class:`Author`."""

    def __init__(self, config: Optional[NameParserConfig] = None):
        self._config = config or NameParserConfig.create_default()

    @property
    def config(self) -> NameParserConfig:
        return self._config

    def split(self, text: str) -> List[str]:
        """Split a field on the top-level, whitespace-bounded word "and" (any case)."""
        if not text or text.isspace():
            return []
        result = scan(text)
        length = len(text)
        pieces = []
        segment_start = 0
        position = 0
        while position + 3 <= length:
            if self._is_and_at(result, position):
                pieces.append(text[segment_start:position])
                segment_start = position + 3
                position += 3
            else:
                position += 1
        pieces.append(text[segment_start:])
        return [piece.strip() for piece in pieces if piece.strip()]

    @staticmethod
    def _is_and_at(result: ScanResult, position: int) -> bool:
        text = result.text
        if text[position : position + 3].lower() != "and":
            return False
        if not all(result.is_top_level(index) for index in range(position, position + 3)):
            return False
        before_ok = position == 0 or text[position - 1].isspace()
        after = position + 3
        after_ok = after == len(text) or text[after].isspace()
        return before_ok and after_ok

    def parse(self, text: str) -> List[Author]:
        """Parse every name of a field; empty names are skipped."""
        authors = []
        for name in self.split(text):
            author = self.parse_one(name)
            if author is not None:
                authors.append(author)
        return authors

    def parse_one(self, name: str) -> Optional[Author]:
        """Parse a single name. Returns None only when the name holds no words at all."""
        name = name.strip()
        if not name:
            return None

        result = scan(name)
        if not result.balanced:
            logging.debug(f"Unbalanced braces in name {name!r}, parsing best effort")

        if self.is_institution_name(name):
            return Author(family_name=name, institution=True)

        items = tokenize(
            name, tex_letter_names=self._config.tex_letter_names, han_is_upper=self._config.han_is_upper_case
        )
        segments: List[List[NameToken]] = [[]]
        for item in items:
            if item == COMMA:
                segments.append([])
            elif isinstance(item, NameToken):
                segments[-1].append(item)

        if not any(segments):
            return None

        if len(segments) == 1:
            author = self._parse_first_von_last(segments[0])
        elif not segments[0]:
            # nothing before the first comma: read the remaining words as "First von Last"
            author = self._parse_first_von_last([token for segment in segments for token in segment])
        else:
            author = self._parse_von_last_first(segments)
        return self._strip_braces(author)

    @staticmethod
    def is_institution_name(name: str) -> bool:
        """True when the whole name is one brace group (or an opening brace that never closes)."""
        if not name.startswith("{"):
            return False
        closing = scan(name).closing_brace(0)
        return closing is None or closing == len(name) - 1

    @staticmethod
    def _find_von_start(tokens: Sequence[NameToken]) -> Optional[int]:
        """Index of the first lower-case word that is not joined to its neighbour by a hyphen."""
        for index, token in enumerate(tokens):
            if token.upper_case:
                continue
            if token.term == "-":
                continue
            if index > 0 and tokens[index - 1].term == "-":
                continue
            return index
        return None

    def _parse_first_von_last(self, tokens: List[NameToken]) -> Author:
        von_start = self._find_von_start(tokens)
        if von_start is None:
            family_start = len(tokens) - 1
            if family_start > 0 and tokens[family_start - 1].term == "-":
                family_start -= 1
            return self._build(given=tokens[:family_start], von=[], family=tokens[family_start:], suffix=[])

        family_start = next(
            (index for index in range(von_start + 1, len(tokens)) if tokens[index].upper_case),
            None,
        )
        if family_start is None:
            # a family name is never empty: the last lower-case word takes that role
            family_start = len(tokens) - 1
        return self._build(
            given=tokens[:von_start],
            von=tokens[von_start:family_start],
            family=tokens[family_start:],
            suffix=[],
        )

    def _parse_von_last_first(self, segments: List[List[NameToken]]) -> Author:
        von_last = segments[0]
        if len(segments) == 2:
            suffix: List[NameToken] = []
            given_segments = segments[1:]
        else:
            suffix = segments[1]
            given_segments = segments[2:]

        von: List[NameToken] = []
        family = von_last
        # only a lower-case first word opens a "von" part in the comma forms
        if von_last and self._find_von_start(von_last) == 0:
            family_start = next(
                (index for index in range(1, len(von_last)) if von_last[index].upper_case),
                len(von_last) - 1,
            )
            von = von_last[:family_start]
            family = von_last[family_start:]

        given_parts = [join_tokens(segment) for segment in given_segments if segment]
        given_abbreviations = [join_tokens(segment, abbreviated=True) for segment in given_segments if segment]
        return Author(
            given_name=", ".join(part for part in given_parts if part) or None,
            given_name_abbreviated=" ".join(part for part in given_abbreviations if part) or None,
            name_prefix=join_tokens(von),
            family_name=join_tokens(family),
            name_suffix=join_tokens(suffix),
        )

    @staticmethod
    def _build(
        given: Sequence[NameToken], von: Sequence[NameToken], family: Sequence[NameToken], suffix: Sequence[NameToken]
    ) -> Author:
        return Author(
            given_name=join_tokens(given),
            given_name_abbreviated=join_tokens(given, abbreviated=True),
            name_prefix=join_tokens(von),
            family_name=join_tokens(family),
            name_suffix=join_tokens(suffix),
        )

    def _strip_braces(self, author: Author) -> Author:
        if not self._config.strip_protective_braces:
            return author
        return Author(
            given_name=remove_start_and_end_braces(author.given_name),
            given_name_abbreviated=author.given_name_abbreviated,
            name_prefix=remove_start_and_end_braces(author.name_prefix),
            family_name=remove_start_and_end_braces(author.family_name),
            name_suffix=remove_start_and_end_braces(author.name_suffix),
        )
