"""Word-level tokenization of a single name."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence, Union

from bibnames.latex_data import TEX_LETTER_NAMES
from bibnames.scanner import ScanResult, scan

# Marker emitted for a top-level comma
COMMA = ","

WORD_SEPARATORS = "~-"


@dataclass(frozen=True)
class NameToken:
    """One word of a name together with its initial and the separator that ended it."""

    text: str
    abbreviation: str
    term: str
    upper_case: bool


def is_han(char: str) -> bool:
    return unicodedata.name(char, "").startswith("CJK UNIFIED IDEOGRAPH")


def _is_separator(result: ScanResult, index: int, include_comma: bool) -> bool:
    if not result.is_top_level(index):
        return False
    char = result.text[index]
    return char.isspace() or char in WORD_SEPARATORS or (include_comma and char == ",")


def _make_token(
    result: ScanResult, start: int, end: int, term: str, tex_letter_names: AbstractSet[str], han_is_upper: bool
) -> NameToken:
    text = result.text
    base = result.depths[start]
    group_start = start
    first_letter_found = False
    abbreviation_end: Optional[int] = None
    upper_case = True
    command_end = -1
    command_name: Optional[str] = None

    for position in range(start, end):
        char = text[position]
        level = result.group_depth(position) - base
        opens_group = result.is_brace(position, "{")
        if opens_group and result.depths[position] == base:
            group_start = position

        if first_letter_found and abbreviation_end is None and (level == 0 or opens_group):
            abbreviation_end = position

        letter_level: Optional[int] = None
        if not first_letter_found and not result.in_command[position] and char.isalpha():
            if level == 0:
                upper_case = char.isupper() or (han_is_upper and is_han(char))
            else:
                # letters protected by braces always count as capitals
                upper_case = True
            letter_level = level

        if command_name is not None and position == command_end:
            if not first_letter_found and letter_level is None and command_name in tex_letter_names:
                upper_case = command_name[0].isupper()
                letter_level = level
            command_name = None

        if letter_level is not None:
            first_letter_found = True
            if letter_level > 0:
                # a braced group is one letter: the initial is the whole top-level group
                closing = result.closing_brace(group_start)
                abbreviation_end = closing + 1 if closing is not None and closing < end else end

        span_end = result.command_end_at(position)
        if span_end is not None:
            command_end = span_end
            name = text[position + 1 : span_end]
            command_name = name if is_ascii_word(name) else None

    abbreviation = text[start:abbreviation_end] if abbreviation_end is not None else text[start:end]
    return NameToken(text=text[start:end], abbreviation=abbreviation, term=term, upper_case=upper_case)


def is_ascii_word(name: str) -> bool:
    return bool(name) and name.isascii() and name.isalpha()


def tokenize(
    text: str, tex_letter_names: AbstractSet[str] = TEX_LETTER_NAMES, han_is_upper: bool = True
) -> List[Union[NameToken, str]]:
    """
    Split one name into words and top-level commas.

    Words end at top-level whitespace, ``~``, ``-`` or ``,``. A word ended by a hyphen carries
    the term ``"-"`` so that "Tse-tung" and "al-Khwārizmī" can be put back together.
    """
    result = scan(text)
    length = len(text)
    items: List[Union[NameToken, str]] = []
    position = 0
    while True:
        while position < length and _is_separator(result, position, include_comma=False):
            position += 1
        if position >= length:
            break
        if text[position] == "," and result.is_top_level(position):
            items.append(COMMA)
            position += 1
            continue
        start = position
        while position < length and not _is_separator(result, position, include_comma=True):
            position += 1
        term = "-" if position < length and text[position] == "-" else " "
        items.append(_make_token(result, start, position, term, tex_letter_names, han_is_upper))
    return items


def words_of(items: Sequence[Union[NameToken, str]]) -> List[NameToken]:
    return [item for item in items if isinstance(item, NameToken)]


def join_tokens(tokens: Sequence[NameToken], abbreviated: bool = False) -> Optional[str]:
    """Join words with the separators that originally followed them."""
    if not tokens:
        return None
    pieces = []
    for index, token in enumerate(tokens):
        pieces.append(token.abbreviation + "." if abbreviated else token.text)
        if index < len(tokens) - 1:
            pieces.append(token.term)
    return "".join(pieces)


def abbreviate(given_name: Optional[str]) -> Optional[str]:
    """Initials of a given name, e.g. "John Peter" -> "J. P.", "Tse-tung" -> "T.-t."."""
    if not given_name:
        return None
    return join_tokens(words_of(tokenize(given_name)), abbreviated=True)
