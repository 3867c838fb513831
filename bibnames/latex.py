"""
LaTeX to Unicode conversion for name parts.

Resolves accent commands (``\\"o``, ``{\\={a}}``, ``\\d{h}``), special letters (``\\L{}``,
``\\ss``), escaped symbols (``\\&``) and drops the remaining protective braces, producing the
plain text used by :meth:`bibnames.author_list.AuthorList.latex_free`.
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import List, Optional, Tuple

from bibnames.latex_data import ACCENT_COMMANDS, DOTLESS_BASES, ESCAPED_SYMBOLS, SPECIAL_LETTERS, TEXT_SYMBOLS
from bibnames.scanner import ScanResult, is_ascii_letter, scan

NO_BREAK_SPACE = "\u00a0"


class LatexToUnicodeService:
    """Pure converter from LaTeX-encoded name text to NFC-normalized Unicode."""

    def apply(self, text: str) -> str:
        if not any(char in text for char in "\\{}~"):
            return unicodedata.normalize("NFC", text)
        result = scan(text)
        converted = self._convert(result, 0, len(text))
        return unicodedata.normalize("NFC", converted)

    def _convert(self, result: ScanResult, start: int, end: int) -> str:
        text = result.text
        pieces: List[str] = []
        position = start
        while position < end:
            char = text[position]
            if char == "\\" and result.command_end_at(position) is not None:
                converted, position = self._read_command(result, position, end)
                pieces.append(converted)
            elif char in "{}":
                position += 1
            elif char == "~":
                pieces.append(NO_BREAK_SPACE)
                position += 1
            elif char == "\\":
                # lone trailing backslash
                position += 1
            else:
                pieces.append(char)
                position += 1
        return "".join(pieces)

    def _read_command(self, result: ScanResult, start: int, end: int) -> Tuple[str, int]:
        """Convert the escape command at start, returning its text and the position after it."""
        name = result.command_name_at(start) or ""
        position = min(result.command_end_at(start) or start + 1, end)
        is_word = is_ascii_letter(name[0]) if name else False

        if name in ACCENT_COMMANDS:
            position = self._skip_spaces(result.text, position, end)
            argument, position = self._read_argument(result, position, end)
            return self._accent(argument, ACCENT_COMMANDS[name]), position

        if name in SPECIAL_LETTERS:
            return SPECIAL_LETTERS[name], self._skip_terminator(result.text, position, end)

        if name in TEXT_SYMBOLS:
            return TEXT_SYMBOLS[name], self._skip_terminator(result.text, position, end)

        if not is_word:
            return ESCAPED_SYMBOLS.get(name, ""), position

        # unknown control word (\relax, \textit, \emph ...): keep only its argument text
        return "", self._skip_spaces(result.text, position, end)

    def _read_argument(self, result: ScanResult, position: int, end: int) -> Tuple[str, int]:
        if position >= end:
            return "", position
        char = result.text[position]
        if char == "{" and not result.in_command[position]:
            closing: Optional[int] = result.closing_brace(position)
            if closing is None or closing >= end:
                return self._convert(result, position + 1, end), end
            return self._convert(result, position + 1, closing), closing + 1
        if char == "\\" and result.command_end_at(position) is not None:
            return self._read_command(result, position, end)
        return char, position + 1

    @staticmethod
    def _accent(argument: str, mark: str) -> str:
        if not argument:
            return ""
        base = DOTLESS_BASES.get(argument[0], argument[0])
        return base + mark + argument[1:]

    @staticmethod
    def _skip_spaces(text: str, position: int, end: int) -> int:
        while position < end and text[position] == " ":
            position += 1
        return position

    def _skip_terminator(self, text: str, position: int, end: int) -> int:
        if text.startswith("{}", position) and position + 2 <= end:
            return position + 2
        return self._skip_spaces(text, position, end)


# Shared converter instance for module-level use
_global_converter: Optional[LatexToUnicodeService] = None


def _get_global_converter() -> LatexToUnicodeService:
    global _global_converter
    if _global_converter is None:
        _global_converter = LatexToUnicodeService()
    return _global_converter


@lru_cache(maxsize=8192)
def _convert_cached(text: str) -> str:
    return _get_global_converter().apply(text)


def latex_to_unicode(text: Optional[str]) -> Optional[str]:
    """Convert one name part; absent parts stay absent and parts that convert to nothing become absent."""
    if text is None:
        return None
    converted = _convert_cached(text)
    return converted if converted else None
