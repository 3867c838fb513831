"""
Brace-aware scanning of LaTeX-flavoured name strings.

Every structural decision made on an author field (splitting on "and", on commas, on
whitespace and hyphens) must ignore delimiters that sit inside a brace group or inside an
escape command such as ``\\-`` or ``\\,``. This module computes that information once per
string so the splitter, the name tokenizer and the LaTeX converter all share it.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple


def is_ascii_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


@dataclass(frozen=True)
class ScanResult:
    """Per-position brace depth and escape-command membership of a string."""

    text: str
    depths: Tuple[int, ...]
    in_command: Tuple[bool, ...]
    command_spans: Mapping[int, int]
    unmatched_closing: FrozenSet[int]
    balanced: bool

    def is_top_level(self, index: int) -> bool:
        """True when the character at index is a depth-0 character outside any escape command."""
        return self.depths[index] == 0 and not self.in_command[index]

    def group_depth(self, index: int) -> int:
        """Depth of the group the character at index belongs to; a brace belongs to the group it delimits."""
        if self.is_brace(index, "{"):
            return self.depths[index] + 1
        if self.is_brace(index, "}") and index not in self.unmatched_closing:
            return self.depths[index] + 1
        return self.depths[index]

    def command_end_at(self, index: int) -> Optional[int]:
        """End (exclusive) of the escape command starting at index, if one starts there."""
        return self.command_spans.get(index)

    def command_name_at(self, index: int) -> Optional[str]:
        end = self.command_spans.get(index)
        if end is None:
            return None
        return self.text[index + 1 : end]

    def is_brace(self, index: int, brace: str) -> bool:
        return self.text[index] == brace and not self.in_command[index]

    def closing_brace(self, index: int) -> Optional[int]:
        """Index of the brace closing the group opened at index, or None if it never closes."""
        if not self.is_brace(index, "{"):
            return None
        depth = self.depths[index]
        for position in range(index + 1, len(self.text)):
            if self.is_brace(position, "}") and self.depths[position] == depth:
                return position
        return None


@lru_cache(maxsize=4096)
def scan(text: str) -> ScanResult:
    """
    Scan text once, recording brace depth and escape-command boundaries.

    An escape command is a backslash followed by a run of ASCII letters (``\\relax``) or by
    exactly one other character (``\\'``, ``\\{``). The depth reported for ``{`` is the depth
    outside the group it opens, the depth for ``}`` is the depth after it closes. Unmatched
    closing braces leave the depth at 0.
    """
    length = len(text)
    in_command = [False] * length
    spans = {}

    position = 0
    while position < length:
        if text[position] == "\\" and position + 1 < length:
            end = position + 1
            if is_ascii_letter(text[end]):
                while end < length and is_ascii_letter(text[end]):
                    end += 1
            else:
                end += 1
            spans[position] = end
            for inside in range(position, end):
                in_command[inside] = True
            position = end
        else:
            position += 1

    depths = []
    depth = 0
    unmatched = set()
    for position, char in enumerate(text):
        if in_command[position]:
            depths.append(depth)
        elif char == "{":
            depths.append(depth)
            depth += 1
        elif char == "}":
            if depth > 0:
                depth -= 1
            else:
                unmatched.add(position)
            depths.append(depth)
        else:
            depths.append(depth)

    return ScanResult(
        text=text,
        depths=tuple(depths),
        in_command=tuple(in_command),
        command_spans=MappingProxyType(spans),
        unmatched_closing=frozenset(unmatched),
        balanced=not unmatched and depth == 0,
    )
