"""Immutable value type for one person or institution in an author field."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from bibnames.latex import latex_to_unicode
from bibnames.scanner import scan
from bibnames.tokenizer import abbreviate as abbreviate_given_name


@dataclass(frozen=True)
class Author:
    """
    One entry of an author list.

    Parts follow the BibTeX naming: ``given_name`` ("First"), ``name_prefix`` ("von"),
    ``family_name`` ("Last") and ``name_suffix`` ("Jr"). An institution is an entry whose only
    part is a brace-wrapped ``family_name`` such as ``"{JabRef Developers}"``; the ``institution``
    flag records this and survives :meth:`latex_free`, which removes the braces.

    Equality and hashing use the four parts. ``given_name_abbreviated`` is derived data; it is
    computed from ``given_name`` when not supplied.
    """

    given_name: Optional[str] = None
    given_name_abbreviated: Optional[str] = field(default=None, compare=False)
    name_prefix: Optional[str] = None
    family_name: Optional[str] = None
    name_suffix: Optional[str] = None
    institution: bool = field(default=False, compare=False)

    def __post_init__(self):
        if self.given_name_abbreviated is None and self.given_name:
            object.__setattr__(self, "given_name_abbreviated", abbreviate_given_name(self.given_name))
        if not self.institution and self._is_brace_wrapped_literal():
            object.__setattr__(self, "institution", True)

    def _is_brace_wrapped_literal(self) -> bool:
        return (
            self.given_name is None
            and self.name_prefix is None
            and self.name_suffix is None
            and self.family_name is not None
            and self.family_name.startswith("{")
            and scan(self.family_name).closing_brace(0) == len(self.family_name) - 1
        )

    def is_institution(self) -> bool:
        return self.institution

    def get_name_prefix_and_family_name(self) -> str:
        """The family name preceded by its "von" part, e.g. "von Neumann"."""
        if self.name_prefix is None:
            return self.family_name or ""
        if self.family_name is None:
            return self.name_prefix
        return f"{self.name_prefix} {self.family_name}"

    def get_family_given(self, abbreviate: bool) -> str:
        """Last-first form: "von Last, Jr, First"."""
        if self.institution:
            return self.family_name or ""
        parts = [self.get_name_prefix_and_family_name()]
        if self.name_suffix is not None:
            parts.append(self.name_suffix)
        given = self.given_name_abbreviated if abbreviate else self.given_name
        if given is not None:
            parts.append(given)
        return ", ".join(parts)

    def get_given_family(self, abbreviate: bool) -> str:
        """First-last form: "First von Last, Jr"."""
        if self.institution:
            return self.family_name or ""
        given = self.given_name_abbreviated if abbreviate else self.given_name
        result = self.get_name_prefix_and_family_name()
        if given is not None:
            result = f"{given} {result}"
        if self.name_suffix is not None:
            result = f"{result}, {self.name_suffix}"
        return result

    def get_name_for_alphabetization(self) -> str:
        """Sort key without the "von" part: "Neumann, Jr, J."."""
        if self.institution:
            return self.family_name or ""
        parts = []
        if self.family_name is not None:
            parts.append(self.family_name)
        if self.name_suffix is not None:
            parts.append(self.name_suffix)
        if self.given_name_abbreviated is not None:
            parts.append(self.given_name_abbreviated)
        return ", ".join(parts)

    def latex_free(self) -> "Author":
        """Copy of this entry with LaTeX commands resolved and protective braces removed."""
        return Author(
            given_name=latex_to_unicode(self.given_name),
            given_name_abbreviated=latex_to_unicode(self.given_name_abbreviated),
            name_prefix=latex_to_unicode(self.name_prefix),
            family_name=latex_to_unicode(self.family_name),
            name_suffix=latex_to_unicode(self.name_suffix),
            institution=self.institution,
        )
