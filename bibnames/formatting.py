"""
Citation-style rendering of author lists.

Every function takes any sequence of :class:`~bibnames.author.Author` (normally an
:class:`~bibnames.author_list.AuthorList`) and returns a string; an empty sequence always
renders as ``""``. Institutions only carry a family name, so they come out unchanged.

Examples for ``"John von Neumann and John Smith and Peter Black Brown"``:

- natbib: ``von Neumann et al.``
- last names: ``von Neumann, Smith and Black Brown``
- last-first: ``von Neumann, John, Smith, John and Black Brown, Peter``
- first-last, abbreviated, Oxford comma: ``J. von Neumann, J. Smith, and P. Black Brown``
- alphabetization: ``Neumann, J. and Smith, J. and Brown, P. B.``
"""

from __future__ import annotations

from typing import List, Sequence

from bibnames.author import Author

ET_AL = " et al."


def join_names(names: List[str], oxford_comma: bool = False) -> str:
    """Join with ", " and a final " and "; the final separator is ", and " for Oxford style with three or more."""
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    last_separator = ", and " if oxford_comma and len(names) > 2 else " and "
    return ", ".join(names[:-1]) + last_separator + names[-1]


def format_natbib(authors: Sequence[Author], et_al: str = ET_AL) -> str:
    if not authors:
        return ""
    first = authors[0].get_name_prefix_and_family_name()
    if len(authors) == 1:
        return first
    if len(authors) == 2:
        return f"{first} and {authors[1].get_name_prefix_and_family_name()}"
    return first + et_al


def format_last_names(authors: Sequence[Author], oxford_comma: bool = False) -> str:
    return join_names([author.get_name_prefix_and_family_name() for author in authors], oxford_comma)


def format_last_first(authors: Sequence[Author], abbreviate: bool = False, oxford_comma: bool = False) -> str:
    return join_names([author.get_family_given(abbreviate) for author in authors], oxford_comma)


def format_last_first_with_and(authors: Sequence[Author], abbreviate: bool = False) -> str:
    return " and ".join(author.get_family_given(abbreviate) for author in authors)


def format_first_last(authors: Sequence[Author], abbreviate: bool = False, oxford_comma: bool = False) -> str:
    return join_names([author.get_given_family(abbreviate) for author in authors], oxford_comma)


def format_first_last_with_and(authors: Sequence[Author], abbreviate: bool = False) -> str:
    return " and ".join(author.get_given_family(abbreviate) for author in authors)


def format_for_alphabetization(authors: Sequence[Author]) -> str:
    return " and ".join(author.get_name_for_alphabetization() for author in authors)


def format_last_first_first_last_with_and(authors: Sequence[Author], abbreviate: bool = False) -> str:
    """First author last-first, every other author first-last: "Doe, J. and M. Smith"."""
    if not authors:
        return ""
    names = [authors[0].get_family_given(abbreviate)]
    names.extend(author.get_given_family(abbreviate) for author in authors[1:])
    return " and ".join(names)
