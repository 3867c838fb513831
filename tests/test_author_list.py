"""
Test Suite for Author Lists

Rendering expectations follow the punctuation of the classic BibTeX citation formats: natbib
("Smith et al."), last-first and first-last lists with and without the Oxford comma,
alphabetization keys and the mixed last-first/first-last form.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import bibnames
sys.path.insert(0, str(Path(__file__).parent.parent))

from bibnames.author import Author
from bibnames.author_list import (
    AuthorIndexError,
    AuthorList,
    fix_author_first_name_first,
    fix_author_first_name_first_commas,
    fix_author_for_alphabetization,
    fix_author_last_name_first,
    fix_author_last_name_first_commas,
    fix_author_last_name_only_commas,
    fix_author_natbib,
)

MUHAMMAD_ALKHWARIZMI = Author(r"Mu{\d{h}}ammad", "M.", None, r"al-Khw{\={a}}rizm{\={i}}", None)
CORRADO_BOHM = Author("Corrado", "C.", None, r"B{\"o}hm", None)
KURT_GODEL = Author("Kurt", "K.", None, r"G{\"{o}}del", None)
BANU_MOSA = Author(None, None, None, r"{The Ban\={u} M\={u}s\={a} brothers}", None)

EMPTY_AUTHOR = AuthorList.of()
ONE_AUTHOR_WITH_LATEX = AuthorList.of(MUHAMMAD_ALKHWARIZMI)
TWO_AUTHORS_WITH_LATEX = AuthorList.of(MUHAMMAD_ALKHWARIZMI, CORRADO_BOHM)
THREE_AUTHORS_WITH_LATEX = AuthorList.of(MUHAMMAD_ALKHWARIZMI, CORRADO_BOHM, KURT_GODEL)
ONE_INSTITUTION_WITH_LATEX = AuthorList.of(BANU_MOSA)
ONE_INSTITUTION_WITH_STARTING_PARANTHESIS = AuthorList.of(
    Author(None, None, None, r"{{\L{}}ukasz Micha\l{}}", None)
)
TWO_INSTITUTIONS_WITH_LATEX = AuthorList.of(BANU_MOSA, BANU_MOSA)
MIXED_AUTHOR_AND_INSTITUTION_WITH_LATEX = AuthorList.of(BANU_MOSA, CORRADO_BOHM)

THREE_NAMES = "John von Neumann and John Smith and Black Brown, Peter"


# ════════════════════════════════════════════════════════════════════════════════
# NATBIB
# ════════════════════════════════════════════════════════════════════════════════

NATBIB_TEST_CASES = [
    ("", ""),
    ("John Smith", "Smith"),
    ("John Smith and Black Brown, Peter", "Smith and Black Brown"),
    (THREE_NAMES, "von Neumann et al."),
    ("First Second Last-Name and John Smith and Black Brown, Peter", "Last-Name et al."),
    ("{JabRef Developers}", "{JabRef Developers}"),
]


def test_fix_author_natbib():
    for field, expected in NATBIB_TEST_CASES:
        result = fix_author_natbib(field)
        assert result == expected, f"Failed for '{field}': expected {expected!r}, got {result!r}"
        assert AuthorList.parse(field).get_as_natbib() == expected


def test_natbib_latex_free():
    assert EMPTY_AUTHOR.latex_free().get_as_natbib() == ""
    assert ONE_AUTHOR_WITH_LATEX.latex_free().get_as_natbib() == "al-Khwārizmī"
    assert TWO_AUTHORS_WITH_LATEX.latex_free().get_as_natbib() == "al-Khwārizmī and Böhm"
    assert THREE_AUTHORS_WITH_LATEX.latex_free().get_as_natbib() == "al-Khwārizmī et al."
    assert ONE_INSTITUTION_WITH_LATEX.latex_free().get_as_natbib() == "The Banū Mūsā brothers"
    assert ONE_INSTITUTION_WITH_STARTING_PARANTHESIS.latex_free().get_as_natbib() == "Łukasz Michał"
    assert (
        TWO_INSTITUTIONS_WITH_LATEX.latex_free().get_as_natbib()
        == "The Banū Mūsā brothers and The Banū Mūsā brothers"
    )
    assert MIXED_AUTHOR_AND_INSTITUTION_WITH_LATEX.latex_free().get_as_natbib() == "The Banū Mūsā brothers and Böhm"


def test_natbib_keeps_latex_without_normalization():
    assert ONE_AUTHOR_WITH_LATEX.get_as_natbib() == r"al-Khw{\={a}}rizm{\={i}}"
    assert ONE_INSTITUTION_WITH_LATEX.get_as_natbib() == r"{The Ban\={u} M\={u}s\={a} brothers}"


# ════════════════════════════════════════════════════════════════════════════════
# LAST NAME FIRST
# ════════════════════════════════════════════════════════════════════════════════


def test_fix_author_last_name_first_commas_no_comma():
    assert fix_author_last_name_first_commas("", False, False) == ""
    assert fix_author_last_name_first_commas("", True, False) == ""
    assert fix_author_last_name_first_commas("John Smith", False, False) == "Smith, John"
    assert fix_author_last_name_first_commas("John Smith", True, False) == "Smith, J."
    assert (
        fix_author_last_name_first_commas("John Smith and Black Brown, Peter", False, False)
        == "Smith, John and Black Brown, Peter"
    )
    assert (
        fix_author_last_name_first_commas("John Smith and Black Brown, Peter", True, False)
        == "Smith, J. and Black Brown, P."
    )
    assert (
        fix_author_last_name_first_commas(THREE_NAMES, False, False)
        == "von Neumann, John, Smith, John and Black Brown, Peter"
    )
    assert (
        fix_author_last_name_first_commas(THREE_NAMES, True, False) == "von Neumann, J., Smith, J. and Black Brown, P."
    )
    assert fix_author_last_name_first_commas("John Peter von Neumann", True, False) == "von Neumann, J. P."


def test_fix_author_last_name_first_commas_oxford_comma():
    assert fix_author_last_name_first_commas("John Smith", False, True) == "Smith, John"
    assert (
        fix_author_last_name_first_commas("John Smith and Black Brown, Peter", False, True)
        == "Smith, John and Black Brown, Peter"
    )
    assert (
        fix_author_last_name_first_commas(THREE_NAMES, False, True)
        == "von Neumann, John, Smith, John, and Black Brown, Peter"
    )
    assert (
        fix_author_last_name_first_commas(THREE_NAMES, True, True) == "von Neumann, J., Smith, J., and Black Brown, P."
    )


def test_last_first_latex_free():
    assert ONE_AUTHOR_WITH_LATEX.latex_free().get_as_last_first_names(False, False) == "al-Khwārizmī, Muḥammad"
    assert ONE_AUTHOR_WITH_LATEX.latex_free().get_as_last_first_names(True, False) == "al-Khwārizmī, M."
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_last_first_names(False, True)
        == "al-Khwārizmī, Muḥammad, Böhm, Corrado, and Gödel, Kurt"
    )
    assert ONE_INSTITUTION_WITH_LATEX.latex_free().get_as_last_first_names(True, False) == "The Banū Mūsā brothers"


def test_fix_author_last_name_first():
    assert fix_author_last_name_first("John Smith") == "Smith, John"
    assert fix_author_last_name_first("John Smith and Black Brown, Peter") == "Smith, John and Black Brown, Peter"
    assert fix_author_last_name_first(THREE_NAMES) == "von Neumann, John and Smith, John and Black Brown, Peter"
    assert fix_author_last_name_first("von Last, Jr ,First") == "von Last, Jr, First"
    assert fix_author_last_name_first("von Last, Jr ,First", True) == "von Last, Jr, F."


def test_last_first_with_and_latex_free():
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_last_first_names_with_and(False)
        == "al-Khwārizmī, Muḥammad and Böhm, Corrado and Gödel, Kurt"
    )
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_last_first_names_with_and(True)
        == "al-Khwārizmī, M. and Böhm, C. and Gödel, K."
    )


# ════════════════════════════════════════════════════════════════════════════════
# FIRST NAME FIRST
# ════════════════════════════════════════════════════════════════════════════════


def test_fix_author_first_name_first_commas():
    assert fix_author_first_name_first_commas("", False, False) == ""
    assert fix_author_first_name_first_commas("John Smith", False, False) == "John Smith"
    assert fix_author_first_name_first_commas("John Smith", True, False) == "J. Smith"
    assert (
        fix_author_first_name_first_commas("John Smith and Black Brown, Peter", False, False)
        == "John Smith and Peter Black Brown"
    )
    assert (
        fix_author_first_name_first_commas("John Smith and Black Brown, Peter", True, False)
        == "J. Smith and P. Black Brown"
    )
    assert (
        fix_author_first_name_first_commas(THREE_NAMES, False, False)
        == "John von Neumann, John Smith and Peter Black Brown"
    )
    assert fix_author_first_name_first_commas(THREE_NAMES, True, False) == "J. von Neumann, J. Smith and P. Black Brown"
    assert (
        fix_author_first_name_first_commas(THREE_NAMES, False, True)
        == "John von Neumann, John Smith, and Peter Black Brown"
    )
    assert fix_author_first_name_first_commas(THREE_NAMES, True, True) == "J. von Neumann, J. Smith, and P. Black Brown"
    assert fix_author_first_name_first_commas("John Peter von Neumann", True, False) == "J. P. von Neumann"


def test_fix_author_first_name_first():
    assert fix_author_first_name_first("John Smith") == "John Smith"
    assert fix_author_first_name_first("John Smith and Black Brown, Peter") == "John Smith and Peter Black Brown"
    assert fix_author_first_name_first(THREE_NAMES) == "John von Neumann and John Smith and Peter Black Brown"
    assert fix_author_first_name_first("von Last, Jr. III, First") == "First von Last, Jr. III"


def test_first_last_latex_free():
    assert ONE_AUTHOR_WITH_LATEX.latex_free().get_as_first_last_names(False, False) == "Muḥammad al-Khwārizmī"
    assert ONE_AUTHOR_WITH_LATEX.latex_free().get_as_first_last_names(True, False) == "M. al-Khwārizmī"
    assert (
        TWO_AUTHORS_WITH_LATEX.latex_free().get_as_first_last_names(False, False)
        == "Muḥammad al-Khwārizmī and Corrado Böhm"
    )
    assert ONE_INSTITUTION_WITH_LATEX.latex_free().get_as_first_last_names(True, False) == "The Banū Mūsā brothers"
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_first_last_names_with_and()
        == "Muḥammad al-Khwārizmī and Corrado Böhm and Kurt Gödel"
    )


def test_first_last_abbreviated_without_von():
    authors = AuthorList.parse("The Banū Mūsā brothers")
    assert authors.get_as_first_last_names(True, False) == "T. B. M. brothers"


# ════════════════════════════════════════════════════════════════════════════════
# LAST NAMES ONLY, ALPHABETIZATION, MIXED FORM
# ════════════════════════════════════════════════════════════════════════════════


def test_fix_author_last_name_only_commas():
    assert fix_author_last_name_only_commas("", False) == ""
    assert fix_author_last_name_only_commas("John Smith", False) == "Smith"
    assert fix_author_last_name_only_commas("Smith, Jr, John", False) == "Smith"
    assert fix_author_last_name_only_commas("John Smith and Black Brown, Peter", False) == "Smith and Black Brown"
    assert fix_author_last_name_only_commas(THREE_NAMES, False) == "von Neumann, Smith and Black Brown"
    assert fix_author_last_name_only_commas(THREE_NAMES, True) == "von Neumann, Smith, and Black Brown"
    assert fix_author_last_name_only_commas("John Smith and Black Brown, Peter", True) == "Smith and Black Brown"


def test_last_names_latex_free():
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_last_names(True) == "al-Khwārizmī, Böhm, and Gödel"
    ), "Oxford comma with three names"
    assert ONE_INSTITUTION_WITH_LATEX.latex_free().get_as_last_names(False) == "The Banū Mūsā brothers"


def test_fix_author_for_alphabetization():
    assert fix_author_for_alphabetization("John Smith") == "Smith, J."
    assert fix_author_for_alphabetization("John von Neumann") == "Neumann, J."
    assert fix_author_for_alphabetization("J. von Neumann") == "Neumann, J."
    assert (
        fix_author_for_alphabetization("John von Neumann and John Smith and de Black Brown, Jr., Peter")
        == "Neumann, J. and Smith, J. and Black Brown, Jr., P."
    )
    assert fix_author_for_alphabetization("Peter Black Brown") == "Brown, P. B."


def test_last_first_first_last_with_and():
    assert (
        THREE_AUTHORS_WITH_LATEX.get_as_last_first_first_last_names_with_and(True)
        == r"al-Khw{\={a}}rizm{\={i}}, M. and C. B{\"o}hm and K. G{\"{o}}del"
    )
    assert (
        THREE_AUTHORS_WITH_LATEX.latex_free().get_as_last_first_first_last_names_with_and(False)
        == "al-Khwārizmī, Muḥammad and Corrado Böhm and Kurt Gödel"
    )
    assert EMPTY_AUTHOR.get_as_last_first_first_last_names_with_and(True) == ""


def test_every_renderer_is_empty_for_empty_list():
    renderings = [
        EMPTY_AUTHOR.get_as_natbib(),
        EMPTY_AUTHOR.get_as_last_names(True),
        EMPTY_AUTHOR.get_as_last_first_names(True, True),
        EMPTY_AUTHOR.get_as_last_first_names_with_and(True),
        EMPTY_AUTHOR.get_as_first_last_names(True, True),
        EMPTY_AUTHOR.get_as_first_last_names_with_and(True),
        EMPTY_AUTHOR.get_for_alphabetization(),
        EMPTY_AUTHOR.get_as_last_first_first_last_names_with_and(False),
    ]
    assert renderings == [""] * len(renderings)


@pytest.mark.parametrize("field", ["{JabRef Developers}", "{JabRef Developers on Fire}"])
def test_institution_renders_unchanged_in_every_format(field):
    authors = AuthorList.parse(field)
    renderings = {
        authors.get_as_natbib(),
        authors.get_as_last_names(False),
        authors.get_as_last_first_names(True, True),
        authors.get_as_last_first_names_with_and(False),
        authors.get_as_first_last_names(True, False),
        authors.get_as_first_last_names_with_and(True),
        authors.get_for_alphabetization(),
        authors.get_as_last_first_first_last_names_with_and(True),
    }
    assert renderings == {field}


# ════════════════════════════════════════════════════════════════════════════════
# LIST QUERIES AND EQUALITY
# ════════════════════════════════════════════════════════════════════════════════


def test_size():
    assert AuthorList.parse("").size() == 0
    assert AuthorList.parse("   ").size() == 0
    assert AuthorList.parse("John Smith").size() == 1

    field = "John von Neumann"
    for expected_size in range(1, 26):
        authors = AuthorList.parse(field)
        assert authors.size() == expected_size, f"Failed for {expected_size} names"
        assert len(authors) == expected_size
        field += " and Albert Einstein"


def test_is_empty():
    assert AuthorList.parse("").is_empty()
    assert not AuthorList.parse("John Smith").is_empty()


def test_get_author():
    authors = AuthorList.parse("John Smith and von Neumann, Jr, John")
    assert authors.get_author(0) == Author("John", "J.", None, "Smith", None)
    assert authors.get_author(1) == Author("John", "J.", "von", "Neumann", "Jr")
    assert authors[1] == authors.get_author(1)
    assert authors[-1] == authors.get_author(1)
    assert list(authors) == authors.get_authors()


@pytest.mark.parametrize("index", [0, 1, -1])
def test_get_author_on_empty_list_raises(index):
    with pytest.raises(AuthorIndexError):
        AuthorList.parse("").get_author(index)


def test_get_author_out_of_range_is_an_index_error():
    authors = AuthorList.parse("John Smith")
    with pytest.raises(IndexError):
        authors.get_author(1)
    with pytest.raises(IndexError):
        authors[5]


def test_parse_institutions():
    assert AuthorList.parse("{JabRef Developers}") == AuthorList.of(
        Author(None, None, None, "{JabRef Developers}", None)
    )
    assert AuthorList.parse("{JabRef Developers} and Stefan Kolb") == AuthorList.of(
        Author(None, None, None, "{JabRef Developers}", None),
        Author("Stefan", "S.", None, "Kolb", None),
    )


def test_of_accepts_an_iterable():
    assert AuthorList.of([CORRADO_BOHM, KURT_GODEL]) == AuthorList.of(CORRADO_BOHM, KURT_GODEL)


def test_of_rejects_non_authors():
    with pytest.raises(TypeError):
        AuthorList.of("John Smith")


def test_equality_is_order_sensitive():
    first = AuthorList.of(Author("A"), Author("B"))
    second = AuthorList.of(Author("B"), Author("A"))
    assert first != second
    assert first == AuthorList.of(Author("A"), Author("B"))


def test_equality_is_reflexive_symmetric_transitive():
    first = AuthorList.parse("John Smith and Jane Doe")
    second = AuthorList.of(Author("John", None, None, "Smith", None), Author("Jane", None, None, "Doe", None))
    third = AuthorList.of(list(second))
    assert first == first
    assert first == second and second == first
    assert second == third and first == third


def test_not_equal_to_other_types():
    authors = AuthorList.of(Author("A"))
    assert authors != Author("A")
    assert authors != None  # noqa: E711
    assert authors != [Author("A")]


def test_hash():
    assert hash(AuthorList.of(Author("A"))) != hash(AuthorList.of(Author("B")))
    assert hash(AuthorList.parse("John Smith")) == hash(AuthorList.of(Author("John", None, None, "Smith", None)))


def test_latex_free_is_memoized_and_idempotent():
    authors = AuthorList.of(MUHAMMAD_ALKHWARIZMI, CORRADO_BOHM)
    normalized = authors.latex_free()
    assert authors.latex_free() is normalized
    assert normalized.latex_free() is normalized
    assert normalized == AuthorList.of(
        Author("Muḥammad", "M.", None, "al-Khwārizmī", None),
        Author("Corrado", "C.", None, "Böhm", None),
    )
    assert normalized is not authors


def test_latex_free_keeps_institutions():
    normalized = AuthorList.parse("{JabRef Developers} and Stefan Kolb").latex_free()
    assert normalized.get_author(0).is_institution()
    assert not normalized.get_author(1).is_institution()
    assert normalized.get_author(0).family_name == "JabRef Developers"


def test_name_without_family_segment_renders_cleanly():
    authors = AuthorList.parse(",John")
    assert authors.get_author(0).family_name == "John"
    assert authors.get_as_first_last_names(False, False) == "John"
    assert authors.get_as_last_first_names(True, False) == "John"
