from bibnames.author import Author
from bibnames.author_list import (
    AuthorIndexError,
    AuthorList,
    AuthorListCache,
    CacheInfo,
    clear_cache,
    fix_author_first_name_first,
    fix_author_first_name_first_commas,
    fix_author_for_alphabetization,
    fix_author_last_name_first,
    fix_author_last_name_first_commas,
    fix_author_last_name_only_commas,
    fix_author_natbib,
    get_cache_info,
    parse,
)
from bibnames.latex import LatexToUnicodeService, latex_to_unicode
from bibnames.parser import AuthorListParser, NameParserConfig

__all__ = [
    "Author",
    "AuthorIndexError",
    "AuthorList",
    "AuthorListCache",
    "AuthorListParser",
    "CacheInfo",
    "LatexToUnicodeService",
    "NameParserConfig",
    "clear_cache",
    "fix_author_first_name_first",
    "fix_author_first_name_first_commas",
    "fix_author_for_alphabetization",
    "fix_author_last_name_first",
    "fix_author_last_name_first_commas",
    "fix_author_last_name_only_commas",
    "fix_author_natbib",
    "get_cache_info",
    "latex_to_unicode",
    "parse",
]
