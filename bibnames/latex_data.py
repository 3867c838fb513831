# ═════════════════════════════════════════════════════════════════════════════════
# LATEX MARKUP TABLES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Name fields in bibliographic records carry a small subset of LaTeX:
# 1. ACCENT_COMMANDS: diacritics applied to the following character or group
# 2. SPECIAL_LETTERS: letters that have no plain-ASCII spelling (\L, \ss, \o ...)
# 3. ESCAPED_SYMBOLS / TEXT_SYMBOLS: characters that must be escaped in LaTeX
#
# All tables are read-only at module level.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Accent command name -> Unicode combining mark
ACCENT_COMMANDS = MappingProxyType(
    {
        "'": "\u0301",  # acute
        "`": "\u0300",  # grave
        "^": "\u0302",  # circumflex
        '"': "\u0308",  # diaeresis
        "~": "\u0303",  # tilde
        "=": "\u0304",  # macron
        ".": "\u0307",  # dot above
        "u": "\u0306",  # breve
        "v": "\u030c",  # caron
        "H": "\u030b",  # double acute
        "c": "\u0327",  # cedilla
        "d": "\u0323",  # dot below
        "b": "\u0331",  # macron below
        "k": "\u0328",  # ogonek
        "r": "\u030a",  # ring above
        "t": "\u0361",  # tie
    }
)

SPECIAL_LETTERS = MappingProxyType(
    {
        "L": "Ł",
        "l": "ł",
        "O": "Ø",
        "o": "ø",
        "ss": "ß",
        "AE": "Æ",
        "ae": "æ",
        "OE": "Œ",
        "oe": "œ",
        "AA": "Å",
        "aa": "å",
        "i": "ı",
        "j": "ȷ",
        "DH": "Ð",
        "dh": "ð",
        "TH": "Þ",
        "th": "þ",
        "NG": "Ŋ",
        "ng": "ŋ",
        "DJ": "Đ",
        "dj": "đ",
    }
)

# Dotless letters get their dot back when an accent is placed on them
DOTLESS_BASES = MappingProxyType({"ı": "i", "ȷ": "j"})

# Commands that spell a letter and therefore decide the case of the word they start
TEX_LETTER_NAMES = frozenset({"aa", "ae", "l", "o", "oe", "i", "AA", "AE", "L", "O", "OE", "j"})

# Control symbols (backslash + one non-letter)
ESCAPED_SYMBOLS = MappingProxyType(
    {
        "&": "&",
        "%": "%",
        "$": "$",
        "#": "#",
        "_": "_",
        "{": "{",
        "}": "}",
        " ": " ",
        ",": "\u2009",  # thin space
        "-": "",  # discretionary hyphen
        "\\": " ",
        "/": "",  # italic correction
    }
)

TEXT_SYMBOLS = MappingProxyType(
    {
        "textendash": "\u2013",
        "textemdash": "\u2014",
        "textquoteleft": "‘",
        "textquoteright": "’",
        "textquotedblleft": "“",
        "textquotedblright": "”",
        "textperiodcentered": "·",
        "ldots": "…",
        "dots": "…",
        "S": "§",
        "P": "¶",
        "pounds": "£",
        "copyright": "©",
    }
)
