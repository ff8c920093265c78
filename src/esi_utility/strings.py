"""String helpers.

Case conversion, prefix/suffix tests, camelCase, ASCII transliteration,
slugs, random tokens and a few validators.

All functions operate on ``str`` (Unicode code points). Only
:func:`length` with ``binary_safe=True`` looks at encoded bytes, and the
encoding it uses is passed explicitly.
"""

from __future__ import annotations

import json
import logging
import re
import secrets
import unicodedata
import uuid

from esi_utility.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

_CAMEL_SEPARATOR_REGEX = re.compile(r"[-_\s]+(.)?")
_CAMEL_NUMBER_REGEX = re.compile(r"\d+(.)?")

# Conservative: dot-atom local part, at least one dot in the domain.
_EMAIL_REGEX = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]{1,64}(?<!\.)"
    r"@(?=.{1,253}$)"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)

_NON_PRINTABLE_ASCII_REGEX = re.compile(r"[^\x20-\x7E]")

# fmt: off
_CHAR_MAP = {
    "Ǎ": "A", "А": "A", "Ā": "A", "Ă": "A", "Ą": "A", "Å": "A",
    "Ǻ": "A", "Ä": "Ae", "Á": "A", "À": "A", "Ã": "A", "Â": "A",
    "Æ": "AE", "Ǽ": "AE", "Б": "B", "Ç": "C", "Ć": "C", "Ĉ": "C",
    "Č": "C", "Ċ": "C", "Ц": "C", "Ч": "Ch", "Ð": "Dj", "Đ": "Dj",
    "Ď": "Dj", "Д": "Dj", "É": "E", "Ę": "E", "Ё": "E", "Ė": "E",
    "Ê": "E", "Ě": "E", "Ē": "E", "È": "E", "Е": "E", "Э": "E",
    "Ë": "E", "Ĕ": "E", "Ф": "F", "Г": "G", "Ģ": "G", "Ġ": "G",
    "Ĝ": "G", "Ğ": "G", "Х": "H", "Ĥ": "H", "Ħ": "H", "Ï": "I",
    "Ĭ": "I", "İ": "I", "Į": "I", "Ī": "I", "Í": "I", "Ì": "I",
    "И": "I", "Ǐ": "I", "Ĩ": "I", "Î": "I", "Ĳ": "IJ", "Ĵ": "J",
    "Й": "J", "Я": "Ja", "Ю": "Ju", "К": "K", "Ķ": "K", "Ĺ": "L",
    "Л": "L", "Ł": "L", "Ŀ": "L", "Ļ": "L", "Ľ": "L", "М": "M",
    "Н": "N", "Ń": "N", "Ñ": "N", "Ņ": "N", "Ň": "N", "Ō": "O",
    "О": "O", "Ǿ": "O", "Ǒ": "O", "Ơ": "O", "Ŏ": "O", "Ő": "O",
    "Ø": "O", "Ö": "Oe", "Õ": "O", "Ó": "O", "Ò": "O", "Ô": "O",
    "Œ": "OE", "П": "P", "Ŗ": "R", "Р": "R", "Ř": "R", "Ŕ": "R",
    "Ŝ": "S", "Ş": "S", "Š": "S", "Ș": "S", "Ś": "S", "С": "S",
    "Ш": "Sh", "Щ": "Shch", "Ť": "T", "Ŧ": "T", "Ţ": "T", "Ț": "T",
    "Т": "T", "Ů": "U", "Ű": "U", "Ŭ": "U", "Ũ": "U", "Ų": "U",
    "Ū": "U", "Ǜ": "U", "Ǚ": "U", "Ù": "U", "Ú": "U", "Ü": "Ue",
    "Ǘ": "U", "Ǖ": "U", "У": "U", "Ư": "U", "Ǔ": "U", "Û": "U",
    "В": "V", "Ŵ": "W", "Ы": "Y", "Ŷ": "Y", "Ý": "Y", "Ÿ": "Y",
    "Ź": "Z", "З": "Z", "Ż": "Z", "Ž": "Z", "Ж": "Zh", "á": "a",
    "ă": "a", "â": "a", "à": "a", "ā": "a", "ǻ": "a", "å": "a",
    "ä": "ae", "ą": "a", "ǎ": "a", "ã": "a", "а": "a", "ª": "a",
    "æ": "ae", "ǽ": "ae", "б": "b", "č": "c", "ç": "c", "ц": "c",
    "ċ": "c", "ĉ": "c", "ć": "c", "ч": "ch", "ð": "dj", "ď": "dj",
    "д": "dj", "đ": "dj", "э": "e", "é": "e", "ё": "e", "ë": "e",
    "ê": "e", "е": "e", "ĕ": "e", "è": "e", "ę": "e", "ě": "e",
    "ė": "e", "ē": "e", "ƒ": "f", "ф": "f", "ġ": "g", "ĝ": "g",
    "ğ": "g", "г": "g", "ģ": "g", "х": "h", "ĥ": "h", "ħ": "h",
    "ǐ": "i", "ĭ": "i", "и": "i", "ī": "i", "ĩ": "i", "į": "i",
    "ı": "i", "ì": "i", "î": "i", "í": "i", "ï": "i", "ĳ": "ij",
    "ĵ": "j", "й": "j", "я": "ja", "ю": "ju", "ķ": "k", "к": "k",
    "ľ": "l", "ł": "l", "ŀ": "l", "ĺ": "l", "ļ": "l", "л": "l",
    "м": "m", "ņ": "n", "ñ": "n", "ń": "n", "н": "n", "ň": "n",
    "ŉ": "n", "ó": "o", "ò": "o", "ǒ": "o", "ő": "o", "о": "o",
    "ō": "o", "º": "o", "ơ": "o", "ŏ": "o", "ô": "o", "ö": "oe",
    "õ": "o", "ø": "o", "ǿ": "o", "œ": "oe", "п": "p", "р": "r",
    "ř": "r", "ŕ": "r", "ŗ": "r", "ſ": "s", "ŝ": "s", "ș": "s",
    "š": "s", "ś": "s", "с": "s", "ş": "s", "ш": "sh", "щ": "shch",
    "ß": "ss", "ţ": "t", "т": "t", "ŧ": "t", "ť": "t", "ț": "t",
    "у": "u", "ǘ": "u", "ŭ": "u", "û": "u", "ú": "u", "ų": "u",
    "ù": "u", "ű": "u", "ů": "u", "ư": "u", "ū": "u", "ǚ": "u",
    "ǜ": "u", "ǔ": "u", "ǖ": "u", "ũ": "u", "ü": "ue", "в": "v",
    "ŵ": "w", "ы": "y", "ÿ": "y", "ý": "y", "ŷ": "y", "ź": "z",
    "ž": "z", "з": "z", "ż": "z", "ж": "zh", "ь": "", "ъ": "",
    # Unicode spaces
    "\u00a0": " ", "\u2000": " ", "\u2001": " ", "\u2002": " ", "\u2003": " ",
    "\u2004": " ", "\u2005": " ", "\u2006": " ", "\u2007": " ", "\u2008": " ",
    "\u2009": " ", "\u200a": " ", "\u202f": " ", "\u205f": " ", "\u3000": " ",
}
# fmt: on

_CHAR_TABLE = str.maketrans(_CHAR_MAP)


# ============================================================================
#                               Case
# ============================================================================


def title(value: str) -> str:
    """Title-case every word."""
    return value.title()


def lower(value: str) -> str:
    return value.lower()


def upper(value: str) -> str:
    return value.upper()


def substr(string: str, start: int, length: int | None = None) -> str:
    """Return part of ``string``.

    ``start`` may be negative (counted from the end). A negative ``length``
    leaves that many characters off the end.
    """
    if length is None:
        return string[start:]

    begin = len(string) + start if start < 0 else start
    begin = max(begin, 0)
    end = len(string) + length if length < 0 else begin + length

    return string[begin:max(end, begin)]


def lcfirst(string: str) -> str:
    return lower(string[:1]) + string[1:]


def ucfirst(string: str) -> str:
    return upper(string[:1]) + string[1:]


def strcasecmp(str1: str, str2: str) -> int:
    """Case-insensitive comparison: -1, 0 or 1."""
    left, right = upper(str1), upper(str2)
    return (left > right) - (left < right)


# ============================================================================
#                               Searching
# ============================================================================


def _fold(haystack: str, needle: str, insensitive: bool) -> tuple[str, str]:
    if insensitive:
        return lower(haystack), lower(needle)
    return haystack, needle


def begins_with(haystack: str, needle: str, insensitive: bool = False) -> bool:
    haystack, needle = _fold(haystack, needle, insensitive)
    return haystack.startswith(needle)


def ends_with(haystack: str, needle: str, insensitive: bool = False) -> bool:
    haystack, needle = _fold(haystack, needle, insensitive)
    return haystack.endswith(needle)


def does_contain(haystack: str, needle: str, insensitive: bool = False) -> bool:
    haystack, needle = _fold(haystack, needle, insensitive)
    return needle in haystack


def does_not_contain(haystack: str, needle: str, insensitive: bool = False) -> bool:
    return not does_contain(haystack, needle, insensitive)


def length(string: str, binary_safe: bool = False, encoding: str = DEFAULT_ENCODING) -> int:
    """Number of characters, or of encoded bytes when ``binary_safe``."""
    if binary_safe:
        return len(string.encode(encoding))
    return len(string)


# ============================================================================
#                               Transformations
# ============================================================================


def camel_case(string: str) -> str:
    """Convert ``string`` to camelCase.

    Runs of ``-``, ``_`` and whitespace are removed and the following
    character is upper-cased; so is the character following a run of digits.

    Example:
        >>> camel_case("string-with-2-2 numbers")
        'stringWith22Numbers'
    """
    string = lcfirst(string.strip()).lstrip("-_")

    string = _CAMEL_SEPARATOR_REGEX.sub(
        lambda match: upper(match.group(1)) if match.group(1) else "", string
    )
    return _CAMEL_NUMBER_REGEX.sub(lambda match: upper(match.group(0)), string)


def ascii(value: str) -> str:  # pylint: disable=redefined-builtin
    """Transliterate ``value`` to printable ASCII.

    Known letters are mapped explicitly (``Ä`` -> ``Ae``, ``Щ`` -> ``Shch``),
    remaining accented letters lose their combining marks, and anything
    still outside ``\\x20-\\x7E`` is dropped.
    """
    value = value.translate(_CHAR_TABLE)
    value = "".join(
        char for char in unicodedata.normalize("NFKD", value) if not unicodedata.combining(char)
    )
    return _NON_PRINTABLE_ASCII_REGEX.sub("", value)


def slugify(text: str, separator: str = "-") -> str:
    """Turn a title into a URL slug.

    Example:
        >>> slugify("This post -- it has a dash")
        'this-post-it-has-a-dash'
    """
    sep = re.escape(separator)
    opposite = re.escape("_" if separator == "-" else "-")

    slug = ascii(text)
    slug = slug.replace("@", f"{separator}at{separator}")
    slug = re.sub(f"[{opposite}]+", separator, slug)
    slug = re.sub(f"[^{sep}a-z0-9\\s]+", "", lower(slug))
    slug = re.sub(f"[{sep}\\s]+", separator, slug)

    return slug.strip(separator)


# ============================================================================
#                               Random values
# ============================================================================


def random_bytes(nbytes: int) -> bytes:
    """Cryptographically secure random bytes.

    Raises:
        InvalidArgumentError: If ``nbytes`` is less than 1.
    """
    if nbytes < 1:
        raise InvalidArgumentError("nbytes must be greater than 0.")
    return secrets.token_bytes(nbytes)


def random_string(length: int = 8) -> str:  # pylint: disable=redefined-outer-name
    """Random lowercase hex string of exactly ``length`` characters.

    Raises:
        InvalidArgumentError: If ``length`` is less than 1.
    """
    if length < 1:
        raise InvalidArgumentError("length must be greater than 0.")
    return random_bytes(length).hex()[:length]


def guid() -> str:
    """Random (version 4) UUID string."""
    return str(uuid.uuid4())


# ============================================================================
#                               Validation
# ============================================================================


def valid_email(email: str) -> bool:
    return _EMAIL_REGEX.match(email) is not None


def valid_json(data: str) -> bool:
    """True if ``data`` (surrounding whitespace ignored) parses as JSON."""
    try:
        json.loads(data.strip())
    except ValueError:
        return False
    return True


def obscure_email(email: str) -> str:
    """Encode every character of ``email`` as an HTML numeric entity.

    Raises:
        InvalidArgumentError: If ``email`` is not a valid address.
    """
    if not valid_email(email):
        raise InvalidArgumentError(f"Invalid email specified: {email!r}")
    return "".join(f"&#{ord(char)};" for char in email)
