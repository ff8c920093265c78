"""Unit tests for :mod:`esi_utility.strings`."""

import re

import pytest

from esi_utility import strings
from esi_utility.errors import InvalidArgumentError

# pylint: disable=magic-value-comparison


def test_title_capitalises_every_word():
    """Every word starts upper-case, the rest lower-case."""
    assert (
        strings.title("Mary had A little lamb and She Loved it so")
        == "Mary Had A Little Lamb And She Loved It So"
    )


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (("abcdef", -1), "f"),
        (("abcdef", 1, 3), "bcd"),
        (("abcdef", 0, -1), "abcde"),
        (("abcdef", -3, 2), "de"),
        (("abcdef", 4, -4), ""),
    ],
)
def test_substr(args, expected):
    """Negative start counts from the end; negative length trims the end."""
    assert strings.substr(*args) == expected


def test_first_character_case():
    """Only the first character changes."""
    assert strings.lcfirst("TEST") == "tEST"
    assert strings.ucfirst("tEsT") == "TEsT"
    assert strings.lcfirst("") == ""


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [("test", "Test", 0), ("tes", "Test", -1), ("testing", "Test", 1)],
)
def test_strcasecmp(left, right, expected):
    """Comparison ignores case and returns -1, 0 or 1."""
    assert strings.strcasecmp(left, right) == expected


@pytest.mark.parametrize(
    ("func", "haystack", "needle", "insensitive", "expected"),
    [
        (strings.begins_with, "this is a test", "this", False, True),
        (strings.begins_with, "this is a test", "THIS", False, False),
        (strings.begins_with, "this is a test", "THIS", True, True),
        (strings.ends_with, "this is a test", "test", False, True),
        (strings.ends_with, "this is a test", "TEST", True, True),
        (strings.does_contain, "this is a test", "is a", False, True),
        (strings.does_contain, "this is a test", "IS A", True, True),
        (strings.does_not_contain, "this is a test", "foo", False, True),
        (strings.does_not_contain, "this is a test", "IS", True, False),
    ],
)
def test_search_helpers(func, haystack, needle, insensitive, expected):
    """Prefix, suffix and substring checks honour the case flag."""
    assert func(haystack, needle, insensitive) is expected


def test_length_counts_characters_or_bytes():
    """Code points by default, encoded bytes with binary_safe."""
    assert strings.length("Îñţérñåţîöñåļîžåţîöñ") == 20
    assert strings.length("Îñţérñåţîöñåļîžåţîöñ", binary_safe=True) == 39
    assert strings.length("é", binary_safe=True, encoding="latin-1") == 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("CamelCase", "camelCase"),
        ("Camel-Case", "camelCase"),
        ("camel -case", "camelCase"),
        ("camel_case", "camelCase"),
        ("camel c test", "camelCTest"),
        ("string_with1number", "stringWith1Number"),
        ("string-with-2-2 numbers", "stringWith22Numbers"),
        ("-moz-something", "mozSomething"),
        ("_car_speed_", "carSpeed"),
        ("ServeHTTP", "serveHTTP"),
        ("1camel2case", "1Camel2Case"),
        ("camel σase", "camelΣase"),
        ("Στανιλ case", "στανιλCase"),
        ("σamel  Case", "σamelCase"),
    ],
)
def test_camel_case(value, expected):
    """Separators vanish and the following character is upper-cased."""
    assert strings.camel_case(value) == expected


def test_ascii_transliterates_and_drops_non_printables():
    """Mapped letters, stripped marks and special spaces end up as plain ASCII."""
    assert strings.ascii("ǍǺ\u2007") == "AA "
    assert strings.ascii("Ärger über Щука") == "Aerger ueber Shchuka"
    assert strings.ascii("café\x00") == "cafe"


@pytest.mark.parametrize(
    ("text", "separator", "expected"),
    [
        ("A simple title", "-", "a-simple-title"),
        ("This post -- it has a dash", "-", "this-post-it-has-a-dash"),
        ("This post -- it has a dash", "_", "this_post_it_has_a_dash"),
        ("123----1251251", "-", "123-1251251"),
        (" ", "-", ""),
        ("Țhîș îș ă șîmple țîțle", "-", "this-is-a-simple-title"),
        ("mail me@home", "-", "mail-me-at-home"),
    ],
)
def test_slugify(text, separator, expected):
    """Slugs are lower-case ASCII joined by a single separator."""
    assert strings.slugify(text, separator) == expected


def test_random_bytes_length():
    """The requested number of bytes is returned."""
    assert len(strings.random_bytes(16)) == 16


@pytest.mark.parametrize("length", [1, 7, 8, 33])
def test_random_string_is_hex_of_exact_length(length):
    """Random strings are lowercase hex of the requested length."""
    value = strings.random_string(length)
    assert re.fullmatch(f"[0-9a-f]{{{length}}}", value)


@pytest.mark.parametrize("func", [strings.random_bytes, strings.random_string])
def test_random_helpers_reject_non_positive_sizes(func):
    """Zero or negative sizes are rejected."""
    with pytest.raises(InvalidArgumentError):
        func(0)


def test_guid_is_version_four_uuid():
    """The canonical 36-character form with version nibble 4."""
    value = strings.guid()
    assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}", value)
    assert value != strings.guid()


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("john.smith@gmail.com", True),
        ("john.smith+label@gmail.com", True),
        ("john.smith@gmail.co.uk", True),
        ("j@", False),
        ("j@localhost", False),
        (".john@gmail.com", False),
        ("john..smith@gmail.com", False),
    ],
)
def test_valid_email(email, expected):
    """Addresses need a dot-atom local part and a dotted domain."""
    assert strings.valid_email(email) is expected


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ('{ "test": { "foo": "bar" } }', True),
        ("  [1, 2, 3]\n", True),
        ('{ "": "": "" } }', False),
        ("", False),
    ],
)
def test_valid_json(data, expected):
    """Anything json.loads accepts (after stripping) is valid."""
    assert strings.valid_json(data) is expected


def test_obscure_email_uses_numeric_entities():
    """Every character becomes an HTML numeric entity."""
    obscured = strings.obscure_email("admin@example.com")
    assert obscured.startswith("&#97;&#100;")
    assert obscured.count("&#") == len("admin@example.com")


def test_obscure_email_rejects_invalid_address():
    """Invalid addresses raise InvalidArgumentError (also a ValueError)."""
    with pytest.raises(ValueError):
        strings.obscure_email("not-an-email")
