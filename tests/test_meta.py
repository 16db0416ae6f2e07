import pytest

from educe_derive.errors import EduceError
from educe_derive.meta import (
    MetaList,
    MetaNameValue,
    MetaPath,
    parse_meta,
    parse_path,
    parse_where_predicates,
    predicates_for_generics,
)


def test_bare_path():
    assert parse_meta("Clone") == MetaPath("Clone")


def test_list_with_name_value():
    meta = parse_meta('Clone(bound = "T: core::clone::Clone")')
    assert meta == MetaList("Clone", (MetaNameValue("bound", "T: core::clone::Clone"),))


def test_nested_lists_and_paths():
    meta = parse_meta('Clone(trait("A"), method("cloner"))')
    assert meta == MetaList(
        "Clone", (MetaList("trait", ("A",)), MetaList("method", ("cloner",)))
    )


def test_multiple_traits():
    meta = parse_meta("educe(Copy(bound), Clone)")
    assert meta.nested == (MetaList("Copy", (MetaPath("bound"),)), MetaPath("Clone"))


def test_literal_kinds():
    assert parse_meta("Debug(name = true)").nested[0].lit is True
    assert parse_meta("Debug(false)").nested == (False,)
    assert parse_meta("Default = 1.1").lit == 1.1
    assert parse_meta("Default(11111111111111111111111111111)").nested == (
        11111111111111111111111111111,
    )


def test_string_escapes():
    assert parse_meta(r'x = "a\"b\\c"').lit == 'a"b\\c'
    assert parse_meta(r'x = "\u{4d}"').lit == "M"


def test_path_with_colons():
    assert parse_meta("core::clone::Clone") == MetaPath("core::clone::Clone")
    assert parse_meta("::a::b") == MetaPath("::a::b")


def test_empty_list_and_trailing_comma():
    assert parse_meta("Clone()") == MetaList("Clone", ())
    assert parse_meta("Clone(bound,)") == MetaList("Clone", (MetaPath("bound"),))


@pytest.mark.parametrize("text", ["Clone(", "Clone extra", "Clone(a b)", "= 1", "a = b", "x = \"\\q\"", "a$"])
def test_malformed_meta(text):
    with pytest.raises(EduceError):
        parse_meta(text)


def test_parse_path():
    assert parse_path("  ") is None
    assert parse_path("A") == "A"
    assert parse_path(" a :: b ") == "a::b"
    with pytest.raises(EduceError):
        parse_path("1x")


def test_parse_where_predicates():
    assert parse_where_predicates("T: core::clone::Clone") == ("T: core::clone::Clone",)
    assert parse_where_predicates("") is None
    assert parse_where_predicates("T: A,K:B,") == ("T: A", "K: B")
    assert parse_where_predicates("T: Fn(u8, u8) -> Vec<u8>") == ("T: Fn(u8, u8) -> Vec<u8>",)


@pytest.mark.parametrize("text", ["T", "T: A,,K: B", ": A", "a::b"])
def test_bad_where_predicates(text):
    with pytest.raises(EduceError):
        parse_where_predicates(text)


def test_predicates_for_generics():
    assert predicates_for_generics(("T", "K"), "Copy") == ("T: Copy", "K: Copy")
    assert predicates_for_generics(("'a", "T"), "Clone") == ("T: Clone",)
    assert predicates_for_generics((), "Clone") == ()