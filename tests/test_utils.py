import pytest

from radixroute.utils import (
    H,
    choose_data,
    filter_flags,
    join_paths,
    last_char,
    name_of_function,
    parse_accept,
    resolve_address,
)


def somefunction():
    pass


def test_last_char():
    assert last_char("hola") == "a"
    assert last_char("adios") == "s"
    with pytest.raises(ValueError):
        last_char("")


def test_parse_accept():
    parts = parse_accept("text/html , application/xhtml+xml,application/xml;q=0.9,  */* ;q=0.8")
    assert parts == ["text/html", "application/xhtml+xml", "application/xml", "*/*"]


def test_choose_data():
    assert choose_data("a", "b") == "a"
    assert choose_data(None, "b") == "b"
    with pytest.raises(ValueError):
        choose_data(None, None)


def test_filter_flags():
    assert filter_flags("text/html ") == "text/html"
    assert filter_flags("text/html;") == "text/html"
    assert filter_flags("text/html") == "text/html"


def test_function_name():
    assert name_of_function(somefunction).endswith("test_utils.somefunction")


@pytest.mark.parametrize("absolute, relative, expected", [
    ("", "", ""),
    ("", "/", "/"),
    ("/a", "", "/a"),
    ("/a/", "", "/a/"),
    ("/a/", "/", "/a/"),
    ("/a", "/", "/a/"),
    ("/a", "/hola", "/a/hola"),
    ("/a/", "/hola", "/a/hola"),
    ("/a/", "/hola/", "/a/hola/"),
    ("/a/", "/hola//", "/a/hola/"),
])
def test_join_paths(absolute, relative, expected):
    assert join_paths(absolute, relative) == expected


def test_h_to_xml():
    assert H({"foo": "bar"}).to_xml() == "<map><foo>bar</foo></map>"


def test_h_to_xml_escapes_text():
    assert H({"a": "<x&y>"}).to_xml() == "<map><a>&lt;x&amp;y&gt;</a></map>"


def test_h_to_xml_empty_key_fails():
    with pytest.raises(ValueError):
        H({"": "test"}).to_xml()


def test_resolve_address_default(monkeypatch):
    monkeypatch.setenv("PORT", "")
    assert resolve_address() == ":8080"


def test_resolve_address_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "3123")
    assert resolve_address() == ":3123"


def test_resolve_address_explicit():
    assert resolve_address(":5150") == ":5150"


def test_resolve_address_too_many():
    with pytest.raises(ValueError, match="too much parameters"):
        resolve_address("2", "2")