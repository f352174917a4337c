from __future__ import annotations

import io

import pytest

from pystrata.errors import FormatError
from pystrata.sources import IniFileSource


def load_ini(text: str) -> IniFileSource:
    source = IniFileSource("unused.ini")
    source.load_stream(io.BytesIO(text.encode("utf-8")))
    return source


def test_sections_prefix_keys():
    source = load_ini(
        """
; comment
# another comment
/ and another
DefaultConnection:ConnectionString=TestConnectionString
[Data:Inventory]
ConnectionString = AnotherTestConnectionString
Provider="MySql"
"""
    )
    assert dict(source.data) == {
        "DefaultConnection:ConnectionString": "TestConnectionString",
        "Data:Inventory:ConnectionString": "AnotherTestConnectionString",
        "Data:Inventory:Provider": "MySql",
    }


def test_key_case_is_preserved_and_lookup_ignores_it():
    source = load_ini("[Server]\nPort=80\n")
    assert list(source.data) == ["Server:Port"]
    assert source.try_get("SERVER:port") == "80"


def test_empty_value():
    assert load_ini("[A]\nKey=\n").try_get("A:Key") == ""


def test_duplicate_key_fails():
    with pytest.raises(FormatError, match="duplicate key 'Data:Provider'") as info:
        load_ini("[Data]\nProvider=a\nProvider=b\n")
    assert info.value.line == 3


def test_duplicate_key_differing_in_case_fails():
    with pytest.raises(FormatError, match="duplicate key"):
        load_ini("[Data]\nProvider=a\nprovider=b\n")


def test_line_without_separator_fails():
    with pytest.raises(FormatError, match="Unrecognized line"):
        load_ini("[Data]\njust some words\n")


def test_load_from_file(write_file):
    source = IniFileSource(write_file("app.ini", "[Logging]\nLevel=debug\n"))
    source.load()
    assert source.try_get("logging:level") == "debug"


def test_indented_lines_are_separate_keys():
    source = load_ini("[A]\nKey=1\n    Other=2\n")
    assert source.try_get("A:Key") == "1"
    assert source.try_get("A:Other") == "2"


def test_section_named_like_top_level_bucket():
    source = load_ini("Top=1\n[__root__]\nKey=2\n")
    assert dict(source.data) == {"Top": "1", "__root__:Key": "2"}


def test_invalid_utf8_is_format_error():
    source = IniFileSource("unused.ini")
    with pytest.raises(FormatError, match="not valid UTF-8"):
        source.load_stream(io.BytesIO(b"[A]\nKey=\xff\xfe\n"))
