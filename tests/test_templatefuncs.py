import pytest

from packcli.templatefuncs import file_contents, go_quote, to_string_list


@pytest.mark.parametrize(
    "items, expected",
    [
        (["dc1", "dc2", "dc3", "dc4"], '["dc1", "dc2", "dc3", "dc4"]'),
        (["dc1"], '["dc1"]'),
        ([], "[]"),
    ],
)
def test_to_string_list(items, expected):
    assert to_string_list(items) == expected


def test_to_string_list_single_value():
    assert to_string_list("dc1") == '["dc1"]'


def test_to_string_list_escapes_quotes():
    assert to_string_list(['a"b']) == '["a\\"b"]'


@pytest.mark.parametrize(
    "value, expected",
    [
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
        ("line\nbreak\ttab", '"line\\nbreak\\ttab"'),
        ("\x01", '"\\x01"'),
        ("é", '"é"'),
    ],
)
def test_go_quote_strings(value, expected):
    assert go_quote(value) == expected


def test_go_quote_integer_is_character():
    assert go_quote(97) == "'a'"


def test_go_quote_nested_list():
    assert go_quote(["a", "b"]) == '["a" "b"]'


def test_go_quote_invalid_utf8_bytes():
    assert go_quote(b"a\xffb") == '"a\\xffb"'


def test_file_contents_reads_text(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"hello\nworld\n")
    assert file_contents(str(path)) == "hello\nworld\n"


def test_file_contents_missing(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(OSError, match="failed to read"):
        file_contents(str(missing))