from datetime import timedelta

import pytest

from packcli.flags.flagutil import (
    append_duration_suffix,
    env_bool_default,
    env_default,
    env_duration_default,
    format_duration,
    parse_bool,
    parse_duration,
    parse_int,
    parse_uint,
    wrap_at_length_with_padding,
)


@pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true(text):
    assert parse_bool(text) is True


@pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false(text):
    assert parse_bool(text) is False


@pytest.mark.parametrize("text", ["", "yes", "tRuE", " true", "2"])
def test_parse_bool_rejects(text):
    with pytest.raises(ValueError):
        parse_bool(text)


@pytest.mark.parametrize("n", [0, 1, 7, 255, 123456789])
def test_parse_int_prefix_round_trips(n):
    assert parse_int(str(n)) == n
    assert parse_int(f"0x{n:x}") == n
    assert parse_int(f"0X{n:X}") == n
    assert parse_int(f"0o{n:o}") == n
    assert parse_int(f"0{n:o}") == n
    assert parse_int(f"0b{n:b}") == n
    assert parse_int(f"-{n}") == -n
    assert parse_int(f"+{n}") == n


def test_parse_int_underscores():
    assert parse_int("1_000") == parse_int("1000")


def test_parse_int_bounds():
    assert parse_int(str(-(2**63))) == -(2**63)
    assert parse_int(str(2**63 - 1)) == 2**63 - 1
    with pytest.raises(ValueError, match="out of range"):
        parse_int(str(2**63))
    with pytest.raises(ValueError, match="out of range"):
        parse_int(str(-(2**63) - 1))


@pytest.mark.parametrize(
    "text", ["", "abc", " 1", "1 ", "08", "0x", "1.5", "_1", "1__0", "--1"]
)
def test_parse_int_rejects(text):
    with pytest.raises(ValueError):
        parse_int(text)


@pytest.mark.parametrize("n", [0, 42, 2**64 - 1])
def test_parse_uint_round_trips(n):
    assert parse_uint(str(n)) == n
    assert parse_uint(f"0x{n:x}") == n


@pytest.mark.parametrize("text", ["-1", "+1", "", str(2**64)])
def test_parse_uint_rejects(text):
    with pytest.raises(ValueError):
        parse_uint(text)


@pytest.mark.parametrize(
    "text",
    [
        "0s",
        "1ns",
        "1.5\u00b5s",
        "2ms",
        "1.5s",
        "1m30s",
        "1h0m0s",
        "1h15m30.918273645s",
        "-1m30s",
    ],
)
def test_duration_round_trip(text):
    assert format_duration(parse_duration(text)) == text


def test_duration_unit_relations():
    assert parse_duration("1h") == 60 * parse_duration("1m")
    assert parse_duration("1m") == 60 * parse_duration("1s")
    assert parse_duration("1s") == 1000 * parse_duration("1ms")
    assert parse_duration("1us") == parse_duration("1\u00b5s") == parse_duration("1\u03bcs")
    assert parse_duration("1h30m") == parse_duration("90m") == parse_duration("1.5h")
    assert parse_duration("0") == 0
    assert parse_duration("+5s") == -parse_duration("-5s")
    assert parse_duration(".5s") == parse_duration("500ms")


def test_format_duration_pinned():
    assert format_duration(90) == "1m30s"
    assert format_duration(timedelta(hours=2)) == "2h0m0s"
    assert format_duration(0.25) == "250ms"


@pytest.mark.parametrize(
    "text", ["", "s", ".s", "1", "1x", "-", "1.5.5s", "3000000h", "abcs"]
)
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize(
    "text, expected",
    [("10", "10s"), ("10s", "10s"), ("5m", "5m"), ("2h", "2h"), ("3ms", "3ms")],
)
def test_append_duration_suffix(text, expected):
    assert append_duration_suffix(text) == expected


def test_env_default(monkeypatch):
    monkeypatch.delenv("PACKCLI_TEST_VALUE", raising=False)
    assert env_default("PACKCLI_TEST_VALUE", "fallback") == "fallback"
    monkeypatch.setenv("PACKCLI_TEST_VALUE", "from-env")
    assert env_default("PACKCLI_TEST_VALUE", "fallback") == "from-env"
    monkeypatch.setenv("PACKCLI_TEST_VALUE", "")
    assert env_default("PACKCLI_TEST_VALUE", "fallback") == ""


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("PACKCLI_TEST_BOOL", raising=False)
    assert env_bool_default("PACKCLI_TEST_BOOL", True) is True
    monkeypatch.setenv("PACKCLI_TEST_BOOL", "false")
    assert env_bool_default("PACKCLI_TEST_BOOL", True) is False
    monkeypatch.setenv("PACKCLI_TEST_BOOL", "nope")
    with pytest.raises(ValueError):
        env_bool_default("PACKCLI_TEST_BOOL", True)


def test_env_duration_default(monkeypatch):
    monkeypatch.delenv("PACKCLI_TEST_DURATION", raising=False)
    assert env_duration_default("PACKCLI_TEST_DURATION", 30) == 30
    monkeypatch.setenv("PACKCLI_TEST_DURATION", "1m30s")
    assert env_duration_default("PACKCLI_TEST_DURATION", 30) == parse_duration("1m30s")
    monkeypatch.setenv("PACKCLI_TEST_DURATION", "10")
    with pytest.raises(ValueError):
        env_duration_default("PACKCLI_TEST_DURATION", 30)


def test_wrap_short_text_is_padded():
    assert wrap_at_length_with_padding("hello world", 8) == " " * 8 + "hello world"


def test_wrap_long_text_respects_width_and_keeps_words():
    text = " ".join(["lorem", "ipsum", "dolor", "sit", "amet", "consectetur"] * 12)
    out = wrap_at_length_with_padding(text, 8)
    lines = out.split("\n")
    assert len(lines) > 1
    for line in lines:
        assert line.startswith(" " * 8)
        assert len(line) <= 78
    assert " ".join(line.strip() for line in lines) == text


def test_wrap_keeps_overlong_word_whole():
    word = "x" * 100
    assert wrap_at_length_with_padding(word, 4) == "    " + word


def test_wrap_turns_newlines_into_spaces():
    assert wrap_at_length_with_padding("alpha\nbeta", 0) == "alpha beta"