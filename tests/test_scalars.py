import math

import pytest

from packcli.flags.flagutil import parse_duration, parse_int
from packcli.flags.scalars import (
    BoolValue,
    DurationValue,
    FlagValue,
    FloatValue,
    Int64Value,
    IntValue,
    Uint64Value,
    UintValue,
)


def test_string_value_set_and_hook():
    seen = []
    value = FlagValue("initial", set_hook=seen.append)
    assert value.get() == "initial"
    value.set("next")
    assert value.get() == "next"
    assert str(value) == "next"
    assert seen == ["next"]
    assert value.example() == "string"


def test_bool_value_defaults_to_false():
    value = BoolValue()
    assert value.get() is False
    assert str(value) == "false"


def test_bool_value_set_calls_hook():
    seen = []
    value = BoolValue(set_hook=seen.append)
    value.set("T")
    assert value.get() is True
    assert str(value) == "true"
    assert seen == [True]


def test_bool_value_invalid_input_keeps_value():
    seen = []
    value = BoolValue(True, set_hook=seen.append)
    with pytest.raises(ValueError):
        value.set("maybe")
    assert value.get() is True
    assert seen == []


def test_bool_value_is_a_bool_flag_without_example():
    value = BoolValue(hidden=True)
    assert value.is_bool_flag is True
    assert value.example() == ""
    assert value.hidden is True
    assert value.type_name == "bool"


@pytest.mark.parametrize(
    "number",
    [0.0, 1.5, -2.25, 1e6, 1e-5, 123456.0, 0.1, 3.141592653589793, 1e300, 0.0001],
)
def test_float_string_round_trips(number):
    assert float(str(FloatValue(number))) == number


def test_float_value_uses_exponent_for_large_numbers():
    assert str(FloatValue(1e6)) == "1e+06"


def test_float_value_set():
    value = FloatValue()
    value.set("2.5")
    assert value.get() == 2.5
    value.set("0x1p-2")
    assert value.get() == float.fromhex("0x1p-2")
    assert value.example() == "float"


def test_float_value_special_values():
    value = FloatValue()
    value.set("+Inf")
    assert math.isinf(value.get()) and value.get() > 0
    assert str(value) == "+Inf"
    value.set("NaN")
    assert math.isnan(value.get())
    assert str(value) == "NaN"


@pytest.mark.parametrize("text", ["", "abc", "1_0", " 1", "1e400"])
def test_float_value_rejects(text):
    value = FloatValue(1.5)
    with pytest.raises(ValueError):
        value.set(text)
    assert value.get() == 1.5


def test_int_value_set_and_hook():
    seen = []
    value = IntValue(3, set_hook=seen.append)
    assert str(value) == "3"
    value.set("0x10")
    assert value.get() == parse_int("0x10")
    assert seen == [value.get()]
    assert str(value) == str(value.get())
    assert value.example() == "int"


@pytest.mark.parametrize("cls", [IntValue, Int64Value])
def test_signed_values_reject_out_of_range(cls):
    value = cls()
    with pytest.raises(ValueError):
        value.set(str(2**63))
    value.set(str(-(2**63)))
    assert value.get() == -(2**63)


def test_int64_value_accepts_negative_numbers():
    value = Int64Value()
    value.set("-5")
    assert value.get() == -5
    assert value.type_name == "int64"


@pytest.mark.parametrize("cls", [UintValue, Uint64Value])
def test_unsigned_values(cls):
    value = cls()
    with pytest.raises(ValueError):
        value.set("-1")
    value.set(str(2**64 - 1))
    assert value.get() == 2**64 - 1
    assert str(value) == str(2**64 - 1)
    with pytest.raises(ValueError):
        value.set(str(2**64))
    assert value.example() == "uint"


def test_duration_value_defaults_to_zero():
    value = DurationValue()
    assert value.get() == 0
    assert str(value) == "0s"
    assert value.example() == "duration"


def test_duration_value_bare_number_means_seconds():
    value = DurationValue()
    value.set("10")
    assert value.get() == parse_duration("10s")


def test_duration_value_keeps_units():
    value = DurationValue()
    value.set("1m30s")
    assert str(value) == "1m30s"
    assert value.get() == parse_duration("90s")


def test_duration_value_rejects_garbage():
    value = DurationValue(5.0)
    with pytest.raises(ValueError):
        value.set("abc")
    assert value.get() == 5.0