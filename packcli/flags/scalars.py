"""Flag values holding a single scalar: strings, booleans, numbers and durations."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable, ClassVar, Optional

from .flagutil import (
    append_duration_suffix,
    format_duration,
    parse_bool,
    parse_duration,
    parse_int,
    parse_uint,
)

_FLOAT_SPECIAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


def _parse_float(text: str) -> float:
    invalid = ValueError(f'strconv.ParseFloat: parsing "{text}": invalid syntax')
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise invalid
    try:
        if text.lstrip("+-")[:2].lower() == "0x":
            value = float.fromhex(text)
        else:
            value = float(text)
    except ValueError:
        raise invalid from None
    if math.isinf(value) and not _FLOAT_SPECIAL.fullmatch(text):
        raise ValueError(f'strconv.ParseFloat: parsing "{text}": value out of range')
    return value


def _format_float(value: float) -> str:
    """Shortest representation, switching to exponent form outside 1e-4..1e6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    digits = digits.rstrip("0")
    exp = point - 1

    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"


class FlagValue:
    """A flag value holding a plain string; the base of all flag values."""

    type_name: ClassVar[str] = "string"
    _zero: ClassVar[Any] = ""

    def __init__(
        self,
        default: Any = None,
        *,
        hidden: bool = False,
        set_hook: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.value = self._zero if default is None else default
        self.hidden = hidden
        self.set_hook = set_hook

    def _assign(self, value: Any) -> None:
        self.value = value
        if self.set_hook is not None:
            self.set_hook(value)

    def set(self, text: str) -> None:
        """Store ``text`` as the new value."""
        self._assign(text)

    def get(self) -> Any:
        """Return the current value."""
        return self.value

    def example(self) -> str:
        """Return the placeholder shown for this flag in help output."""
        return "string"

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class BoolValue(FlagValue):
    """A boolean flag; it may be given without an explicit value."""

    type_name = "bool"
    _zero = False
    is_bool_flag: ClassVar[bool] = True

    def set(self, text: str) -> None:
        self._assign(parse_bool(text))

    def get(self) -> bool:
        return bool(self.value)

    def example(self) -> str:
        return ""

    def __str__(self) -> str:
        return "true" if self.value else "false"


class FloatValue(FlagValue):
    """A 64-bit floating point flag."""

    type_name = "float64"
    _zero = 0.0

    def set(self, text: str) -> None:
        self._assign(_parse_float(text))

    def get(self) -> float:
        return float(self.value)

    def example(self) -> str:
        return "float"

    def __str__(self) -> str:
        return _format_float(float(self.value))


class IntValue(FlagValue):
    """A signed integer flag limited to the 64-bit range."""

    type_name = "int"
    _zero = 0

    def set(self, text: str) -> None:
        self._assign(parse_int(text))

    def get(self) -> int:
        return int(self.value)

    def example(self) -> str:
        return "int"


class Int64Value(IntValue):
    """A signed 64-bit integer flag."""

    type_name = "int64"

    def set(self, text: str) -> None:
        self._assign(parse_int(text))


class UintValue(FlagValue):
    """An unsigned integer flag limited to the 64-bit range."""

    type_name = "uint"
    _zero = 0

    def set(self, text: str) -> None:
        self._assign(parse_uint(text))

    def get(self) -> int:
        return int(self.value)

    def example(self) -> str:
        return "uint"


class Uint64Value(UintValue):
    """An unsigned 64-bit integer flag."""

    type_name = "uint64"

    def set(self, text: str) -> None:
        self._assign(parse_uint(text))


class DurationValue(FlagValue):
    """A duration flag held in seconds; a bare number means seconds."""

    type_name = "duration"
    _zero = 0.0

    def set(self, text: str) -> None:
        self._assign(parse_duration(append_duration_suffix(text)))

    def get(self) -> float:
        return float(self.value)

    def example(self) -> str:
        return "duration"

    def __str__(self) -> str:
        return format_duration(self.value)