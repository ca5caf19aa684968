"""Flag values holding collections: enums, string slices and string maps."""

from __future__ import annotations

import json
from typing import Callable, Iterable, Mapping, Optional

from .scalars import FlagValue


def map_to_kv(mapping: Optional[Mapping[str, str]]) -> str:
    """Render a mapping as ``k1=v1,k2=v2`` with keys in sorted order."""
    if not mapping:
        return ""
    return ",".join(f"{key}={mapping[key]}" for key in sorted(mapping))


def _not_valid(item: str, allowed: list[str]) -> ValueError:
    return ValueError(f"'{item}' not valid. Must be one of: {', '.join(allowed)}")


class EnumValue(FlagValue):
    """A flag collecting one or more values, each drawn from a fixed set."""

    type_name = "enum"

    def __init__(
        self,
        values: Iterable[str],
        default: Optional[Iterable[str]] = None,
        *,
        hidden: bool = False,
    ) -> None:
        super().__init__(list(default) if default is not None else [], hidden=hidden)
        self.values = list(values)

    def set(self, text: str) -> None:
        """Append each comma-separated item; raise ValueError on the first unknown one."""
        for part in text.split(","):
            item = part.strip()
            if item not in self.values:
                raise _not_valid(item, self.values)
            self.value.append(item)

    def get(self) -> list[str]:
        return self.value

    def example(self) -> str:
        return "string"

    def __str__(self) -> str:
        return ",".join(self.value)


class EnumSingleValue(FlagValue):
    """A flag holding exactly one value drawn from a fixed set."""

    type_name = "EnumSingle"

    def __init__(
        self,
        values: Iterable[str],
        default: str = "",
        *,
        hidden: bool = False,
        set_hook: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__(default, hidden=hidden, set_hook=set_hook)
        self.values = list(values)

    def set(self, text: str) -> None:
        """Store ``text`` if it is one of the allowed values, else raise ValueError."""
        if text not in self.values:
            raise _not_valid(text, self.values)
        self._assign(text)

    def get(self) -> str:
        return self.value

    def example(self) -> str:
        return "string"

    def __str__(self) -> str:
        return self.value


class StringMapValue(FlagValue):
    """A flag collecting ``key=value`` pairs into a dictionary."""

    type_name = "StringMap"

    def __init__(
        self,
        default: Optional[Mapping[str, str]] = None,
        *,
        hidden: bool = False,
    ) -> None:
        super().__init__(dict(default) if default is not None else {}, hidden=hidden)

    def set(self, text: str) -> None:
        """Add one ``key=value`` pair, splitting at the first ``=``."""
        key, sep, value = text.partition("=")
        if not sep:
            raise ValueError(
                f"missing = in KV pair: {json.dumps(text, ensure_ascii=False)}"
            )
        self.value[key] = value

    def get(self) -> dict[str, str]:
        return self.value

    def example(self) -> str:
        return "key=value"

    def __str__(self) -> str:
        return map_to_kv(self.value)


class StringSliceValue(FlagValue):
    """A flag collecting comma-separated strings; the first use replaces the default."""

    type_name = "StringSlice"

    def __init__(
        self,
        default: Optional[Iterable[str]] = None,
        *,
        hidden: bool = False,
    ) -> None:
        super().__init__(list(default) if default is not None else [], hidden=hidden)
        self._was_set = False

    def set(self, text: str) -> None:
        """Append the comma-separated items of ``text``."""
        if not self._was_set:
            self._was_set = True
            self.value = []
        self.value.extend(text.strip().split(","))

    def get(self) -> list[str]:
        return self.value

    def example(self) -> str:
        return "string"

    def __str__(self) -> str:
        return ",".join(self.value)