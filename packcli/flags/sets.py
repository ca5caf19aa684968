"""Grouped flag sets: POSIX-style parsing with a single-dash fallback, and help."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from .flagutil import (
    append_duration_suffix,
    format_duration,
    parse_bool,
    parse_duration,
    parse_int,
    parse_uint,
    wrap_at_length_with_padding,
)
from .listvalues import (
    EnumSingleValue,
    EnumValue,
    StringMapValue,
    StringSliceValue,
    map_to_kv,
)
from .scalars import (
    BoolValue,
    DurationValue,
    FlagValue,
    FloatValue,
    Int64Value,
    IntValue,
    Uint64Value,
    UintValue,
)

_WHITESPACE = re.compile(r"\s+")

FLAG_AFTER_ARGS_MESSAGE = (
    "Flags must be specified before positional arguments when using Go standard\n"
    " library style flags. For example, \"nomad-pack plan -verbose example\" instead\n"
    " of \"nomad-pack plan example -verbose\".\n"
    "\n"
    " The CLI also accepts posix flags, which does allow flags after positional\n"
    " arguments. For example, both \"nomad-pack plan --verbose example\" and\n"
    " \"nomad-pack plan example --verbose\" are valid commands."
)


class FlagError(Exception):
    """Raised for flag definition or parsing errors."""


@dataclass
class Flag:
    """A defined flag as seen by one flag table."""

    name: str
    value: FlagValue
    shorthand: str = ""
    usage: str = ""
    def_value: str = ""
    hidden: bool = False
    deprecated: str = ""
    no_opt_def_val: str = ""
    changed: bool = False


@dataclass
class VarFlag:
    """A full flag definition, from which usage text and completions derive."""

    name: str
    value: FlagValue
    usage: str = ""
    default: str = ""
    env_var: str = ""
    aliases: Sequence[str] = ()
    completion: Any = None
    shorthand: str = ""


class _FlagTable:
    def __init__(self) -> None:
        self.formal: dict[str, Flag] = {}
        self.shorthands: dict[str, Flag] = {}

    def add(self, value: FlagValue, name: str, shorthand: str, usage: str) -> Flag:
        if name in self.formal:
            raise FlagError(f"flag redefined: {name}")
        if len(shorthand) > 1:
            raise FlagError(f"{shorthand!r} shorthand is more than one ASCII character")
        if shorthand and shorthand in self.shorthands:
            raise FlagError(
                f"unable to redefine {shorthand!r} shorthand: already used for "
                f"{self.shorthands[shorthand].name}"
            )
        flag = Flag(name=name, value=value, shorthand=shorthand, usage=usage,
                    def_value=str(value))
        self.formal[name] = flag
        if shorthand:
            self.shorthands[shorthand] = flag
        return flag

    def sorted(self) -> list[Flag]:
        return [self.formal[n] for n in sorted(self.formal)]


def _format_float_e(value: float) -> str:
    if value == 0:
        return "0e+00"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    exp = len(digits) + exponent - 1
    digits = digits.rstrip("0") or "0"
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp):02d}"


def _split_env_list(text: str) -> list[str]:
    return [part.strip() for part in text.split(",")]


class Set:
    """A named group of flags, sharing one parser with its sibling sets."""

    def __init__(self, name: str, owner: "Sets") -> None:
        self.name = name
        self._table = _FlagTable()
        self._owner = owner
        self._vars: list[VarFlag] = []

    def visit(self, fn: Callable[[Flag], None]) -> None:
        """Call ``fn`` for this set's flags marked as changed, sorted by name."""
        for flag in self._table.sorted():
            if flag.changed:
                fn(flag)

    def visit_all(self, fn: Callable[[Flag], None]) -> None:
        """Call ``fn`` for every flag of this set, sorted by name."""
        for flag in self._table.sorted():
            fn(flag)

    def visit_vars(self, fn: Callable[[VarFlag], None]) -> None:
        """Call ``fn`` for every definition in the order they were added."""
        for var in self._vars:
            fn(var)

    def var_flag(self, var: VarFlag) -> Flag:
        """Define a flag from a full definition, building its usage text."""
        self._vars.append(var)
        value = var.value
        if value.hidden:
            return self.var_p(value, var.name, var.shorthand, "")

        usage = var.usage
        if var.aliases:
            sentence = [f'"-{a}"' for a in var.aliases]
            if len(sentence) == 1:
                aliases = sentence[0]
            elif len(sentence) == 2:
                aliases = f"{sentence[0]} and {sentence[1]}"
            else:
                sentence[-1] = "and " + sentence[-1]
                aliases = ", ".join(sentence)
            usage += f" This is aliased as {aliases}."
        if var.default:
            if value.type_name == "string":
                usage += f" Defaults to {json.dumps(var.default, ensure_ascii=False)}."
            else:
                usage += f" Defaults to {var.default}."
        if var.env_var:
            usage += f" This can also be specified via the {var.env_var} environment variable."

        for alias in var.aliases:
            self._owner._union.add(value, alias, var.shorthand, "")
        flag = self.var_p(value, var.name, var.shorthand, usage)
        self._owner._completions["--" + var.name] = var.completion
        return flag

    def var(self, value: FlagValue, name: str, usage: str) -> Flag:
        """Add a flag directly, bypassing usage generation."""
        return self.var_p(value, name, "", usage)

    def var_p(self, value: FlagValue, name: str, shorthand: str, usage: str) -> Flag:
        """Add a flag with a shorthand directly, bypassing usage generation."""
        self._owner._union.add(value, name, shorthand, usage)
        flag = self._table.add(value, name, shorthand, usage)
        if name in self._owner._goflags:
            raise FlagError(f"flag redefined: {name}")
        self._owner._goflags[name] = value
        return flag

    def _define(self, name, value, *, usage, default_text, shorthand, aliases,
                env_var, completion) -> None:
        self.var_flag(VarFlag(name=name, value=value, usage=usage, default=default_text,
                              env_var=env_var, aliases=tuple(aliases or ()),
                              completion=completion, shorthand=shorthand))

    def bool_var(self, name, *, usage="", default=False, shorthand="", aliases=None,
                 hidden=False, env_var="", completion=None, set_hook=None) -> BoolValue:
        """Define a boolean flag that may be given without a value."""
        initial = default
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            try:
                initial = parse_bool(env)
            except ValueError:
                pass
        value = BoolValue(initial, hidden=hidden, set_hook=set_hook)
        self._define(name, value, usage=usage, default_text="true" if default else "false",
                     shorthand=shorthand, aliases=aliases, env_var=env_var,
                     completion=completion)
        self._owner._union.formal[name].no_opt_def_val = "true"
        return value

    def enum_var(self, name, *, values, usage="", default=None, shorthand="",
                 aliases=None, hidden=False, env_var="", completion=None) -> EnumValue:
        """Define a flag collecting values from a fixed list."""
        initial = list(default) if default is not None else []
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            initial = _split_env_list(env)
        value = EnumValue(values, initial, hidden=hidden)
        full_usage = (usage.rstrip(". \t") + ". One possible value from: "
                      + ", ".join(values) + ".")
        self._define(name, value, usage=full_usage,
                     default_text=",".join(default) if default is not None else "",
                     shorthand=shorthand, aliases=aliases, env_var=env_var,
                     completion=completion)
        return value

    def enum_single_var(self, name, *, values, usage="", default="", shorthand="",
                        aliases=None, hidden=False, env_var="", completion=None,
                        set_hook=None) -> EnumSingleValue:
        """Define a flag holding one value from a fixed list."""
        env = os.environ.get(env_var) if env_var else None
        initial = env if env is not None else default
        value = EnumSingleValue(values, initial, hidden=hidden, set_hook=set_hook)
        full_usage = (usage.rstrip(". \t") + ". One possible value from: "
                      + ", ".join(values) + ".")
        self._define(name, value, usage=full_usage, default_text=default,
                     shorthand=shorthand, aliases=aliases, env_var=env_var,
                     completion=completion)
        return value

    def float64_var(self, name, *, usage="", default=0.0, aliases=None, hidden=False,
                    env_var="", completion=None) -> FloatValue:
        """Define a floating point flag."""
        initial = default
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            try:
                initial = float(env)
            except ValueError:
                pass
        value = FloatValue(initial, hidden=hidden)
        self._define(name, value, usage=usage,
                     default_text=_format_float_e(default) if default != 0 else "",
                     shorthand="", aliases=aliases, env_var=env_var, completion=completion)
        return value

    def _integer(self, cls, parser, name, usage, default, shorthand, aliases, hidden,
                 env_var, completion, set_hook, show_default=True):
        initial = default
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            try:
                initial = parser(env)
            except ValueError:
                pass
        value = cls(initial, hidden=hidden, set_hook=set_hook)
        text = str(default) if default != 0 and show_default else ""
        self._define(name, value, usage=usage, default_text=text, shorthand=shorthand,
                     aliases=aliases, env_var=env_var, completion=completion)
        return value

    def int_var(self, name, *, usage="", default=0, shorthand="", aliases=None,
                hidden=False, env_var="", completion=None, set_hook=None) -> IntValue:
        """Define a signed integer flag."""
        return self._integer(IntValue, parse_int, name, usage, default, shorthand,
                             aliases, hidden, env_var, completion, set_hook)

    def int64_var(self, name, *, usage="", default=0, shorthand="", aliases=None,
                  hidden=False, env_var="", completion=None, set_hook=None) -> Int64Value:
        """Define a signed 64-bit integer flag."""
        return self._integer(Int64Value, parse_int, name, usage, default, shorthand,
                             aliases, hidden, env_var, completion, set_hook)

    def uint_var(self, name, *, usage="", default=0, shorthand="", aliases=None,
                 hidden=False, env_var="", completion=None, set_hook=None) -> UintValue:
        """Define an unsigned integer flag."""
        return self._integer(UintValue, parse_uint, name, usage, default, shorthand,
                             aliases, hidden, env_var, completion, set_hook)

    def uint64_var(self, name, *, usage="", default=0, shorthand="", aliases=None,
                   hidden=False, env_var="", completion=None, set_hook=None) -> Uint64Value:
        """Define an unsigned 64-bit integer flag; its default is not shown in usage."""
        return self._integer(Uint64Value, parse_uint, name, usage, default, shorthand,
                             aliases, hidden, env_var, completion, set_hook,
                             show_default=False)

    def string_map_var(self, name, *, usage="", default=None, shorthand="",
                       aliases=None, hidden=False, completion=None) -> StringMapValue:
        """Define a flag collecting ``key=value`` pairs."""
        value = StringMapValue(default, hidden=hidden)
        self._define(name, value, usage=usage,
                     default_text=map_to_kv(default) if default is not None else "",
                     shorthand=shorthand, aliases=aliases, env_var="",
                     completion=completion)
        return value

    def string_slice_var(self, name, *, usage="", default=None, shorthand="",
                         aliases=None, hidden=False, env_var="",
                         completion=None) -> StringSliceValue:
        """Define a flag collecting comma-separated strings."""
        initial: Optional[Iterable[str]] = default
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            initial = _split_env_list(env)
        value = StringSliceValue(initial, hidden=hidden)
        self._define(name, value, usage=usage,
                     default_text=",".join(default) if default is not None else "",
                     shorthand=shorthand, aliases=aliases, env_var=env_var,
                     completion=completion)
        return value

    def duration_var(self, name, *, usage="", default=0.0, shorthand="", aliases=None,
                     hidden=False, env_var="", completion=None) -> DurationValue:
        """Define a duration flag, in seconds."""
        initial = default
        env = os.environ.get(env_var) if env_var else None
        if env is not None:
            try:
                initial = parse_duration(append_duration_suffix(env))
            except ValueError:
                pass
        value = DurationValue(initial, hidden=hidden)
        self._define(name, value, usage=usage,
                     default_text=format_duration(default) if default != 0 else "",
                     shorthand=shorthand, aliases=aliases, env_var=env_var,
                     completion=completion)
        return value


class Sets:
    """A group of flag sets parsed together but listed separately in help."""

    def __init__(self) -> None:
        self._union = _FlagTable()
        self._goflags: dict[str, FlagValue] = {}
        self._sets: list[Set] = []
        self._completions: dict[str, Any] = {}
        self._parsed = False
        self._args: list[str] = []
        self._go_parsed = False
        self._go_args: list[str] = []

    def new_set(self, name: str) -> Set:
        """Create and register a new named set."""
        flag_set = Set(name, self)
        self._sets.append(flag_set)
        return flag_set

    def completions(self) -> dict[str, Any]:
        """Return the completion handlers keyed by ``--name``."""
        return self._completions

    def parse(self, args: Sequence[str]) -> None:
        """Parse ``args``; raise FlagError on any problem."""
        args = list(args)
        if has_go_flags(args):
            self._parse_go(args)
            check_flags_after_args(self._go_args, self)
            return
        self._parse_posix(args)

    def parsed(self) -> bool:
        """Report whether POSIX parsing has happened."""
        return self._parsed

    def args(self) -> list[str]:
        """Return the positional arguments left after parsing."""
        return list(self._go_args if self._go_parsed else self._args)

    def uses_goflags(self) -> bool:
        """Report whether parsing fell back to single-dash long flags."""
        return self._go_parsed

    def visit(self, fn: Callable[[Flag], None]) -> None:
        """Call ``fn`` for every flag that was set, sorted by name."""
        for flag in self._union.sorted():
            if flag.changed:
                fn(flag)

    def help(self) -> str:
        """Build help text grouped by set."""
        out: list[str] = []
        for flag_set in self._sets:
            out.append(f"{flag_set.name}:\n\n")
            for flag in flag_set._table.sorted():
                if not flag.hidden:
                    out.append(_flag_detail(flag))
        return "".join(out).rstrip("\n")

    def visit_sets(self, fn: Callable[[str, Set], None]) -> None:
        """Call ``fn`` with the name and object of every set."""
        for flag_set in self._sets:
            fn(flag_set.name, flag_set)

    def hide_unused_flags(self, set_name: str, flag_names: Iterable[str]) -> None:
        """Hide the named flags of the named set from help."""
        names = set(flag_names)
        for flag_set in self._sets:
            if flag_set.name == set_name:
                for flag in flag_set._table.formal.values():
                    if flag.name in names:
                        flag.hidden = True

    @staticmethod
    def _apply(flag: Flag, text: str, label: str) -> None:
        try:
            flag.value.set(text)
        except ValueError as exc:
            raise FlagError(f'invalid argument "{text}" for "{label}" flag: {exc}') from exc
        flag.changed = True

    def _parse_posix(self, args: list[str]) -> None:
        self._parsed = True
        positional: list[str] = []
        rest = list(args)
        while rest:
            arg = rest.pop(0)
            if arg == "--":
                positional.extend(rest)
                break
            if arg.startswith("--"):
                name, sep, text = arg[2:].partition("=")
                flag = self._union.formal.get(name)
                if flag is None:
                    raise FlagError(f"unknown flag: --{name}")
                if sep:
                    pass
                elif flag.no_opt_def_val:
                    text = flag.no_opt_def_val
                elif rest:
                    text = rest.pop(0)
                else:
                    raise FlagError(f"flag needs an argument: --{name}")
                label = f"-{flag.shorthand}, --{flag.name}" if flag.shorthand else f"--{flag.name}"
                self._apply(flag, text, label)
            elif arg.startswith("-") and len(arg) > 1:
                shorts = arg[1:]
                while shorts:
                    char, shorts = shorts[0], shorts[1:]
                    flag = self._union.shorthands.get(char)
                    if flag is None:
                        raise FlagError(f"unknown shorthand flag: {char!r} in -{arg[1:]}")
                    if shorts.startswith("="):
                        text, shorts = shorts[1:], ""
                    elif flag.no_opt_def_val:
                        text = flag.no_opt_def_val
                    elif shorts:
                        text, shorts = shorts, ""
                    elif rest:
                        text = rest.pop(0)
                    else:
                        raise FlagError(f"flag needs an argument: {char!r} in -{char}")
                    self._apply(flag, text, f"-{flag.shorthand}, --{flag.name}")
            else:
                positional.append(arg)
        self._args = positional

    def _parse_go(self, args: list[str]) -> None:
        self._go_parsed = True
        rest = list(args)
        while rest:
            arg = rest[0]
            if len(arg) < 2 or arg[0] != "-":
                break
            rest.pop(0)
            if arg == "--":
                break
            name = arg[2:] if arg[1] == "-" else arg[1:]
            if not name or name[0] in "-=":
                raise FlagError(f"bad flag syntax: {arg}")
            name, sep, text = name.partition("=")
            value = self._goflags.get(name)
            if value is None:
                if name in ("help", "h"):
                    raise FlagError("flag: help requested")
                raise FlagError(f"flag provided but not defined: -{name}")
            if getattr(value, "is_bool_flag", False):
                try:
                    value.set(text if sep else "true")
                except ValueError as exc:
                    raise FlagError(
                        f'invalid boolean value "{text}" for -{name}: {exc}') from exc
                continue
            if not sep:
                if not rest:
                    raise FlagError(f"flag needs an argument: -{name}")
                text = rest.pop(0)
            try:
                value.set(text)
            except ValueError as exc:
                raise FlagError(f'invalid value "{text}" for flag -{name}: {exc}') from exc
        self._go_args = rest


def _flag_detail(flag: Flag) -> str:
    if flag.value.hidden:
        return ""
    if flag.shorthand:
        line = f"  -{flag.shorthand}, --{flag.name}"
    else:
        line = f"      --{flag.name}"
    example = flag.value.example()
    if example:
        line += f"=<{example}>"
    if not default_is_zero_value(flag):
        if flag.value.type_name == "string":
            line += f" (default {json.dumps(flag.def_value, ensure_ascii=False)})"
        else:
            line += f" (default {flag.def_value})"
    if flag.deprecated:
        line += f" (DEPRECATED: {flag.deprecated})"
    usage = _WHITESPACE.sub(" ", flag.usage)
    return f"{line}\n{wrap_at_length_with_padding(usage, 8)}\n\n"


def default_is_zero_value(flag: Flag) -> bool:
    """Report whether the flag's default represents its type's zero value."""
    value, default = flag.value, flag.def_value
    if getattr(value, "is_bool_flag", False):
        return default == "false"
    if isinstance(value, DurationValue):
        return default in ("0", "0s")
    if isinstance(value, (IntValue, UintValue, FloatValue)):
        return default == "0"
    if type(value) is FlagValue:
        return default == ""
    if isinstance(value, StringSliceValue):
        return default in ("[]", "")
    if isinstance(value, StringMapValue):
        return default == ""
    return str(value) in ("false", "<nil>", "", "0")


def check_flags_after_args(args: Sequence[str], sets: Sets) -> None:
    """Raise FlagError if a known flag appears among positional arguments."""
    if not args:
        return
    seen: set[str] = set()
    for arg in args:
        if arg == "--":
            break
        if len(arg) < 2 or arg[0] != "-":
            continue
        if arg[1] == "-":
            arg = arg[1:]
        if arg[1] == "-":
            continue
        arg = arg.split("=", 1)[0]
        seen.add(arg[1:])

    found = []
    sets.visit_sets(lambda _name, s: s.visit_all(
        lambda f: found.append(f) if f.name in seen else None))
    if found:
        raise FlagError(FLAG_AFTER_ARGS_MESSAGE)


def has_go_flags(args: Sequence[str]) -> bool:
    """Report whether any argument is a single-dash long flag."""
    return any(len(a) > 2 and a[0] == "-" and a[1] != "-" for a in args)