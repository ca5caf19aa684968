"""Helper functions made available to pack templates."""

from __future__ import annotations

import os
from typing import Any, Mapping

_NAMED_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote_text(text: str, quote: str) -> str:
    out = [quote]
    for char in text:
        code = ord(char)
        if char == quote or char == "\\":
            out.append("\\" + char)
        elif 0xDC80 <= code <= 0xDCFF:
            # A byte that was not valid UTF-8, kept by surrogateescape.
            out.append(f"\\x{code - 0xDC00:02x}")
        elif char.isprintable():
            out.append(char)
        elif char in _NAMED_ESCAPES:
            out.append(_NAMED_ESCAPES[char])
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append(quote)
    return "".join(out)


def _quote_rune(code: int) -> str:
    if not 0 <= code <= 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        code = 0xFFFD
    return _quote_text(chr(code), "'")


def go_quote(value: Any) -> str:
    """Quote a value the way the ``%q`` verb does.

    Strings become double-quoted with escapes, integers become quoted
    characters, and sequences and mappings are quoted element by element.
    """
    if isinstance(value, str):
        return _quote_text(value, '"')
    if isinstance(value, (bytes, bytearray)):
        return _quote_text(bytes(value).decode("utf-8", "surrogateescape"), '"')
    if value is None:
        return "%!q(<nil>)"
    if isinstance(value, bool):
        return f"%!q(bool={'true' if value else 'false'})"
    if isinstance(value, int):
        return _quote_rune(value)
    if isinstance(value, float):
        return f"%!q(float64={value!r})"
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda item: str(item[0]))
        return "map[" + " ".join(f"{go_quote(k)}:{go_quote(v)}" for k, v in items) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(go_quote(item) for item in value) + "]"
    return f"%!q({type(value).__name__}={value})"


def to_string_list(value: Any) -> str:
    """Render a list as an HCL list of quoted strings, e.g. ``["a", "b"]``."""
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(go_quote(item) for item in value) + "]"
    return "[" + go_quote(value) + "]"


def file_contents(path: str) -> str:
    """Return the contents of the file at ``path``; raise OSError if unreadable."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise OSError(f"failed to read {os.fspath(path)}: {exc}") from exc
    return data.decode("utf-8", "surrogateescape")