"""Single-byte base encodings and glyph name resolution.

The character tables are the ones bundled with pypdf. A NUL entry in a table
marks an undefined code.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Mapping

from pypdf._codecs import (
    _mac_encoding,
    _std_encoding,
    _symbol_encoding,
    _win_encoding,
    adobe_glyphs,
)

from .exceptions import UnsupportedEncodingError

__all__ = [
    "BaseEncoding",
    "build_difference_table",
    "glyph_name_to_unicode",
    "lookup",
]


class BaseEncoding(str, Enum):
    """Base encodings a simple font may declare."""

    STANDARD = "StandardEncoding"
    SYMBOL = "SymbolEncoding"
    WIN_ANSI = "WinAnsiEncoding"
    MAC_ROMAN = "MacRomanEncoding"

    @classmethod
    def from_name(cls, name: object) -> "BaseEncoding":
        cleaned = str(name).lstrip("/")
        for member in cls:
            if member.value == cleaned:
                return member
        raise UnsupportedEncodingError(cleaned)


_TABLES: dict[BaseEncoding, tuple[str, ...]] = {
    BaseEncoding.STANDARD: tuple(_std_encoding),
    BaseEncoding.SYMBOL: tuple(_symbol_encoding),
    BaseEncoding.WIN_ANSI: tuple(_win_encoding),
    BaseEncoding.MAC_ROMAN: tuple(_mac_encoding),
}

_UNI_NAME = re.compile(r"^uni([0-9A-Fa-f]{4})$")
_U_NAME = re.compile(r"^u([0-9A-Fa-f]{4,6})$")


def lookup(encoding: BaseEncoding, byte: int) -> str | None:
    """Return the character for ``byte`` in ``encoding`` or ``None``."""

    table = _TABLES[encoding]
    if not 0 <= byte < len(table):
        return None
    char = table[byte]
    if not char or char == "\u0000":
        return None
    return char


def glyph_name_to_unicode(name: object) -> str | None:
    """Resolve a glyph name such as ``/Aacute`` or ``uni00C1`` to text."""

    raw = str(name)
    if not raw or raw in {"/", "/.notdef", ".notdef"}:
        return None
    if not raw.startswith("/"):
        raw = f"/{raw}"
    mapped = adobe_glyphs.get(raw)
    if mapped:
        return mapped
    bare = raw[1:]
    match = _UNI_NAME.match(bare) or _U_NAME.match(bare)
    if match:
        try:
            return chr(int(match.group(1), 16))
        except ValueError:
            return None
    return None


def build_difference_table(
    base: BaseEncoding | None,
    differences: Mapping[int, str],
) -> dict[int, str]:
    """Layer ``differences`` on top of ``base`` into a byte -> text table."""

    table: dict[int, str] = {}
    if base is not None:
        for code in range(256):
            char = lookup(base, code)
            if char is not None:
                table[code] = char
    for code, text in differences.items():
        if 0 <= code < 256 and text:
            table[code] = text
    return table
