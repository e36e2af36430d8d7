"""Font decoding strategies and the per-page font cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from pypdf import _cmap
from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject

from .encoding_tables import BaseEncoding, build_difference_table, glyph_name_to_unicode
from .exceptions import MissingEncodingError, UnsupportedEncodingError, Utf16DecodeError

__all__ = [
    "DecoderKind",
    "FontCache",
    "FontInfo",
    "MISSING_FONT_NAME",
    "UTF16_BE_BOM",
    "clean_name",
    "resolve_indirect",
]

LOGGER = logging.getLogger(__name__)

UTF16_BE_BOM = b"\xfe\xff"
MISSING_FONT_NAME = "MISSING_NAME"

Resolver = Callable[[Any], Any]


def resolve_indirect(obj: object | None) -> object | None:
    if isinstance(obj, IndirectObject):
        try:
            return obj.get_object()
        except Exception:
            return None
    return obj


def clean_name(name: object) -> str:
    raw = str(name)
    return raw[1:] if raw.startswith("/") else raw


class DecoderKind(str, Enum):
    DIFFERENCE_MAP = "difference_map"
    UNICODE_MAP = "unicode_map"
    RAW_BYTES = "raw_bytes"


def _freeze(table: Mapping[int, str] | None) -> Mapping[int, str]:
    return MappingProxyType(dict(table or {}))


@dataclass(frozen=True, slots=True)
class FontInfo:
    """How the string bytes shown with one font become text.

    ``kind`` selects the strategy:

    * ``DIFFERENCE_MAP``: ``table`` maps each byte to a character.
    * ``UNICODE_MAP``: ``table`` maps character codes to text, taken from
      the font's ToUnicode CMap.
    * ``RAW_BYTES``: no font information, bytes are read as UTF-16BE (with a
      byte order mark) or UTF-8.
    """

    kind: DecoderKind = DecoderKind.RAW_BYTES
    table: Mapping[int, str] = field(default_factory=lambda: _freeze(None))

    @classmethod
    def raw_bytes(cls) -> "FontInfo":
        return cls()

    @classmethod
    def difference_map(cls, table: Mapping[int, str]) -> "FontInfo":
        return cls(DecoderKind.DIFFERENCE_MAP, _freeze(table))

    @classmethod
    def unicode_map(cls, table: Mapping[int, str]) -> "FontInfo":
        return cls(DecoderKind.UNICODE_MAP, _freeze(table))

    @classmethod
    def from_font(cls, font: DictionaryObject, resolve: Resolver = resolve_indirect) -> "FontInfo":
        """Build the decoding strategy for a font dictionary.

        A parsable ToUnicode map wins; otherwise the simple ``/Encoding`` is
        used. Raises :class:`UnsupportedEncodingError` for unknown base
        encodings and :class:`MissingEncodingError` when neither is present.
        """

        if "/ToUnicode" in font:
            table = _parse_to_unicode(font)
            if table:
                return cls.unicode_map(table)

        if "/Encoding" in font:
            encoding = resolve(font.get("/Encoding"))
            return cls.difference_map(_parse_simple_encoding(encoding, resolve))

        base_font = resolve(font.get("/BaseFont"))
        name = clean_name(base_font) if base_font is not None else MISSING_FONT_NAME
        raise MissingEncodingError(name)

    def decode(self, data: bytes) -> str:
        """Decode the raw bytes of a PDF string into text."""

        if self.kind is DecoderKind.DIFFERENCE_MAP:
            return "".join(self.table[byte] for byte in data if byte in self.table)

        if self.kind is DecoderKind.UNICODE_MAP:
            if data.startswith(UTF16_BE_BOM):
                body = data[len(UTF16_BE_BOM):]
                codes = (
                    int.from_bytes(body[index:index + 2], "big")
                    for index in range(0, len(body) - 1, 2)
                )
            else:
                codes = iter(data)
            return "".join(self.table[code] for code in codes if code in self.table)

        if data.startswith(UTF16_BE_BOM):
            try:
                return data[len(UTF16_BE_BOM):].decode("utf-16-be")
            except UnicodeDecodeError as exc:
                raise Utf16DecodeError() from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Utf16DecodeError() from exc


def _parse_to_unicode(font: DictionaryObject) -> dict[int, str]:
    try:
        _encoding, cmap = _cmap.get_encoding(font)
    except Exception as exc:
        LOGGER.debug("Unable to parse ToUnicode map: %s", exc)
        return {}
    table: dict[int, str] = {}
    if not isinstance(cmap, dict):
        return table
    for key, value in cmap.items():
        if key == -1 or not isinstance(key, str) or len(key) != 1:
            continue
        if isinstance(value, bytes):
            try:
                mapped = value.decode("utf-16-be", "surrogatepass")
            except Exception:
                mapped = value.decode("latin-1", "ignore")
        else:
            mapped = str(value)
        table[ord(key)] = mapped
    return table


def _parse_simple_encoding(encoding: object, resolve: Resolver) -> dict[int, str]:
    if isinstance(encoding, DictionaryObject):
        base_name = resolve(encoding.get("/BaseEncoding"))
        base = BaseEncoding.from_name(base_name) if base_name is not None else None
        differences = _parse_differences(resolve(encoding.get("/Differences")), resolve)
        return build_difference_table(base, differences)
    if isinstance(encoding, str):
        return build_difference_table(BaseEncoding.from_name(encoding), {})
    raise UnsupportedEncodingError(str(encoding))


def _parse_differences(differences: object, resolve: Resolver) -> dict[int, str]:
    result: dict[int, str] = {}
    if not isinstance(differences, ArrayObject):
        return result
    code: int | None = None
    for item in differences:
        item = resolve(item)
        if isinstance(item, str):
            if code is None:
                continue
            text = glyph_name_to_unicode(item)
            if text is not None:
                result[code] = text
            code += 1
        else:
            try:
                code = int(item)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                code = None
    return result


class FontCache:
    """Fonts available on one page, keyed by resource name.

    Extended graphics states that select a font are recorded as
    ``state name -> (font key, size)``. Lookups never fail: unknown names
    yield the raw-bytes strategy.
    """

    def __init__(
        self,
        fonts: Mapping[str, FontInfo] | None = None,
        graphics_states: Mapping[str, tuple[str | None, float]] | None = None,
    ) -> None:
        self._fonts: dict[str, FontInfo] = {clean_name(k): v for k, v in (fonts or {}).items()}
        self._graphics_states: dict[str, tuple[str | None, float]] = {
            clean_name(k): v for k, v in (graphics_states or {}).items()
        }

    @classmethod
    def from_page(cls, page: Mapping[str, Any], resolve: Resolver = resolve_indirect) -> "FontCache":
        cache = cls()
        resources = resolve(page.get("/Resources"))
        if not isinstance(resources, DictionaryObject):
            return cache

        fonts = resolve(resources.get("/Font"))
        if isinstance(fonts, DictionaryObject):
            for name, entry in fonts.items():
                font = resolve(entry)
                if isinstance(font, DictionaryObject):
                    cache._add_font(clean_name(name), font, resolve)

        states = resolve(resources.get("/ExtGState"))
        if isinstance(states, DictionaryObject):
            for state_name, entry in states.items():
                state = resolve(entry)
                if not isinstance(state, DictionaryObject):
                    continue
                selection = resolve(state.get("/Font"))
                if not isinstance(selection, ArrayObject) or len(selection) < 2:
                    continue
                font = resolve(selection[0])
                try:
                    size = float(resolve(selection[1]))  # type: ignore[arg-type]
                except (TypeError, ValueError):
                    LOGGER.warning("Ignoring graphics state %s with invalid font size", state_name)
                    continue
                key: str | None = None
                if isinstance(font, DictionaryObject):
                    base_font = resolve(font.get("/BaseFont"))
                    if base_font is not None:
                        key = clean_name(base_font)
                        cache._add_font(key, font, resolve)
                cache._graphics_states[clean_name(state_name)] = (key, size)

        return cache

    def get_font(self, name: object) -> FontInfo:
        return self._fonts.get(clean_name(name)) or FontInfo.raw_bytes()

    def get_font_from_graphics_state(self, name: object) -> tuple[FontInfo, float] | None:
        entry = self._graphics_states.get(clean_name(name))
        if entry is None:
            return None
        key, size = entry
        font = self.get_font(key) if key is not None else FontInfo.raw_bytes()
        return font, size

    def __contains__(self, name: object) -> bool:
        return clean_name(name) in self._fonts

    def __len__(self) -> int:
        return len(self._fonts)

    def _add_font(self, name: str, font: DictionaryObject, resolve: Resolver) -> None:
        try:
            self._fonts[name] = FontInfo.from_font(font, resolve)
        except (MissingEncodingError, UnsupportedEncodingError) as exc:
            LOGGER.warning("Unable to add font %s: %s", name, exc)
