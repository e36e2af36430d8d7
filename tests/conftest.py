from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    StreamObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


PageSpec = Mapping[str, Any]


def _to_unicode_stream(mapping: Mapping[int, str], code_bytes: int) -> DecodedStreamObject:
    width = code_bytes * 2
    entries = "\n".join(
        f"<{code:0{width}X}> <{text.encode('utf-16-be').hex().upper()}>"
        for code, text in sorted(mapping.items())
    )
    low = "0" * width
    high = "F" * width
    cmap = (
        "/CIDInit /ProcSet findresource begin\n"
        "12 dict begin\n"
        "begincmap\n"
        "/CIDSystemInfo << /Registry (Adobe) /Ordering (UCS) /Supplement 0 >> def\n"
        "/CMapName /Adobe-Identity-UCS def\n"
        "/CMapType 2 def\n"
        "1 begincodespacerange\n"
        f"<{low}> <{high}>\n"
        "endcodespacerange\n"
        f"{len(mapping)} beginbfchar\n"
        f"{entries}\n"
        "endbfchar\n"
        "endcmap\n"
        "CMapName currentdict /CMap defineresource pop\n"
        "end\n"
        "end\n"
    )
    stream = DecodedStreamObject()
    stream.set_data(cmap.encode("ascii"))
    return stream


@pytest.fixture()
def font_factory() -> Callable[..., DictionaryObject]:
    """Build simple font dictionaries.

    ``encoding`` is a base encoding name (``None`` leaves it out),
    ``differences`` maps codes to glyph names and ``to_unicode`` maps codes to
    text through an embedded CMap.
    """

    def _create(
        base_font: str | None = "Helvetica",
        *,
        encoding: str | None = "WinAnsiEncoding",
        differences: Mapping[int, str] | None = None,
        to_unicode: Mapping[int, str] | None = None,
        code_bytes: int = 1,
    ) -> DictionaryObject:
        font = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
            }
        )
        if base_font is not None:
            font[NameObject("/BaseFont")] = NameObject(f"/{base_font}")
        if differences is not None:
            array = ArrayObject()
            for code, glyph in sorted(differences.items()):
                array.append(NumberObject(code))
                array.append(NameObject(f"/{glyph}"))
            encoding_dict = DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/Encoding"),
                    NameObject("/Differences"): array,
                }
            )
            if encoding is not None:
                encoding_dict[NameObject("/BaseEncoding")] = NameObject(f"/{encoding}")
            font[NameObject("/Encoding")] = encoding_dict
        elif encoding is not None:
            font[NameObject("/Encoding")] = NameObject(f"/{encoding}")
        if to_unicode is not None:
            font[NameObject("/ToUnicode")] = _to_unicode_stream(to_unicode, code_bytes)
        return font

    return _create


def _indirect(writer: PdfWriter, font: DictionaryObject):
    for key, value in list(font.items()):
        if isinstance(value, StreamObject):
            font[key] = writer._add_object(value)
    return writer._add_object(font)


def _add_page(writer: PdfWriter, spec: PageSpec) -> None:
    page = writer.add_blank_page(width=612, height=792)
    content = spec.get("content")
    if content is not None:
        stream = DecodedStreamObject()
        stream.set_data(content)
        page[NameObject("/Contents")] = writer._add_object(stream)

    resources = DictionaryObject()
    fonts = spec.get("fonts") or {}
    if fonts:
        resources[NameObject("/Font")] = DictionaryObject(
            {NameObject(f"/{name}"): _indirect(writer, font) for name, font in fonts.items()}
        )
    states = spec.get("graphics_states") or {}
    if states:
        ext = DictionaryObject()
        for name, (font, size) in states.items():
            ext[NameObject(f"/{name}")] = DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/ExtGState"),
                    NameObject("/Font"): ArrayObject([_indirect(writer, font), FloatObject(size)]),
                }
            )
        resources[NameObject("/ExtGState")] = ext
    page[NameObject("/Resources")] = resources


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a PDF whose pages are described by dictionaries.

    Each page spec may contain ``content`` (raw content stream bytes, or
    ``None`` for a page without contents), ``fonts`` (resource name -> font
    dictionary) and ``graphics_states`` (name -> ``(font, size)``).
    """

    def _create(
        filename: str,
        pages: Sequence[PageSpec],
        *,
        password: str | None = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for spec in pages:
            _add_page(writer, spec)
        if password is not None:
            writer.encrypt(user_password=password, owner_password=password)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def title_pdf(pdf_factory: Callable[..., Path], font_factory: Callable[..., DictionaryObject]) -> Path:
    """Two pages: a 24pt title on page one and 12pt body text on both."""

    font = font_factory()
    first = (
        b"BT\n/F1 24 Tf\n72 700 Td\n(A Study of) Tj\n0 -30 Td\n(Blood Flow) Tj\n"
        b"/F1 12 Tf\n0 -40 Td\n(Abstract) Tj\nET\n"
    )
    second = b"BT\n/F1 12 Tf\n72 700 Td\n(Introduction) Tj\nET\n"
    return pdf_factory(
        "title.pdf",
        [
            {"content": first, "fonts": {"F1": font}},
            {"content": second, "fonts": {"F1": font}},
        ],
    )
