from __future__ import annotations

import pytest
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from pdftitlex.exceptions import ContentDecodeError, NoContentError
from pdftitlex.operations import (
    BeginText,
    EndText,
    MoveTextPosition,
    Other,
    SetFont,
    SetGraphicsStateFont,
    SetLeading,
    SetTextMatrix,
    ShowText,
    ShowTextAdjusted,
    TextNewline,
    convert_operation,
    convert_operations,
    decode_operations,
    raw_string_bytes,
)


def test_text_object_operators() -> None:
    assert convert_operation([], b"BT") == [BeginText()]
    assert convert_operation([], b"ET") == [EndText()]
    assert convert_operation([], b"T*") == [TextNewline()]


def test_font_and_state_operators() -> None:
    assert convert_operation([NameObject("/F1"), NumberObject(24)], b"Tf") == [SetFont("F1", 24.0)]
    assert convert_operation([NameObject("/GS1")], b"gs") == [SetGraphicsStateFont("GS1")]
    assert convert_operation([FloatObject(14.5)], b"TL") == [SetLeading(14.5)]


def test_positioning_operators() -> None:
    assert convert_operation([NumberObject(72), NumberObject(-30)], b"Td") == [
        MoveTextPosition(72.0, -30.0)
    ]
    matrix = [NumberObject(1), NumberObject(0), NumberObject(0), NumberObject(1), NumberObject(50), NumberObject(100)]
    assert convert_operation(matrix, b"Tm") == [SetTextMatrix(1.0, 0.0, 0.0, 1.0, 50.0, 100.0)]


def test_td_uppercase_sets_leading_then_moves() -> None:
    assert convert_operation([NumberObject(0), NumberObject(-14)], b"TD") == [
        SetLeading(14.0),
        MoveTextPosition(0.0, -14.0),
    ]


def test_quote_operators_move_then_show() -> None:
    assert convert_operation([ByteStringObject(b"Next")], b"'") == [TextNewline(), ShowText(b"Next")]
    operands = [NumberObject(1), NumberObject(2), ByteStringObject(b"Spaced")]
    assert convert_operation(operands, b'"') == [TextNewline(), ShowText(b"Spaced")]


def test_show_text_keeps_raw_bytes() -> None:
    assert convert_operation([TextStringObject("Title")], b"Tj") == [ShowText(b"Title")]
    assert convert_operation([ByteStringObject(b"\xfe\xff\x00A")], b"Tj") == [ShowText(b"\xfe\xff\x00A")]


def test_show_text_adjusted_mixes_strings_and_numbers() -> None:
    array = ArrayObject([ByteStringObject(b"Hello"), NumberObject(-250), ByteStringObject(b"World"), FloatObject(-50.5)])
    (operation,) = convert_operation([array], b"TJ")
    assert operation == ShowTextAdjusted((b"Hello", -250.0, b"World", -50.5))


def test_show_text_adjusted_ignores_names() -> None:
    array = ArrayObject([ByteStringObject(b"A"), NameObject("/Oops")])
    assert convert_operation([array], b"TJ") == [ShowTextAdjusted((b"A",))]


def test_unknown_operator_is_other() -> None:
    assert convert_operation([NumberObject(1)], b"re") == [Other("re")]
    assert convert_operation([], "Do") == [Other("Do")]


@pytest.mark.parametrize(
    ("operands", "operator"),
    [
        ([], b"Tf"),
        ([NameObject("/F1")], b"Tf"),
        ([NameObject("/F1"), NameObject("/big")], b"Tf"),
        ([NumberObject(1)], b"Td"),
        ([NumberObject(1)] * 5, b"Tm"),
        ([], b"Tj"),
        ([NumberObject(1), NumberObject(2)], b'"'),
        ([ByteStringObject(b"not an array")], b"TJ"),
        ([], b"gs"),
    ],
)
def test_malformed_operands_raise(operands, operator) -> None:
    with pytest.raises(ContentDecodeError):
        convert_operation(operands, operator)


def test_raw_string_bytes_rejects_numbers() -> None:
    with pytest.raises(ContentDecodeError):
        raw_string_bytes(NumberObject(3))


def test_convert_operations_flattens_expansions() -> None:
    raw = [
        ([], b"BT"),
        ([NumberObject(0), NumberObject(-12)], b"TD"),
        ([ByteStringObject(b"x")], b"'"),
        ([], b"ET"),
    ]
    assert convert_operations(raw) == [
        BeginText(),
        SetLeading(12.0),
        MoveTextPosition(0.0, -12.0),
        TextNewline(),
        ShowText(b"x"),
        EndText(),
    ]


def test_describe_is_readable() -> None:
    assert BeginText().describe() == "begin text"
    assert SetFont("F1", 24.0).describe() == "  font F1 size 24"
    assert SetTextMatrix(1, 0, 0, 1, 72, 700).describe() == "  text matrix [1 0 0 1 72 700]"
    assert Other("re").describe() == "  (re)"


class _Contents:
    def __init__(self, operations=None, error=None):
        self._operations = operations or []
        self._error = error

    @property
    def operations(self):
        if self._error is not None:
            raise self._error
        return self._operations


class _Page:
    def __init__(self, contents):
        self._contents = contents

    def get_contents(self):
        return self._contents


def test_decode_operations_from_page() -> None:
    page = _Page(_Contents([([], b"BT"), ([NameObject("/F1"), NumberObject(9)], b"Tf"), ([], b"ET")]))
    assert decode_operations(page) == [BeginText(), SetFont("F1", 9.0), EndText()]


def test_decode_operations_without_contents() -> None:
    with pytest.raises(NoContentError):
        decode_operations(_Page(None))


def test_decode_operations_wraps_parser_errors() -> None:
    with pytest.raises(ContentDecodeError):
        decode_operations(_Page(_Contents(error=ValueError("truncated"))))
