"""Typed content stream operations and their decoding from pypdf."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

from pypdf.generic import ArrayObject, NameObject

from .exceptions import ContentDecodeError, NoContentError

__all__ = [
    "BeginText",
    "EndText",
    "MoveTextPosition",
    "Operation",
    "Other",
    "SetFont",
    "SetGraphicsStateFont",
    "SetLeading",
    "SetTextMatrix",
    "ShowText",
    "ShowTextAdjusted",
    "TextNewline",
    "convert_operation",
    "convert_operations",
    "decode_operations",
    "raw_string_bytes",
]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BeginText:
    def describe(self) -> str:
        return "begin text"


@dataclass(frozen=True, slots=True)
class EndText:
    def describe(self) -> str:
        return "end text"


@dataclass(frozen=True, slots=True)
class SetLeading:
    amount: float

    def describe(self) -> str:
        return f"  set leading {self.amount:g}"


@dataclass(frozen=True, slots=True)
class SetFont:
    name: str
    size: float

    def describe(self) -> str:
        return f"  font {self.name} size {self.size:g}"


@dataclass(frozen=True, slots=True)
class SetGraphicsStateFont:
    state_name: str

    def describe(self) -> str:
        return f"  graphics state {self.state_name}"


@dataclass(frozen=True, slots=True)
class MoveTextPosition:
    dx: float
    dy: float

    def describe(self) -> str:
        return f"  move {self.dx:g} {self.dy:g}"


@dataclass(frozen=True, slots=True)
class SetTextMatrix:
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    def describe(self) -> str:
        values = " ".join(f"{value:g}" for value in (self.a, self.b, self.c, self.d, self.e, self.f))
        return f"  text matrix [{values}]"


@dataclass(frozen=True, slots=True)
class TextNewline:
    def describe(self) -> str:
        return "  newline"


@dataclass(frozen=True, slots=True)
class ShowText:
    raw: bytes

    def describe(self) -> str:
        return f"  show {self.raw!r}"


@dataclass(frozen=True, slots=True)
class ShowTextAdjusted:
    items: tuple[Union[bytes, float], ...]

    def describe(self) -> str:
        return f"  show adjusted {list(self.items)!r}"


@dataclass(frozen=True, slots=True)
class Other:
    operator: str

    def describe(self) -> str:
        return f"  ({self.operator})"


Operation = Union[
    BeginText,
    EndText,
    SetLeading,
    SetFont,
    SetGraphicsStateFont,
    MoveTextPosition,
    SetTextMatrix,
    TextNewline,
    ShowText,
    ShowTextAdjusted,
    Other,
]


def _decode_operator(operator: object) -> bytes:
    if isinstance(operator, bytes):
        return operator
    if isinstance(operator, str):
        return operator.encode("latin-1", "ignore")
    return str(operator).encode("latin-1", "ignore")


def raw_string_bytes(value: object) -> bytes:
    """Return the bytes a PDF string operand was parsed from."""

    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    original = getattr(value, "original_bytes", None)
    if isinstance(original, (bytes, bytearray)):
        return bytes(original)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise ContentDecodeError(f"Expected a string operand, got {type(value).__name__}")


def _is_string(value: object) -> bool:
    return isinstance(value, (bytes, bytearray, str)) and not isinstance(value, NameObject)


def _float(operands: Sequence[Any], index: int, operator: str) -> float:
    try:
        return float(operands[index])
    except (IndexError, TypeError, ValueError) as exc:
        raise ContentDecodeError(f"The operation {operator} could not be parsed") from exc


def convert_operation(operands: Sequence[Any], operator: object) -> list[Operation]:
    """Convert one ``(operands, operator)`` pair from pypdf into operations.

    Compound operators expand into their primitive steps: ``TD`` sets the
    leading then moves, ``'`` and ``"`` move to the next line then show.
    """

    op = _decode_operator(operator)
    name = op.decode("latin-1", "ignore")

    if op == b"BT":
        return [BeginText()]
    if op == b"ET":
        return [EndText()]
    if op == b"TL":
        return [SetLeading(_float(operands, 0, name))]
    if op == b"Tf":
        if not operands:
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        return [SetFont(str(operands[0]).lstrip("/"), _float(operands, 1, name))]
    if op == b"gs":
        if not operands:
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        return [SetGraphicsStateFont(str(operands[0]).lstrip("/"))]
    if op == b"Td":
        return [MoveTextPosition(_float(operands, 0, name), _float(operands, 1, name))]
    if op == b"TD":
        dx = _float(operands, 0, name)
        dy = _float(operands, 1, name)
        return [SetLeading(-dy), MoveTextPosition(dx, dy)]
    if op == b"Tm":
        return [SetTextMatrix(*(_float(operands, index, name) for index in range(6)))]
    if op == b"T*":
        return [TextNewline()]
    if op == b"Tj":
        if not operands:
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        return [ShowText(raw_string_bytes(operands[0]))]
    if op == b"'":
        if not operands:
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        return [TextNewline(), ShowText(raw_string_bytes(operands[0]))]
    if op == b'"':
        if len(operands) < 3:
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        return [TextNewline(), ShowText(raw_string_bytes(operands[2]))]
    if op == b"TJ":
        if not operands or not isinstance(operands[0], (list, tuple, ArrayObject)):
            raise ContentDecodeError(f"The operation {name} could not be parsed")
        items: list[Union[bytes, float]] = []
        for item in operands[0]:
            if _is_string(item):
                items.append(raw_string_bytes(item))
            else:
                try:
                    items.append(float(item))
                except (TypeError, ValueError):
                    LOGGER.debug("Ignoring unexpected TJ element %r", item)
        return [ShowTextAdjusted(tuple(items))]
    return [Other(name)]


def convert_operations(raw_operations: Iterable[tuple[Sequence[Any], object]]) -> list[Operation]:
    operations: list[Operation] = []
    for operands, operator in raw_operations:
        operations.extend(convert_operation(operands, operator))
    return operations


def decode_operations(page: Any) -> list[Operation]:
    """Decode a page's content stream into typed operations.

    Raises :class:`NoContentError` when the page has no content stream and
    :class:`ContentDecodeError` when pypdf cannot parse it.
    """

    try:
        contents = page.get_contents()
    except Exception as exc:
        raise ContentDecodeError(f"Unable to read page contents: {exc}") from exc
    if contents is None:
        raise NoContentError()
    try:
        raw_operations = list(contents.operations)
    except Exception as exc:
        raise ContentDecodeError(f"Unable to parse content stream: {exc}") from exc
    return convert_operations(raw_operations)
