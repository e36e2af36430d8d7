"""Text positioning state driven by content stream operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from .fonts import FontCache, FontInfo
from .operations import (
    BeginText,
    MoveTextPosition,
    Operation,
    SetFont,
    SetGraphicsStateFont,
    SetLeading,
    SetTextMatrix,
    TextNewline,
)

__all__ = ["TextState", "TextStateTracker"]


@dataclass(slots=True)
class TextState:
    """Cursor for one page: active font, size, leading and baseline."""

    font: FontInfo = field(default_factory=FontInfo.raw_bytes)
    font_size: float = 0.0
    leading: float = 0.0
    y: float = 0.0

    def reset(self, *, keep_font: bool = True) -> None:
        self.font_size = 0.0
        self.leading = 0.0
        self.y = 0.0
        if not keep_font:
            self.font = FontInfo.raw_bytes()


class TextStateTracker:
    """Applies positioning and font operations to a :class:`TextState`.

    ``max_font_size`` is the largest size selected so far on the page.
    """

    def __init__(self, font_cache: FontCache, *, reset_font_on_begin_text: bool = False) -> None:
        self.font_cache = font_cache
        self.reset_font_on_begin_text = reset_font_on_begin_text
        self.state = TextState()
        self.max_font_size = 0.0

    def apply(self, operation: Operation) -> bool:
        """Apply ``operation`` if it affects text state; return whether it did."""

        if isinstance(operation, BeginText):
            self.begin_text()
        elif isinstance(operation, SetLeading):
            self.set_leading(operation.amount)
        elif isinstance(operation, SetFont):
            self.set_font(self.font_cache.get_font(operation.name), operation.size)
        elif isinstance(operation, SetGraphicsStateFont):
            selection = self.font_cache.get_font_from_graphics_state(operation.state_name)
            if selection is not None:
                self.set_font(*selection)
        elif isinstance(operation, MoveTextPosition):
            self.move_text_position(operation.dx, operation.dy)
        elif isinstance(operation, SetTextMatrix):
            self.set_text_matrix(operation.f)
        elif isinstance(operation, TextNewline):
            self.newline()
        else:
            return False
        return True

    def begin_text(self) -> None:
        self.state.reset(keep_font=not self.reset_font_on_begin_text)

    def set_leading(self, amount: float) -> None:
        self.state.leading = amount

    def set_font(self, font: FontInfo, size: float) -> None:
        self.state.font = font
        self.state.font_size = size
        if size > self.max_font_size:
            self.max_font_size = size

    def move_text_position(self, dx: float, dy: float) -> None:
        if dy != 0:
            self.state.y += dy

    def set_text_matrix(self, f: float) -> None:
        self.state.y = f

    def newline(self) -> None:
        self.move_text_position(0.0, -self.state.leading)
