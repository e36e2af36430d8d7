"""Content stream interpreter producing positioned text runs."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .exceptions import Utf16DecodeError
from .fonts import FontCache, Resolver, resolve_indirect
from .operations import Operation, ShowText, ShowTextAdjusted, decode_operations
from .text_state import TextStateTracker
from .types import FONT_SIZE_TOLERANCE, ExtractionOptions, PageText, PositionedText

__all__ = ["PageInterpreter", "interpret_operations", "interpret_page"]

LOGGER = logging.getLogger(__name__)


class PageInterpreter:
    """Interpret page content streams into their largest text runs."""

    def __init__(
        self,
        options: ExtractionOptions | None = None,
        resolve: Resolver = resolve_indirect,
    ) -> None:
        self.options = options or ExtractionOptions()
        self.resolve = resolve

    def interpret_page(self, page: Any, page_index: int | None = None) -> PageText:
        """Interpret a pypdf page.

        Raises :class:`~pdftitlex.exceptions.NoContentError` for pages without
        contents and :class:`~pdftitlex.exceptions.ContentDecodeError` when the
        stream cannot be parsed.
        """

        operations = decode_operations(page)
        font_cache = FontCache.from_page(page, self.resolve)
        return self.interpret_operations(operations, font_cache, page_index=page_index)

    def interpret_operations(
        self,
        operations: Iterable[Operation],
        font_cache: FontCache | None = None,
        *,
        page_index: int | None = None,
    ) -> PageText:
        tracker = TextStateTracker(
            font_cache or FontCache(),
            reset_font_on_begin_text=self.options.reset_font_on_begin_text,
        )
        runs: list[PositionedText] = []
        dropped = 0

        for operation in operations:
            if tracker.apply(operation):
                continue
            if not isinstance(operation, (ShowText, ShowTextAdjusted)):
                continue
            state = tracker.state
            try:
                text = self._show(operation, tracker)
            except Utf16DecodeError:
                if not self.options.skip_malformed_text:
                    raise
                dropped += 1
                LOGGER.warning("Dropping undecodable text run on page %s", _label(page_index))
                continue
            runs.append(PositionedText(text=text, font_size=state.font_size, y=state.y))

        max_font_size = tracker.max_font_size
        largest = [run for run in runs if abs(run.font_size - max_font_size) <= FONT_SIZE_TOLERANCE]
        LOGGER.debug(
            "Page %s: %d runs, max font size %s, %d at max",
            _label(page_index),
            len(runs),
            max_font_size,
            len(largest),
        )
        return PageText(
            runs=largest,
            max_font_size=max_font_size,
            page_index=page_index,
            dropped_runs=dropped,
        )

    def _show(self, operation: ShowText | ShowTextAdjusted, tracker: TextStateTracker) -> str:
        font = tracker.state.font
        if isinstance(operation, ShowText):
            return font.decode(operation.raw)
        parts: list[str] = []
        for item in operation.items:
            if isinstance(item, bytes):
                parts.append(font.decode(item))
            elif item < self.options.space_threshold:
                parts.append(" ")
        return "".join(parts)


def _label(page_index: int | None) -> str:
    return "?" if page_index is None else str(page_index + 1)


def interpret_page(
    page: Any,
    resolve: Resolver = resolve_indirect,
    options: ExtractionOptions | None = None,
    page_index: int | None = None,
) -> PageText:
    return PageInterpreter(options, resolve).interpret_page(page, page_index=page_index)


def interpret_operations(
    operations: Iterable[Operation],
    font_cache: FontCache | None = None,
    options: ExtractionOptions | None = None,
) -> PageText:
    return PageInterpreter(options).interpret_operations(operations, font_cache)
