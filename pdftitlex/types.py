"""
Type definitions and dataclasses for pdftitlex.

This module defines data structures shared by the interpreter, the title
selector and the command line front end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

FONT_SIZE_TOLERANCE = 1e-6


@dataclass(frozen=True)
class ExtractionOptions:
    """
    Options controlling title extraction.

    Attributes:
        page_limit: Maximum number of leading pages to scan
        reset_font_on_begin_text: Whether ``BT`` also clears the active font
        skip_malformed_text: Drop undecodable text runs instead of
            abandoning the whole page
        space_threshold: ``TJ`` spacing values below this insert a space
    """
    page_limit: int = 2
    reset_font_on_begin_text: bool = False
    skip_malformed_text: bool = True
    space_threshold: float = -100.0

    def __post_init__(self) -> None:
        if self.page_limit < 0:
            raise ValueError("page_limit must be >= 0")


@dataclass(frozen=True, slots=True)
class PositionedText:
    """Text drawn by a single show-text operator."""

    text: str
    font_size: float
    y: float


@dataclass(slots=True)
class PageText:
    """
    Outcome of interpreting one page.

    Attributes:
        runs: Text runs drawn at the page's maximum font size, in order
        max_font_size: Largest font size selected on the page
        page_index: Zero-based page index, when known
        dropped_runs: Number of runs skipped because their bytes were
            undecodable
    """
    runs: List[PositionedText] = field(default_factory=list)
    max_font_size: float = 0.0
    page_index: Optional[int] = None
    dropped_runs: int = 0

    @property
    def text(self) -> str:
        return " ".join(run.text for run in self.runs)


@dataclass
class PageFailure:
    """A page that was skipped, and why."""

    page_index: int
    error: Exception

    def __str__(self) -> str:
        return f"page {self.page_index + 1}: {self.error}"


@dataclass
class TitleSelection:
    """
    Running best title across pages.

    Only replaced when a page's maximum font size strictly exceeds
    ``best_font_size``, so the first page wins ties.
    """
    best_font_size: float = 0.0
    best_text: str = ""
    page_index: Optional[int] = None

    def offer(self, page: PageText) -> bool:
        if page.max_font_size > self.best_font_size:
            self.best_font_size = page.max_font_size
            self.best_text = page.text
            self.page_index = page.page_index
            return True
        return False


@dataclass
class TitleResult:
    """
    Result of a title extraction.

    Attributes:
        title: Extracted title, empty when no page yielded text
        font_size: Font size the title was drawn at
        page_index: Zero-based page the title came from
        pages_scanned: Number of pages visited
        failures: Pages that were skipped
    """
    title: str
    font_size: float = 0.0
    page_index: Optional[int] = None
    pages_scanned: int = 0
    failures: List[PageFailure] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            "TitleResult(title={title!r}, font_size={size}, pages={pages}, "
            "failures={failures})"
        ).format(
            title=self.title,
            size=self.font_size,
            pages=self.pages_scanned,
            failures=len(self.failures),
        )
