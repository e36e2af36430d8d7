"""Title extraction across the leading pages of a document."""
from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from .backends import PypdfBackend
from .backends.base import PDFBackend
from .exceptions import PDFTitleError
from .interpreter import PageInterpreter
from .types import ExtractionOptions, PageFailure, TitleResult, TitleSelection
from .utils import PathLike, time_block, to_path

__all__ = ["TitleExtractor", "extract_title"]

LOGGER = logging.getLogger(__name__)


class TitleExtractor:
    """Select the text drawn at the largest font size as the title.

    Pages are visited in order; a page replaces the current title only when
    its largest font size is strictly greater, so the earliest page wins ties.
    Page failures are recorded on the result and never abort the extraction.
    """

    def __init__(
        self,
        options: Optional[ExtractionOptions] = None,
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.options = options or ExtractionOptions()
        self.backend: PDFBackend = backend or PypdfBackend()

    def extract(self, pdf_path: PathLike) -> TitleResult:
        path = to_path(pdf_path)
        LOGGER.info("Extracting title from %s", path)
        document = self.backend.load(path)
        interpreter = PageInterpreter(self.options, document.resolve)

        selection = TitleSelection()
        failures: list[PageFailure] = []
        scanned = 0

        with time_block(LOGGER, f"Title extraction for {path.name}"):
            for index, page in enumerate(document.iter_pages(self.options.page_limit)):
                scanned += 1
                try:
                    page_text = interpreter.interpret_page(page, page_index=index)
                except PDFTitleError as exc:
                    LOGGER.warning("Skipping page %d of %s: %s", index + 1, path, exc)
                    failures.append(PageFailure(page_index=index, error=exc))
                    continue
                if selection.offer(page_text):
                    LOGGER.debug(
                        "Page %d sets title at font size %s", index + 1, page_text.max_font_size
                    )

        result = TitleResult(
            title=selection.best_text,
            font_size=selection.best_font_size,
            page_index=selection.page_index,
            pages_scanned=scanned,
            failures=failures,
        )
        LOGGER.info("Extracted title %r from %s", result.title, path)
        return result


def extract_title(
    pdf_path: PathLike,
    page_limit: Optional[int] = None,
    *,
    options: Optional[ExtractionOptions] = None,
    backend: Optional[PDFBackend] = None,
) -> str:
    """Return the title of ``pdf_path`` judged from its first pages.

    Raises :class:`~pdftitlex.exceptions.DocumentLoadError` or
    :class:`~pdftitlex.exceptions.EncryptedPDFError` when the document cannot
    be opened. Returns an empty string when no page yields text.
    """
    options = options or ExtractionOptions()
    if page_limit is not None:
        options = dataclasses.replace(options, page_limit=page_limit)
    return TitleExtractor(options, backend=backend).extract(pdf_path).title
