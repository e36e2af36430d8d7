"""pypdf backend implementation for pdftitlex."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any, Iterator

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import DocumentLoadError, EncryptedPDFError
from ..fonts import resolve_indirect
from .base import BackendDocument, PDFBackend

LOGGER = logging.getLogger(__name__)


@dataclass
class PypdfDocument(BackendDocument):
    reader: PdfReader

    @property
    def is_encrypted(self) -> bool:
        return bool(self.reader.is_encrypted)

    def iter_pages(self, limit: int | None = None) -> Iterator[Any]:
        pages = iter(self.reader.pages)
        if limit is None:
            return pages
        return islice(pages, limit)

    def resolve(self, obj: Any) -> Any:
        return resolve_indirect(obj)


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, pdf_path: str | Path) -> PypdfDocument:
        path = Path(pdf_path)
        if not path.exists() or not path.is_file():
            raise DocumentLoadError(path, FileNotFoundError(f"PDF file not found: {path}"))

        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise DocumentLoadError(path, exc) from exc

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
        except PdfReadError as exc:
            raise DocumentLoadError(path, exc) from exc
        except Exception as exc:
            raise DocumentLoadError(path, exc) from exc

        if reader.is_encrypted:
            raise EncryptedPDFError(path)

        try:
            num_pages = len(reader.pages)
        except Exception as exc:
            raise DocumentLoadError(path, exc) from exc

        LOGGER.debug("Loaded %s with %d pages", path, num_pages)
        return PypdfDocument(path=path, num_pages=num_pages, reader=reader)
