"""Backend protocol for loading documents and walking their pages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Protocol


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    path: Path
    num_pages: int

    @property
    def is_encrypted(self) -> bool:
        raise NotImplementedError

    def iter_pages(self, limit: int | None = None) -> Iterator[Any]:
        raise NotImplementedError

    def resolve(self, obj: Any) -> Any:
        raise NotImplementedError


class PDFBackend(Protocol):
    """Protocol defining how documents are loaded."""

    def load(self, pdf_path: str | Path) -> BackendDocument:
        """Load a PDF file, raising on unreadable or encrypted documents."""
