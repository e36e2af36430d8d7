"""
Custom exceptions for pdftitlex.

Document-level errors (:class:`DocumentLoadError`, :class:`EncryptedPDFError`)
abort an extraction. Page-level and font-level errors are caught by the
extractor, logged, and the page or font is skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PDFTitleError(Exception):
    """Base exception for all pdftitlex errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown title extraction error occurred."


class DocumentLoadError(PDFTitleError):
    """Raised when the PDF document cannot be read or parsed."""

    def __init__(self, path: str | Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not load document: {self.path}{detail}")

    @property
    def default_message(self) -> str:
        return "Could not load document."


class EncryptedPDFError(PDFTitleError):
    """Raised when the PDF requires a password."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"PDF is encrypted and cannot be processed: {self.path}")

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class NoContentError(PDFTitleError):
    """Raised when a page has no content stream."""

    @property
    def default_message(self) -> str:
        return "Page has no content stream."


class ContentDecodeError(PDFTitleError):
    """Raised when a page content stream cannot be decoded into operations."""

    @property
    def default_message(self) -> str:
        return "Page content stream could not be decoded."


class UnsupportedEncodingError(PDFTitleError):
    """Raised when a font declares a base encoding that is not implemented."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unsupported base encoding: {kind}")

    @property
    def default_message(self) -> str:
        return "Unsupported base encoding."


class MissingEncodingError(PDFTitleError):
    """Raised when a font has neither a ToUnicode map nor a simple encoding."""

    def __init__(self, font_name: str) -> None:
        self.font_name = font_name
        super().__init__(f"Font has no usable encoding: {font_name}")

    @property
    def default_message(self) -> str:
        return "Font has no usable encoding."


class Utf16DecodeError(PDFTitleError):
    """Raised when raw string bytes are neither valid UTF-16BE nor UTF-8."""

    @property
    def default_message(self) -> str:
        return "Text payload is not decodable as UTF-16BE or UTF-8."
