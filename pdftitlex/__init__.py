"""
pdftitlex - Find the title of a PDF document.

The title is the text drawn at the largest font size within the first pages
of the document. Page content streams are interpreted operator by operator,
and string bytes are decoded through each font's ToUnicode map or simple
encoding.

Quick Start:
    >>> from pdftitlex import extract_title
    >>> extract_title('paper.pdf', page_limit=2)
    'Analysis of Blood Flow in One Dimension'

Main Classes:
    - TitleExtractor: Runs an extraction and reports skipped pages
    - PageInterpreter: Interprets a single page content stream
    - FontInfo / FontCache: Per-font decoding strategies for a page

For CLI usage, use the 'pdftitlex' command after installation.
"""

__version__ = "0.1.0"

from pdftitlex.exceptions import (
    ContentDecodeError,
    DocumentLoadError,
    EncryptedPDFError,
    MissingEncodingError,
    NoContentError,
    PDFTitleError,
    UnsupportedEncodingError,
    Utf16DecodeError,
)
from pdftitlex.extractor import TitleExtractor, extract_title
from pdftitlex.fonts import FontCache, FontInfo
from pdftitlex.interpreter import PageInterpreter
from pdftitlex.types import (
    ExtractionOptions,
    PageFailure,
    PageText,
    PositionedText,
    TitleResult,
)

__all__ = [
    "TitleExtractor",
    "extract_title",
    "PageInterpreter",
    "FontCache",
    "FontInfo",
    "ExtractionOptions",
    "PageFailure",
    "PageText",
    "PositionedText",
    "TitleResult",
    "PDFTitleError",
    "DocumentLoadError",
    "EncryptedPDFError",
    "NoContentError",
    "ContentDecodeError",
    "UnsupportedEncodingError",
    "MissingEncodingError",
    "Utf16DecodeError",
    "__version__",
]
