"""
Document readers: turn corpus files into per-page token streams.

Supports PDF (one entry per page, via pypdf), HTML (one page) and plain
text (one page, or one per form-feed-separated chunk). Also loads the
stop-word list.
"""

import logging
import warnings
from pathlib import Path
from typing import Iterator

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .errors import (
    CorpusNotFoundError,
    DocumentReadError,
    StopWordsNotFoundError,
    UnsupportedDocumentError,
)
from .tokenizer import tokenize

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

logger = logging.getLogger(__name__)

PDF_SUFFIXES = {".pdf"}
HTML_SUFFIXES = {".html", ".htm"}
TEXT_SUFFIXES = {".txt"}
SUPPORTED_SUFFIXES = PDF_SUFFIXES | HTML_SUFFIXES | TEXT_SUFFIXES


TEXT_ENCODINGS = ("utf-8", "latin-1", "cp1252")
# Stop lists are usually Russian; latin-1 would decode cp1251 bytes into junk.
STOP_WORD_ENCODINGS = ("utf-8", "cp1251")


def read_text_file(filepath: Path, encodings: tuple[str, ...] = TEXT_ENCODINGS) -> str:
    """
    Read text file content, handling common encodings.
    """
    for encoding in encodings:
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise DocumentReadError(f"Could not decode file: {filepath}")


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def read_pdf_pages(filepath: Path) -> Iterator[tuple[int, str]]:
    """
    Yield (page_number, text) for every page of a PDF, starting at 1.
    Pages without a text layer yield "".
    """
    try:
        reader = PdfReader(filepath)
        for page_number, page in enumerate(reader.pages, start=1):
            yield page_number, page.extract_text() or ""
    except PyPdfError as e:
        raise DocumentReadError(f"Could not parse PDF {filepath}: {e}") from e


def iter_document_pages(filepath: Path) -> Iterator[tuple[int, str]]:
    """Yield (page_number, text) for one corpus file, dispatching on suffix."""
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix in PDF_SUFFIXES:
        yield from read_pdf_pages(filepath)
    elif suffix in HTML_SUFFIXES:
        yield 1, extract_text_from_html(read_text_file(filepath))
    elif suffix in TEXT_SUFFIXES:
        # Form feeds split a text file into pages (pdftotext output does this).
        chunks = read_text_file(filepath).split("\f")
        if len(chunks) > 1 and not chunks[-1].strip():
            chunks.pop()
        for page_number, chunk in enumerate(chunks, start=1):
            yield page_number, chunk
    else:
        raise UnsupportedDocumentError(f"Unsupported document type: {filepath}")


def iter_corpus_files(corpus_dir: Path) -> list[Path]:
    """Files directly inside corpus_dir, sorted by name."""
    corpus_dir = Path(corpus_dir)
    if not corpus_dir.is_dir():
        raise CorpusNotFoundError(f"Corpus directory not found: {corpus_dir.resolve()}")
    return sorted((p for p in corpus_dir.iterdir() if p.is_file()), key=lambda p: p.name)


def iter_corpus_pages(corpus_dir: Path) -> Iterator[tuple[str, int, list[str]]]:
    """
    Yield (document_id, page, tokens) for every supported file in corpus_dir.
    document_id is the file name. Unsupported files are skipped; read errors
    propagate so that a broken corpus is never partially indexed.
    """
    for filepath in iter_corpus_files(corpus_dir):
        if filepath.suffix.lower() not in SUPPORTED_SUFFIXES:
            logger.warning("Skipping unsupported file: %s", filepath.name)
            continue
        logger.debug("Reading %s", filepath.name)
        for page_number, text in iter_document_pages(filepath):
            yield filepath.name, page_number, tokenize(text)


def load_stop_words(path: Path) -> frozenset[str]:
    """
    Load a stop-word list: one word per line, case-folded, blanks ignored.
    UTF-8 and cp1251 files are accepted; anything else raises DocumentReadError.
    """
    path = Path(path)
    if not path.is_file():
        raise StopWordsNotFoundError(f"Stop-word file not found: {path.resolve()}")
    words = frozenset(
        line.strip().lower()
        for line in read_text_file(path, STOP_WORD_ENCODINGS).splitlines()
        if line.strip()
    )
    logger.info("Loaded %d stop words from %s", len(words), path)
    return words
