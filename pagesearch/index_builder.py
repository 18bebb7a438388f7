"""
Index builder: constructs the in-memory inverted index from per-page token streams.

The builder runs once at startup, single-threaded, and returns a frozen index.
It is all-or-nothing: any error from the document stream propagates and no
partial index is produced.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import AbstractSet, Iterable, Sequence

from .documents import iter_corpus_pages
from .errors import EmptyCorpusError
from .posting import InvertedIndex
from .tokenizer import normalize_tokens

logger = logging.getLogger(__name__)


def _page_frequencies(tokens: Iterable[str], stop_words: AbstractSet[str]) -> Counter:
    """Local frequency table for one page, stop words removed."""
    return Counter(t for t in normalize_tokens(tokens) if t not in stop_words)


def build(
    documents: Iterable[tuple[str, int, Sequence[str]]],
    stop_words: AbstractSet[str],
) -> InvertedIndex:
    """
    Build an inverted index from (document_id, page, tokens) triples.
    - Tokens are lowercased; empty tokens and stop words are dropped.
    - Each page contributes one PageHit per distinct token, with its total count.
    Raises EmptyCorpusError if documents yields nothing.
    """
    index = InvertedIndex()
    num_pages = 0
    doc_ids: set[str] = set()

    for document_id, page, tokens in documents:
        num_pages += 1
        if document_id not in doc_ids:
            logger.debug("Indexing document: %s", document_id)
            doc_ids.add(document_id)
        tf = _page_frequencies(tokens, stop_words)
        if tf:
            index.add_page(document_id, page, tf)

    if num_pages == 0:
        raise EmptyCorpusError("No documents to index: the corpus is empty.")

    index.freeze()
    logger.info(
        "Indexed %d documents, %d pages, %d unique terms",
        len(doc_ids), num_pages, len(index),
    )
    return index


def build_index_from_directory(
    corpus_dir: Path,
    stop_words: AbstractSet[str],
) -> InvertedIndex:
    """
    Build the inverted index from every supported file in a directory.
    """
    corpus_dir = Path(corpus_dir)
    logger.info("Building index from %s", corpus_dir.resolve())
    try:
        return build(iter_corpus_pages(corpus_dir), stop_words)
    except EmptyCorpusError:
        raise EmptyCorpusError(
            f"{corpus_dir.resolve()} - corpus directory has no documents to index."
        ) from None
