"""
Query engine: OR-of-terms search with additive page counts.

Given a raw query, the engine:
- tokenizes it with the same rule as indexing and drops stop words,
- deduplicates terms so a repeated word counts once,
- unions the postings of every remaining term, summing counts per page,
- ranks pages by count desc, then document_id asc, then page asc.

search() never mutates the index and never raises on odd input: a query with
no usable terms, or with no matches, returns [].
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Tuple

from .documents import load_stop_words
from .index_builder import build_index_from_directory
from .posting import InvertedIndex, PageHit
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def normalize_query(raw_query: str, stop_words: AbstractSet[str]) -> List[str]:
    """
    Tokenize the raw query using the same logic as indexing, drop stop words
    and duplicates (first occurrence wins).
    """
    terms = (t for t in tokenize(raw_query) if t not in stop_words)
    return list(dict.fromkeys(terms))


def union_postings(
    postings_lists: Iterable[Iterable[PageHit]],
) -> Dict[Tuple[str, int], int]:
    """
    Union postings lists (OR query), summing counts per (document_id, page).
    """
    aggregated: Dict[Tuple[str, int], int] = {}
    for postings in postings_lists:
        for hit in postings:
            aggregated[hit.key] = aggregated.get(hit.key, 0) + hit.count
    return aggregated


def rank_page_hits(aggregated: Dict[Tuple[str, int], int]) -> List[PageHit]:
    """Materialize fresh PageHits and sort them by PageHit.sort_key."""
    hits = [
        PageHit(document_id=doc_id, page=page, count=count)
        for (doc_id, page), count in aggregated.items()
    ]
    hits.sort(key=lambda h: h.sort_key)
    return hits


def search(
    query: str,
    index: InvertedIndex,
    stop_words: AbstractSet[str],
) -> List[PageHit]:
    """Return ranked page hits for a free-text query."""
    terms = normalize_query(query or "", stop_words)
    if not terms:
        return []
    aggregated = union_postings(index.get_postings(term) for term in terms)
    return rank_page_hits(aggregated)


class SearchEngine:
    """
    A built index plus its stop words, shared read-only by request handlers.
    """

    def __init__(self, index: InvertedIndex, stop_words: AbstractSet[str]) -> None:
        self.index = index.freeze()
        self.stop_words = frozenset(stop_words)

    @classmethod
    def from_directory(cls, corpus_dir: Path, stop_words_path: Path) -> SearchEngine:
        """Load stop words, index the corpus directory and return the engine."""
        stop_words = load_stop_words(stop_words_path)
        index = build_index_from_directory(corpus_dir, stop_words)
        return cls(index, stop_words)

    def search(self, query: str) -> List[PageHit]:
        hits = search(query, self.index, self.stop_words)
        logger.debug("Query %r -> %d hits", query, len(hits))
        return hits
