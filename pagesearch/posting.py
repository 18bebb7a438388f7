"""
Page hit and inverted index data structures.

A page hit represents a token's (or a query's) occurrences on one page of one
document: document_id (file name), 1-based page number, occurrence count.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping

from .errors import IndexFrozenError


@dataclass(frozen=True)
class PageHit:
    """
    Aggregate occurrence count on one page.
    - document_id: document name (e.g. "a.pdf")
    - page: page number, starting at 1
    - count: number of occurrences

    Two hits point at the same target iff document_id and page are equal.
    """

    document_id: str
    page: int
    count: int

    @property
    def key(self) -> tuple[str, int]:
        return (self.document_id, self.page)

    @property
    def sort_key(self) -> tuple[int, str, int]:
        """Ranking order: count desc, then document_id asc, then page asc."""
        return (-self.count, self.document_id, self.page)

    def to_dict(self) -> dict:
        return {"pdfName": self.document_id, "page": self.page, "count": self.count}

    def __repr__(self) -> str:
        return f"PageHit(document_id={self.document_id!r}, page={self.page}, count={self.count})"


class InvertedIndex:
    """
    Inverted index: map from token -> postings (one PageHit per page).

    Postings are accumulated in per-token {(document_id, page): count} tables
    while building, so a page seen twice is summed rather than duplicated.
    freeze() turns them into tuples of PageHit; after that the index is
    read-only and safe to share between threads.
    """

    def __init__(self) -> None:
        self._pending: dict[str, dict[tuple[str, int], int]] | None = {}
        self._index: dict[str, tuple[PageHit, ...]] = {}

    @property
    def frozen(self) -> bool:
        return self._pending is None

    def add_page(self, document_id: str, page: int, counts: Mapping[str, int]) -> None:
        """Merge one page's local frequency table into the postings."""
        if self._pending is None:
            raise IndexFrozenError("index is read-only after build")
        target = (document_id, page)
        for token, count in counts.items():
            postings = self._pending.setdefault(token, {})
            postings[target] = postings.get(target, 0) + count

    def freeze(self) -> "InvertedIndex":
        """Materialize immutable postings and stop accepting pages."""
        if self._pending is None:
            return self
        self._index = {
            token: tuple(
                PageHit(document_id=doc_id, page=page, count=count)
                for (doc_id, page), count in postings.items()
            )
            for token, postings in self._pending.items()
        }
        self._pending = None
        return self

    def get_postings(self, token: str) -> tuple[PageHit, ...]:
        """Return the postings for a token, or an empty tuple."""
        return self._index.get(token, ())

    def tokens(self) -> Iterator[str]:
        """Iterate over all tokens in the index."""
        return iter(self._index)

    def document_ids(self) -> set[str]:
        return {hit.document_id for postings in self._index.values() for hit in postings}

    def page_count(self) -> int:
        """Number of distinct pages with at least one indexed token."""
        return len({hit.key for postings in self._index.values() for hit in postings})

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, token: str) -> bool:
        return token in self._index

    def to_dict(self) -> dict:
        """Serialize to a JSON-serializable dict (diagnostics only)."""
        return {
            token: [hit.to_dict() for hit in postings]
            for token, postings in self._index.items()
        }
