"""
Interactive search over the in-memory index.

The index is built from the corpus directory at startup (nothing is read
from or written to disk besides the corpus and the stop-word list), then
queries are read from stdin.

Usage (from repo root):
    python -m pagesearch.search_cli --corpus pdfs --stop-words stop-ru.txt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_TOP_K, Settings, configure_logging, log_level_arg
from .errors import ConfigurationError
from .search import SearchEngine


def run_search_loop(engine: SearchEngine, top_k: int = DEFAULT_TOP_K) -> None:
    """
    Interactive command-line search loop.
    """
    print(f"Indexed {len(engine.index.document_ids())} documents, {len(engine.index)} terms.")
    print("Enter queries (OR semantics). Empty line or Ctrl+C to exit.")

    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break

        hits = engine.search(raw_query)
        if not hits:
            print("No pages matched the query.")
            continue

        print(f"Top {min(top_k, len(hits))} of {len(hits)} results:")
        for rank, hit in enumerate(hits[:top_k], start=1):
            print(f"{rank:2d}. count={hit.count:<4d} {hit.document_id} p.{hit.page}")


def main(argv: Iterable[str] | None = None) -> None:
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    parser = argparse.ArgumentParser(description="Interactive page search.")
    parser.add_argument(
        "--corpus",
        type=Path,
        default=settings.corpus_dir,
        help="Directory with documents to index.",
    )
    parser.add_argument(
        "--stop-words",
        type=Path,
        default=settings.stop_words,
        help="Stop-word file, one word per line.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_K,
        help="Number of top results to show.",
    )
    parser.add_argument("--log-level", type=log_level_arg, default=settings.log_level)
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(args.log_level)
    try:
        engine = SearchEngine.from_directory(args.corpus, args.stop_words)
    except (ConfigurationError, OSError) as e:
        print(f"Cannot build index: {e}", file=sys.stderr)
        sys.exit(1)

    run_search_loop(engine, top_k=args.top)


if __name__ == "__main__":
    main()
