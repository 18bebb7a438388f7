"""
Build the page index and serve queries over TCP.

Usage:
    python serve.py                          # index ./pdfs, serve on localhost:8989
    python serve.py --corpus docs --port 9000
    python serve.py --query "cat dog"        # ask a running server

Put the documents (.pdf, .html, .txt) into the corpus folder and a stop-word
list (one word per line) next to this script, then run it. The index lives in
memory only and is rebuilt on every start.
"""

import argparse
import sys
import time
from pathlib import Path

from pagesearch.config import Settings, configure_logging, log_level_arg, port_arg
from pagesearch.errors import ConfigurationError
from pagesearch.search import SearchEngine
from pagesearch.server import query_server, serve


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    parser = argparse.ArgumentParser(description="Page search server")
    parser.add_argument(
        "--corpus",
        type=Path,
        default=settings.corpus_dir,
        help="Directory with documents to index (default: pdfs)",
    )
    parser.add_argument(
        "--stop-words",
        type=Path,
        default=settings.stop_words,
        help="Stop-word file, one word per line (default: stop-ru.txt)",
    )
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=port_arg, default=settings.port)
    parser.add_argument("--log-level", type=log_level_arg, default=settings.log_level)
    parser.add_argument(
        "--query",
        default=None,
        help="Send a query to a running server instead of starting one",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.query is not None:
        for hit in query_server(args.query, args.host, args.port):
            print(f"{hit['count']:>5}  {hit['pdfName']}  p.{hit['page']}")
        return

    start = time.perf_counter()
    try:
        engine = SearchEngine.from_directory(args.corpus, args.stop_words)
    except (ConfigurationError, OSError) as e:
        print(f"Cannot build index: {e}", file=sys.stderr)
        sys.exit(1)
    elapsed_ms = (time.perf_counter() - start) * 1000

    index = engine.index
    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {len(index.document_ids())} |")
    print(f"| Number of indexed pages     | {index.page_count()} |")
    print(f"| Number of unique terms      | {len(index)} |")
    print(f"| Build time (ms)             | {elapsed_ms:.0f} |")
    print()
    print("=" * 50)
    print()

    serve(engine, args.host, args.port)


if __name__ == "__main__":
    main()
