"""
Line-based TCP front end for the search engine.

Protocol: the client sends one UTF-8 query line; the server answers with one
line holding a JSON array of {"pdfName", "page", "count"} objects and closes
the connection.
"""

import json
import logging
import socket
import socketserver
from typing import Iterable

from .posting import PageHit
from .search import SearchEngine

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
REQUEST_TIMEOUT = 30.0


def encode_results(hits: Iterable[PageHit]) -> str:
    """Encode ranked hits as a single-line JSON array."""
    return json.dumps([hit.to_dict() for hit in hits], ensure_ascii=False, separators=(",", ":"))


class SearchRequestHandler(socketserver.StreamRequestHandler):
    # Seconds a client may take to send its query line.
    timeout = REQUEST_TIMEOUT

    def handle(self) -> None:
        try:
            raw = self.rfile.readline()
        except TimeoutError:
            logger.warning("%s:%s sent no query within %ss", *self.client_address[:2], self.timeout)
            return
        query = raw.decode(ENCODING, errors="replace").rstrip("\r\n")
        hits = self.server.engine.search(query)
        logger.info("%s:%s %r -> %d hits", *self.client_address[:2], query, len(hits))
        self.wfile.write((encode_results(hits) + "\n").encode(ENCODING))


class SearchServer(socketserver.ThreadingTCPServer):
    """
    Threaded server; every handler thread reads the same frozen index.
    """

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, server_address: tuple[str, int], engine: SearchEngine) -> None:
        self.engine = engine
        super().__init__(server_address, SearchRequestHandler)

    def handle_error(self, request, client_address) -> None:
        logger.exception("Error while handling request from %s", client_address)


def serve(engine: SearchEngine, host: str, port: int) -> None:
    """Serve queries until interrupted."""
    with SearchServer((host, port), engine) as server:
        logger.info("Server started on %s:%d", *server.server_address[:2])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped.")


def query_server(query: str, host: str, port: int, timeout: float = 10.0) -> list[dict]:
    """
    Send one query to a running server and return the decoded results.
    """
    with socket.create_connection((host, port), timeout=timeout) as sock:
        sock.sendall((query.replace("\n", " ") + "\n").encode(ENCODING))
        with sock.makefile("rb") as f:
            line = f.readline()
    return json.loads(line.decode(ENCODING))
