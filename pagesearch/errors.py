"""
Error taxonomy for the page search engine.

Build-time problems are fatal: configuration errors and I/O errors abort
startup. Query time raises nothing; an empty result is a normal result.
"""


class SearchEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(SearchEngineError):
    """The engine cannot start with the given corpus / stop-word setup."""


class EmptyCorpusError(ConfigurationError):
    """The document stream yielded no pages at all."""


class CorpusNotFoundError(ConfigurationError):
    pass


class StopWordsNotFoundError(ConfigurationError):
    pass


class IndexFrozenError(SearchEngineError):
    """Raised when something tries to add postings to a built index."""


class UnsupportedDocumentError(SearchEngineError):
    pass


class DocumentReadError(SearchEngineError, OSError):
    """A document exists but its contents could not be parsed."""
