"""Page search engine package."""

from .posting import PageHit, InvertedIndex
from .index_builder import build, build_index_from_directory
from .search import SearchEngine, search
from .tokenizer import tokenize
