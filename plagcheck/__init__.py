"""
N-gram plagiarism checker: multiset Jaccard similarity of two documents.
"""

from .ngrams import NGramLimitError, NGramMultiset
from .similarity import compare, format_score, similarity
from .text import normalize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "NGramLimitError",
    "NGramMultiset",
    "compare",
    "format_score",
    "normalize",
    "similarity",
]
