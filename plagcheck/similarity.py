"""
Multiset Jaccard similarity between two n-gram multisets.

- intersection: sum of per-key minimum counts over shared keys
- union: total(A) + total(B) - intersection
- similarity: intersection / union, 0.0 when both multisets are empty
"""

import logging
from typing import Optional

from .ngrams import DEFAULT_N, NGramMultiset
from .text import Buffer, normalize, normalize_text, to_bytes

logger = logging.getLogger(__name__)

UNITS = ("bytes", "chars")


def _check_compatible(a: NGramMultiset, b: NGramMultiset):
    if a.n != b.n:
        raise ValueError(f"cannot compare multisets with different n ({a.n} != {b.n})")


def intersection_size(a: NGramMultiset, b: NGramMultiset) -> int:
    _check_compatible(a, b)
    # probe the larger multiset with the smaller one's keys
    small, large = (a, b) if len(a) <= len(b) else (b, a)
    inter = 0
    for gram, c in small.items():
        other = large.count(gram)
        if other:
            inter += min(c, other)
    return inter


def union_size(a: NGramMultiset, b: NGramMultiset, intersection: Optional[int] = None) -> int:
    if intersection is None:
        intersection = intersection_size(a, b)
    return a.total + b.total - intersection


def similarity(a: NGramMultiset, b: NGramMultiset) -> float:
    inter = intersection_size(a, b)
    union = union_size(a, b, intersection=inter)
    if union == 0:
        return 0.0
    return inter / union


def build_multiset(doc: Buffer, n: int = DEFAULT_N, unit: str = "bytes",
                   max_distinct: Optional[int] = None, encoding: str = "utf-8") -> NGramMultiset:
    """Normalize one document and build its multiset for the given window unit."""
    if unit == "bytes":
        normalized = normalize(doc)
    elif unit == "chars":
        if isinstance(doc, str):
            text = doc
        else:
            text = to_bytes(doc).decode(encoding, errors="replace")
        normalized = normalize_text(text)
    else:
        raise ValueError(f"unknown n-gram unit {unit!r}, expected one of {UNITS}")
    grams = NGramMultiset.build(normalized, n=n, max_distinct=max_distinct)
    logger.debug("normalized %d -> %d units, %r", len(doc or b""), len(normalized), grams)
    return grams


def compare(doc_a: Buffer, doc_b: Buffer, n: int = DEFAULT_N, unit: str = "bytes",
            max_distinct: Optional[int] = None, encoding: str = "utf-8") -> float:
    """
    Full pipeline on two in-memory documents: normalize, build one multiset
    per document, and return their similarity in [0, 1].
    """
    a = build_multiset(doc_a, n=n, unit=unit, max_distinct=max_distinct, encoding=encoding)
    b = build_multiset(doc_b, n=n, unit=unit, max_distinct=max_distinct, encoding=encoding)
    return similarity(a, b)


def format_score(score: float, precision: int = 2) -> str:
    return f"{score:.{precision}f}"
