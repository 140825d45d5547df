from typing import Dict, Iterator, Optional, Sequence, Tuple, Union

Key = Union[bytes, str]

DEFAULT_N = 3
_DJB2_SEED = 5381


class NGramLimitError(ValueError):
    """Raised when a document yields more distinct n-grams than the configured cap."""

    def __init__(self, limit: int):
        super().__init__(f"document exceeds the limit of {limit} distinct n-grams")
        self.limit = limit


def djb2(key: Key, table_size: Optional[int] = None) -> int:
    """
    DJB2 string hash: start at 5381, then h = h * 33 + unit for every byte
    (or code point), wrapped to 32 bits. Optionally reduced modulo table_size.
    """
    units = key.encode("utf-8") if isinstance(key, str) else key
    h = _DJB2_SEED
    for u in units:
        h = (h * 33 + u) & 0xFFFFFFFF
    if table_size:
        return h % table_size
    return h


class NGramMultiset:
    """
    Multiset of fixed-length windows taken from a normalized document.

    Keys are the exact window contents (bytes for byte input, str for text
    input) mapped to their occurrence count. Instances are built once through
    build() and are read-only afterwards.
    """

    __slots__ = ("_n", "_counts", "_total")

    def __init__(self, counts: Dict[Key, int], n: int = DEFAULT_N):
        """Internal: wraps already-counted windows. Use build() to make one from text."""
        if n < 1:
            raise ValueError("n must be >= 1")
        self._n = n
        self._counts = dict(counts)
        if any(c < 1 for c in self._counts.values()):
            raise ValueError("n-gram counts must be >= 1")
        if any(len(k) != n for k in self._counts):
            raise ValueError(f"every n-gram must be {n} units long")
        self._total = sum(self._counts.values())

    @classmethod
    def build(cls, normalized: Sequence, n: int = DEFAULT_N,
              max_distinct: Optional[int] = None) -> "NGramMultiset":
        if n < 1:
            raise ValueError("n must be >= 1")
        if isinstance(normalized, (bytearray, memoryview)):
            normalized = bytes(normalized)

        counts: Dict[Key, int] = {}
        for i in range(len(normalized) - n + 1):
            gram = normalized[i:i + n]
            c = counts.get(gram)
            if c is None:
                if max_distinct is not None and len(counts) >= max_distinct:
                    raise NGramLimitError(max_distinct)
                counts[gram] = 1
            else:
                counts[gram] = c + 1
        return cls(counts, n=n)

    @property
    def n(self) -> int:
        return self._n

    @property
    def total(self) -> int:
        """Number of window positions that produced this multiset."""
        return self._total

    def count(self, key: Key) -> int:
        return self._counts.get(key, 0)

    def items(self) -> Iterator[Tuple[Key, int]]:
        return iter(self._counts.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[Key]:
        return iter(self._counts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NGramMultiset):
            return NotImplemented
        return self.n == other.n and self._counts == other._counts

    __hash__ = None

    def __repr__(self) -> str:
        return f"NGramMultiset(n={self.n}, distinct={len(self)}, total={self.total})"
