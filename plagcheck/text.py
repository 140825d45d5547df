import re
import string
from typing import Union

Buffer = Union[bytes, bytearray, memoryview, str]

# keep ascii alphanumerics, space and any byte with the high bit set
_drop_re = re.compile(rb"[^0-9a-zA-Z \x80-\xff]+")
_drop_text_re = re.compile(r"[^0-9a-zA-Z \u0080-\U0010ffff]+")
_ascii_lower = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def to_bytes(buffer: Buffer) -> bytes:
    if buffer is None:
        return b""
    if isinstance(buffer, str):
        return buffer.encode("utf-8")
    return bytes(buffer)


def normalize(buffer: Buffer) -> bytes:
    """
    Case-fold ASCII letters and drop punctuation, whitespace other than the
    space character, and control bytes. Bytes >= 0x80 pass through untouched,
    so multi-byte encoded characters survive as opaque byte runs.
    """
    b = to_bytes(buffer)
    # bytes.lower() only touches A-Z
    b = b.lower()
    return _drop_re.sub(b"", b)


def normalize_text(text: str) -> str:
    """Same rules as normalize(), applied to code points instead of bytes."""
    if text is None:
        return ""
    t = str(text).translate(_ascii_lower)
    return _drop_text_re.sub("", t)
