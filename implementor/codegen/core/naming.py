"""
Naming utilities for safe code generation.

Handles lexical escaping of non-ASCII text, decoding of escapes, and
allocation of synthetic identifiers for generated members.
"""

import re
from typing import Set

from .generator import ErrorKind, GenerationError

JAVA_RESERVED_WORDS = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
}

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)
_ESCAPE_PATTERN = re.compile(r"\\u([0-9a-fA-F]{4})")


def escape_non_ascii(text: str) -> str:
    """
    Rewrite every code point >= 128 as a ``\\uXXXX`` escape.

    Code points outside the Basic Multilingual Plane are written as a
    surrogate pair of escapes so every escape stays 4 hex digits wide.
    Text that already carries surrogate pairs is combined first.

    Args:
        text: Text that may contain non-ASCII characters

    Returns:
        ASCII-only text

    Raises:
        GenerationError: If a surrogate pair is truncated at the end of the text
    """
    result = []
    i = 0
    length = len(text)
    while i < length:
        cp = ord(text[i])
        if cp in _HIGH_SURROGATES:
            if i + 1 >= length:
                raise GenerationError(
                    f"Text truncated inside a surrogate pair: {text!r}",
                    ErrorKind.MALFORMED_TEXT,
                )
            low = ord(text[i + 1])
            if low in _LOW_SURROGATES:
                cp = 0x10000 + ((cp - 0xD800) << 10) + (low - 0xDC00)
                i += 1
        i += 1

        if cp < 128:
            result.append(chr(cp))
        elif cp > 0xFFFF:
            offset = cp - 0x10000
            result.append("\\u%04x" % (0xD800 + (offset >> 10)))
            result.append("\\u%04x" % (0xDC00 + (offset & 0x3FF)))
        else:
            result.append("\\u%04x" % cp)
    return "".join(result)


def unescape_unicode(text: str) -> str:
    """Decode ``\\uXXXX`` escapes, recombining surrogate pairs into code points."""
    decoded = _ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1), 16)), text)
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16")


class NameAllocator:
    """Hands out unique synthetic identifiers built from a prefix and a counter."""

    def __init__(self, prefix: str, reserved_words: Set[str] = None):
        """
        Initialize allocator.

        Args:
            prefix: Identifier prefix, e.g. "field" gives field0, field1, ...
            reserved_words: Names that must never be produced
        """
        self.prefix = prefix
        self.reserved_words = reserved_words if reserved_words is not None else JAVA_RESERVED_WORDS
        self._counter = 0
        self._used_names: Set[str] = set()

    def next_name(self) -> str:
        """Return the next unused name."""
        while True:
            name = f"{self.prefix}{self._counter}"
            self._counter += 1
            if name not in self._used_names and name not in self.reserved_words:
                self._used_names.add(name)
                return name

    def names(self, count: int) -> list:
        """Return ``count`` fresh names in order."""
        return [self.next_name() for _ in range(count)]

    def reset(self):
        """Forget every name handed out so far."""
        self._counter = 0
        self._used_names.clear()


def is_valid_identifier(name: str) -> bool:
    """Check that a name can be used as a Java identifier."""
    return bool(name) and name.isidentifier() and name not in JAVA_RESERVED_WORDS
