"""Character classes for the primitive parsers.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Classes operate on Unicode scalar values. Anything outside the control,
space and special sets, including every non-ASCII character, is printable.

Usage:
    from colibri.parsing.charsets import SPECIAL_CHARS

    if char in SPECIAL_CHARS:  # O(1) lookup
        ...
"""

# ASCII punctuation: the symbols that may carry syntax
SPECIAL_CHARS: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# C0 control codes plus DEL
CONTROL_CHARS: frozenset[str] = frozenset(chr(i) for i in range(0x20)) | frozenset("\x7f")

# Longest first: "\r\n" must win over a bare "\n"
LINE_ENDINGS: tuple[str, ...] = ("\r\n", "\n")

EMPHASIS_DELIMITER = "*"
HEADING_MARKER = "#"
SPACE = " "
TAB = "\t"


def is_control(char: str) -> bool:
    """Check if character is a C0 control code or DEL."""
    return char in CONTROL_CHARS


def is_printable(char: str) -> bool:
    """Check if character is neither a control code nor the space character.

    Space is kept out of this class so whitespace-sensitive rules can tell
    it apart from content.
    """
    return char != SPACE and not is_control(char)


def is_special(char: str) -> bool:
    """Check if character is ASCII punctuation."""
    return char in SPECIAL_CHARS
