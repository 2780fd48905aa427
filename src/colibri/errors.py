"""Exception classes for Colibri.

Provides standardized exceptions for error handling throughout Colibri.

Grammar rules never raise to signal "no match"; they return None and the
enclosing transaction rolls the cursor back. The exceptions here are for
conditions a caller has to see.
"""

from __future__ import annotations


class ColibriError(Exception):
    """Base exception for all Colibri errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(ColibriError):
    """Error during Markdown parsing.

    Raised when the parser is configured to reject input it cannot
    represent (``on_unparsed="error"``).
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class GrammarInvariantError(ParseError):
    """A delimited span could not be re-parsed completely.

    Header text and paragraph extents are isolated first and parsed into
    inline nodes second. The inline grammar is total over such spans, so
    this error means the grammar itself is broken, not the input.
    """

    pass


class RenderError(ColibriError):
    """Error during rendering.

    Raised when a renderer encounters a node it does not know.
    """

    pass
