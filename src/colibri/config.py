"""ContextVar-based parse configuration for Colibri.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Parser reads the active config once, when it is constructed.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config for one call
    doc = parse(source, config=ParseConfig(emit_hard_breaks=True))

    # Or set it for the current context
    with parse_config_context(ParseConfig(on_unparsed="error")):
        doc = parse(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Literal

type UnparsedPolicy = Literal["paragraph", "drop", "error"]

_UNPARSED_POLICIES = ("paragraph", "drop", "error")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    source_file is per-call state and lives on the Parser instance.

    Attributes:
        hard_break_limit: Most line endings folded into a single hard break
        max_emphasis_depth: Emphasis nested deeper than this degrades to
            literal '*' characters
        emit_hard_breaks: Keep HardBreak nodes for blank-line separators
            between blocks
        on_unparsed: What to do with input no block rule accepts:
            "paragraph" wraps it in a catch-all paragraph, "drop" stops
            parsing and leaves it out, "error" raises ParseError

    """

    hard_break_limit: int = 9999
    max_emphasis_depth: int = 64
    emit_hard_breaks: bool = False
    on_unparsed: UnparsedPolicy = "paragraph"

    def __post_init__(self) -> None:
        if self.hard_break_limit < 2:
            msg = f"hard_break_limit must be at least 2, got {self.hard_break_limit}"
            raise ValueError(msg)
        if self.max_emphasis_depth < 0:
            msg = f"max_emphasis_depth must not be negative, got {self.max_emphasis_depth}"
            raise ValueError(msg)
        if self.on_unparsed not in _UNPARSED_POLICIES:
            msg = (
                f"on_unparsed must be one of {', '.join(_UNPARSED_POLICIES)}, "
                f"got {self.on_unparsed!r}"
            )
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ParseConfig attribute names.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "emit_hard_breaks": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.emit_hard_breaks
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local).

    Returns:
        The active ParseConfig for this thread/context.

    """
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(emit_hard_breaks=True)):
        ...     doc = parse("one\\n\\ntwo")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "UnparsedPolicy",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
