"""ContextVar-based tokenize configuration for Glint.

Provides thread-local resource ceilings using Python's ContextVars (PEP 567).
The active config is read once when a Tokenizer is created and shared by
every nested grammar it runs.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit argument (wins over the context)
    tokens = tokenize(code, css, config=TokenizeConfig(max_steps=10_000))

    # Or scope a config with the context manager
    with tokenize_config_context(TokenizeConfig(timeout=0.5)):
        tokens = tokenize(code, css)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenizeConfig:
    """Immutable tokenize configuration.

    Attributes:
        max_depth: Ceiling on nested grammar plus rematch recursion depth
        max_steps: Ceiling on pattern attempts per top-level call (None = unlimited)
        timeout: Wall-clock budget in seconds per top-level call (None = unlimited)

    """

    max_depth: int = 100
    max_steps: int | None = None
    timeout: float | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "TokenizeConfig":
        """Create TokenizeConfig from dictionary.

        Only includes keys that are valid TokenizeConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = TokenizeConfig.from_dict({"max_depth": 20, "other": 1})
            >>> config.max_depth
            20

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: TokenizeConfig = TokenizeConfig()

_tokenize_config: ContextVar[TokenizeConfig] = ContextVar(
    "tokenize_config",
    default=_DEFAULT_CONFIG,
)


def get_tokenize_config() -> TokenizeConfig:
    """Get current tokenize configuration (thread-local)."""
    return _tokenize_config.get()


def set_tokenize_config(config: TokenizeConfig) -> None:
    """Set tokenize configuration for current context.

    Args:
        config: TokenizeConfig instance to use for this context.

    """
    _tokenize_config.set(config)


def reset_tokenize_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _tokenize_config.set(_DEFAULT_CONFIG)


@contextmanager
def tokenize_config_context(config: TokenizeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: TokenizeConfig to use within the context.

    Example:
        >>> with tokenize_config_context(TokenizeConfig(max_depth=10)):
        ...     tokens = tokenize(source, grammar)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _tokenize_config.get()
    _tokenize_config.set(config)
    try:
        yield
    finally:
        _tokenize_config.set(previous)


__all__ = [
    "TokenizeConfig",
    "get_tokenize_config",
    "set_tokenize_config",
    "reset_tokenize_config",
    "tokenize_config_context",
]
