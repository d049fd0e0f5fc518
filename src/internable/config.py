"""ContextVar-based configuration for internable.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Buffer sizing is read by InternableString.new_empty() on every call;
table limits are read once when an InternTable is constructed.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from internable.config import InternConfig, intern_config_context

    with intern_config_context(InternConfig(chars_per_fragment=64)):
        value = InternableString.new_empty(2)  # capacity 128

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class InternConfig:
    """Immutable interning configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        default_fragment_count: Fragment hint used by new_empty() when none is given
        chars_per_fragment: Code units reserved per expected fragment
        max_entries: Table size that triggers scavenging of the oldest half
        max_length: Values longer than this bypass the table (None = no limit)
        statistics_enabled: Collect InternStatistics in new tables

    """

    default_fragment_count: int = 4
    chars_per_fragment: int = 128
    max_entries: int = 65536
    max_length: int | None = None
    statistics_enabled: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "InternConfig":
        """Create InternConfig from dictionary.

        Only includes keys that are valid InternConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                InternConfig attribute names.

        Returns:
            New InternConfig instance with values from dict.

        Example:
            >>> config = InternConfig.from_dict({
            ...     "max_entries": 1024,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_entries
            1024

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: InternConfig = InternConfig()

_intern_config: ContextVar[InternConfig] = ContextVar(
    "intern_config",
    default=_DEFAULT_CONFIG,
)


def get_intern_config() -> InternConfig:
    """Get current interning configuration (thread-local)."""
    return _intern_config.get()


def set_intern_config(config: InternConfig) -> None:
    """Set interning configuration for current context.

    Args:
        config: InternConfig instance to use for this context.

    """
    _intern_config.set(config)


def reset_intern_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _intern_config.set(_DEFAULT_CONFIG)


@contextmanager
def intern_config_context(config: InternConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: InternConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _intern_config.get()
    _intern_config.set(config)
    try:
        yield
    finally:
        _intern_config.set(previous)


__all__ = [
    "InternConfig",
    "get_intern_config",
    "intern_config_context",
    "reset_intern_config",
    "set_intern_config",
]
