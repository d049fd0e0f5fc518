"""
internable — Allocation-averse string assembly with interning

Build strings from fragments of existing text without paying for a copy
until one is really needed, then collapse equal results to one shared
instance through a thread-safe intern table. Zero runtime dependencies.

Quick Start:
    >>> from internable import InternableString
    >>> name = InternableString("Configuration")   # borrowed, no copy
    >>> name.startswith("Config")
    True
    >>> name.to_canonical_string()
    'Configuration'

    >>> # Build from fragments
    >>> value = InternableString.new_empty(2)
    >>> value.append("$(Out").append("xDirx", 1, 3)
    InternableString(buffer='$(OutDir', capacity=256)

Custom Caches:
    >>> from internable import InternTable, set_intern_cache
    >>> set_intern_cache(InternTable(max_entries=4096, statistics_enabled=True))
"""

from internable.config import (
    InternConfig,
    get_intern_config,
    intern_config_context,
    reset_intern_config,
    set_intern_config,
)
from internable.errors import (
    IndexOutOfRangeError,
    InternableError,
    InvalidArgumentError,
    InvalidStateError,
)
from internable.intern import (
    InternCache,
    InternTable,
    get_intern_cache,
    intern_string,
    set_intern_cache,
)
from internable.statistics import InternStatistics
from internable.string import InternableString

__version__ = "0.1.0"

__all__ = [
    "IndexOutOfRangeError",
    "InternCache",
    "InternConfig",
    "InternStatistics",
    "InternTable",
    "InternableError",
    "InternableString",
    "InvalidArgumentError",
    "InvalidStateError",
    "__version__",
    "get_intern_cache",
    "get_intern_config",
    "intern_config_context",
    "intern_string",
    "reset_intern_config",
    "set_intern_cache",
    "set_intern_config",
]
