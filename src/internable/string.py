"""InternableString: a string that is either borrowed or being built.

Tokenizers mostly hand out text that already exists as a whole ``str``
(an identifier, a quoted value). Occasionally they have to glue fragments
together. InternableString covers both cases with one type:

- Wrapping an existing string costs nothing: the string is held by
  reference and returned as-is on finalization.
- Appending switches to a growable code-unit buffer. The wrapped string is
  copied into it once, and every later append only grows the buffer.

Length, indexing, iteration and prefix tests give the same answers in
both states, so callers never need to know which one is active.

Finalizing with to_canonical_string() routes the content through an intern
cache, so equal strings seen repeatedly collapse to one shared instance.

Thread Safety:
    Instances are single-owner values. Build, read and finalize on one
    thread; only the intern cache is shared.

Example:
    >>> value = InternableString.new_empty(2)
    >>> value.append("abc").append("def", 1, 2)
    InternableString(buffer='abcef', capacity=256)
    >>> value.materialize()
    'abcef'

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice
from typing import TYPE_CHECKING

from internable.config import get_intern_config
from internable.errors import IndexOutOfRangeError, InvalidArgumentError, InvalidStateError

if TYPE_CHECKING:
    from internable.intern import InternCache


@dataclass(frozen=True, slots=True)
class _Reference:
    """A single borrowed string, never copied."""

    value: str


class _CharBuffer:
    """Growable buffer of code units.

    Storage is a pre-sized list of one-character strings. Only the first
    ``length`` slots are live; the rest is spare capacity.
    """

    __slots__ = ("_chars", "length")

    def __init__(self, capacity: int) -> None:
        self._chars: list[str] = [""] * capacity
        self.length = 0

    @property
    def capacity(self) -> int:
        return len(self._chars)

    def reserve(self, required: int) -> None:
        """Grow to at least ``required`` slots, doubling when possible."""
        capacity = len(self._chars)
        if required > capacity:
            grown = max(required, capacity * 2)
            self._chars.extend([""] * (grown - capacity))

    def write(self, text: str) -> None:
        end = self.length + len(text)
        self.reserve(end)
        self._chars[self.length : end] = text
        self.length = end

    def clear(self) -> None:
        self.length = 0

    def __getitem__(self, index: int) -> str:
        return self._chars[index]

    def to_str(self) -> str:
        if self.length == len(self._chars):
            return "".join(self._chars)
        return "".join(islice(self._chars, self.length))


class InternableString:
    """String value backed by either one borrowed str or a char buffer.

    Exactly one representation is active at a time. Once anything is
    appended the value stays buffered for the rest of its life; clear()
    empties the buffer but never goes back to the borrowed form.

    Usage:
            >>> value = InternableString("hello")
            >>> value.startswith("he")
            True
            >>> value.materialize() is value.materialize()
            True

    Thread Safety:
        Not safe for concurrent use. No internal locking.

    """

    __slots__ = ("_state",)

    def __init__(self, value: str) -> None:
        """Wrap an existing string without copying it.

        Args:
            value: String to wrap (must be a str, not None)

        Raises:
            InvalidArgumentError: If value is None or not a str
        """
        if not isinstance(value, str):
            raise InvalidArgumentError("value")
        self._state: _Reference | _CharBuffer = _Reference(value)

    @classmethod
    def wrap(cls, value: str) -> InternableString:
        """Wrap an existing string. Same as calling the class."""
        return cls(value)

    @classmethod
    def new_empty(cls, expected_fragments: int | None = None) -> InternableString:
        """Create an empty buffered value sized for the expected fragments.

        Capacity is ``expected_fragments * chars_per_fragment`` from the
        active InternConfig.

        Args:
            expected_fragments: Number of appends expected (None = config default)

        Returns:
            New empty InternableString in buffered form

        Raises:
            InvalidArgumentError: If expected_fragments is negative or not an int
        """
        config = get_intern_config()
        if expected_fragments is None:
            expected_fragments = config.default_fragment_count
        elif not isinstance(expected_fragments, int) or expected_fragments < 0:
            raise InvalidArgumentError("expected_fragments", "must be a non-negative int")
        instance = cls.__new__(cls)
        instance._state = _CharBuffer(expected_fragments * config.chars_per_fragment)
        return instance

    @property
    def is_reference(self) -> bool:
        """True while the value still wraps a single string."""
        return isinstance(self._state, _Reference)

    @property
    def capacity(self) -> int:
        """Buffer capacity in code units (the wrapped length if not buffered)."""
        match self._state:
            case _Reference(value=value):
                return len(value)
            case buffer:
                return buffer.capacity

    def __len__(self) -> int:
        match self._state:
            case _Reference(value=value):
                return len(value)
            case buffer:
                return buffer.length

    def __getitem__(self, index: int) -> str:
        """Return the code unit at ``index``.

        Negative indexes are out of range; they do not count from the end.

        Raises:
            InvalidArgumentError: If index is not an int
            IndexOutOfRangeError: If index < 0 or index >= len(self)
        """
        if not isinstance(index, int):
            raise InvalidArgumentError("index", "must be an int")
        length = len(self)
        if index < 0 or index >= length:
            raise IndexOutOfRangeError(index, length)
        match self._state:
            case _Reference(value=value):
                return value[index]
            case buffer:
                return buffer[index]

    def __iter__(self) -> Iterator[str]:
        """Yield code units from index 0 without building a new string."""
        index = 0
        while index < len(self):
            yield self[index]
            index += 1

    def startswith(self, prefix: str) -> bool:
        """Ordinal prefix test, code unit by code unit.

        Args:
            prefix: String to look for at the start of this value

        Returns:
            True if this value begins with ``prefix``

        Raises:
            InvalidArgumentError: If prefix is None or not a str
        """
        if not isinstance(prefix, str):
            raise InvalidArgumentError("prefix")
        match self._state:
            case _Reference(value=value):
                return value.startswith(prefix)
            case buffer:
                if len(prefix) > buffer.length:
                    return False
                for index, char in enumerate(prefix):
                    if buffer[index] != char:
                        return False
                return True

    def is_same_instance(self, candidate: object) -> bool:
        """True only if this value wraps exactly ``candidate`` (identity, not content)."""
        match self._state:
            case _Reference(value=value):
                return value is candidate
            case _:
                return False

    def equals(self, other: str | InternableString) -> bool:
        """Ordinal content equality against a str or another InternableString.

        Neither side is materialized.

        Raises:
            InvalidArgumentError: If other is neither a str nor an InternableString
        """
        if isinstance(other, InternableString):
            if other is self:
                return True
            if isinstance(other._state, _Reference):
                return self.equals(other._state.value)
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        if not isinstance(other, str):
            raise InvalidArgumentError("other", "must be a str or InternableString")
        match self._state:
            case _Reference(value=value):
                return value == other
            case buffer:
                if buffer.length != len(other):
                    return False
                return all(buffer[index] == char for index, char in enumerate(other))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, InternableString)):
            return self.equals(other)
        return NotImplemented

    # Mutable, so never usable as a dict key.
    __hash__ = None  # type: ignore[assignment]

    def append(
        self,
        fragment: str,
        start_index: int = 0,
        count: int | None = None,
    ) -> InternableString:
        """Append a string, or the ``count`` code units starting at ``start_index``.

        The first append on a wrapped value copies the wrapped string into
        a fresh buffer; the value stays buffered from then on.

        Args:
            fragment: String to append from
            start_index: First code unit of ``fragment`` to append
            count: Number of code units to append (None = to the end)

        Returns:
            self for method chaining

        Raises:
            InvalidArgumentError: If fragment is None or not a str
            IndexOutOfRangeError: If the range is not inside ``fragment``
        """
        if not isinstance(fragment, str):
            raise InvalidArgumentError("fragment")
        fragment_length = len(fragment)
        if count is None:
            count = fragment_length - start_index
        if start_index < 0 or count < 0 or start_index + count > fragment_length:
            raise IndexOutOfRangeError(
                start_index,
                fragment_length,
                f"Range start={start_index} count={count} out of range "
                f"for fragment of length {fragment_length}",
            )
        buffer = self._ensure_buffer(count)
        if count == fragment_length:
            buffer.write(fragment)
        else:
            buffer.write(fragment[start_index : start_index + count])
        return self

    def _ensure_buffer(self, extra: int) -> _CharBuffer:
        match self._state:
            case _Reference(value=value):
                config = get_intern_config()
                default_capacity = config.default_fragment_count * config.chars_per_fragment
                buffer = _CharBuffer(max(default_capacity, len(value) + extra))
                buffer.write(value)
                self._state = buffer
                return buffer
            case buffer:
                return buffer

    def clear(self) -> InternableString:
        """Empty the buffer, keeping its capacity.

        Returns:
            self for method chaining

        Raises:
            InvalidStateError: If the value still wraps a string and has no buffer
        """
        match self._state:
            case _Reference():
                raise InvalidStateError(
                    "Cannot clear a wrapped string that was never appended to; "
                    "use InternableString.new_empty() for a reusable buffer"
                )
            case buffer:
                buffer.clear()
        return self

    def materialize(self) -> str:
        """Return the content as a str, bypassing the intern cache.

        A wrapped value returns the wrapped string itself. A buffered value
        allocates a new string on every call.
        """
        match self._state:
            case _Reference(value=value):
                return value
            case buffer:
                return buffer.to_str()

    def to_canonical_string(self, cache: InternCache | None = None) -> str:
        """Return the canonical shared instance of this content.

        Args:
            cache: Intern cache to use (None = the process-wide active cache)

        Returns:
            The cached string equal to this content, or a newly stored one
        """
        if cache is None:
            from internable.intern import get_intern_cache

            cache = get_intern_cache()
        return cache.intern(self)

    def __str__(self) -> str:
        return self.to_canonical_string()

    def __repr__(self) -> str:
        match self._state:
            case _Reference(value=value):
                return f"InternableString(reference={value!r})"
            case buffer:
                return f"InternableString(buffer={buffer.to_str()!r}, capacity={buffer.capacity})"


__all__ = ["InternableString"]
