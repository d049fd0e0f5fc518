"""Tests for InternTable and the process-wide intern cache."""

import logging

import pytest

from internable import (
    InternableString,
    InternConfig,
    InternTable,
    get_intern_cache,
    intern_config_context,
    intern_string,
    set_intern_cache,
)
from internable.errors import InvalidArgumentError


def _copy(s: str) -> str:
    return "".join(list(s))


class TestIntern:
    """Content-based canonicalization."""

    def test_first_value_becomes_canonical(self) -> None:
        table = InternTable()
        s = _copy("Include")
        assert table.intern(InternableString(s)) is s
        assert len(table) == 1

    def test_equal_content_returns_canonical(self) -> None:
        table = InternTable()
        canonical = table.intern(_copy("Include"))
        assert table.intern(_copy("Include")) is canonical

    def test_buffered_value_hits(self) -> None:
        table = InternTable()
        canonical = table.intern(_copy("Condition"))
        built = InternableString.new_empty().append("Cond").append("ition")
        assert table.intern(built) is canonical

    def test_buffered_value_miss_stores_new_string(self) -> None:
        table = InternTable()
        built = InternableString.new_empty().append("Target").append("s")
        result = table.intern(built)
        assert result == "Targets"
        assert "Targets" in table
        assert table.intern(_copy("Targets")) is result

    def test_accepts_plain_str(self) -> None:
        table = InternTable()
        s = _copy("plain")
        assert table.intern(s) is s

    def test_rejects_other_types(self) -> None:
        with pytest.raises(InvalidArgumentError):
            InternTable().intern(b"bytes")  # type: ignore[arg-type]

    def test_empty_string(self) -> None:
        table = InternTable()
        assert table.intern(InternableString.new_empty()) == ""
        assert table.intern("") == ""
        assert len(table) == 1

    def test_distinct_content_not_merged(self) -> None:
        table = InternTable()
        assert table.intern("a1") != table.intern("a2")
        assert len(table) == 2


class TestContainsAndClear:
    """Membership and reset."""

    def test_contains(self) -> None:
        table = InternTable()
        table.intern("abc")
        assert "abc" in table
        assert InternableString.new_empty().append("ab").append("c") in table
        assert "abd" not in table
        assert 3 not in table

    def test_clear(self) -> None:
        table = InternTable()
        table.intern("abc")
        table.clear()
        assert len(table) == 0
        assert "abc" not in table


class TestLimits:
    """max_length bypass and max_entries scavenging."""

    def test_long_values_bypass_table(self) -> None:
        table = InternTable(max_length=4)
        built = InternableString.new_empty().append("abcde")
        assert table.intern(built) == "abcde"
        assert len(table) == 0
        assert table.intern("abcd") == "abcd"
        assert len(table) == 1

    def test_long_wrapped_value_returned_unchanged(self) -> None:
        table = InternTable(max_length=2)
        s = _copy("long")
        assert table.intern(s) is s

    def test_scavenging_evicts_oldest_half(self) -> None:
        table = InternTable(max_entries=4)
        for name in ("a0", "a1", "a2", "a3"):
            table.intern(name)
        assert len(table) == 4
        table.intern("a4")
        assert len(table) == 3
        assert "a0" not in table
        assert "a1" not in table
        assert "a2" in table
        assert "a4" in table

    def test_scavenging_single_entry_table(self) -> None:
        table = InternTable(max_entries=1)
        table.intern("first")
        table.intern("second")
        assert len(table) == 1
        assert "second" in table

    def test_scavenging_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        table = InternTable(max_entries=2)
        with caplog.at_level(logging.DEBUG, logger="internable.intern"):
            for name in ("x0", "x1", "x2"):
                table.intern(name)
        assert any("Scavenged intern table" in r.message for r in caplog.records)

    def test_invalid_max_entries(self) -> None:
        with pytest.raises(InvalidArgumentError):
            InternTable(max_entries=0)

    def test_limits_from_config(self) -> None:
        with intern_config_context(InternConfig(max_entries=2, max_length=3)):
            table = InternTable()
        assert table.intern(_copy("long")) == "long"
        assert len(table) == 0
        for name in ("b0", "b1", "b2"):
            table.intern(name)
        assert len(table) == 2


class TestActiveCache:
    """Process-wide cache management."""

    def teardown_method(self) -> None:
        set_intern_cache(None)

    def test_default_cache_is_intern_table(self) -> None:
        set_intern_cache(None)
        cache = get_intern_cache()
        assert isinstance(cache, InternTable)
        assert get_intern_cache() is cache

    def test_set_custom_cache(self) -> None:
        class RecordingCache:
            def __init__(self) -> None:
                self.seen: list[str] = []

            def intern(self, value: InternableString | str) -> str:
                text = value if isinstance(value, str) else value.materialize()
                self.seen.append(text)
                return text

        cache = RecordingCache()
        set_intern_cache(cache)
        assert InternableString("abc").to_canonical_string() == "abc"
        assert intern_string("def") == "def"
        assert cache.seen == ["abc", "def"]

    def test_reset_creates_fresh_table(self) -> None:
        first = get_intern_cache()
        set_intern_cache(None)
        assert get_intern_cache() is not first

    def test_intern_string_uses_active_cache(self) -> None:
        table = InternTable()
        set_intern_cache(table)
        canonical = intern_string(_copy("shared"))
        assert intern_string(_copy("shared")) is canonical
        assert "shared" in table
