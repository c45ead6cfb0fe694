"""Tests for fedoractl.core.paths module."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qsl, unquote

import pytest

from fedoractl.core.exceptions import InvalidArgumentError
from fedoractl.core.paths import (
    append_query,
    datastream_path,
    datetime_to_fedoratime,
    dissemination_path,
    escape_segment,
    format_query_value,
    object_path,
    strip_pid_prefix,
)

# =============================================================================
# Encoding Helpers
# =============================================================================


class TestStripPidPrefix:
    """Tests for strip_pid_prefix."""

    def test_strips_uri_prefix(self):
        assert strip_pid_prefix("info:fedora/demo:1") == "demo:1"

    def test_plain_pid_unchanged(self):
        assert strip_pid_prefix("demo:1") == "demo:1"

    def test_idempotent(self):
        once = strip_pid_prefix("info:fedora/demo:1")
        assert strip_pid_prefix(once) == once

    def test_repeated_prefix(self):
        assert strip_pid_prefix("info:fedora/info:fedora/demo:1") == "demo:1"


class TestEscapeSegment:
    """Tests for escape_segment."""

    def test_colon_stays_literal(self):
        assert escape_segment("test:1") == "test:1"

    @pytest.mark.parametrize("value", ["a/b", "a?b", "a#b", "a b", "a%b", "a&b=c"])
    def test_reserved_characters_encoded(self, value):
        escaped = escape_segment(value)
        for char in "/?# &=":
            assert char not in escaped
        assert unquote(escaped) == value

    def test_unicode_round_trip(self):
        escaped = escape_segment("dé:ü")
        assert escaped.isascii()
        assert unquote(escaped) == "dé:ü"


class TestFormatQueryValue:
    """Tests for format_query_value."""

    def test_booleans_lower_case(self):
        assert format_query_value(True) == "true"
        assert format_query_value(False) == "false"

    def test_numbers(self):
        assert format_query_value(25) == "25"

    def test_naive_datetime(self):
        value = datetime(2020, 1, 2, 3, 4, 5, 678000)
        assert format_query_value(value) == "2020-01-02T03:04:05.678Z"

    def test_aware_datetime_converted_to_utc(self):
        value = datetime(2020, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert datetime_to_fedoratime(value) == "2020-01-02T03:04:05.000Z"


# =============================================================================
# Builders
# =============================================================================


class TestAppendQuery:
    """Tests for append_query."""

    def test_empty_params_unchanged(self):
        assert append_query("objects", {}) == "objects"
        assert append_query("objects", None) == "objects"

    def test_none_values_skipped(self):
        assert append_query("objects", {"a": None}) == "objects"
        assert append_query("objects", {"a": None, "b": "1"}) == "objects?b=1"

    def test_preserves_order(self):
        assert append_query("x", {"b": "2", "a": "1"}) == "x?b=2&a=1"

    def test_keys_and_values_escaped(self):
        path = append_query("x", {"a&b": "c=d&e"})
        assert path == "x?a%26b=c%3Dd%26e"

    def test_round_trip(self):
        params = {
            "query": "pid~demo:* label='x y'",
            "terms": "naïve café",
            "odd key": "a+b/c?d#e",
        }
        path = append_query("objects", params)
        _, query = path.split("?", 1)
        assert dict(parse_qsl(query)) == params


class TestObjectPath:
    """Tests for object_path."""

    def test_collection(self):
        assert object_path() == "objects"

    def test_collection_with_params(self):
        assert object_path(params={"terms": "demo"}) == "objects?terms=demo"

    def test_pid(self):
        assert object_path("demo:1") == "objects/demo:1"

    def test_pid_uri_prefix_stripped(self):
        assert object_path("info:fedora/demo:1") == "objects/demo:1"

    def test_pid_slash_encoded(self):
        assert object_path("demo:a/b") == "objects/demo:a%2Fb"


class TestDatastreamPath:
    """Tests for datastream_path."""

    def test_datastream(self):
        assert datastream_path("test:1", "content") == "objects/test:1/datastreams/content"

    def test_datastream_with_params(self):
        path = datastream_path("test:1", "content", {"asOfDateTime": "2020-01-01"})
        assert path == "objects/test:1/datastreams/content?asOfDateTime=2020-01-01"

    def test_listing_without_dsid(self):
        assert datastream_path("test:1") == "objects/test:1/datastreams"

    def test_missing_pid_raises(self):
        with pytest.raises(InvalidArgumentError) as excinfo:
            datastream_path(None, "content")
        assert excinfo.value.argument == "pid"

    def test_empty_pid_raises(self):
        with pytest.raises(InvalidArgumentError):
            datastream_path("", "content")


class TestDisseminationPath:
    """Tests for dissemination_path."""

    def test_methods_listing(self):
        assert dissemination_path("demo:1") == "objects/demo:1/methods"

    def test_sdef_only(self):
        assert dissemination_path("demo:1", "demo:sdef") == "objects/demo:1/methods/demo:sdef"

    def test_sdef_and_method(self):
        path = dissemination_path("demo:1", "demo:sdef", "view", {"width": 100})
        assert path == "objects/demo:1/methods/demo:sdef/view?width=100"

    def test_method_without_sdef(self):
        assert dissemination_path("demo:1", None, "view") == "objects/demo:1/methods/view"

    def test_missing_pid_raises(self):
        with pytest.raises(InvalidArgumentError):
            dissemination_path(None, "demo:sdef", "view")
