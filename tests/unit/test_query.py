"""Unit tests for query-string helpers."""

from __future__ import annotations

from cloudapi_double.core.query import parse_filters, query_param


def test_parse_filters_splits_pairs():
    assert parse_filters("a=1&b=2") == {"a": "1", "b": "2"}


def test_parse_filters_absent_query_is_none_not_empty():
    assert parse_filters("") is None
    assert parse_filters(None) is None


def test_parse_filters_keeps_raw_values_and_splits_on_first_equals():
    assert parse_filters("name=my%20box&expr=a=b") == {"name": "my%20box", "expr": "a=b"}


def test_parse_filters_pair_without_equals_maps_to_empty_value():
    assert parse_filters("flag&os=linux") == {"flag": "", "os": "linux"}


def test_query_param_decodes_first_value():
    assert query_param("action=rename&name=web%201&name=other", "name") == "web 1"
    assert query_param("action=stop", "package") == ""
