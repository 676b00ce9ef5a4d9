"""Query-string helpers."""

from __future__ import annotations

from urllib.parse import parse_qs


def parse_filters(raw_query: str) -> dict[str, str] | None:
    """Parse raw ``key=value`` pairs joined by ``&`` into a filter set.

    No URL decoding is applied. A missing or empty query returns None so
    callers can tell "no filters" from an empty filter set. A pair without
    ``=`` maps its key to an empty string.
    """
    if not raw_query:
        return None

    filters = {}
    for pair in raw_query.split("&"):
        key, _, value = pair.partition("=")
        filters[key] = value
    return filters


def query_param(raw_query: str, name: str) -> str:
    """Return the first URL-decoded value of a query parameter, or ""."""
    values = parse_qs(raw_query, keep_blank_values=True).get(name)
    return values[0] if values else ""
