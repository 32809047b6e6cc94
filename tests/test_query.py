"""Tests for rip.http.query — immutable QueryParams."""

import pytest

from rip.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams(b"q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = QueryParams(b"q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_contains(self) -> None:
        q = QueryParams(b"q=hello")
        assert "q" in q
        assert "missing" not in q

    def test_len_and_iter(self) -> None:
        q = QueryParams(b"a=1&b=2&a=3")
        assert len(q) == 2
        assert set(q) == {"a", "b"}

    def test_get_with_default(self) -> None:
        q = QueryParams(b"q=hello")
        assert q.get("q") == "hello"
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_repeated_name_keeps_first_value(self) -> None:
        q = QueryParams(b"tag=python&tag=rust&q=hello")
        assert q["tag"] == "python"
        assert q["q"] == "hello"

    def test_blank_values_kept(self) -> None:
        q = QueryParams(b"page=&q=x")
        assert "page" in q
        assert q["page"] == ""

    def test_percent_decoding(self) -> None:
        q = QueryParams(b"q=hello%20world&name=a+b")
        assert q["q"] == "hello world"
        assert q["name"] == "a b"

    def test_raw(self) -> None:
        assert QueryParams(b"a=1").raw == b"a=1"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
