"""Request query string, one value per name.

Resources never read this directly: ``validate_query`` turns it into
the declared parameter mapping handed over in ``ResourceContext``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Parsed query string. A repeated name keeps its first value.

    Blank values stay visible (``?page=`` maps ``page`` to ``""``) so
    request dumps show what the client sent. ``validate_query`` treats a
    blank value like a missing one and substitutes the default, since
    HTML forms submit untouched fields as ``name=``.
    """

    __slots__ = ("_first", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        self._first: dict[str, str] = {}
        for name, value in parse_qsl(query_string.decode("latin-1"), keep_blank_values=True):
            self._first.setdefault(name, value)

    def __getitem__(self, key: str) -> str:
        return self._first[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._first)

    def __len__(self) -> int:
        return len(self._first)

    def __repr__(self) -> str:
        return f"QueryParams({self._first!r})"

    @property
    def raw(self) -> bytes:
        """The undecoded query string, as received from the ASGI scope."""
        return self._raw
