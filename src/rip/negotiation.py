"""Content negotiation — Content-Type and Accept header parsing.

``parse_content_type`` turns the request Content-Type header into a
single ``MediaType`` (or ``None`` when the request declares no body
type). ``parse_accept`` turns the Accept header into a ranked
``AcceptHeader`` that resources consult to pick their output type.

Each output type a resource offers is ranked by the best preference
that covers it, highest first:

1. quality value (``q``, default 1.0)
2. specificity: ``type/subtype`` > ``type/*`` > ``*/*``

Output types of equal rank fall back to the resource's own
declaration order. Where the client listed them in the header has
no say.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from rip.errors import InvalidAcceptHeader, InvalidContentTypeHeader

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class MediaType:
    """A single parsed media type, e.g. ``application/json; charset=utf-8``."""

    type: str
    subtype: str
    params: tuple[tuple[str, str], ...] = ()

    @property
    def essence(self) -> str:
        """``type/subtype`` without parameters, lowercased."""
        return f"{self.type}/{self.subtype}"

    def __str__(self) -> str:
        if not self.params:
            return self.essence
        rendered = "; ".join(f"{k}={v}" for k, v in self.params)
        return f"{self.essence}; {rendered}"


@dataclass(frozen=True, slots=True)
class MediaTypePreference:
    """One element of an Accept header."""

    type: str
    subtype: str
    quality: float = 1.0
    params: tuple[tuple[str, str], ...] = ()

    @property
    def specificity(self) -> int:
        """2 for ``type/subtype``, 1 for ``type/*``, 0 for ``*/*``."""
        if self.type == WILDCARD:
            return 0
        if self.subtype == WILDCARD:
            return 1
        return 2

    def matches(self, media_type: str) -> bool:
        """Whether this media range covers *media_type* (parameters ignored)."""
        type_, _, subtype = essence_of(media_type).partition("/")
        if self.type != WILDCARD and self.type != type_:
            return False
        return self.subtype in (WILDCARD, subtype)


class AcceptHeader:
    """Ranked Accept header preferences.

    Elements are stored best-first. An empty ``AcceptHeader`` is falsy:
    the caller must reject the request before resource matching.
    """

    __slots__ = ("_preferences",)

    def __init__(self, preferences: Sequence[MediaTypePreference] = ()) -> None:
        self._preferences: tuple[MediaTypePreference, ...] = tuple(
            sorted(preferences, key=lambda p: (-p.quality, -p.specificity))
        )

    def __getitem__(self, index: int) -> MediaTypePreference:
        return self._preferences[index]

    def __len__(self) -> int:
        return len(self._preferences)

    def __iter__(self) -> Iterator[MediaTypePreference]:
        return iter(self._preferences)

    def __repr__(self) -> str:
        items = ", ".join(f"{p.type}/{p.subtype};q={p.quality}" for p in self._preferences)
        return f"AcceptHeader([{items}])"

    def best_match(self, offered: Sequence[str]) -> str | None:
        """Return the highest-ranked entry of *offered*, or ``None``.

        Every offered type is scored by the best ``(quality,
        specificity)`` among the preferences covering it; ties go to the
        type listed first in *offered*. ``q=0`` ranges mark types as not
        acceptable and never contribute a score.
        """
        best: str | None = None
        best_rank: tuple[float, int] | None = None
        for media_type in offered:
            rank = self._rank(media_type)
            if rank is not None and (best_rank is None or rank > best_rank):
                best, best_rank = media_type, rank
        return best

    def _rank(self, media_type: str) -> tuple[float, int] | None:
        ranks = [
            (p.quality, p.specificity)
            for p in self._preferences
            if p.quality > 0 and p.matches(media_type)
        ]
        return max(ranks, default=None)


def essence_of(media_type: str) -> str:
    """Strip parameters and whitespace: ``"Text/HTML; charset=x"`` -> ``"text/html"``."""
    return media_type.split(";", 1)[0].strip().lower()


def _parse_params(raw: Sequence[str]) -> tuple[tuple[str, str], ...]:
    params: list[tuple[str, str]] = []
    for item in raw:
        name, sep, value = item.partition("=")
        name = name.strip().lower()
        if not sep or not name:
            continue
        params.append((name, value.strip().strip('"')))
    return tuple(params)


def parse_content_type(header: str | None) -> MediaType | None:
    """Parse a Content-Type header.

    An absent or blank header is valid and returns ``None`` ("no
    declared input type"). Anything other than exactly one concrete
    ``type/subtype[;params]`` raises ``InvalidContentTypeHeader``.
    """
    if header is None or not header.strip():
        return None
    if "," in header:
        msg = f"Invalid Content-Type header {header!r}: exactly one media type expected"
        raise InvalidContentTypeHeader(msg)

    main, *raw_params = header.split(";")
    type_, sep, subtype = main.strip().lower().partition("/")
    if not sep or not type_ or not subtype or "/" in subtype:
        msg = f"Invalid Content-Type header {header!r}: expected type/subtype"
        raise InvalidContentTypeHeader(msg)
    if WILDCARD in (type_, subtype):
        msg = f"Invalid Content-Type header {header!r}: wildcards are not allowed"
        raise InvalidContentTypeHeader(msg)
    return MediaType(type=type_, subtype=subtype, params=_parse_params(raw_params))


def parse_accept(header: str | None) -> AcceptHeader:
    """Parse an Accept header into ranked preferences.

    Structurally broken elements (no ``/``, ``*/subtype``) raise
    ``InvalidAcceptHeader``. Elements whose ``q`` does not parse as a
    number in ``[0, 1]`` are dropped. A blank header yields an empty
    ``AcceptHeader``.
    """
    if header is None:
        return AcceptHeader()

    preferences: list[MediaTypePreference] = []
    for element in header.split(","):
        element = element.strip()
        if not element:
            continue

        media, *raw_params = element.split(";")
        type_, sep, subtype = media.strip().lower().partition("/")
        if not sep or not type_ or not subtype or "/" in subtype:
            msg = f"Invalid Accept header element {element!r}: expected type/subtype"
            raise InvalidAcceptHeader(msg)
        if type_ == WILDCARD and subtype != WILDCARD:
            msg = f"Invalid Accept header element {element!r}: '*/{subtype}' is not a media range"
            raise InvalidAcceptHeader(msg)

        params = _parse_params(raw_params)
        quality = 1.0
        q_values = [value for name, value in params if name == "q"]
        if q_values:
            try:
                quality = float(q_values[0])
            except ValueError:
                continue
            if not 0.0 <= quality <= 1.0:
                continue

        preferences.append(
            MediaTypePreference(
                type=type_,
                subtype=subtype,
                quality=quality,
                params=tuple((k, v) for k, v in params if k != "q"),
            )
        )
    return AcceptHeader(preferences)
