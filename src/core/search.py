# core/search.py
from __future__ import annotations

from typing import Iterable

from core.models import SearchState


def matches(query: str, catalog: Iterable[str]) -> tuple[str, ...]:
    """
    Case-insensitive substring match over the full path, catalog order kept.
    An empty query yields nothing rather than the whole catalog.
    """
    if not query:
        return ()
    needle = query.lower()
    return tuple(p for p in catalog if needle in p.lower())


class SearchIndex:
    def __init__(self, catalog: Iterable[str] = ()):
        self._catalog: tuple[str, ...] = tuple(catalog)
        self._state = SearchState()

    @property
    def catalog(self) -> tuple[str, ...]:
        return self._catalog

    @property
    def state(self) -> SearchState:
        return self._state

    def set_catalog(self, catalog: Iterable[str]) -> SearchState:
        self._catalog = tuple(catalog)
        return self._refresh(self._state.query)

    def set_query(self, query: str) -> SearchState:
        return self._refresh(query or "")

    def _refresh(self, query: str) -> SearchState:
        self._state = SearchState(query=query, matches=matches(query, self._catalog))
        return self._state
