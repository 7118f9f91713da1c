"""
Headphone directory lookup.

Matches a free-text query against the AutoEq catalog (lower-cased link text
-> link). An exact name wins; otherwise every word of the query narrows the
candidate list until only names containing all of them are left.
"""

from dataclasses import dataclass
from typing import Mapping, Tuple, Union


@dataclass(frozen=True)
class Exact:
    """Query matched a catalog entry"""
    name: str
    link: str


@dataclass(frozen=True)
class Suggestions:
    """Catalog names containing every word of the query, in catalog order"""
    names: Tuple[str, ...]


@dataclass(frozen=True)
class NotFound:
    """Nothing in the catalog resembles the query"""
    query: str


QueryResult = Union[Exact, Suggestions, NotFound]


class DirectoryResolver:
    """Resolves device queries against a name -> link catalog"""

    @staticmethod
    def resolve(catalog: Mapping[str, str], query: str) -> QueryResult:
        normalized = query.lower().strip()

        if normalized in catalog:
            return Exact(normalized, catalog[normalized])

        candidates = list(catalog)
        for token in normalized.split():
            candidates = [name for name in candidates if token in name.lower()]
            if not candidates:
                return NotFound(query)

        if not candidates:
            return NotFound(query)
        return Suggestions(tuple(candidates))

    @staticmethod
    def pick(catalog: Mapping[str, str], fragment: str) -> Union[Exact, NotFound]:
        """First entry whose name contains fragment (e.g. 'parametriceq.txt')"""
        needle = fragment.lower()
        for name, link in catalog.items():
            if needle in name.lower():
                return Exact(name, link)
        return NotFound(fragment)
