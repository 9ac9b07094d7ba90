"""
Movie Catalog API — Custom Column Types
=========================================

What:  CommaSeparatedList, a column type that stores a list of strings as
       one comma-joined text value.
Why:   Movie genres are a denormalized list of genre names kept on the movie
       row itself ("Action,Sci-Fi"), not a join table.
How:   SQLAlchemy TypeDecorator over Text; joins on the way in, splits on
       the way out.

Storage format:
    ["Action", "Sci-Fi"]  ↔  "Action,Sci-Fi"
    []                    ↔  ""

    Element order round-trips unchanged. Elements must not contain the
    separator; the request schemas reject such names before they get here.

    The format also makes exact-element matching possible in SQL:
    (',' || genres || ',') LIKE '%,Action,%'  (see MovieService.search_movies)
"""

from typing import List, Optional, Sequence

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

SEPARATOR = ","


class CommaSeparatedList(TypeDecorator):
    """A list of strings persisted as a single comma-joined TEXT value."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[Sequence[str]], dialect) -> Optional[str]:
        if value is None:
            return None
        items = list(value)
        for item in items:
            if SEPARATOR in item:
                raise ValueError(f"List element {item!r} must not contain {SEPARATOR!r}")
        return SEPARATOR.join(items)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[List[str]]:
        if value is None:
            return None
        if value == "":
            return []
        return value.split(SEPARATOR)
