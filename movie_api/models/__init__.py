# Models package init
"""
Movie Catalog API — ORM Models
================================

Importing this package registers every table on Base.metadata, which
Alembic autogenerate and database.create_tables() both rely on.
"""

from movie_api.models.genre import Genre
from movie_api.models.movie import Movie

__all__ = ["Genre", "Movie"]
