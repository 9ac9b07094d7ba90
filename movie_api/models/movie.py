"""
Movie Catalog API — Movie SQLAlchemy Model
============================================

What:  ORM model representing the `movies` table.
Who:   Used by MovieService (CRUD, search) and GenreService (deletion cascade).

Table Design:
    - Integer auto-increment primary key; listing and search order by it,
      which keeps offset pagination stable
    - genres: denormalized list of genre names in one TEXT column
      (see models/types.py for the storage format)
"""

from datetime import date
from typing import List

from sqlalchemy import Date, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from movie_api.database import Base
from movie_api.models.types import CommaSeparatedList


class Movie(Base):
    """A catalog entry with its release date and an ordered list of genre names."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Serialized as `releaseDate` in the API
    release_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Reassign (never mutate in place) so the ORM notices the change
    genres: Mapped[List[str]] = mapped_column(
        CommaSeparatedList,
        nullable=False,
        default=list,
        server_default=text("''"),
        comment="Comma-joined genre names, in the order the client gave them",
    )

    def __repr__(self) -> str:
        return (
            f"<Movie(id={self.id}, title='{self.title}', "
            f"release_date='{self.release_date}', genres={self.genres})>"
        )
