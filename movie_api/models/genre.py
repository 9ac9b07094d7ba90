"""
Movie Catalog API — Genre SQLAlchemy Model
============================================

What:  ORM model representing the `genres` table.
Who:   Used by GenreService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer auto-increment primary key (ids appear in the URL paths)
    - name: unique; movies reference genres by this exact string, not by id
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from movie_api.database import Base


class Genre(Base):
    """
    A named category that movies may list in their `genres` column.

    Deleting a Genre strips its name from every movie (GenreService.delete_genre).
    Renaming one leaves existing movie lists as they are.
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Movies reference genres by this exact string
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Genre name, referenced verbatim by movies.genres",
    )

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"
