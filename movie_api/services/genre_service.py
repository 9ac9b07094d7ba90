"""
Movie Catalog API — Genre Service
===================================

What:  Business logic for genres: CRUD, name uniqueness and the deletion
       cascade into movie genre lists.
Who:   Called by the /Genres route handlers.

Deletion cascade (DeleteGenre):
    ┌──────────────┐    ┌────────────────────────────┐    ┌──────────────┐
    │ Load genre   │───▶│ Strip its name from every  │───▶│ Delete genre │
    │ (404 if none)│    │ movie that lists it        │    │ row          │
    └──────────────┘    └────────────────────────────┘    └──────────────┘

    All three steps run on the request's session, which commits once at the
    end of the request (get_db_session). A failure anywhere rolls back both
    the movie updates and the delete.

Renaming (UpdateGenre) does not rewrite movie genre lists; movies keep
whatever names they were saved with.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.exceptions import ConflictError, DatabaseError, NotFoundError
from movie_api.models.genre import Genre
from movie_api.schemas.genre import GenreCreate, GenreResponse, GenreUpdate
from movie_api.services.movie_service import movie_service

logger = logging.getLogger(__name__)


class GenreService:
    """
    Business logic layer for genre operations.

    Error Handling Strategy:
        Missing ids raise NotFoundError; a taken name raises ConflictError,
        whether it is caught by the pre-check or by the unique index (two
        concurrent inserts). Other SQLAlchemy failures become DatabaseError.
    """

    async def _get_or_404(self, db: AsyncSession, genre_id: int) -> Genre:
        result = await db.execute(select(Genre).where(Genre.id == genre_id))
        genre = result.scalar_one_or_none()
        if genre is None:
            raise NotFoundError(resource="Genre", resource_id=genre_id)
        return genre

    async def _ensure_name_available(
        self,
        db: AsyncSession,
        name: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        query = select(Genre.id).where(Genre.name == name)
        if exclude_id is not None:
            query = query.where(Genre.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ConflictError(
                message=f"Genre '{name}' already exists",
                context={"name": name},
            )

    async def list_genres(self, db: AsyncSession) -> List[GenreResponse]:
        """All genres, ordered by id."""
        try:
            result = await db.execute(select(Genre).order_by(Genre.id))
            genres = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing genres: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve genres. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return [GenreResponse.model_validate(genre) for genre in genres]

    async def get_genre(self, db: AsyncSession, genre_id: int) -> GenreResponse:
        """
        Retrieve a single genre by ID.

        Raises:
            NotFoundError: No genre with this id (→ 404)
        """
        try:
            genre = await self._get_or_404(db, genre_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching genre %s: %s", genre_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the genre. Please try again.",
                context={"genre_id": genre_id},
            ) from e
        return GenreResponse.model_validate(genre)

    async def create_genre(self, db: AsyncSession, payload: GenreCreate) -> GenreResponse:
        """
        Insert a genre.

        Raises:
            ConflictError: The name is already taken (→ 409)
        """
        try:
            await self._ensure_name_available(db, payload.name)
            genre = Genre(name=payload.name)
            db.add(genre)
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                message=f"Genre '{payload.name}' already exists",
                context={"name": payload.name},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error creating genre: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the genre. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Genre %s created: '%s'", genre.id, genre.name)
        return GenreResponse.model_validate(genre)

    async def update_genre(
        self,
        db: AsyncSession,
        genre_id: int,
        payload: GenreUpdate,
    ) -> GenreResponse:
        """
        Apply the fields present in `payload`.

        Raises:
            NotFoundError: No genre with this id
            ConflictError: The new name belongs to another genre
        """
        changes = payload.model_dump(exclude_unset=True)
        try:
            genre = await self._get_or_404(db, genre_id)
            if "name" in changes:
                await self._ensure_name_available(db, changes["name"], exclude_id=genre_id)
            for field, value in changes.items():
                setattr(genre, field, value)
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                message=f"Genre '{changes.get('name')}' already exists",
                context={"name": changes.get("name")},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error updating genre %s: %s", genre_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the genre. Please try again.",
                context={"genre_id": genre_id},
            ) from e

        logger.info("Genre %s updated: %s", genre_id, changes)
        return GenreResponse.model_validate(genre)

    async def delete_genre(self, db: AsyncSession, genre_id: int) -> GenreResponse:
        """
        Delete a genre and remove its name from every movie that lists it.

        The cascade runs only once the genre is known to exist.

        Returns:
            The deleted genre as it was stored.

        Raises:
            NotFoundError: No genre with this id (nothing is modified)
        """
        try:
            genre = await self._get_or_404(db, genre_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching genre %s: %s", genre_id, str(e))
            raise DatabaseError(
                message="Could not delete the genre. Please try again.",
                context={"genre_id": genre_id},
            ) from e

        deleted = GenreResponse.model_validate(genre)
        movies_updated = await movie_service.remove_genre_from_movies(db, genre.name)

        try:
            await db.delete(genre)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting genre %s: %s", genre_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the genre. Please try again.",
                context={"genre_id": genre_id},
            ) from e

        logger.info(
            "Genre %s ('%s') deleted; removed from %d movie(s)",
            genre_id,
            deleted.name,
            movies_updated,
        )
        return deleted


# ── Singleton Instance ────────────────────────────────────────────────────
genre_service = GenreService()
