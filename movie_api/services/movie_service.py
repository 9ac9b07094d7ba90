"""
Movie Catalog API — Movie Service
===================================

What:  Business logic for movies: paginated listing, filtered search and CRUD,
       plus the movie-side half of the genre deletion cascade.
How:   Builds SQLAlchemy 2.0 select() statements and runs them on the request's
       AsyncSession. Commit/rollback belongs to get_db_session, so every
       method here only flushes.
Who:   Called by the /Movies route handlers and by GenreService.

Search semantics:
    title: case-insensitive substring of Movie.title
    genre: exact, case-sensitive element of Movie.genres

    Genres live in one comma-joined column, so an exact element match is a
    LIKE on the column padded with separators on both sides:

        (',' || genres || ',') LIKE '%,Sci-Fi,%'

    User input is LIKE-escaped first, so '%' and '_' match literally.

Pagination:
    skip = (page - 1) * limit, take = limit, over rows ordered by id.
    Ordering by the primary key keeps pages stable between requests.
"""

import logging
from typing import List, Optional

from sqlalchemy import String, func, literal, select, type_coerce
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from movie_api.exceptions import DatabaseError, NotFoundError, ValidationError
from movie_api.models.movie import Movie
from movie_api.models.types import SEPARATOR
from movie_api.schemas.movie import MovieCreate, MovieResponse, MovieUpdate

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "/"

# Largest OFFSET a 64-bit integer parameter can carry (SQLite INTEGER, PostgreSQL BIGINT)
MAX_OFFSET = 2**63 - 1


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so `value` matches itself literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def genre_element_pattern(genre: str) -> str:
    """LIKE pattern matching `genre` as a whole element of a padded genre list."""
    return f"%{SEPARATOR}{escape_like(genre)}{SEPARATOR}%"


def padded_genres():
    """SQL expression for ',' || movies.genres || ','."""
    return literal(SEPARATOR) + type_coerce(Movie.genres, String) + literal(SEPARATOR)


class MovieService:
    """
    Business logic layer for movie operations.

    Responsibilities:
        - list_movies() / search_movies(): paginated reads
        - count_movies(): total matching rows for the X-Total-Count header
        - get_movie() / create_movie() / update_movie() / delete_movie()
        - remove_genre_from_movies(): cascade step used when a genre is deleted

    Error Handling Strategy:
        Missing ids raise NotFoundError. SQLAlchemy failures are logged and
        re-raised as DatabaseError (generic message, details in context).
    """

    # ── Query helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _apply_filters(
        query: Select,
        title: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> Select:
        """Add the title/genre WHERE clauses; empty filters add nothing."""
        if title:
            query = query.where(
                Movie.title.ilike(f"%{escape_like(title)}%", escape=LIKE_ESCAPE)
            )
        if genre:
            query = query.where(
                padded_genres().like(genre_element_pattern(genre), escape=LIKE_ESCAPE)
            )
        return query

    @staticmethod
    def _validate_page(page: int, limit: int) -> None:
        if page < 1:
            raise ValidationError(message="page must be 1 or greater", field="page")
        if limit < 1:
            raise ValidationError(message="limit must be 1 or greater", field="limit")

    async def _get_or_404(self, db: AsyncSession, movie_id: int) -> Movie:
        result = await db.execute(select(Movie).where(Movie.id == movie_id))
        movie = result.scalar_one_or_none()
        if movie is None:
            raise NotFoundError(resource="Movie", resource_id=movie_id)
        return movie

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_movies(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
    ) -> List[MovieResponse]:
        """
        One page of all movies, ordered by id.

        A page past the end is an empty list, not an error.
        """
        return await self.search_movies(db, page=page, limit=limit)

    async def search_movies(
        self,
        db: AsyncSession,
        title: Optional[str] = None,
        genre: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> List[MovieResponse]:
        """
        One page of the movies matching every given filter.

        Args:
            db:    Async database session
            title: Case-insensitive substring of the title (None/"" = any title)
            genre: Exact genre name the movie must list (None/"" = any genres)
            page:  1-based page number
            limit: Page size

        Raises:
            ValidationError: page or limit below 1
            DatabaseError:   Query execution failed
        """
        self._validate_page(page, limit)

        offset = (page - 1) * limit
        if offset > MAX_OFFSET:
            # No table holds that many rows
            return []

        query = self._apply_filters(select(Movie), title=title, genre=genre)
        query = query.order_by(Movie.id).offset(offset).limit(min(limit, MAX_OFFSET))

        try:
            result = await db.execute(query)
            movies = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error searching movies: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve movies. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [MovieResponse.model_validate(movie) for movie in movies]

    async def count_movies(
        self,
        db: AsyncSession,
        title: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> int:
        """Number of movies matching the filters, ignoring pagination."""
        query = self._apply_filters(select(func.count(Movie.id)), title=title, genre=genre)
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error counting movies: %s", str(e))
            raise DatabaseError(
                message="Could not count movies. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return result.scalar() or 0

    async def get_movie(self, db: AsyncSession, movie_id: int) -> MovieResponse:
        """
        Retrieve a single movie by ID.

        Raises:
            NotFoundError: No movie with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            movie = await self._get_or_404(db, movie_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching movie %s: %s", movie_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the movie. Please try again.",
                context={"movie_id": movie_id},
            ) from e
        return MovieResponse.model_validate(movie)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_movie(self, db: AsyncSession, payload: MovieCreate) -> MovieResponse:
        """Insert a movie. Genre names are stored as given, without checking the genres table."""
        movie = Movie(**payload.model_dump())
        try:
            db.add(movie)
            await db.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating movie: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the movie. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Movie %s created: '%s'", movie.id, movie.title)
        return MovieResponse.model_validate(movie)

    async def update_movie(
        self,
        db: AsyncSession,
        movie_id: int,
        payload: MovieUpdate,
    ) -> MovieResponse:
        """
        Apply the fields present in `payload` (PATCH semantics).

        Fields the client left out keep their stored values.

        Raises:
            NotFoundError: No movie with this id
        """
        changes = payload.model_dump(exclude_unset=True)
        try:
            movie = await self._get_or_404(db, movie_id)
            for field, value in changes.items():
                setattr(movie, field, value)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating movie %s: %s", movie_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the movie. Please try again.",
                context={"movie_id": movie_id},
            ) from e

        logger.info("Movie %s updated: %s", movie_id, sorted(changes))
        return MovieResponse.model_validate(movie)

    async def delete_movie(self, db: AsyncSession, movie_id: int) -> MovieResponse:
        """
        Delete a movie and return its last stored state.

        Raises:
            NotFoundError: No movie with this id
        """
        try:
            movie = await self._get_or_404(db, movie_id)
            deleted = MovieResponse.model_validate(movie)
            await db.delete(movie)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting movie %s: %s", movie_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the movie. Please try again.",
                context={"movie_id": movie_id},
            ) from e

        logger.info("Movie %s deleted", movie_id)
        return deleted

    async def remove_genre_from_movies(self, db: AsyncSession, genre_name: str) -> int:
        """
        Strip `genre_name` from the genre list of every movie that has it.

        What:    The movie-side step of deleting a genre.
        How:     The LIKE pattern narrows the candidates in SQL; exact list
                 membership is then checked in Python, so only movies that
                 really list the genre are modified.

        Guarantees:
            - every occurrence of the name is removed, duplicates included
            - the remaining names keep their relative order
            - movies without the genre are not written

        Returns:
            Number of movies modified.
        """
        query = (
            select(Movie)
            .where(padded_genres().like(genre_element_pattern(genre_name), escape=LIKE_ESCAPE))
            .order_by(Movie.id)
        )
        try:
            result = await db.execute(query)
            candidates = list(result.scalars().all())

            updated = 0
            for movie in candidates:
                if genre_name not in movie.genres:
                    continue
                # New list object: in-place mutation would not mark the attribute dirty
                movie.genres = [g for g in movie.genres if g != genre_name]
                updated += 1

            if updated:
                await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error removing genre '%s' from movies: %s", genre_name, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not update movies for the deleted genre. Please try again.",
                context={"genre": genre_name},
            ) from e

        logger.info("Removed genre '%s' from %d movie(s)", genre_name, updated)
        return updated


# ── Singleton Instance ────────────────────────────────────────────────────
movie_service = MovieService()
