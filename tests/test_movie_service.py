"""
Movie Catalog API — Movie Service Unit Tests
==============================================

What:  Tests for MovieService business logic (list, search, CRUD).
How:   Error paths use a mock session; query semantics run against a real
       in-memory SQLite database so the generated SQL is exercised.

What we test:
    ✅ Movie not found raises NotFoundError and writes nothing
    ✅ SQLAlchemy failures surface as DatabaseError
    ✅ Pagination: skip = (page - 1) * limit, pages past the end are empty
    ✅ Title search is a case-insensitive substring match
    ✅ Genre search is an exact, case-sensitive element match
    ✅ LIKE wildcards in user input match literally
    ✅ Title matching folds non-ASCII letters on SQLite too
    ✅ Page numbers far past the end return an empty page
    ✅ Partial updates keep the fields that were left out
"""

from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from conftest import mock_movie, scalar_result, seed_movies
from movie_api.database import unicode_lower
from movie_api.exceptions import DatabaseError, NotFoundError, ValidationError
from movie_api.schemas.movie import MovieCreate, MovieUpdate
from movie_api.services.movie_service import MovieService, escape_like, genre_element_pattern


async def stored_genres(session, movie_id):
    """The raw text stored in movies.genres for one row."""
    result = await session.execute(
        text("SELECT genres FROM movies WHERE id = :id"), {"id": movie_id}
    )
    return result.scalar_one()


class TestLikePatterns:
    """Tests for the LIKE helpers used by the filters."""

    def test_escape_like_escapes_wildcards(self):
        assert escape_like("100%_real") == "100/%/_real"

    def test_escape_like_escapes_escape_character(self):
        assert escape_like("AC/DC") == "AC//DC"

    def test_genre_element_pattern_is_padded_with_separators(self):
        assert genre_element_pattern("Sci-Fi") == "%,Sci-Fi,%"

    def test_unicode_lower_folds_accented_letters(self):
        assert unicode_lower("ÉLAN Ñu") == "élan ñu"

    def test_unicode_lower_passes_non_text_through(self):
        assert unicode_lower(None) is None
        assert unicode_lower(5) == 5


class TestMovieServiceErrors:
    """Error paths, using a mock session."""

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_get_movie_found(self, mock_db_session):
        mock_db_session.execute.return_value = scalar_result(mock_movie(id=7, title="Heat"))

        result = await self.service.get_movie(mock_db_session, 7)

        assert result.id == 7
        assert result.title == "Heat"

    @pytest.mark.asyncio
    async def test_get_movie_not_found(self, mock_db_session):
        """Missing movie should raise NotFoundError naming the id."""
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_movie(mock_db_session, 42)

        assert exc_info.value.resource == "Movie"
        assert exc_info.value.resource_id == 42
        assert "42" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_movie_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection lost")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_movie(mock_db_session, 1)

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_update_movie_not_found_writes_nothing(self, mock_db_session):
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.update_movie(mock_db_session, 3, MovieUpdate(title="New"))

        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_movie_not_found_deletes_nothing(self, mock_db_session):
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_movie(mock_db_session, 3)

        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0)])
    async def test_search_rejects_invalid_page(self, mock_db_session, page, limit):
        with pytest.raises(ValidationError):
            await self.service.search_movies(mock_db_session, page=page, limit=limit)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_offset_past_integer_range_skips_query(self, mock_db_session):
        result = await self.service.search_movies(mock_db_session, page=2**62, limit=10)

        assert result == []
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))

        with pytest.raises(DatabaseError):
            await self.service.search_movies(mock_db_session, title="x")


class TestMovieServicePagination:
    """list_movies() against a real database."""

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_pages_follow_id_order(self, db_session):
        await seed_movies(db_session, [{"title": f"Movie {i}", "genres": []} for i in range(1, 16)])

        first = await self.service.list_movies(db_session, page=1, limit=10)
        second = await self.service.list_movies(db_session, page=2, limit=10)

        assert [m.id for m in first] == list(range(1, 11))
        assert [m.id for m in second] == list(range(11, 16))

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, db_session):
        await seed_movies(db_session, [{"title": "Only", "genres": []}])

        result = await self.service.list_movies(db_session, page=3, limit=10)

        assert result == []

    @pytest.mark.asyncio
    async def test_page_beyond_offset_range_is_empty(self, db_session):
        await seed_movies(db_session, [{"title": "Only", "genres": []}])

        listed = await self.service.list_movies(db_session, page=10**18, limit=10)
        searched = await self.service.search_movies(db_session, title="only", page=10**18, limit=100)

        assert listed == []
        assert searched == []

    @pytest.mark.asyncio
    async def test_largest_offset_still_queries(self, db_session):
        await seed_movies(db_session, [{"title": "Only", "genres": []}])

        result = await self.service.list_movies(db_session, page=2**63, limit=1)

        assert result == []

    @pytest.mark.asyncio
    async def test_empty_catalog(self, db_session):
        assert await self.service.list_movies(db_session) == []
        assert await self.service.count_movies(db_session) == 0


class TestMovieServiceSearch:
    """search_movies() / count_movies() against a real database."""

    def setup_method(self):
        self.service = MovieService()

    @pytest.fixture
    def catalog(self):
        return [
            {"title": "The Matrix", "genres": ["Sci-Fi", "Action"]},
            {"title": "Matrix Reloaded", "genres": ["Action"]},
            {"title": "Inception", "genres": ["Science Fiction"]},
            {"title": "Die Hard", "genres": ["action"]},
            {"title": "100% Cotton", "genres": ["Documentary"]},
            {"title": "snake_case", "genres": ["Comedy", "Action Comedy"]},
        ]

    @pytest.mark.asyncio
    async def test_title_is_case_insensitive_substring(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, title="MATRIX")

        assert [m.title for m in result] == ["The Matrix", "Matrix Reloaded"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["élan", "ÉLAN", "Élan"])
    async def test_title_folds_non_ascii_case(self, db_session, title):
        await seed_movies(
            db_session,
            [{"title": "Élan Vital", "genres": []}, {"title": "Straße", "genres": []}],
        )

        result = await self.service.search_movies(db_session, title=title)

        assert [m.title for m in result] == ["Élan Vital"]

    @pytest.mark.asyncio
    async def test_genre_is_exact_element(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, genre="Action")

        assert [m.title for m in result] == ["The Matrix", "Matrix Reloaded"]

    @pytest.mark.asyncio
    async def test_genre_is_case_sensitive(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, genre="action")

        assert [m.title for m in result] == ["Die Hard"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("genre", ["Sci", "Science", "Comedy Action", "Act"])
    async def test_genre_does_not_match_partial_names(self, db_session, catalog, genre):
        await seed_movies(db_session, catalog)

        assert await self.service.search_movies(db_session, genre=genre) == []

    @pytest.mark.asyncio
    async def test_genre_matches_last_element(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, genre="Action Comedy")

        assert [m.title for m in result] == ["snake_case"]

    @pytest.mark.asyncio
    async def test_filters_combine(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, title="reloaded", genre="Action")

        assert [m.title for m in result] == ["Matrix Reloaded"]

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        percent = await self.service.search_movies(db_session, title="%")
        underscore = await self.service.search_movies(db_session, title="_")
        genre_wildcard = await self.service.search_movies(db_session, genre="%")

        assert [m.title for m in percent] == ["100% Cotton"]
        assert [m.title for m in underscore] == ["snake_case"]
        assert genre_wildcard == []

    @pytest.mark.asyncio
    async def test_empty_filters_match_everything(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        result = await self.service.search_movies(db_session, title="", genre=None)

        assert len(result) == len(catalog)

    @pytest.mark.asyncio
    async def test_search_paginates(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        page_two = await self.service.search_movies(db_session, genre="Action", page=2, limit=1)

        assert [m.title for m in page_two] == ["Matrix Reloaded"]

    @pytest.mark.asyncio
    async def test_count_ignores_pagination(self, db_session, catalog):
        await seed_movies(db_session, catalog)

        assert await self.service.count_movies(db_session) == len(catalog)
        assert await self.service.count_movies(db_session, title="matrix") == 2
        assert await self.service.count_movies(db_session, genre="Documentary") == 1


class TestMovieServiceWrites:
    """create / update / delete against a real database."""

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_create_movie_assigns_id_and_keeps_genre_order(self, db_session):
        payload = MovieCreate(
            title="Inception",
            description="Dreams within dreams.",
            releaseDate="2010-07-16",
            genres=["Sci-Fi", "Action", "Thriller"],
        )

        result = await self.service.create_movie(db_session, payload)

        assert result.id == 1
        assert result.release_date == date(2010, 7, 16)
        assert result.genres == ["Sci-Fi", "Action", "Thriller"]
        assert await stored_genres(db_session, result.id) == "Sci-Fi,Action,Thriller"

    @pytest.mark.asyncio
    async def test_create_movie_with_no_genres(self, db_session):
        payload = MovieCreate(
            title="Untitled", description="Nothing yet.", releaseDate="2024-01-01", genres=[]
        )

        result = await self.service.create_movie(db_session, payload)

        assert result.genres == []
        assert await stored_genres(db_session, result.id) == ""
        assert (await self.service.get_movie(db_session, result.id)).genres == []

    @pytest.mark.asyncio
    async def test_update_movie_changes_only_given_fields(self, db_session):
        [movie] = await seed_movies(
            db_session,
            [{"title": "Heat", "description": "Cops and robbers.", "genres": ["Crime", "Drama"]}],
        )

        result = await self.service.update_movie(db_session, movie.id, MovieUpdate(title="Heat (1995)"))

        assert result.title == "Heat (1995)"
        assert result.description == "Cops and robbers."
        assert result.genres == ["Crime", "Drama"]

    @pytest.mark.asyncio
    async def test_update_movie_replaces_genre_list(self, db_session):
        [movie] = await seed_movies(db_session, [{"title": "Heat", "genres": ["Crime", "Drama"]}])

        await self.service.update_movie(db_session, movie.id, MovieUpdate(genres=["Thriller"]))

        assert await stored_genres(db_session, movie.id) == "Thriller"

    @pytest.mark.asyncio
    async def test_delete_movie_returns_stored_state(self, db_session):
        [movie] = await seed_movies(db_session, [{"title": "Heat", "genres": ["Crime"]}])

        deleted = await self.service.delete_movie(db_session, movie.id)

        assert deleted.title == "Heat"
        assert deleted.genres == ["Crime"]
        with pytest.raises(NotFoundError):
            await self.service.get_movie(db_session, movie.id)
