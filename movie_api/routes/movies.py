"""
Movie Catalog API — Movie Route Handlers
==========================================

What:  /Movies endpoints: list, get one, search, add, update, delete.
How:   Validates path/query/body input, delegates to MovieService, returns JSON.
       Handlers stay thin; not-found and database errors are raised by the
       service and rendered by the global exception handlers.

Paths follow the resource/verb naming the catalog API has always exposed
(/Movies/ListMovies, /Movies/AddMovie, ...), which existing clients call.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.config import settings
from movie_api.database import get_db_session
from movie_api.schemas.common import ErrorResponse
from movie_api.schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from movie_api.services.movie_service import movie_service

router = APIRouter(prefix="/Movies", tags=["Movies"])

TOTAL_COUNT_HEADER = "X-Total-Count"

NOT_FOUND = {404: {"description": "Movie not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid parameters or request body", "model": ErrorResponse}}

MovieId = Annotated[int, Path(description="Movie ID")]


def page_param(
    page: int = Query(default=1, ge=1, description="1-based page number"),
) -> int:
    return page


def limit_param(
    limit: Optional[int] = Query(
        default=None,
        ge=1,
        le=settings.max_page_size,
        description=f"Movies per page (default {settings.default_page_size}, max {settings.max_page_size})",
    ),
) -> int:
    return limit if limit is not None else settings.default_page_size


@router.get(
    "/ListMovies",
    response_model=List[MovieResponse],
    responses=BAD_REQUEST,
    summary="List all movies",
    description="Returns one page of movies ordered by id. The X-Total-Count header carries the total.",
)
async def list_movies(
    response: Response,
    page: int = Depends(page_param),
    limit: int = Depends(limit_param),
    db: AsyncSession = Depends(get_db_session),
) -> List[MovieResponse]:
    movies = await movie_service.list_movies(db=db, page=page, limit=limit)
    response.headers[TOTAL_COUNT_HEADER] = str(await movie_service.count_movies(db=db))
    return movies


@router.get(
    "/ListOneMovie/{movie_id}",
    response_model=MovieResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="List one movie",
)
async def get_movie(
    movie_id: MovieId,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.get_movie(db=db, movie_id=movie_id)


@router.get(
    "/SearchMovies",
    response_model=List[MovieResponse],
    responses=BAD_REQUEST,
    summary="Search movies by filters",
    description=(
        "Filters combine with AND. `title` matches any part of the title, ignoring case; "
        "`genre` must equal one of the movie's genres exactly. Omitted filters match everything."
    ),
)
async def search_movies(
    response: Response,
    title: Optional[str] = Query(default=None, description="Case-insensitive title substring"),
    genre: Optional[str] = Query(default=None, description="Exact genre name"),
    page: int = Depends(page_param),
    limit: int = Depends(limit_param),
    db: AsyncSession = Depends(get_db_session),
) -> List[MovieResponse]:
    movies = await movie_service.search_movies(
        db=db, title=title, genre=genre, page=page, limit=limit
    )
    total = await movie_service.count_movies(db=db, title=title, genre=genre)
    response.headers[TOTAL_COUNT_HEADER] = str(total)
    return movies


@router.post(
    "/AddMovie",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
    summary="Add a movie to the database",
)
async def add_movie(
    payload: MovieCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.create_movie(db=db, payload=payload)


@router.patch(
    "/UpdateMovie/{movie_id}",
    response_model=MovieResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Update a movie from database",
    description="Only the fields present in the body are changed.",
)
async def update_movie(
    payload: MovieUpdate,
    movie_id: MovieId,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.update_movie(db=db, movie_id=movie_id, payload=payload)


@router.delete(
    "/DeleteMovie/{movie_id}",
    response_model=MovieResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Delete a movie from database",
    description="Returns the movie as it was before deletion.",
)
async def delete_movie(
    movie_id: MovieId,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.delete_movie(db=db, movie_id=movie_id)
