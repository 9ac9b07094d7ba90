"""
Movie Catalog API — Genre Route Handlers
==========================================

What:  /Genres endpoints: list, get one, add, update, delete.
How:   Thin handlers over GenreService. DeleteGenre also strips the genre
       from every movie that lists it, in the same transaction.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.database import get_db_session
from movie_api.schemas.common import ErrorResponse
from movie_api.schemas.genre import GenreCreate, GenreResponse, GenreUpdate
from movie_api.services.genre_service import genre_service

router = APIRouter(prefix="/Genres", tags=["Genres"])

NOT_FOUND = {404: {"description": "Genre not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid genre ID or request body", "model": ErrorResponse}}
CONFLICT = {409: {"description": "A genre with this name already exists", "model": ErrorResponse}}

GenreId = Annotated[int, Path(description="Genre ID")]


@router.get(
    "/ListGenres",
    response_model=List[GenreResponse],
    responses={500: {"description": "Internal server error", "model": ErrorResponse}},
    summary="List all genres",
)
async def list_genres(db: AsyncSession = Depends(get_db_session)) -> List[GenreResponse]:
    return await genre_service.list_genres(db=db)


@router.get(
    "/ListOneGenre/{genre_id}",
    response_model=GenreResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="List one genre by ID",
)
async def get_genre(
    genre_id: GenreId,
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.get_genre(db=db, genre_id=genre_id)


@router.post(
    "/AddGenre",
    response_model=GenreResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **CONFLICT},
    summary="Add a genre to the database",
)
async def add_genre(
    payload: GenreCreate,
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.create_genre(db=db, payload=payload)


@router.patch(
    "/UpdateGenre/{genre_id}",
    response_model=GenreResponse,
    responses={**NOT_FOUND, **BAD_REQUEST, **CONFLICT},
    summary="Update a genre in the database",
    description="Renaming a genre does not change the genre lists of existing movies.",
)
async def update_genre(
    payload: GenreUpdate,
    genre_id: GenreId,
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.update_genre(db=db, genre_id=genre_id, payload=payload)


@router.delete(
    "/DeleteGenre/{genre_id}",
    response_model=GenreResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Delete a genre from the database",
    description="The genre is also removed from every movie that lists it.",
)
async def delete_genre(
    genre_id: GenreId,
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.delete_genre(db=db, genre_id=genre_id)
