"""
Movie Catalog API — Movie Schemas
===================================

What:  Payloads for AddMovie / UpdateMovie and the Movie response body.

Field naming:
    The wire format uses `releaseDate`; Python code uses `release_date`.
    Input accepts either spelling, responses always emit `releaseDate`.
"""

from datetime import date
from typing import Annotated, List, Optional

from pydantic import AliasChoices, BaseModel, Field, StringConstraints, field_validator

from movie_api.schemas.common import GenreName, reject_null

MovieTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
MovieDescription = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

RELEASE_DATE_ALIASES = AliasChoices("release_date", "releaseDate")


class MovieCreate(BaseModel):
    """
    Body of POST /Movies/AddMovie.

    Example:
        {
            "title": "Inception",
            "description": "A mind-bending thriller about dreams within dreams.",
            "releaseDate": "2010-07-16",
            "genres": ["Action", "Sci-Fi"]
        }
    """
    title: MovieTitle = Field(description="Movie title", examples=["Inception"])
    description: MovieDescription = Field(description="Movie description")
    release_date: date = Field(
        validation_alias=RELEASE_DATE_ALIASES,
        description="Release date (YYYY-MM-DD)",
        examples=["2010-07-16"],
    )
    genres: List[GenreName] = Field(
        description="List of genre names; order is preserved",
        examples=[["Action", "Sci-Fi"]],
    )


class MovieUpdate(BaseModel):
    """
    Body of PATCH /Movies/UpdateMovie/{id}.

    Every field is optional; only the fields present in the body are written.
    """
    title: Optional[MovieTitle] = Field(default=None, description="Movie title")
    description: Optional[MovieDescription] = Field(default=None, description="Movie description")
    release_date: Optional[date] = Field(
        default=None,
        validation_alias=RELEASE_DATE_ALIASES,
        description="Release date (YYYY-MM-DD)",
    )
    genres: Optional[List[GenreName]] = Field(default=None, description="Replacement genre list")

    @field_validator("title", "description", "release_date", "genres", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class MovieResponse(BaseModel):
    """A stored movie."""
    id: int = Field(description="Movie identifier")
    title: str = Field(description="Movie title")
    description: str = Field(description="Movie description")
    release_date: date = Field(
        validation_alias=RELEASE_DATE_ALIASES,
        serialization_alias="releaseDate",
        description="Release date",
    )
    genres: List[str] = Field(description="Genre names, in stored order")

    model_config = {"from_attributes": True}
