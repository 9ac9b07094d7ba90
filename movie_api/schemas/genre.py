"""
Movie Catalog API — Genre Schemas
===================================

What:  Payloads for AddGenre / UpdateGenre and the Genre response body.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from movie_api.schemas.common import GenreName, reject_null


class GenreCreate(BaseModel):
    """Body of POST /Genres/AddGenre."""
    name: GenreName = Field(description="Name of genre", examples=["Action"])


class GenreUpdate(BaseModel):
    """Body of PATCH /Genres/UpdateGenre/{id}; omitted fields stay unchanged."""
    name: Optional[GenreName] = Field(default=None, description="New name of genre", examples=["Adventure"])

    @field_validator("name", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class GenreResponse(BaseModel):
    """A stored genre."""
    id: int = Field(description="Genre identifier")
    name: str = Field(description="Genre name")

    model_config = {"from_attributes": True}
