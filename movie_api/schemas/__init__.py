# Schemas package init
"""
Movie Catalog API — Pydantic Request/Response Schemas
=======================================================

What:  The API contract: request validation, response serialization and the
       OpenAPI documentation FastAPI generates from them.

Schemas are separate from the SQLAlchemy models: the wire format uses
`releaseDate` while the table column is `release_date`, and update payloads
make every field optional.
"""
