# Services package init
"""
Movie Catalog API — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession, apply business rules, and
       return response schemas. They flush but never commit; the session
       dependency owns the transaction.

Service Inventory:
    - MovieService: listing, search, CRUD, and stripping a genre from movies
    - GenreService: CRUD, name uniqueness, and the genre deletion cascade
"""
