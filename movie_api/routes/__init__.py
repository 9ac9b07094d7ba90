# Routes package init
"""
Movie Catalog API — API Routes Package
========================================

Route Inventory:
    - movies.py:  /Movies/ListMovies, /Movies/ListOneMovie/{id}, /Movies/SearchMovies,
                  /Movies/AddMovie, /Movies/UpdateMovie/{id}, /Movies/DeleteMovie/{id}
    - genres.py:  /Genres/ListGenres, /Genres/ListOneGenre/{id}, /Genres/AddGenre,
                  /Genres/UpdateGenre/{id}, /Genres/DeleteGenre/{id}
    - health.py:  /health

Routes stay thin: read the request, call a service, shape the response.
"""
