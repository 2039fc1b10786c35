from movie_catalog.models.movie import Genre, Movie, movie_genres
from movie_catalog.models.rating import Rating
from movie_catalog.models.session import UserSession
from movie_catalog.models.user import User
from movie_catalog.models.watchlist import WatchlistItem

__all__ = [
    "Genre",
    "Movie",
    "Rating",
    "User",
    "UserSession",
    "WatchlistItem",
    "movie_genres",
]
