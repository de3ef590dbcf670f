from .movie_catalog import MovieCatalogPort
from .watchlist_storage import WatchlistStoragePort

__all__ = [
    "MovieCatalogPort",
    "WatchlistStoragePort",
]
