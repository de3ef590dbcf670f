from .diskcache_storage import DiskcacheWatchlistStorage
from .file_storage import JsonFileWatchlistStorage
from .memory_storage import InMemoryWatchlistStorage
from .storage_factory import create_watchlist_storage

__all__ = [
    "DiskcacheWatchlistStorage",
    "InMemoryWatchlistStorage",
    "JsonFileWatchlistStorage",
    "create_watchlist_storage",
]
