from .client import HttpxOmdbClient

__all__ = ["HttpxOmdbClient"]
