"""Application services built on the cache."""
