"""mailcache: a persistent key/value cache for mail client state.

Keeps expensive values (such as folder message counts) in memory and
persists them to a single versioned flat file between runs.
"""

__version__ = "0.1.0"
