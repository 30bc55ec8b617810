"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the cache to the outside world (the local file system, the
configuration sources, the console) by implementing the interfaces defined
in the domain layer.
"""
