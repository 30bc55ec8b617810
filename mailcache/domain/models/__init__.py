"""Domain models: value objects and the on-disk cache line format."""
