"""Console presentation for the command line interface."""
