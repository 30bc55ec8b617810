"""Main entry point when executing mailcache as a package.

This allows running the package using python -m mailcache.
"""

from mailcache.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
