"""Keep a release version consistent across the files that declare it."""

__version__ = "0.1.0"
