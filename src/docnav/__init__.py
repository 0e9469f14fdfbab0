"""docnav - in-memory indexing and search for markdown documentation trees."""

__version__ = "0.1.0"
