"""Data acquisition, caching and persistence."""
