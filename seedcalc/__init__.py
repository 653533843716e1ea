"""Historical March Madness seed matchup calculator."""

__version__ = "1.1.0"
