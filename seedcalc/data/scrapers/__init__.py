"""Scraper exports."""

from .bracket_pages import BracketPageScraper

__all__ = ["BracketPageScraper"]
