"""
HTML parsing exports.
"""

from app.crawler.parsing.html_parsers import HTMLParsingLayer

__all__ = ["HTMLParsingLayer"]
