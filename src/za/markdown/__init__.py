"""Markdown helpers: inline link extraction and note documents."""

from za.markdown.document import Document
from za.markdown.links import (
    RawLink,
    date_from_destination,
    extract_links,
    is_date_link,
    is_external,
    series_from_destination,
)

__all__ = [
    "Document",
    "RawLink",
    "date_from_destination",
    "extract_links",
    "is_date_link",
    "is_external",
    "series_from_destination",
]
