"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

TITLE_PLACEHOLDER = "title not found"
CONTENT_PLACEHOLDER = "content not found"
AUTHOR_PLACEHOLDER = "unknown author"


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Structured article content extracted from one page."""

    title: str
    content: str
    author: str
    prev_link: str | None = None
    next_link: str | None = None
    book_name: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate the result."""
        for name in ("title", "content", "author"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the API's field names, omitting absent optional fields."""
        data: Dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "prevLink": self.prev_link,
            "nextLink": self.next_link,
        }
        if self.book_name is not None:
            data["bookName"] = self.book_name
        if self.description is not None:
            data["description"] = self.description
        return data
