"""
Review data model.

Represents one customer review and its translation/response state.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict


class Language(str, Enum):
    """Source languages a review can be tagged with."""
    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    OTHER = "Other"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Language":
        """
        Map an ISO language code ("es", "fr-CA") or a language name to a Language.
        Unknown or missing values map to OTHER.
        """
        if not code:
            return cls.OTHER

        value = code.strip()
        for language in cls:
            if language.value.lower() == value.lower():
                return language

        prefix = value.split("-")[0].split("_")[0].lower()
        return _ISO_CODES.get(prefix, cls.OTHER)


_ISO_CODES = {
    "en": Language.ENGLISH,
    "es": Language.SPANISH,
    "fr": Language.FRENCH,
}


@dataclass(frozen=True)
class Author:
    """Review author as shown on the dashboard."""
    author_id: str
    username: str
    avatar_url: str = ""


@dataclass(frozen=True)
class Review:
    """
    Snapshot of a customer review.

    Records are never mutated in place: the store swaps in a new snapshot
    (dataclasses.replace) for every transition.
    """
    review_id: str  # Unique within the store
    text: str  # Display text, possibly translated
    lang: Language  # Source language
    original_text: Optional[str] = None  # Captured once, on first translation
    rating: Optional[int] = None  # 1-5 star rating
    responded: bool = False
    is_translating: bool = False
    response_time: Optional[str] = None  # Display label, e.g. "2h"
    response_text: Optional[str] = None
    author: Optional[Author] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        # Validate rating
        if self.rating is not None:
            if isinstance(self.rating, bool) or not isinstance(self.rating, int):
                raise ValueError(f"Invalid rating: {self.rating!r}. Must be an integer 1-5")
            if not (1 <= self.rating <= 5):
                raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["lang"] = self.lang.value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Review":
        author = data.get("author")
        return cls(
            review_id=str(data["review_id"]),
            text=data["text"],
            lang=Language.from_code(data.get("lang")),
            original_text=data.get("original_text"),
            rating=data.get("rating"),
            responded=data.get("responded", False),
            # A loaded record never has a translation running
            is_translating=False,
            response_time=data.get("response_time"),
            response_text=data.get("response_text"),
            author=Author(**author) if author else None,
            image_url=data.get("image_url"),
        )
