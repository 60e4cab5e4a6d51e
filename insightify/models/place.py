"""
Place data model.

Represents a location returned by the Places gateway and the reviews it owns.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from insightify.models.review import Author, Language, Review


@dataclass
class PlaceReview:
    """A review as delivered by the Places gateway (normalized shape)."""
    author_name: str
    text: str
    language: Optional[str] = None  # ISO code, e.g. "en"
    rating: Optional[int] = None
    profile_photo_url: str = ""
    relative_time_description: str = ""
    time: Optional[float] = None  # Unix seconds

    @classmethod
    def from_dict(cls, data: dict) -> "PlaceReview":
        """Create PlaceReview from a gateway review dict."""
        text = data.get("text") or ""
        # Places v1 returns localized text objects
        if isinstance(text, dict):
            text = text.get("text", "")

        return cls(
            author_name=data.get("author_name") or "Anonymous",
            text=text,
            language=data.get("language"),
            rating=data.get("rating"),
            profile_photo_url=data.get("profile_photo_url") or "",
            relative_time_description=data.get("relative_time_description") or "",
            time=data.get("time")
        )

    def to_review(self, review_id: str) -> Review:
        """Convert into a store Review record."""
        rating = None
        if isinstance(self.rating, (int, float)) and not isinstance(self.rating, bool):
            rating = int(round(self.rating))
            if not (1 <= rating <= 5):
                rating = None

        return Review(
            review_id=review_id,
            text=self.text,
            lang=Language.from_code(self.language),
            rating=rating,
            response_time=self.relative_time_description or None,
            author=Author(
                author_id=review_id,
                username=self.author_name,
                avatar_url=self.profile_photo_url
            )
        )


@dataclass
class PlacePhoto:
    photo_reference: str
    height: int = 0
    width: int = 0
    html_attributions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "PlacePhoto":
        return cls(
            photo_reference=data.get("photo_reference", ""),
            height=data.get("height") or 0,
            width=data.get("width") or 0,
            html_attributions=data.get("html_attributions", [])
        )


@dataclass
class PlaceDetails:
    """
    Normalized place details.
    Read-only input to the summary aggregator.
    """
    name: str
    formatted_address: str = ""
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    reviews: List[PlaceReview] = field(default_factory=list)
    photos: List[PlacePhoto] = field(default_factory=list)
    website: Optional[str] = None
    international_phone_number: Optional[str] = None
    price_level: Optional[str] = None
    business_status: Optional[str] = None

    @classmethod
    def from_result(cls, result: dict) -> "PlaceDetails":
        """Create PlaceDetails from the gateway's `result` object."""
        return cls(
            name=result.get("name") or "Unknown",
            formatted_address=result.get("formatted_address") or "",
            rating=result.get("rating"),
            user_ratings_total=result.get("user_ratings_total"),
            reviews=[PlaceReview.from_dict(r) for r in result.get("reviews") or []],
            photos=[PlacePhoto.from_dict(p) for p in result.get("photos") or []],
            website=result.get("website"),
            international_phone_number=result.get("international_phone_number"),
            price_level=result.get("price_level"),
            business_status=result.get("business_status")
        )


@dataclass
class Place:
    """
    A location tracked by the dashboard.
    `details` is None when the gateway had no data for the place.
    """
    place_id: str
    details: Optional[PlaceDetails] = None

    @property
    def rating(self) -> Optional[float]:
        return self.details.rating if self.details else None

    @property
    def user_ratings_total(self) -> Optional[int]:
        return self.details.user_ratings_total if self.details else None

    @property
    def name(self) -> str:
        return self.details.name if self.details else "Unknown"
