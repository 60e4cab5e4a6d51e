"""
Seed data.

The single mock fixture used as the production default in mock mode and by tests.
"""

from typing import List

from insightify.models.place import Place, PlaceDetails, PlaceReview
from insightify.models.review import Author, Language, Review

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"
PLACEHOLDER_AVATAR = "https://via.placeholder.com/40"


def seed_reviews() -> List[Review]:
    """Return the dashboard's mock reviews."""
    return [
        Review(
            review_id="1",
            text="Great service!",
            lang=Language.ENGLISH,
            rating=5,
            responded=False,
            response_time="2h",
            author=Author("1", "John Doe", PLACEHOLDER_AVATAR)
        ),
        Review(
            review_id="2",
            text="Muy buen producto",
            lang=Language.SPANISH,
            rating=4,
            responded=True,
            response_time="1d",
            author=Author("2", "Maria Garcia", PLACEHOLDER_AVATAR)
        ),
        Review(
            review_id="3",
            text="Produit de qualité",
            lang=Language.FRENCH,
            rating=3,
            responded=False,
            response_time="3d",
            author=Author("3", "Jean Dupont", PLACEHOLDER_AVATAR),
            image_url=PLACEHOLDER_IMAGE
        ),
    ]


def seed_places() -> List[Place]:
    """Return mock locations for the summary tab."""
    return [
        Place(
            place_id="mock-downtown",
            details=PlaceDetails(
                name="Insightify Cafe Downtown",
                formatted_address="120 Market St, San Francisco, CA",
                rating=4.6,
                user_ratings_total=328,
                reviews=[
                    PlaceReview("John Doe", "Great service!", "en", 5,
                                relative_time_description="2 hours ago"),
                    PlaceReview("Maria Garcia", "Muy buen producto", "es", 4,
                                relative_time_description="a day ago"),
                ]
            )
        ),
        Place(
            place_id="mock-harbor",
            details=PlaceDetails(
                name="Insightify Cafe Harbor",
                formatted_address="8 Pier Ave, Oakland, CA",
                rating=4.1,
                user_ratings_total=145,
                reviews=[
                    PlaceReview("Jean Dupont", "Produit de qualité", "fr", 3,
                                relative_time_description="3 days ago"),
                ]
            )
        ),
        Place(
            place_id="mock-airport",
            details=PlaceDetails(
                name="Insightify Cafe Airport",
                formatted_address="SFO Terminal 2, San Francisco, CA",
                rating=3.7,
                user_ratings_total=96
            )
        ),
    ]
