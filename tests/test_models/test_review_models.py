"""
Unit tests for review and place models.
"""

import pytest
from dataclasses import FrozenInstanceError

from insightify.models.place import Place, PlaceDetails
from insightify.models.review import Author, Language, Review


def test_rating_validation():
    """Test ratings must be integers in 1-5."""
    Review(review_id="1", text="ok", lang=Language.ENGLISH, rating=1)
    Review(review_id="1", text="ok", lang=Language.ENGLISH, rating=None)

    with pytest.raises(ValueError):
        Review(review_id="1", text="ok", lang=Language.ENGLISH, rating=6)
    with pytest.raises(ValueError):
        Review(review_id="1", text="ok", lang=Language.ENGLISH, rating=0)
    with pytest.raises(ValueError):
        Review(review_id="1", text="ok", lang=Language.ENGLISH, rating=4.5)


def test_review_is_immutable():
    review = Review(review_id="1", text="ok", lang=Language.ENGLISH)
    with pytest.raises(FrozenInstanceError):
        review.responded = True


def test_language_from_code():
    assert Language.from_code("es") is Language.SPANISH
    assert Language.from_code("fr-CA") is Language.FRENCH
    assert Language.from_code("en_US") is Language.ENGLISH
    assert Language.from_code("French") is Language.FRENCH
    assert Language.from_code("de") is Language.OTHER
    assert Language.from_code(None) is Language.OTHER


def test_review_dict_conversion():
    review = Review(
        review_id="3",
        text="Produit de qualité",
        lang=Language.FRENCH,
        rating=3,
        author=Author("3", "Jean Dupont", "https://via.placeholder.com/40"),
        image_url="https://via.placeholder.com/150"
    )

    data = review.to_dict()
    assert data["lang"] == "French"
    assert data["author"]["username"] == "Jean Dupont"
    assert Review.from_dict(data) == review


def test_review_from_dict_loads_idle():
    """Test a stored translating flag is not carried into a loaded record."""
    data = Review(review_id="1", text="Great service!", lang=Language.ENGLISH).to_dict()
    data["is_translating"] = True

    review = Review.from_dict(data)

    assert review.is_translating is False
    assert review.text == "Great service!"


def test_place_without_details():
    place = Place(place_id="X")
    assert place.rating is None
    assert place.user_ratings_total is None
    assert place.name == "Unknown"


def test_place_details_from_result():
    details = PlaceDetails.from_result({
        "name": "Cafe",
        "rating": 4.4,
        "user_ratings_total": 10,
        "reviews": [{"author_name": "Ana", "text": {"text": "Hola"}, "language": "es"}],
        "photos": [{"photo_reference": "p1", "height": 10, "width": 20}]
    })

    assert details.reviews[0].text == "Hola"
    assert details.photos[0].width == 20
    assert details.formatted_address == ""
