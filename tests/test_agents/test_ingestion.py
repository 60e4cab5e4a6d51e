"""
Unit tests for the Place Ingestion Agent.
"""

import pytest
from unittest.mock import MagicMock

from insightify.agents.aggregation import rating_distribution, total_review_count
from insightify.agents.ingestion import PlaceIngestionAgent, reviews_from_places
from insightify.gateway.places import GatewayUnavailable, PlacesGateway
from insightify.models.place import Place, PlaceDetails, PlaceReview
from insightify.models.review import Language


def _payload(name, reviews):
    return {
        "result": {
            "name": name,
            "formatted_address": "1 Main St",
            "rating": 4.2,
            "user_ratings_total": 12,
            "reviews": reviews,
            "photos": []
        },
        "status": "OK"
    }


def test_requires_gateway_in_real_mode():
    with pytest.raises(ValueError):
        PlaceIngestionAgent(gateway=None, use_mock_data=False)


def test_mock_mode_serves_seed_fixture():
    agent = PlaceIngestionAgent(use_mock_data=True)

    reviews = agent.fetch_reviews([])
    places = agent.fetch_places([])

    assert [r.review_id for r in reviews] == ["1", "2", "3"]
    assert len(places) == 3


def test_partial_gateway_failure_is_tolerated():
    """Test a failed place is kept without details and contributes no reviews."""
    gateway = MagicMock()
    gateway.fetch_place_details.side_effect = [
        _payload("Cafe A", [
            {"author_name": "Ana", "text": "Muy buen producto", "language": "es", "rating": 4},
            {"author_name": "Bob", "text": "", "language": "en", "rating": 2},
        ]),
        GatewayUnavailable("B", "status 500"),
    ]
    agent = PlaceIngestionAgent(gateway=gateway)

    places = agent.fetch_places(["A", "B"])

    assert [p.place_id for p in places] == ["A", "B"]
    assert places[0].details.name == "Cafe A"
    assert places[1].details is None

    reviews = reviews_from_places(places)
    assert len(reviews) == 1
    assert reviews[0].review_id == "A-1"
    assert reviews[0].lang is Language.SPANISH
    assert reviews[0].rating == 4
    assert reviews[0].author.username == "Ana"

    # Aggregation treats the failed place as absent
    assert total_review_count(places) == 12
    assert [entry["name"] for entry in rating_distribution(places)] == ["Cafe A"]


def test_malformed_place_is_tolerated():
    """Test one place with a malformed body does not stop the others."""
    session = MagicMock()
    good = MagicMock(status_code=200, ok=True)
    good.json.return_value = {
        "displayName": {"text": "Cafe A"},
        "rating": 4.0,
        "userRatingCount": 8,
        "reviews": [{"rating": 5, "text": {"text": "Great service!", "languageCode": "en"}}]
    }
    bad = MagicMock(status_code=200, ok=True)
    bad.json.return_value = {"displayName": {"text": "Cafe B"}, "reviews": ["oops"]}
    session.get.side_effect = [bad, good]
    agent = PlaceIngestionAgent(gateway=PlacesGateway(api_key="maps-key", session=session))

    places = agent.fetch_places(["B", "A"])

    assert places[0].details is None
    assert places[1].details.name == "Cafe A"
    assert [r.review_id for r in reviews_from_places(places)] == ["A-1"]


def test_fetch_reviews_real_mode():
    gateway = MagicMock()
    gateway.fetch_place_details.return_value = _payload("Cafe A", [
        {"author_name": "Jean", "text": "Produit de qualité", "language": "fr", "rating": 3},
    ])
    agent = PlaceIngestionAgent(gateway=gateway)

    reviews = agent.fetch_reviews(["A"])

    assert len(reviews) == 1
    assert reviews[0].text == "Produit de qualité"
    assert reviews[0].lang is Language.FRENCH


def test_review_ids_unique_across_places():
    details = PlaceDetails(name="P", reviews=[PlaceReview("a", "one"), PlaceReview("b", "two")])
    places = [Place("p1", details), Place("p2", details)]

    ids = [r.review_id for r in reviews_from_places(places)]
    assert ids == ["p1-1", "p1-2", "p2-1", "p2-2"]


def test_out_of_range_gateway_rating_is_dropped():
    review = PlaceReview("a", "text", "en", rating=0).to_review("r1")
    assert review.rating is None
