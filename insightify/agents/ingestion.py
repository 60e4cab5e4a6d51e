"""
Ingestion Agent.

Loads places and their reviews, either from the Places gateway or from the
seed fixture (mock mode).
"""

import logging
from typing import Iterable, List, Optional

from insightify.data.seed import seed_places, seed_reviews
from insightify.gateway.places import GatewayUnavailable, PlacesGateway
from insightify.models.place import Place, PlaceDetails
from insightify.models.review import Review

logger = logging.getLogger(__name__)


class PlaceIngestionAgent:
    """
    Fetches place details and converts their reviews into store records.

    Each place is a one-shot fetch; there is no live sync. A place the
    gateway cannot deliver is kept with `details=None` so aggregation can
    still account for it, and it contributes no reviews.
    """

    def __init__(self, gateway: Optional[PlacesGateway] = None, use_mock_data: bool = False):
        """
        Initialize ingestion agent.

        Args:
            gateway: Places gateway (required unless use_mock_data)
            use_mock_data: If True, serve the seed fixture instead of calling the gateway
        """
        if gateway is None and not use_mock_data:
            raise ValueError("A PlacesGateway is required when mock data is disabled")

        self.gateway = gateway
        self.use_mock_data = use_mock_data

        if use_mock_data:
            logger.info("Initialized PlaceIngestionAgent in MOCK mode")
        else:
            logger.info("Initialized PlaceIngestionAgent in REAL mode")

    def fetch_places(self, place_ids: Iterable[str]) -> List[Place]:
        """
        Fetch details for each place id.

        Args:
            place_ids: Opaque place identifiers

        Returns:
            One Place per id, in input order; failed places have details=None
        """
        if self.use_mock_data:
            return seed_places()

        places = []
        failed = 0
        for place_id in place_ids:
            try:
                payload = self.gateway.fetch_place_details(place_id)
                details = PlaceDetails.from_result(payload.get("result") or {})
                places.append(Place(place_id=place_id, details=details))
            except (GatewayUnavailable, ValueError) as e:
                logger.warning(f"No data for place {place_id!r}: {e}")
                failed += 1
                places.append(Place(place_id=place_id, details=None))

        logger.info(f"Fetched {len(places) - failed}/{len(places)} places")
        return places

    def fetch_reviews(self, place_ids: Iterable[str]) -> List[Review]:
        """Fetch places and return their reviews as store records."""
        if self.use_mock_data:
            return seed_reviews()
        return reviews_from_places(self.fetch_places(place_ids))


def reviews_from_places(places: Iterable[Place]) -> List[Review]:
    """
    Convert gateway reviews into store records.

    Review ids are "<place_id>-<n>" so they stay unique across places.
    Places without details contribute nothing.
    """
    places = list(places)
    reviews = []
    for place in places:
        if place.details is None:
            continue
        for index, place_review in enumerate(place.details.reviews, 1):
            if not place_review.text:
                logger.debug(f"Skipping empty review {index} of {place.place_id}")
                continue
            reviews.append(place_review.to_review(f"{place.place_id}-{index}"))

    logger.info(f"Converted {len(reviews)} reviews from {len(places)} places")
    return reviews
