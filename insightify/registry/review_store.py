"""
Review Store - Single source of truth for the session's reviews.

Holds Review snapshots in insertion order and applies controlled updates.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from insightify.models.review import Review

logger = logging.getLogger(__name__)

RESPONSE_FILTERS = ("all", "responded", "not-responded")


class ReviewStore:
    """
    Owns every Review record for the current session.

    Records are immutable snapshots. An update swaps in a new snapshot for
    the matching id and leaves every other record untouched (same object),
    so readers can detect changes with an identity check. `generation`
    increases on every reload, letting a caller tell whether the snapshot it
    started from still belongs to the current load.
    """

    def __init__(self, reviews: Optional[Iterable[Review]] = None):
        """
        Initialize store, optionally with seed reviews.

        Args:
            reviews: Initial reviews (insertion order is preserved)
        """
        self._reviews: Dict[str, Review] = {}  # review_id -> Review
        self.generation = 0
        if reviews is not None:
            self.replace_all(reviews)

    def get_all(self) -> List[Review]:
        """Return all reviews in insertion order."""
        return list(self._reviews.values())

    def get_by_id(self, review_id: str) -> Optional[Review]:
        """Retrieve review by ID. Returns None if not found."""
        return self._reviews.get(review_id)

    def replace_all(self, reviews: Iterable[Review]) -> None:
        """
        Overwrite the store contents (no merge).

        Args:
            reviews: New reviews; on duplicate ids the last record wins
        """
        replacement: Dict[str, Review] = {}
        for review in reviews:
            if review.review_id in replacement:
                logger.warning(f"Duplicate review id {review.review_id}, keeping last record")
            replacement[review.review_id] = review

        self._reviews = replacement
        self.generation += 1
        logger.info(f"Review store loaded with {len(self._reviews)} reviews")

    def update(self, review_id: str, mutator: Callable[[Review], Review]) -> Optional[Review]:
        """
        Apply a pure transformation to a single review.

        Args:
            review_id: Target review
            mutator: Function returning the new snapshot for the review

        Returns:
            The new snapshot, or None when the id is unknown (no-op)

        Raises:
            ValueError: If the mutator changes the id, reverts a responded
                review or rewrites an already captured original text
        """
        current = self._reviews.get(review_id)
        if current is None:
            logger.debug(f"Update skipped, review not found: {review_id}")
            return None

        updated = mutator(current)
        if updated.review_id != review_id:
            raise ValueError(
                f"Mutator changed review id from {review_id} to {updated.review_id}"
            )
        if current.responded and not updated.responded:
            raise ValueError(f"Review {review_id} is already responded")
        if current.original_text is not None and updated.original_text != current.original_text:
            raise ValueError(f"Original text of review {review_id} is already captured")

        # Reassigning an existing key keeps its insertion position
        self._reviews[review_id] = updated
        return updated

    def filter_by_status(self, status: str = "all") -> List[Review]:
        """
        Filter reviews by response status.

        Args:
            status: "all", "responded" or "not-responded"

        Raises:
            ValueError: If status is not a known filter
        """
        if status not in RESPONSE_FILTERS:
            raise ValueError(
                f"Invalid filter: {status}. Must be one of {', '.join(RESPONSE_FILTERS)}"
            )

        reviews = self.get_all()
        if status == "responded":
            return [r for r in reviews if r.responded]
        if status == "not-responded":
            return [r for r in reviews if not r.responded]
        return reviews

    def __len__(self) -> int:
        return len(self._reviews)

    def __contains__(self, review_id: object) -> bool:
        return review_id in self._reviews
