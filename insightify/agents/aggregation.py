"""
Summary Aggregator and Summary Exporter.

Computes dashboard numbers from places and reviews, and exports the
location table for offline reporting.
"""

import json
import logging
import os
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Iterable, List

import pandas as pd

from insightify.models.place import Place
from insightify.models.review import Review

logger = logging.getLogger(__name__)

LOCATION_COLUMNS = ["Name", "Address", "Rating", "Reviews"]


def average_rating(places: Iterable[Place]) -> float:
    """
    Mean rating over places that have one.

    Returns 0.0 for an empty input or when no place is rated.
    """
    ratings = [place.rating for place in places if place.rating is not None]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def total_review_count(places: Iterable[Place]) -> int:
    """Sum of each place's rating count; a missing count contributes 0."""
    return sum(place.user_ratings_total or 0 for place in places)


def location_count(places: Iterable[Place]) -> int:
    return sum(1 for _ in places)


def rating_distribution(places: Iterable[Place]) -> List[Dict]:
    """
    One entry per rated place: {name, rating, review_count}.
    Places without rating data are excluded, not zero-filled.
    """
    return [
        {
            "name": place.name,
            "rating": place.rating,
            "review_count": place.user_ratings_total or 0
        }
        for place in places
        if place.rating is not None
    ]


def language_distribution(reviews: Iterable[Review]) -> Dict[str, float]:
    """
    Share of reviews per language, as percentages summing to 100.

    An empty input yields an empty mapping.
    """
    counts = Counter(review.lang.value for review in reviews)
    total = sum(counts.values())
    if total == 0:
        return {}
    return {language: 100.0 * count / total for language, count in counts.items()}


def location_table(places: Iterable[Place]) -> pd.DataFrame:
    """Location details table, sorted by review volume (descending)."""
    rows = [
        {
            "Name": place.details.name,
            "Address": place.details.formatted_address,
            "Rating": place.details.rating,
            "Reviews": place.details.user_ratings_total or 0
        }
        for place in places
        if place.details is not None
    ]

    if not rows:
        return pd.DataFrame(columns=LOCATION_COLUMNS)

    df = pd.DataFrame(rows, columns=LOCATION_COLUMNS)
    return df.sort_values("Reviews", ascending=False).reset_index(drop=True)


class SummaryExporter:
    """
    Writes the location table (CSV) and summary metadata (JSON).
    """

    def export(
        self,
        places: List[Place],
        reviews: List[Review],
        output_dir: str = "output",
        label: str = None
    ) -> str:
        """
        Export dashboard summary.

        Args:
            places: Places to summarize
            reviews: Reviews for the language mix
            output_dir: Directory to save output
            label: File name suffix, defaults to today's date (YYYY-MM-DD)

        Returns:
            Path to generated CSV file
        """
        label = label or datetime.now(timezone.utc).strftime("%Y-%m-%d")

        df = location_table(places)
        if df.empty:
            logger.warning("No place details available, exporting empty location table")

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"summary_{label}.csv")
        df.to_csv(output_path, index=False)

        missing = [place.place_id for place in places if place.details is None]
        metadata = {
            "label": label,
            "total_locations": len(places),
            "locations_with_data": len(places) - len(missing),
            "missing_places": missing,
            "average_rating": round(average_rating(places), 2),
            "total_reviews": total_review_count(places),
            "language_distribution": {
                lang: round(share, 1) for lang, share in language_distribution(reviews).items()
            },
            "responded_reviews": sum(1 for r in reviews if r.responded),
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        }

        metadata_path = os.path.join(output_dir, f"summary_{label}_metadata.json")
        with open(metadata_path, "w") as f:
            json.dump(metadata, f, indent=2)

        logger.info(
            f"Summary saved to {output_path} "
            f"({len(df)} locations, {len(missing)} missing)"
        )
        return output_path
