"""
Places Gateway.

Fetches place details from the Google Places API (v1) and normalizes them
into the legacy place-details shape consumed by ingestion.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

PLACES_API_URL = "https://places.googleapis.com/v1/places"
DEFAULT_TIMEOUT = 15

# "<date>T<time>.<fraction><offset>"
_FRACTION = re.compile(r"^(.*T[^.]*)\.(\d+)(.*)$")


class GatewayUnavailable(Exception):
    """The Places API returned no usable data for a place."""

    def __init__(self, place_id: str, reason: str):
        super().__init__(f"Place details unavailable for {place_id}: {reason}")
        self.place_id = place_id
        self.reason = reason


def _publish_time_to_unix(value: Optional[str]) -> Optional[float]:
    """Convert an RFC 3339 timestamp ("2024-06-01T10:00:00Z") to unix seconds."""
    if not value:
        return None
    try:
        # Trim fractional seconds beyond microseconds
        match = _FRACTION.match(value)
        if match:
            head, digits, suffix = match.groups()
            value = f"{head}.{digits[:6]}{suffix}"
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        logger.debug(f"Unparseable publishTime: {value}")
        return None


def _localized_text(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("text")
    return value


def _review_language(review: Dict[str, Any]) -> Optional[str]:
    if review.get("languageCode"):
        return review["languageCode"]
    text = review.get("text")
    if isinstance(text, dict):
        return text.get("languageCode")
    return None


def transform_place(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a Places v1 response.

    Returns:
        {"result": {...}, "status": "OK"}
    """
    reviews = []
    for review in data.get("reviews") or []:
        author = review.get("authorAttribution") or {}
        reviews.append({
            "author_name": review.get("authorName") or author.get("displayName"),
            "profile_photo_url": (review.get("authorPhoto") or {}).get("uri")
                                 or author.get("photoUri") or "",
            "rating": review.get("rating"),
            "relative_time_description": review.get("relativePublishTimeDescription"),
            "text": _localized_text(review.get("text")),
            "time": _publish_time_to_unix(review.get("publishTime")),
            "language": _review_language(review),
        })

    photos = [
        {
            "photo_reference": photo.get("name"),
            "height": photo.get("heightPx"),
            "width": photo.get("widthPx"),
            "html_attributions": []
        }
        for photo in data.get("photos") or []
    ]

    return {
        "result": {
            "name": _localized_text(data.get("displayName")),
            "formatted_address": data.get("formattedAddress"),
            "rating": data.get("rating"),
            "user_ratings_total": data.get("userRatingCount"),
            "reviews": reviews,
            "photos": photos,
            "website": data.get("websiteUri"),
            "international_phone_number": data.get("internationalPhoneNumber"),
            "price_level": data.get("priceLevel"),
            "place_id": data.get("id"),
            "business_status": data.get("businessStatus")
        },
        "status": "OK"
    }


class PlacesGateway:
    """HTTP boundary to the Google Places API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = PLACES_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize gateway.

        Args:
            api_key: Google Maps API key
            base_url: Places API base URL
            timeout: Request timeout in seconds
            session: Optional requests session (shared connection pool)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        if not api_key:
            logger.warning("PlacesGateway initialized without an API key")

    def fetch_place_details(self, place_id: str) -> Dict[str, Any]:
        """
        Fetch and normalize details for one place.

        Raises:
            ValueError: If place_id is empty
            GatewayUnavailable: On transport errors, non-2xx status, bad JSON
                or a body that does not have the Places shape
        """
        if not place_id or not place_id.strip():
            raise ValueError("Place ID is required")

        url = f"{self.base_url}/{place_id}"
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": "*",
            "Accept-Language": "en"
        }

        logger.debug(f"Requesting place details: {url}")
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Places API request failed for {place_id}: {e}")
            raise GatewayUnavailable(place_id, str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayUnavailable(
                place_id, f"invalid JSON (status {response.status_code})"
            ) from e

        if not response.ok:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            logger.error(f"Places API error {response.status_code} for {place_id}: {message}")
            raise GatewayUnavailable(
                place_id, message or f"status {response.status_code}"
            )

        if not isinstance(data, dict):
            raise GatewayUnavailable(place_id, "unexpected response body")

        try:
            transformed = transform_place(data)
        except (AttributeError, KeyError, TypeError) as e:
            logger.error(f"Malformed Places API response for {place_id}: {e}")
            raise GatewayUnavailable(place_id, f"malformed response: {e}") from e

        logger.info(
            f"Fetched {transformed['result']['name']} "
            f"({len(transformed['result']['reviews'])} reviews)"
        )
        return transformed
