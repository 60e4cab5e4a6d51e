"""
Dashboard Orchestrator.

Wires the review store, ingestion, AI providers, transition engine and
summary aggregator behind one object used by the CLI.
"""

import logging
from typing import Dict, List, Optional, Sequence

from insightify.agents import aggregation
from insightify.agents.aggregation import SummaryExporter
from insightify.agents.ingestion import PlaceIngestionAgent, reviews_from_places
from insightify.agents.response_writer import build_response_writer
from insightify.agents.summarizer import build_summarizer
from insightify.agents.transitions import ReviewTransitionEngine
from insightify.agents.translation import build_translator
from insightify.gateway.places import PlacesGateway
from insightify.models.place import Place
from insightify.models.review import Review
from insightify.registry.review_store import ReviewStore
from insightify.utils.delay import Delay, random_delay
import config.settings as settings

logger = logging.getLogger(__name__)


class DashboardOrchestrator:
    """
    Coordinates the dashboard workflow:
    1. Load places + reviews → 2. Translate / respond → 3. Summarize / export
    """

    def __init__(
        self,
        gemini_api_key: str = "",
        maps_api_key: str = "",
        use_mock_data: bool = True,
        delay: Optional[Delay] = None
    ):
        """
        Initialize orchestrator.

        Args:
            gemini_api_key: Gemini key; empty selects the fallback providers
            maps_api_key: Places API key (real mode only)
            use_mock_data: Serve the seed fixture instead of the Places API
            delay: Simulated latency for fallback providers
        """
        logger.info("Initializing dashboard components...")

        delay = delay or random_delay(
            settings.FALLBACK_DELAY_MIN_SECONDS,
            settings.FALLBACK_DELAY_MAX_SECONDS
        )

        self.store = ReviewStore()
        self.places: List[Place] = []

        gateway = None
        if not use_mock_data:
            gateway = PlacesGateway(
                api_key=maps_api_key,
                base_url=settings.PLACES_API_URL,
                timeout=settings.PLACES_TIMEOUT_SECONDS
            )
        self.ingestion_agent = PlaceIngestionAgent(gateway=gateway, use_mock_data=use_mock_data)

        self.translator = build_translator(
            api_key=gemini_api_key,
            model_name=settings.TRANSLATION_MODEL,
            temperature=settings.TRANSLATION_TEMPERATURE,
            max_retries=settings.AI_MAX_RETRIES,
            delay=delay
        )
        self.response_writer = build_response_writer(
            api_key=gemini_api_key,
            model_name=settings.RESPONSE_WRITER_MODEL,
            temperature=settings.RESPONSE_WRITER_TEMPERATURE,
            max_retries=settings.AI_MAX_RETRIES,
            delay=delay
        )
        self.summarizer = build_summarizer(
            api_key=gemini_api_key,
            model_name=settings.SUMMARIZER_MODEL,
            temperature=settings.SUMMARIZER_TEMPERATURE,
            delay=delay
        )

        self.engine = ReviewTransitionEngine(
            store=self.store,
            translator=self.translator,
            response_writer=self.response_writer
        )
        self.exporter = SummaryExporter()

        logger.info("Dashboard initialized successfully")

    def load(self, place_ids: Optional[Sequence[str]] = None) -> int:
        """
        Populate places and the review store.

        Returns:
            Number of reviews loaded
        """
        place_ids = list(place_ids or [])
        self.places = self.ingestion_agent.fetch_places(place_ids)

        if self.ingestion_agent.use_mock_data:
            reviews = self.ingestion_agent.fetch_reviews(place_ids)
        else:
            reviews = reviews_from_places(self.places)

        self.store.replace_all(reviews)
        return len(reviews)

    def summary(self) -> Dict:
        """Dashboard numbers for the summary tab."""
        reviews = self.store.get_all()
        return {
            "total_locations": aggregation.location_count(self.places),
            "average_rating": aggregation.average_rating(self.places),
            "total_reviews": aggregation.total_review_count(self.places),
            "rating_distribution": aggregation.rating_distribution(self.places),
            "language_distribution": aggregation.language_distribution(reviews),
            "responded": sum(1 for r in reviews if r.responded),
            "not_responded": sum(1 for r in reviews if not r.responded)
        }

    def reviews(self, status: str = "all") -> List[Review]:
        return self.store.filter_by_status(status)

    async def translate(self, review_id: str, target_language: str) -> Optional[Review]:
        return await self.engine.translate(review_id, target_language)

    async def translate_all(self, target_language: str) -> List[Review]:
        return await self.engine.translate_all(target_language)

    def mark_responded(self, review_id: str) -> bool:
        return self.engine.mark_responded(review_id)

    def submit_response(self, review_id: str, response_text: str) -> bool:
        return self.engine.submit_response(review_id, response_text)

    async def draft_response(self, review_id: str) -> Optional[str]:
        return await self.engine.draft_response(review_id)

    async def summarize_reviews(self) -> str:
        """Digest of all review text (original language where captured)."""
        texts = [r.original_text or r.text for r in self.store.get_all()]
        if not texts:
            return "No reviews to summarize."
        return await self.summarizer.summarize("\n".join(texts))

    def export(self, output_dir: str, label: Optional[str] = None) -> str:
        return self.exporter.export(
            places=self.places,
            reviews=self.store.get_all(),
            output_dir=output_dir,
            label=label
        )
