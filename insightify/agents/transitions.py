"""
Review Transition Engine.

Drives reviews through the translation workflow (Idle -> Translating -> Idle)
and the response workflow (not responded -> responded). Every write goes
through the ReviewStore.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Union

from insightify.models.review import Language, Review
from insightify.registry.review_store import ReviewStore

logger = logging.getLogger(__name__)


class ReviewTransitionEngine:
    """
    Coordinates review state changes.

    Runs on a single asyncio event loop; no locking is needed. A review that
    is already translating rejects a second translation until it settles.
    Translations cannot be cancelled and have no timeout. A translation still
    running when the store is reloaded is disowned: its result is dropped
    and the reloaded record is left alone.
    """

    def __init__(self, store: ReviewStore, translator, response_writer=None):
        """
        Initialize transition engine.

        Args:
            store: Review store owning the records
            translator: Provider with `async translate(text, language) -> str`
            response_writer: Provider with `async write(review) -> str`
        """
        self.store = store
        self.translator = translator
        self.response_writer = response_writer
        self._in_flight: Dict[str, asyncio.Task] = {}  # review_id -> completion task

    def begin_translate(
        self,
        review_id: str,
        target_language: Union[Language, str]
    ) -> Optional[asyncio.Task]:
        """
        Start translating a review.

        The review is marked translating (and its original text captured)
        before this returns; the translation itself completes in a task.
        Must be called from a running event loop.

        Returns:
            The completion task, or None if the review is unknown or
            already translating
        """
        loop = asyncio.get_running_loop()

        review = self.store.get_by_id(review_id)
        if review is None:
            logger.warning(f"Translate skipped, review not found: {review_id}")
            return None
        if review.is_translating:
            logger.info(f"Translate skipped, review {review_id} is already translating")
            return None

        started = self.store.update(review_id, _start_translation)
        logger.debug(f"Translating review {review_id} to {_name(target_language)}")

        task = loop.create_task(
            self._complete_translation(
                review_id,
                started.original_text,
                target_language,
                self.store.generation
            )
        )
        self._in_flight[review_id] = task
        task.add_done_callback(lambda t: self._forget(review_id, t))
        return task

    def _forget(self, review_id: str, task: asyncio.Task) -> None:
        if self._in_flight.get(review_id) is task:
            del self._in_flight[review_id]

    async def translate(
        self,
        review_id: str,
        target_language: Union[Language, str]
    ) -> Optional[Review]:
        """Translate a single review and return its settled snapshot."""
        task = self.begin_translate(review_id, target_language)
        if task is None:
            return self.store.get_by_id(review_id)
        return await task

    async def translate_all(self, target_language: Union[Language, str]) -> List[Review]:
        """
        Translate every review concurrently.

        Completes only when every translation (including ones already in
        flight) has settled. Completion order across reviews is not defined.
        """
        tasks = []
        for review in self.store.get_all():
            task = self.begin_translate(review.review_id, target_language)
            if task is None:
                task = self._in_flight.get(review.review_id)
            if task is not None:
                tasks.append(task)

        logger.info(f"Translating {len(tasks)} reviews to {_name(target_language)}")
        await asyncio.gather(*tasks)
        return self.store.get_all()

    async def _complete_translation(
        self,
        review_id: str,
        original_text: str,
        target_language: Union[Language, str],
        generation: int
    ) -> Optional[Review]:
        translated: Optional[str] = None
        try:
            translated = await self.translator.translate(original_text, target_language)
        except Exception as e:
            logger.error(f"Translation failed for review {review_id}: {e}", exc_info=True)
        finally:
            # is_translating must be cleared on every exit path of the load it was set in
            if self.store.generation == generation:
                self.store.update(review_id, lambda r: _finish_translation(r, translated))
            else:
                logger.info(f"Store reloaded while translating review {review_id}, result dropped")

        return self.store.get_by_id(review_id)

    def mark_responded(self, review_id: str) -> bool:
        """
        Mark a review as responded.

        Returns:
            True if the review changed state; False when unknown or already responded
        """
        review = self.store.get_by_id(review_id)
        if review is None:
            logger.warning(f"Respond skipped, review not found: {review_id}")
            return False
        if review.responded:
            logger.debug(f"Review {review_id} already responded")
            return False

        self.store.update(review_id, lambda r: replace(r, responded=True))
        logger.info(f"Review {review_id} marked as responded")
        return True

    def submit_response(self, review_id: str, response_text: str) -> bool:
        """
        Attach a response to a review and mark it responded.

        Raises:
            ValueError: If response_text is empty
        """
        if not response_text or not response_text.strip():
            raise ValueError("Response text cannot be empty")

        review = self.store.get_by_id(review_id)
        if review is None:
            logger.warning(f"Response skipped, review not found: {review_id}")
            return False
        if review.responded:
            logger.info(f"Response skipped, review {review_id} already responded")
            return False

        self.store.update(
            review_id,
            lambda r: replace(r, responded=True, response_text=response_text.strip())
        )
        logger.info(f"Response submitted for review {review_id}")
        return True

    async def draft_response(self, review_id: str) -> Optional[str]:
        """Draft a reply for a review without changing its state."""
        if self.response_writer is None:
            raise RuntimeError("No response writer configured")

        review = self.store.get_by_id(review_id)
        if review is None:
            logger.warning(f"Draft skipped, review not found: {review_id}")
            return None

        return await self.response_writer.write(review)


def _start_translation(review: Review) -> Review:
    original = review.original_text if review.original_text is not None else review.text
    return replace(review, is_translating=True, original_text=original)


def _finish_translation(review: Review, translated: Optional[str]) -> Review:
    if translated is None:
        return replace(review, is_translating=False)
    return replace(review, is_translating=False, text=translated)


def _name(language: Union[Language, str]) -> str:
    return language.value if isinstance(language, Language) else str(language)
