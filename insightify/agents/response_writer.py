"""
Response Writer.

Drafts business replies to customer reviews. Gemini is used when available;
otherwise a canned reply is returned after a simulated delay.
"""

import asyncio
import logging

import google.generativeai as genai

from insightify.models.review import Review
from insightify.utils.delay import Delay, no_delay

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE = (
    "Thank you for your feedback! We're glad you enjoyed your experience "
    "and will strive to make it even better."
)

NEGATIVE_RESPONSE = (
    "Thank you for your feedback. We're sorry your experience fell short "
    "and we would like to make it right."
)

SYSTEM_PROMPT = """You write short, polite replies from a business owner to customer reviews.

Rules:
- 1-3 sentences
- Thank the customer and address the specific point they raised
- Apologize and offer to help if the review is negative
- Reply in the same language as the review
- No placeholders, signatures or hashtags

Output the reply text only."""


def _construct_user_prompt(review: Review) -> str:
    rating = f"{review.rating}/5" if review.rating else "unknown"
    return f"""Review Text: "{review.original_text or review.text}"
Language: {review.lang.value}
Rating: {rating}

Write the reply."""


class CannedResponseWriter:
    """Fallback writer returning a fixed reply."""

    is_fallback = True

    def __init__(self, delay: Delay = no_delay):
        self.delay = delay

    async def write(self, review: Review) -> str:
        await self.delay()
        if review.rating is not None and review.rating <= 2:
            return NEGATIVE_RESPONSE
        return DEFAULT_RESPONSE


class GeminiResponseWriter:
    """Drafts replies with Gemini, falling back to the canned reply on failure."""

    is_fallback = False

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.4,
        max_retries: int = 2
    ):
        self.model_name = model_name
        self.max_retries = max_retries
        self.fallback = CannedResponseWriter()

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={"temperature": temperature},
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiResponseWriter with model={model_name}, temp={temperature}")

    async def write(self, review: Review) -> str:
        prompt = _construct_user_prompt(review)

        for attempt in range(self.max_retries):
            try:
                response = await asyncio.to_thread(self.model.generate_content, prompt)
                reply = (response.text or "").strip()
                if reply:
                    return reply
                logger.warning(f"Empty reply from LLM for {review.review_id} (attempt {attempt + 1})")
            except Exception as e:
                logger.error(f"LLM API error (attempt {attempt + 1}): {e}")

        logger.warning(f"Max retries reached for {review.review_id}, using canned reply")
        return await self.fallback.write(review)


def build_response_writer(
    api_key: str,
    model_name: str = "gemini-1.5-flash",
    temperature: float = 0.4,
    max_retries: int = 2,
    delay: Delay = no_delay
):
    if api_key:
        return GeminiResponseWriter(
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_retries=max_retries
        )
    logger.info("No Gemini API key configured, using canned response writer")
    return CannedResponseWriter(delay=delay)
