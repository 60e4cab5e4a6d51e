"""
Review Summarizer.

Produces a short digest of review text for the summary tab.
"""

import asyncio
import logging
from typing import Dict, Optional

import google.generativeai as genai

from insightify.utils.delay import Delay, no_delay

logger = logging.getLogger(__name__)

CONTENT_PREFIXES = ("email:", "article:", "code:", "meeting:")

DEFAULT_FALLBACK_SUMMARIES: Dict[str, str] = {
    # Exact matches (lowercased, trimmed)
    "hello world": "A simple greeting.",
    "lorem ipsum": "A placeholder text commonly used in design.",

    # Content type prefixes
    "email:": "Summary of an email communication.",
    "article:": "Summary of a news or blog article.",
    "code:": "Description of code functionality.",
    "meeting:": "Summary of meeting minutes.",
}

# (exclusive word limit, summary); the last entry catches everything longer
LENGTH_SUMMARIES = (
    (10, "A very short summary."),
    (50, "A brief summary of the provided content."),
    (200, "A concise summary of the main points of the provided content."),
    (None, "A comprehensive summary of the lengthy content provided, "
           "covering key points while maintaining brevity."),
)

SYSTEM_PROMPT = """You summarize customer reviews for a business dashboard.

Rules:
- 1-3 sentences in English
- Mention recurring praise and recurring complaints
- Do not quote individual reviewers

Output the summary text only."""


def fallback_summary(text: str, summaries: Optional[Dict[str, str]] = None) -> str:
    """
    Pick a canned summary.

    Order: exact match, content-type prefix, then word count.
    """
    summaries = DEFAULT_FALLBACK_SUMMARIES if summaries is None else summaries
    key = text.lower().strip()

    if key in summaries:
        return summaries[key]

    for prefix in CONTENT_PREFIXES:
        if key.startswith(prefix) and prefix in summaries:
            return summaries[prefix]

    word_count = len(text.split())
    for limit, summary in LENGTH_SUMMARIES:
        if limit is None or word_count < limit:
            return summary
    return LENGTH_SUMMARIES[-1][1]


class FallbackSummarizer:
    is_fallback = True

    def __init__(self, delay: Delay = no_delay, summaries: Optional[Dict[str, str]] = None):
        self.delay = delay
        self.summaries = summaries

    async def summarize(self, text: str) -> str:
        await self.delay()
        return fallback_summary(text, self.summaries)


class GeminiSummarizer:
    """Summarizes with Gemini; any API failure degrades to the canned summary."""

    is_fallback = False

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0
    ):
        self.model_name = model_name
        self.fallback = FallbackSummarizer()

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={"temperature": temperature},
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiSummarizer with model={model_name}")

    async def summarize(self, text: str) -> str:
        if not text.strip():
            return await self.fallback.summarize(text)

        try:
            response = await asyncio.to_thread(self.model.generate_content, text)
            summary = (response.text or "").strip()
            if summary:
                return summary
            logger.warning("Empty summary from LLM, using fallback")
        except Exception as e:
            logger.error(f"LLM API error while summarizing: {e}")

        return await self.fallback.summarize(text)


def build_summarizer(
    api_key: str,
    model_name: str = "gemini-1.5-flash",
    temperature: float = 0.0,
    delay: Delay = no_delay
):
    if api_key:
        return GeminiSummarizer(api_key=api_key, model_name=model_name, temperature=temperature)
    logger.info("No Gemini API key configured, using fallback summarizer")
    return FallbackSummarizer(delay=delay)
