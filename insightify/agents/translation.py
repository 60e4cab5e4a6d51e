"""
Translation providers.

TranslationLookup is the static fallback table. Two providers share the
`async translate(text, language)` interface:
- GeminiTranslator: real translation through Gemini (capability available)
- LookupTranslator: simulated latency + static lookup (capability unavailable)
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

import google.generativeai as genai

from insightify.models.review import Language
from insightify.utils.delay import Delay, no_delay

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "Translated to "

# target language -> {source text: translated text}
DEFAULT_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "English": {
        "Muy buen producto": "Very good product",
        "Produit de qualité": "Quality product",
    },
    "Spanish": {
        "Great service!": "¡Excelente servicio!",
        "Produit de qualité": "Producto de calidad",
        "Thank you for your feedback! We appreciate your kind words.":
            "¡Gracias por sus comentarios! Apreciamos sus amables palabras.",
        "We're glad you enjoyed our service.":
            "Nos alegra que haya disfrutado de nuestro servicio.",
    },
    "French": {
        "Great service!": "Excellent service !",
        "Muy buen producto": "Très bon produit",
        "Thank you for your review! We strive for excellence.":
            "Merci pour votre avis ! Nous visons l'excellence.",
        "We appreciate your business.": "Nous apprécions votre confiance.",
    },
}


SYSTEM_PROMPT = """You translate customer reviews and business replies for a review dashboard.

Rules:
- Translate the text into the requested target language
- Preserve meaning, tone and punctuation
- Do not add explanations, quotes or notes
- If the text is already in the target language, return it unchanged

Output the translated text only."""


def _language_name(language: Union[Language, str]) -> str:
    return language.value if isinstance(language, Language) else str(language)


def placeholder(language: Union[Language, str], text: str) -> str:
    """Marked stand-in used when no real translation exists."""
    return f"{PLACEHOLDER_PREFIX}{_language_name(language)}: {text}"


def is_placeholder(text: str) -> bool:
    return text.startswith(PLACEHOLDER_PREFIX)


class TranslationLookup:
    """
    Static (language, exact source text) -> translation table.

    Exact match only: no case folding, no partial matching.
    """

    def __init__(self, translations: Optional[Mapping[str, Mapping[str, str]]] = None):
        table = DEFAULT_TRANSLATIONS if translations is None else translations
        self._table = MappingProxyType(
            {lang: MappingProxyType(dict(entries)) for lang, entries in table.items()}
        )

    def lookup(self, language: Union[Language, str], text: str) -> str:
        """Return the mapped translation or a placeholder embedding language and text."""
        entries = self._table.get(_language_name(language), {})
        translated = entries.get(text)
        if translated is None:
            logger.debug(f"No translation for {_language_name(language)}: {text!r}")
            return placeholder(language, text)
        return translated


class LookupTranslator:
    """Simulated translator: waits the injected delay, then consults the lookup."""

    is_fallback = True

    def __init__(self, lookup: Optional[TranslationLookup] = None, delay: Delay = no_delay):
        self.lookup = lookup or TranslationLookup()
        self.delay = delay

    async def translate(self, text: str, language: Union[Language, str]) -> str:
        await self.delay()
        return self.lookup.lookup(language, text)


class GeminiTranslator:
    """
    Translates text with Gemini.

    Falls back to the static lookup after `max_retries` failed attempts,
    so callers never see an API error.
    """

    is_fallback = False

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0,
        max_retries: int = 2,
        lookup: Optional[TranslationLookup] = None
    ):
        """
        Initialize Gemini translator.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
            max_retries: Attempts before falling back to the lookup
            lookup: Fallback translation table
        """
        self.model_name = model_name
        self.max_retries = max_retries
        self.lookup = lookup or TranslationLookup()

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={"temperature": temperature},
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiTranslator with model={model_name}, temp={temperature}")

    async def translate(self, text: str, language: Union[Language, str]) -> str:
        target = _language_name(language)
        prompt = f'Target language: {target}\nText: "{text}"'

        for attempt in range(self.max_retries):
            try:
                response = await asyncio.to_thread(self.model.generate_content, prompt)
                translated = (response.text or "").strip()
                if translated:
                    return translated
                logger.warning(f"Empty translation from LLM (attempt {attempt + 1})")
            except Exception as e:
                logger.error(f"LLM API error (attempt {attempt + 1}): {e}")

        logger.warning(f"Translation to {target} unavailable, using lookup fallback")
        return self.lookup.lookup(language, text)


def build_translator(
    api_key: str,
    model_name: str = "gemini-1.5-flash",
    temperature: float = 0.0,
    max_retries: int = 2,
    delay: Delay = no_delay,
    lookup: Optional[TranslationLookup] = None
):
    """Gemini translator when an API key is configured, lookup translator otherwise."""
    lookup = lookup or TranslationLookup()
    if api_key:
        return GeminiTranslator(
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_retries=max_retries,
            lookup=lookup
        )
    logger.info("No Gemini API key configured, using lookup translator")
    return LookupTranslator(lookup=lookup, delay=delay)
