"""
Configuration settings for Insightify.

Centralized configuration for the review workflow, AI providers and gateway.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = PROJECT_ROOT / "output"

# API Configuration
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")  # Gemini (translation, writer, summarizer)
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")  # Places API

# LLM Models
TRANSLATION_MODEL = "gemini-1.5-flash"
RESPONSE_WRITER_MODEL = "gemini-1.5-flash"
SUMMARIZER_MODEL = "gemini-1.5-flash"

# Temperature settings (0.0 for deterministic)
TRANSLATION_TEMPERATURE = 0.0
RESPONSE_WRITER_TEMPERATURE = 0.4
SUMMARIZER_TEMPERATURE = 0.0

AI_MAX_RETRIES = 2

# Simulated processing delay for the fallback providers (seconds)
FALLBACK_DELAY_MIN_SECONDS = 0.5
FALLBACK_DELAY_MAX_SECONDS = 1.5

# Places gateway
PLACES_API_URL = "https://places.googleapis.com/v1/places"
PLACES_TIMEOUT_SECONDS = 15
PLACE_IDS = [p for p in os.getenv("INSIGHTIFY_PLACE_IDS", "").split(",") if p.strip()]

# Ingestion
USE_MOCK_DATA = os.getenv("USE_MOCK_DATA", "true").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "insightify.log"
