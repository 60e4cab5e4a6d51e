"""
Unit tests for the response writer and summarizer providers.

Note: Gemini is mocked to avoid API costs.
"""

import asyncio
from unittest.mock import MagicMock, patch

from insightify.agents.response_writer import (
    CannedResponseWriter,
    DEFAULT_RESPONSE,
    GeminiResponseWriter,
    NEGATIVE_RESPONSE,
    build_response_writer,
)
from insightify.agents.summarizer import (
    FallbackSummarizer,
    GeminiSummarizer,
    build_summarizer,
    fallback_summary,
)
from insightify.models.review import Language, Review


def _review(rating=5):
    return Review(review_id="1", text="Great service!", lang=Language.ENGLISH, rating=rating)


def test_canned_writer_default_reply():
    assert asyncio.run(CannedResponseWriter().write(_review())) == DEFAULT_RESPONSE


def test_canned_writer_negative_reply():
    assert asyncio.run(CannedResponseWriter().write(_review(rating=1))) == NEGATIVE_RESPONSE


def test_gemini_writer_uses_original_text():
    with patch('insightify.agents.response_writer.genai') as mock_genai:
        mock_model = MagicMock()
        mock_model.generate_content.return_value = MagicMock(text="Thanks, John!")
        mock_genai.GenerativeModel.return_value = mock_model

        writer = GeminiResponseWriter(api_key="test-key")
        review = Review(
            review_id="2",
            text="Very good product",
            original_text="Muy buen producto",
            lang=Language.SPANISH,
            rating=4
        )
        reply = asyncio.run(writer.write(review))

        assert reply == "Thanks, John!"
        prompt = mock_model.generate_content.call_args[0][0]
        assert "Muy buen producto" in prompt
        assert "Spanish" in prompt
        assert "4/5" in prompt


def test_gemini_writer_falls_back_to_canned():
    with patch('insightify.agents.response_writer.genai') as mock_genai:
        mock_model = MagicMock()
        mock_model.generate_content.side_effect = RuntimeError("unavailable")
        mock_genai.GenerativeModel.return_value = mock_model

        writer = GeminiResponseWriter(api_key="test-key", max_retries=2)
        reply = asyncio.run(writer.write(_review()))

        assert reply == DEFAULT_RESPONSE
        assert mock_model.generate_content.call_count == 2


def test_build_response_writer_without_key():
    assert isinstance(build_response_writer(api_key=""), CannedResponseWriter)


def test_fallback_summary_exact_match():
    assert fallback_summary("  Hello World ") == "A simple greeting."


def test_fallback_summary_prefix():
    assert fallback_summary("Meeting: weekly sync notes") == "Summary of meeting minutes."
    assert fallback_summary("email: quarterly update") == "Summary of an email communication."


def test_fallback_summary_by_length():
    assert fallback_summary("Great service!") == "A very short summary."
    assert fallback_summary(" ".join(["word"] * 30)) == "A brief summary of the provided content."
    assert fallback_summary(" ".join(["word"] * 120)).startswith("A concise summary")
    assert fallback_summary(" ".join(["word"] * 500)).startswith("A comprehensive summary")


def test_fallback_summarizer():
    summary = asyncio.run(FallbackSummarizer().summarize("Great service!"))
    assert summary == "A very short summary."


def test_gemini_summarizer_falls_back_on_error():
    with patch('insightify.agents.summarizer.genai') as mock_genai:
        mock_model = MagicMock()
        mock_model.generate_content.side_effect = RuntimeError("unavailable")
        mock_genai.GenerativeModel.return_value = mock_model

        summarizer = GeminiSummarizer(api_key="test-key")
        assert asyncio.run(summarizer.summarize("Great service!")) == "A very short summary."


def test_gemini_summarizer_returns_model_text():
    with patch('insightify.agents.summarizer.genai') as mock_genai:
        mock_model = MagicMock()
        mock_model.generate_content.return_value = MagicMock(text="Customers praise the service.")
        mock_genai.GenerativeModel.return_value = mock_model

        summarizer = GeminiSummarizer(api_key="test-key")
        summary = asyncio.run(summarizer.summarize("Great service!\nMuy buen producto"))

        assert summary == "Customers praise the service."


def test_build_summarizer_without_key():
    assert isinstance(build_summarizer(api_key=""), FallbackSummarizer)
