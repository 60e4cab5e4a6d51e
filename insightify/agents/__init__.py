"""
Agent implementations for Insightify.

- Ingestion Agent (places gateway / seed data)
- Review Transition Engine (translate, respond)
- Translation, Response Writer and Summarizer providers
- Summary Aggregator + Exporter
"""
