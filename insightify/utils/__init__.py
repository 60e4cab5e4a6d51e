"""
Utility modules for Insightify.

Cross-cutting concerns:
- Delay: Injectable simulated latency for fallback AI providers
"""
