"""
Seed fixtures for mock mode and tests.
"""
