"""
Places gateway: HTTP boundary to the external place-details API.
"""
