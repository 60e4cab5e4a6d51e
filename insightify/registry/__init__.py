"""
Review Store Module.

Single source of truth for the session's review records.
"""
