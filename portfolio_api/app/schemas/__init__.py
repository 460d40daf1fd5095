"""
Pydantic schema definitions for API payloads.

Request bodies and response envelopes are declared here, separate from
the stored MongoDB documents.
"""
