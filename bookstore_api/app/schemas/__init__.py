"""
Pydantic schema definitions for API payloads.

Each resource (books, customers) defines its own models for request
and response bodies.
"""
