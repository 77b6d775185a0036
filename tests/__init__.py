"""
Test suite for the quiz sync agent.

Covers quiz extraction, answer resolution, payload building, the
collection service client and full runs against in-memory pages.
"""
