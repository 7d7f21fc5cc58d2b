"""Recommendation service bootstrap."""
