"""Recommendation service dependency injection modules."""
