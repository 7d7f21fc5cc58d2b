"""Recommendation service configuration."""
