"""Dependency injection module for the recommendation service."""
from injector import Module, provider, singleton

from microservices_recommendation.application.config.recommendation_config import (
    RecommendationConfig,
)


class RecommendationModule(Module):
    """Dependency injection module for the recommendation service."""

    def __init__(self, config: RecommendationConfig):
        self.config = config

    @provider
    @singleton
    def provide_recommendation_config(self) -> RecommendationConfig:
        """Provide recommendation service configuration."""
        return self.config
