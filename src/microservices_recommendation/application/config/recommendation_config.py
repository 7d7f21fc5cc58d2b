"""Service-specific configuration for the recommendation service."""
from pydantic import Field

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.config.infrastructure_config import WebApiConfig


class RecommendationWebApiConfig(WebApiConfig):
    port: int = 7002


class RecommendationConfig(BaseApplicationConfig):
    """Configuration for the recommendation service - only what it needs."""
    app_name: str = "recommendation-service"
    webapi: RecommendationWebApiConfig = Field(default_factory=RecommendationWebApiConfig)
