"""Service-specific configuration for the review service."""
from pydantic import Field

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.config.infrastructure_config import WebApiConfig


class ReviewWebApiConfig(WebApiConfig):
    port: int = 7003


class ReviewConfig(BaseApplicationConfig):
    """Configuration for the review service."""
    app_name: str = "review-service"
    webapi: ReviewWebApiConfig = Field(default_factory=ReviewWebApiConfig)
