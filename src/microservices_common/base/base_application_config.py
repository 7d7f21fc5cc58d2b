from pydantic import Field

from microservices_common.base.base_schema import BaseSchema
from microservices_common.config.infrastructure_config import WebApiConfig
from microservices_common.config.service_logging_config import ServiceLoggingConfig


class BaseApplicationConfig(BaseSchema):
    """Base configuration that all services inherit."""
    app_name: str
    version: str = "1.0.0"

    # Common infrastructure settings that all services need
    stage: str = "local"  # local | cicd | prod
    logging: ServiceLoggingConfig = Field(default_factory=ServiceLoggingConfig)
    webapi: WebApiConfig = Field(default_factory=WebApiConfig)
