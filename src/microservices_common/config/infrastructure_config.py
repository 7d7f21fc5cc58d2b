"""Infrastructure configuration for deployment-specific settings."""
from microservices_common.base.base_schema import BaseSchema


class WebApiConfig(BaseSchema):
    """Web interface configuration (health check listener)."""
    enabled: bool = True
    port: int = 8080
    host: str = "0.0.0.0"
    threaded: bool = True
    shutdown_timeout_seconds: float = 10.0
