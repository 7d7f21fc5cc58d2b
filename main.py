#!/usr/bin/env python3
"""Repository-level entry point that starts the service named by SERVICE_TYPE."""

import os
import sys

from microservices_common.logging.bootstrap_logging import get_bootstrap_logger


def main() -> None:
    """Start the service selected by the SERVICE_TYPE environment variable."""
    service_type = os.getenv("SERVICE_TYPE", "recommendation").lower()
    get_bootstrap_logger("launcher").info(f"Starting service: {service_type}")

    if service_type == "recommendation":
        from microservices_recommendation.infrastructure.bootstrap.recommendation_service_bootstrap import (
            bootstrap_recommendation_service,
        )

        bootstrap_recommendation_service(sys.argv[1:])

    elif service_type == "review":
        from microservices_review.infrastructure.bootstrap.review_service_bootstrap import (
            bootstrap_review_service,
        )

        bootstrap_review_service(sys.argv[1:])

    else:
        raise ValueError(f"Unknown service type: {service_type}")


if __name__ == "__main__":
    main()
