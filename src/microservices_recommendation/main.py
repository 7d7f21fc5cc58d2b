"""
Main entry point for the recommendation service.
"""
import sys

from microservices_recommendation.infrastructure.bootstrap.recommendation_service_bootstrap import (
    bootstrap_recommendation_service,
)


def main() -> None:
    """Start the recommendation service with the process arguments."""
    bootstrap_recommendation_service(sys.argv[1:])


if __name__ == "__main__":
    main()
