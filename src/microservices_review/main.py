"""
Main entry point for the review service.
"""
import sys

from microservices_review.infrastructure.bootstrap.review_service_bootstrap import (
    bootstrap_review_service,
)


def main() -> None:
    bootstrap_review_service(sys.argv[1:])


if __name__ == "__main__":
    main()
