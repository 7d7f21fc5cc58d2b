"""Dependency injection module for the review service."""
from injector import Module, provider, singleton

from microservices_review.application.config.review_config import ReviewConfig


class ReviewModule(Module):

    def __init__(self, config: ReviewConfig):
        self.config = config

    @provider
    @singleton
    def provide_review_config(self) -> ReviewConfig:
        return self.config
