"""Service bootstrap framework: lifecycle driver, signal source and startup observability."""
