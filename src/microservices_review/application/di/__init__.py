"""Review service dependency injection modules."""
