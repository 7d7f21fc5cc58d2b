"""Review service configuration."""
