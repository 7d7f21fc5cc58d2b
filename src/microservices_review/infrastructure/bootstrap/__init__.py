"""Review service bootstrap."""
