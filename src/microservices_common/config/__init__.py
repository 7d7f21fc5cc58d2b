"""Configuration schemas and loaders."""
