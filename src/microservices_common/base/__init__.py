"""Base schemas shared by every service configuration."""
