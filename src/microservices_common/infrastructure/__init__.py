"""Infrastructure layer: bootstrap, wiring, health and web adapters."""
