"""Lightweight instrumentation helpers."""
