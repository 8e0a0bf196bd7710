"""Core configuration for httpop."""
