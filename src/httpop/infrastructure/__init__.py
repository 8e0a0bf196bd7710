"""Infrastructure components for httpop."""
