"""Media browser preset store API."""
