"""Route handlers grouped by path prefix."""
