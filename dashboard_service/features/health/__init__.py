"""Health feature package."""
