"""Management CLI."""
