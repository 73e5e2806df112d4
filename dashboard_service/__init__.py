"""Dashboard service: paginated list API over SQLAlchemy."""

__version__ = "0.1.0"
