"""Shared middleware constants."""

# Paths exempt from request logging; the health router is added under the API prefix
EXEMPT_PATHS = [
    "/docs",
    "/redoc",
    "/openapi.json",
]
