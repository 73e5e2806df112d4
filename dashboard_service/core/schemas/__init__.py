"""Shared API schemas."""

from .base import CustomBase
from .problem_details import ProblemDetails

__all__ = ["CustomBase", "ProblemDetails"]
