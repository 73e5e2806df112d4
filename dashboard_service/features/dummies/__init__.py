"""Dummies feature package."""

from .models import Dummy
from .repository import DummyRepository, get_dummy_repository
from .resource import DUMMY_RESOURCE

__all__ = [
    "DUMMY_RESOURCE",
    "Dummy",
    "DummyRepository",
    "get_dummy_repository",
]
