"""Infrastructure repositories module."""
from .state_repository import JsonStateRepository

__all__ = [
    'JsonStateRepository',
]
