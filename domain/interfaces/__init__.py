"""Domain interfaces."""
from .repository import IStateRepository, IPlayerDataSource, ICatalogSource

__all__ = [
    'IStateRepository',
    'IPlayerDataSource',
    'ICatalogSource',
]
