"""Kamino Lend REST client."""

from src.data.clients.kamino.client import KaminoClient
from src.data.clients.kamino.parser import KaminoParser

__all__ = [
    "KaminoClient",
    "KaminoParser",
]
