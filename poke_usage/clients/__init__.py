"""External clients used by the usage overlay tools."""

from .obs import OBSClient, OBSClientError
from .pokeapi import PokeAPIClient, PokeAPIClientError

__all__ = [
    "OBSClient",
    "OBSClientError",
    "PokeAPIClient",
    "PokeAPIClientError",
]
