"""Species catalog lookups."""

from .species_catalog import CatalogError, SpeciesCatalog, SpeciesNotFoundError, build_catalog

__all__ = [
    "CatalogError",
    "SpeciesCatalog",
    "SpeciesNotFoundError",
    "build_catalog",
]
