"""Catalogue source factory.

Provides create_catalogue() to build the configured catalogue adapter.
Only the bundled static feed exists today; a custom data directory can be
passed to load a different feed.
"""

from pathlib import Path

from catalogue.source.port import CatalogueSource, FarmerNotFoundError, ProductNotFoundError
from catalogue.source.static_adapter import StaticCatalogue

__all__ = ["CatalogueSource", "FarmerNotFoundError", "ProductNotFoundError", "StaticCatalogue", "create_catalogue"]


def create_catalogue(data_dir: str | Path | None = None) -> CatalogueSource:
    """Return a catalogue reading from ``data_dir`` (the bundled feed by default)."""
    return StaticCatalogue(data_dir)
