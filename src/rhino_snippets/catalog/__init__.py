"""Rhino catalogs: descriptors, snapshots and ingestion.

Catalogs are fetched by an external collaborator and handed over as
YAML or JSON documents (or already decoded mappings). They are validated
once into an immutable `CatalogSnapshot` that every completion request
reads from.
"""

from .schema import (
    ActionDescriptor,
    AnnotationDescriptor,
    AttributeDescriptor,
    Capability,
    CatalogSnapshot,
    LocatorDescriptor,
)
from .loader import CatalogLoader  # noqa: I001

__all__ = (
    'ActionDescriptor',
    'AnnotationDescriptor',
    'AttributeDescriptor',
    'Capability',
    'CatalogLoader',
    'CatalogSnapshot',
    'LocatorDescriptor',
)
