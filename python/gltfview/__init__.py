# python/gltfview/__init__.py
# Public API for read-only glTF material views
# Exists to re-export the document, view and validation entry points
# RELEVANT FILES: python/gltfview/document.py, python/gltfview/material.py, python/gltfview/validate.py

from .config import DocumentConfig, load_document_config
from .document import (
    Document,
    ImageView,
    SamplerView,
    TextureView,
    ViewCollection,
    load_document,
)
from .errors import DocumentIntegrityError, IntegrityIssue
from .material import (
    AlphaMode,
    MaterialView,
    NormalTextureView,
    OcclusionTextureView,
    PbrMetallicRoughnessView,
    TextureReference,
    TextureReferenceView,
)
from .validate import ensure_valid, validate_document

__version__ = "0.1.0"

__all__ = [
    "AlphaMode",
    "Document",
    "DocumentConfig",
    "DocumentIntegrityError",
    "ImageView",
    "IntegrityIssue",
    "MaterialView",
    "NormalTextureView",
    "OcclusionTextureView",
    "PbrMetallicRoughnessView",
    "SamplerView",
    "TextureReference",
    "TextureReferenceView",
    "TextureView",
    "ViewCollection",
    "ensure_valid",
    "load_document",
    "load_document_config",
    "validate_document",
]
