# python/gltfview/validate.py
# Whole-document integrity pass over materials and textures
# Exists so loaders can report every broken field at once instead of failing on first access
# RELEVANT FILES: python/gltfview/material.py, python/gltfview/document.py, python/gltfview/errors.py, tests/test_validate.py
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import numpy as np

from .config import ConfigSource, load_document_config
from .document import Document, TextureView
from .errors import DocumentIntegrityError, IntegrityIssue
from .material import MaterialView, TextureReference

logger = logging.getLogger(__name__)


def _collect(issues: List[IntegrityIssue], fn: Callable[[], Any]) -> Any:
    try:
        return fn()
    except DocumentIntegrityError as exc:
        issues.extend(exc.issues)
        return None


def _check_unit_range(issues: List[IntegrityIssue], record: str, field: str, value: Any) -> None:
    if value is None:
        return
    arr = np.asarray(value, dtype=np.float32)
    if np.any(arr < 0.0) or np.any(arr > 1.0):
        issues.append(IntegrityIssue(record, field, "must be within [0, 1]", value))


def _check_reference(
    issues: List[IntegrityIssue],
    material: MaterialView,
    location: str,
    reference: Optional[TextureReference],
    max_tex_coord: Optional[int],
) -> None:
    if reference is None:
        return
    tex_coord = _collect(issues, reference.tex_coord)
    if tex_coord is not None and max_tex_coord is not None and tex_coord >= max_tex_coord:
        issues.append(IntegrityIssue(
            material.label(),
            f"{location}.texCoord",
            f"TEXCOORD_{tex_coord} exceeds the {max_tex_coord} supported UV set(s)",
            tex_coord,
        ))


def _validate_material(issues: List[IntegrityIssue], material: MaterialView, max_tex_coord: Optional[int]) -> None:
    label = material.label()
    _collect(issues, material.name)
    _collect(issues, material.double_sided)
    _collect(issues, material.alpha_mode)
    _collect(issues, material.alpha_cutoff)
    _check_unit_range(issues, label, "emissiveFactor", _collect(issues, material.emissive_factor))

    normal = _collect(issues, material.normal_texture)
    occlusion = _collect(issues, material.occlusion_texture)
    emissive = _collect(issues, material.emissive_texture)
    _check_reference(issues, material, "normalTexture", normal, max_tex_coord)
    _check_reference(issues, material, "occlusionTexture", occlusion, max_tex_coord)
    _check_reference(issues, material, "emissiveTexture", emissive, max_tex_coord)

    if normal is not None:
        _collect(issues, normal.scale)
    if occlusion is not None:
        _check_unit_range(issues, label, "occlusionTexture.strength", _collect(issues, occlusion.strength))

    pbr = _collect(issues, material.pbr_metallic_roughness)
    if pbr is None:
        return
    _check_unit_range(issues, label, "pbrMetallicRoughness.baseColorFactor", _collect(issues, pbr.base_color_factor))
    _check_unit_range(issues, label, "pbrMetallicRoughness.metallicFactor", _collect(issues, pbr.metallic_factor))
    _check_unit_range(issues, label, "pbrMetallicRoughness.roughnessFactor", _collect(issues, pbr.roughness_factor))
    for key, accessor in (
        ("baseColorTexture", pbr.base_color_texture),
        ("metallicRoughnessTexture", pbr.metallic_roughness_texture),
    ):
        reference = _collect(issues, accessor)
        _check_reference(issues, material, f"pbrMetallicRoughness.{key}", reference, max_tex_coord)


def _validate_texture(issues: List[IntegrityIssue], texture: TextureView) -> None:
    image = _collect(issues, texture.source)
    if image is not None:
        _collect(issues, image.buffer_view)
    sampler = _collect(issues, texture.sampler)
    if sampler is not None:
        for accessor in (sampler.mag_filter, sampler.min_filter, sampler.wrap_s, sampler.wrap_t):
            _collect(issues, accessor)


def _unique(issues: List[IntegrityIssue]) -> List[IntegrityIssue]:
    seen = set()
    out: List[IntegrityIssue] = []
    for issue in issues:
        key = (issue.record, issue.field, issue.message)
        if key not in seen:
            seen.add(key)
            out.append(issue)
    return out


def validate_document(document: Document, config: ConfigSource = None) -> List[IntegrityIssue]:
    """Check every material and texture and return all issues found.

    An empty list means every accessor of every material view, and of the
    texture, image and sampler views reached from a texture, will succeed.
    Factors outside [0, 1] are reported even though the accessors return them.
    """
    cfg = load_document_config(config if config is not None else document.config)
    issues: List[IntegrityIssue] = []

    materials = _collect(issues, document.materials)
    for i in range(len(materials) if materials is not None else 0):
        material = _collect(issues, lambda: materials[i])
        if material is not None:
            _validate_material(issues, material, cfg.max_tex_coord)

    textures = _collect(issues, document.textures)
    for i in range(len(textures) if textures is not None else 0):
        texture = _collect(issues, lambda: textures[i])
        if texture is not None:
            _validate_texture(issues, texture)

    issues = _unique(issues)
    for issue in issues:
        logger.warning(f"glTF integrity: {issue}")
    return issues


def ensure_valid(document: Document, config: ConfigSource = None) -> None:
    """Raise one :class:`DocumentIntegrityError` carrying every issue found."""
    issues = validate_document(document, config)
    if issues:
        raise DocumentIntegrityError.from_issues(issues)
