# tests/test_texture_reference.py
# Tests for the generic texture reference and its normal/occlusion specializations
# Exists to ensure specializations delegate every shared operation to one inner generic view
# RELEVANT FILES: python/gltfview/material.py, tests/test_material_views.py

from __future__ import annotations

import pytest

from gltfview import (
    Document,
    DocumentIntegrityError,
    NormalTextureView,
    OcclusionTextureView,
    TextureReference,
    TextureReferenceView,
)


def _describe(reference: TextureReference):
    return reference.texture().index, reference.tex_coord(), dict(reference.extensions())


class TestDelegation:
    def test_specializations_satisfy_protocol(self, sample_document):
        material = sample_document.materials()[0]
        assert isinstance(material.normal_texture(), TextureReference)
        assert isinstance(material.occlusion_texture(), TextureReference)
        assert isinstance(material.emissive_texture(), TextureReference)

    def test_normal_matches_direct_generic_view(self, sample_document):
        material = sample_document.materials()[0]
        normal = material.normal_texture()
        raw = material.as_raw_record()["normalTexture"]
        direct = TextureReferenceView(sample_document.textures()[raw["index"]], raw)
        assert normal.tex_coord() == direct.tex_coord() == 1
        assert normal.texture() == direct.texture()
        assert _describe(normal) == _describe(direct)

    def test_occlusion_matches_direct_generic_view(self, sample_document):
        material = sample_document.materials()[0]
        occlusion = material.occlusion_texture()
        raw = material.as_raw_record()["occlusionTexture"]
        direct = TextureReferenceView(sample_document.textures()[raw["index"]], raw)
        assert occlusion.tex_coord() == direct.tex_coord() == 0
        assert occlusion.texture() == direct.texture()
        assert occlusion.extras() == direct.extras()

    def test_inner_view_is_exposed(self, sample_document):
        normal = sample_document.materials()[0].normal_texture()
        inner = normal.as_texture_reference()
        assert isinstance(inner, TextureReferenceView)
        assert inner is normal.info
        assert inner.as_raw_record() is normal.as_raw_record()
        assert inner.path == normal.path == "materials[0].normalTexture"


class TestExtraScalars:
    def test_scale_and_strength(self, sample_document):
        material = sample_document.materials()[0]
        assert material.normal_texture().scale() == 0.5
        assert material.occlusion_texture().strength() == 0.75

    def test_scalar_defaults(self, sample_document):
        material = sample_document.materials()[2]
        normal = material.normal_texture()
        occlusion = material.occlusion_texture()
        assert normal.scale() == 1.0
        assert occlusion.strength() == 1.0
        assert normal.tex_coord() == 0
        assert occlusion.tex_coord() == 0

    def test_bad_strength_names_field(self):
        doc = Document({
            "textures": [{}],
            "materials": [{"name": "Stone", "occlusionTexture": {"index": 0, "strength": [1]}}],
        })
        occlusion = doc.materials()[0].occlusion_texture()
        with pytest.raises(DocumentIntegrityError) as info:
            occlusion.strength()
        assert info.value.record == "materials[0] 'Stone'"
        assert info.value.field == "occlusionTexture.strength"
        assert occlusion.tex_coord() == 0

    def test_negative_tex_coord(self):
        doc = Document({
            "textures": [{}],
            "materials": [{"normalTexture": {"index": 0, "texCoord": -1}}],
        })
        normal = doc.materials()[0].normal_texture()
        with pytest.raises(DocumentIntegrityError) as info:
            normal.tex_coord()
        assert info.value.field == "normalTexture.texCoord"


class TestDirectConstruction:
    def test_generic_view_without_owner(self, sample_document):
        handle = sample_document.textures()[2]
        view = TextureReferenceView(handle, {"index": 2, "texCoord": 3})
        assert view.tex_coord() == 3
        assert view.path == "textures[2]"
        assert view.extensions() == {}
        assert view.extras() is None

    def test_wrapping_a_generic_view(self, sample_document):
        handle = sample_document.textures()[0]
        inner = TextureReferenceView(handle, {"index": 0, "scale": 3.0, "strength": 0.25})
        assert NormalTextureView(inner).scale() == 3.0
        assert OcclusionTextureView(inner).strength() == 0.25
        assert NormalTextureView(inner).texture() is handle

    def test_read_scalar_is_shared_by_specializations(self, sample_document):
        handle = sample_document.textures()[0]
        inner = TextureReferenceView(handle, {"index": 0, "scale": 0.25})
        assert inner.read_scalar("scale", 1.0) == NormalTextureView(inner).scale()
        assert inner.read_scalar("strength", 1.0) == OcclusionTextureView(inner).strength() == 1.0

    def test_errors_without_owner_name_the_texture(self, sample_document):
        handle = sample_document.textures()[1]
        view = TextureReferenceView(handle, {"index": 1, "texCoord": "one"})
        with pytest.raises(DocumentIntegrityError) as info:
            view.tex_coord()
        assert info.value.record == "textures[1]"
        assert info.value.field == "texCoord"
