# Ensure `import gltfview` works from a fresh clone:
# put repo/python on sys.path so the package is importable without prior install.
# Set GLTFVIEW_NO_BOOTSTRAP=1 to test an installed copy instead.
import copy
import os
import sys
from pathlib import Path

import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


if os.environ.get("GLTFVIEW_NO_BOOTSTRAP") != "1":
    _ensure_python_path()


SAMPLE_GLTF = {
    "asset": {"version": "2.0"},
    "images": [
        {"uri": "textures/brass%20base.png", "name": "brass_base"},
        {"bufferView": 0, "mimeType": "image/png"},
        {"uri": "data:image/png;base64,iVBORw0KGgo="},
    ],
    "samplers": [
        {"magFilter": 9729, "minFilter": 9987, "wrapS": 33071},
    ],
    "textures": [
        {"source": 0, "sampler": 0, "name": "base"},
        {"source": 1},
        {"source": 2, "extras": {"note": "occlusion"}},
    ],
    "materials": [
        {
            "name": "Brass",
            "doubleSided": True,
            "alphaMode": "BLEND",
            "alphaCutoff": 0.25,
            "emissiveFactor": [0.1, 0.2, 0.3],
            "pbrMetallicRoughness": {
                "baseColorFactor": [0.9, 0.7, 0.3, 1.0],
                "metallicFactor": 0.8,
                "roughnessFactor": 0.35,
                "baseColorTexture": {"index": 0},
                "metallicRoughnessTexture": {"index": 1, "texCoord": 1},
            },
            "normalTexture": {"index": 1, "scale": 0.5, "texCoord": 1},
            "occlusionTexture": {"index": 2, "strength": 0.75},
            "emissiveTexture": {"index": 0, "extensions": {"KHR_texture_transform": {"scale": [2.0, 2.0]}}},
            "extensions": {"KHR_materials_emissive_strength": {"emissiveStrength": 4.0}},
            "extras": {"author": "tests"},
        },
        {
            "name": "Bare",
        },
        {
            "pbrMetallicRoughness": {},
            "normalTexture": {"index": 0},
            "occlusionTexture": {"index": 2},
        },
    ],
}


def pytest_configure(config):
    config.addinivalue_line("markers", "io: tests that read or write files")


@pytest.fixture
def gltf_root():
    """A fresh, mutable copy of the sample glTF JSON."""
    return copy.deepcopy(SAMPLE_GLTF)


@pytest.fixture
def sample_document(gltf_root):
    from gltfview import Document

    return Document(gltf_root)
