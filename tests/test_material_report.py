# tests/test_material_report.py
# Tests for the material report example script
# Exists to ensure a loader built on the views reports the failing material and field instead of crashing
# RELEVANT FILES: examples/material_report.py, python/gltfview/material.py

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

_EXAMPLES = Path(__file__).resolve().parents[1] / "examples"
if str(_EXAMPLES) not in sys.path:
    sys.path.insert(0, str(_EXAMPLES))

import material_report  # noqa: E402


@pytest.mark.io
def test_report_prints_materials(gltf_root, tmp_path, capsys):
    path = tmp_path / "scene.gltf"
    path.write_text(json.dumps(gltf_root), encoding="utf-8")
    assert material_report.main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "materials[0] 'Brass'" in out
    assert "alpha: BLEND cutoff=0.250" in out
    assert "textures/brass%20base.png (TEXCOORD_0)" in out
    assert "scale=0.500" in out


@pytest.mark.io
def test_report_names_failing_field(tmp_path, capsys):
    path = tmp_path / "broken.gltf"
    path.write_text(
        json.dumps({"textures": [{}], "materials": [{"name": "Rock", "normalTexture": {"index": 7}}]}),
        encoding="utf-8",
    )
    assert material_report.main([str(path)]) == 3
    out = capsys.readouterr().out
    assert "FAILED materials[0] 'Rock': normalTexture.index" in out


@pytest.mark.io
def test_report_validate_flag(tmp_path, capsys):
    path = tmp_path / "broken.gltf"
    path.write_text(json.dumps({"materials": [{"alphaMode": "SCREEN"}]}), encoding="utf-8")
    assert material_report.main([str(path), "--validate"]) == 3
    assert "INVALID materials[0]: alphaMode" in capsys.readouterr().out


def test_report_missing_file(tmp_path, capsys):
    assert material_report.main([str(tmp_path / "nope.gltf")]) == 1
