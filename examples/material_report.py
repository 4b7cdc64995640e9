# examples/material_report.py
# Prints the resolved material parameters of a glTF file and reports broken fields.
# Usage: python examples/material_report.py scene.gltf [--validate] [--max-tex-coord 2]

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from _import_shim import ensure_repo_import

ensure_repo_import()

from gltfview import DocumentIntegrityError, load_document, validate_document  # noqa: E402


def _describe_reference(label: str, reference) -> str:
    if reference is None:
        return f"  {label}: -"
    texture = reference.texture()
    image = texture.source()
    where = image.uri() if image is not None and image.uri() else f"textures[{texture.index}]"
    return f"  {label}: {where} (TEXCOORD_{reference.tex_coord()})"


def _report_material(material) -> None:
    print(material.label())
    print(f"  alpha: {material.alpha_mode().value} cutoff={material.alpha_cutoff():.3f}"
          f" double_sided={material.double_sided()}")
    pbr = material.pbr_metallic_roughness()
    if pbr is not None:
        base = ", ".join(f"{c:.3f}" for c in pbr.base_color_factor())
        print(f"  base_color=({base}) metallic={pbr.metallic_factor():.3f} roughness={pbr.roughness_factor():.3f}")
        print(_describe_reference("base_color_texture", pbr.base_color_texture()))
        print(_describe_reference("metallic_roughness_texture", pbr.metallic_roughness_texture()))
    normal = material.normal_texture()
    print(_describe_reference("normal_texture", normal))
    if normal is not None:
        print(f"    scale={normal.scale():.3f}")
    occlusion = material.occlusion_texture()
    print(_describe_reference("occlusion_texture", occlusion))
    if occlusion is not None:
        print(f"    strength={occlusion.strength():.3f}")
    print(_describe_reference("emissive_texture", material.emissive_texture()))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Report glTF material parameters")
    parser.add_argument("path", type=Path, help="Path to a .gltf or .glb file")
    parser.add_argument("--validate", action="store_true", help="Run the full integrity pass first")
    parser.add_argument("--max-tex-coord", type=int, default=None, help="Number of UV sets the renderer supports")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.path.exists():
        print(f"File not found: {args.path}")
        return 1

    doc = load_document(args.path, config={"max_tex_coord": args.max_tex_coord})
    if args.validate:
        issues = validate_document(doc)
        for issue in issues:
            print(f"INVALID {issue}")
        if issues:
            return 3

    failures = 0
    for material in doc.materials():
        try:
            _report_material(material)
        except DocumentIntegrityError as exc:
            failures += 1
            print(f"  FAILED {exc.record}: {exc.field}: substituting default material")
    return 0 if failures == 0 else 3


if __name__ == "__main__":
    raise SystemExit(main())
