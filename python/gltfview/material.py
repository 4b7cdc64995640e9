# python/gltfview/material.py
# Typed read-only views over glTF material records with on-demand texture resolution
# Exists to give renderers and loaders resolved PBR parameters without copying the document
# RELEVANT FILES: python/gltfview/document.py, python/gltfview/_records.py, tests/test_material_views.py, tests/test_texture_reference.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, runtime_checkable

import numpy as np

from ._records import (
    EMPTY_MAPPING,
    read_bool,
    read_factor,
    read_float,
    read_optional_str,
    read_sub_record,
    read_uint,
)
from .errors import DocumentIntegrityError

if TYPE_CHECKING:
    from .document import Document, TextureView

_DEFAULT_ALPHA_CUTOFF = 0.5
_DEFAULT_EMISSIVE = (0.0, 0.0, 0.0)
_DEFAULT_BASE_COLOR = (1.0, 1.0, 1.0, 1.0)


class AlphaMode(Enum):
    """How the alpha value of the base color is interpreted.

    * ``OPAQUE`` (default): alpha is ignored and the output is fully opaque.
    * ``MASK``: output is fully opaque or fully transparent depending on
      alpha and ``alphaCutoff``.
    * ``BLEND``: alpha composites the surface over the background.
    """
    OPAQUE = "OPAQUE"
    MASK = "MASK"
    BLEND = "BLEND"


@runtime_checkable
class TextureReference(Protocol):
    """Shared shape of "this texture, read from UV set N"."""

    def texture(self) -> "TextureView": ...

    def tex_coord(self) -> int: ...

    def extensions(self) -> Mapping[str, Any]: ...

    def extras(self) -> Any: ...

    def as_raw_record(self) -> Mapping[str, Any]: ...


def _resolve_reference(
    owner: "MaterialView",
    record: Mapping[str, Any],
    location: str,
) -> "TextureReferenceView":
    label = owner.label()
    if "index" not in record:
        raise DocumentIntegrityError(
            "texture reference has no index",
            record=label, field=f"{location}.index",
        )
    handle = owner.document.texture(record["index"], owner=label, field=f"{location}.index")
    return TextureReferenceView(handle, record, owner=owner, location=location)


@dataclass(frozen=True)
class TextureReferenceView:
    """A resolved texture plus the UV set it is read from.

    ``owner`` and ``location`` only locate the reference for diagnostics;
    a view built directly from a handle and a record leaves them empty.
    """
    handle: "TextureView"
    record: Mapping[str, Any] = field(repr=False, compare=False)
    owner: Optional["MaterialView"] = field(default=None, repr=False)
    location: str = ""

    @property
    def path(self) -> str:
        if self.owner is None:
            return self.location or self.handle.path
        return f"{self.owner.path}.{self.location}"

    def _field(self, name: str) -> tuple:
        label = self.owner.label() if self.owner is not None else self.handle.path
        return label, f"{self.location}.{name}" if self.location else name

    def read_scalar(self, key: str, default: float) -> float:
        """Read an extra float field of this reference, e.g. ``scale`` or ``strength``."""
        label, name = self._field(key)
        return read_float(self.record, key, default, owner=label, field=name)

    def texture(self) -> "TextureView":
        return self.handle

    def tex_coord(self) -> int:
        """The set index of the ``TEXCOORD_n`` attribute; 0 when unset."""
        label, name = self._field("texCoord")
        return read_uint(self.record, "texCoord", 0, owner=label, field=name)

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record


@dataclass(frozen=True)
class NormalTextureView:
    """A tangent-space normal map reference.

    Forwards every shared operation to the wrapped :class:`TextureReferenceView`
    and adds :meth:`scale`.
    """
    info: TextureReferenceView

    @property
    def path(self) -> str:
        return self.info.path

    def as_texture_reference(self) -> TextureReferenceView:
        return self.info

    def texture(self) -> "TextureView":
        return self.info.texture()

    def tex_coord(self) -> int:
        return self.info.tex_coord()

    def extensions(self) -> Mapping[str, Any]:
        return self.info.extensions()

    def extras(self) -> Any:
        return self.info.extras()

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.info.as_raw_record()

    def scale(self) -> float:
        """Multiplier applied to the X and Y of each decoded normal; 1.0 when unset."""
        return self.info.read_scalar("scale", 1.0)


@dataclass(frozen=True)
class OcclusionTextureView:
    """An ambient occlusion map reference, sampled from the R channel."""
    info: TextureReferenceView

    @property
    def path(self) -> str:
        return self.info.path

    def as_texture_reference(self) -> TextureReferenceView:
        return self.info

    def texture(self) -> "TextureView":
        return self.info.texture()

    def tex_coord(self) -> int:
        return self.info.tex_coord()

    def extensions(self) -> Mapping[str, Any]:
        return self.info.extensions()

    def extras(self) -> Any:
        return self.info.extras()

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.info.as_raw_record()

    def strength(self) -> float:
        """Amount of occlusion applied, 0.0 (none) to 1.0 (full); 1.0 when unset."""
        return self.info.read_scalar("strength", 1.0)


@dataclass(frozen=True)
class PbrMetallicRoughnessView:
    """Metallic-roughness parameters of a material.

    The metallic-roughness texture stores metalness in B and roughness in G.
    """
    material: "MaterialView"
    record: Mapping[str, Any] = field(repr=False, compare=False)

    _LOCATION = "pbrMetallicRoughness"

    @property
    def path(self) -> str:
        return f"{self.material.path}.{self._LOCATION}"

    def _reference(self, key: str) -> Optional[TextureReferenceView]:
        location = f"{self._LOCATION}.{key}"
        record = read_sub_record(self.record, key, owner=self.material.label(), field=location)
        if record is None:
            return None
        return _resolve_reference(self.material, record, location)

    def base_color_factor(self) -> np.ndarray:
        return read_factor(
            self.record, "baseColorFactor", _DEFAULT_BASE_COLOR,
            owner=self.material.label(), field=f"{self._LOCATION}.baseColorFactor",
        )

    def base_color_texture(self) -> Optional[TextureReferenceView]:
        return self._reference("baseColorTexture")

    def metallic_factor(self) -> float:
        return read_float(
            self.record, "metallicFactor", 1.0,
            owner=self.material.label(), field=f"{self._LOCATION}.metallicFactor",
        )

    def roughness_factor(self) -> float:
        """1.0 is completely rough, 0.0 completely smooth."""
        return read_float(
            self.record, "roughnessFactor", 1.0,
            owner=self.material.label(), field=f"{self._LOCATION}.roughnessFactor",
        )

    def metallic_roughness_texture(self) -> Optional[TextureReferenceView]:
        return self._reference("metallicRoughnessTexture")

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record


@dataclass(frozen=True)
class MaterialView:
    """Read-only view of ``materials[index]``.

    Construction resolves nothing. Each accessor reads or resolves only the
    field it is asked for and raises :class:`DocumentIntegrityError` when that
    field is malformed.
    """
    document: "Document" = field(repr=False)
    index: int
    record: Mapping[str, Any] = field(repr=False, compare=False)

    @property
    def path(self) -> str:
        return f"materials[{self.index}]"

    def label(self) -> str:
        name = self.record.get("name")
        return f"{self.path} {name!r}" if isinstance(name, str) else self.path

    def _sub_record(self, key: str) -> Optional[Mapping[str, Any]]:
        return read_sub_record(self.record, key, owner=self.label(), field=key)

    def name(self) -> Optional[str]:
        return read_optional_str(self.record, "name", owner=self.path, field="name")

    def double_sided(self) -> bool:
        """When False back-face culling is enabled."""
        return read_bool(self.record, "doubleSided", False, owner=self.label(), field="doubleSided")

    def alpha_cutoff(self) -> float:
        return read_float(self.record, "alphaCutoff", _DEFAULT_ALPHA_CUTOFF, owner=self.label(), field="alphaCutoff")

    def alpha_mode(self) -> AlphaMode:
        raw = self.record.get("alphaMode")
        if raw is None:
            return AlphaMode.OPAQUE
        if isinstance(raw, str):
            try:
                return AlphaMode(raw)
            except ValueError:
                pass
        expected = ", ".join(mode.value for mode in AlphaMode)
        raise DocumentIntegrityError(
            f"unknown alpha mode {raw!r}, expected one of {expected}",
            record=self.label(), field="alphaMode", value=raw,
        )

    def emissive_factor(self) -> np.ndarray:
        return read_factor(self.record, "emissiveFactor", _DEFAULT_EMISSIVE, owner=self.label(), field="emissiveFactor")

    def pbr_metallic_roughness(self) -> Optional[PbrMetallicRoughnessView]:
        record = self._sub_record("pbrMetallicRoughness")
        if record is None:
            return None
        return PbrMetallicRoughnessView(self, record)

    def normal_texture(self) -> Optional[NormalTextureView]:
        record = self._sub_record("normalTexture")
        if record is None:
            return None
        return NormalTextureView(_resolve_reference(self, record, "normalTexture"))

    def occlusion_texture(self) -> Optional[OcclusionTextureView]:
        record = self._sub_record("occlusionTexture")
        if record is None:
            return None
        return OcclusionTextureView(_resolve_reference(self, record, "occlusionTexture"))

    def emissive_texture(self) -> Optional[TextureReferenceView]:
        """RGB emission in sRGB; a fourth channel, if present, is ignored."""
        record = self._sub_record("emissiveTexture")
        if record is None:
            return None
        return _resolve_reference(self, record, "emissiveTexture")

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record
