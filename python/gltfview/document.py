# python/gltfview/document.py
# Frozen glTF document and the texture/image/sampler handles resolved from it
# Exists to own the record tree that every material view borrows from
# RELEVANT FILES: python/gltfview/material.py, python/gltfview/_records.py, python/gltfview/config.py, tests/test_document.py
"""glTF document model.

A :class:`Document` owns a frozen copy of the decoded glTF JSON tree. Views
never copy records; they keep a reference to the document plus the record
they wrap and resolve cross-record indices on demand.

Usage:
    from gltfview import load_document

    doc = load_document("scene.gltf")
    for material in doc.materials():
        print(material.label(), material.alpha_mode())
"""

from __future__ import annotations

import json
import logging
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Mapping, Optional, TypeVar, Union
from urllib.parse import unquote, urlparse

from ._records import (
    EMPTY_MAPPING,
    freeze_record,
    read_array,
    read_index,
    read_optional_int,
    read_uint,
)
from .config import ConfigSource, DocumentConfig, load_document_config
from .errors import DocumentIntegrityError
from .material import MaterialView

logger = logging.getLogger(__name__)

_GLB_MAGIC = b"glTF"
_GLB_VERSION = 2
_GLB_HEADER = struct.Struct("<4sII")
_GLB_CHUNK_HEADER = struct.Struct("<II")
_GLB_CHUNK_JSON = 0x4E4F534A

_WRAP_REPEAT = 10497

V = TypeVar("V")


@dataclass(frozen=True)
class ImageView:
    """One entry of ``document.images()``."""
    document: "Document" = field(repr=False)
    index: int
    record: Mapping[str, Any] = field(repr=False, compare=False)

    @property
    def path(self) -> str:
        return f"images[{self.index}]"

    def name(self) -> Optional[str]:
        return self.record.get("name")

    def uri(self) -> Optional[str]:
        return self.record.get("uri")

    def mime_type(self) -> Optional[str]:
        return self.record.get("mimeType")

    def buffer_view(self) -> Optional[int]:
        return read_optional_int(self.record, "bufferView", owner=self.path, field="bufferView")

    def is_data_uri(self) -> bool:
        uri = self.uri()
        return uri is not None and uri.startswith("data:")

    def resolve_uri(self, base_path: Union[str, Path, None] = None) -> Optional[Union[Path, str]]:
        """Resolve the image URI relative to the document.

        Returns ``None`` for buffer-view images and data URIs, the URI string
        unchanged for absolute URLs, and a filesystem path otherwise. The base
        directory is ``base_path``, then ``config.base_path``, then the
        directory of the loaded file.
        """
        uri = self.uri()
        if uri is None or self.is_data_uri():
            return None
        if urlparse(uri).scheme in {"http", "https", "file"}:
            return uri
        relative = Path(unquote(uri))
        if base_path is None:
            base_path = self.document.base_path()
        if base_path is None:
            return relative
        return Path(base_path) / relative

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record


@dataclass(frozen=True)
class SamplerView:
    """One entry of ``document.samplers()``; filters are GL enum values."""
    document: "Document" = field(repr=False)
    index: int
    record: Mapping[str, Any] = field(repr=False, compare=False)

    @property
    def path(self) -> str:
        return f"samplers[{self.index}]"

    def name(self) -> Optional[str]:
        return self.record.get("name")

    def mag_filter(self) -> Optional[int]:
        return read_optional_int(self.record, "magFilter", owner=self.path, field="magFilter")

    def min_filter(self) -> Optional[int]:
        return read_optional_int(self.record, "minFilter", owner=self.path, field="minFilter")

    def wrap_s(self) -> int:
        return read_uint(self.record, "wrapS", _WRAP_REPEAT, owner=self.path, field="wrapS")

    def wrap_t(self) -> int:
        return read_uint(self.record, "wrapT", _WRAP_REPEAT, owner=self.path, field="wrapT")

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record


@dataclass(frozen=True)
class TextureView:
    """A resolved entry of ``document.textures()``.

    Two handles compare equal when they point at the same index of the same
    document.
    """
    document: "Document" = field(repr=False)
    index: int
    record: Mapping[str, Any] = field(repr=False, compare=False)

    @property
    def path(self) -> str:
        return f"textures[{self.index}]"

    def name(self) -> Optional[str]:
        return self.record.get("name")

    def source(self) -> Optional[ImageView]:
        """The image this texture samples, or ``None`` when the source is unset."""
        value = self.record.get("source")
        if value is None:
            return None
        return self.document.image(value, owner=self.path, field="source")

    def sampler(self) -> Optional[SamplerView]:
        """The sampler, or ``None`` for the glTF default (repeat, auto filtering)."""
        value = self.record.get("sampler")
        if value is None:
            return None
        return self.document.sampler(value, owner=self.path, field="sampler")

    def extensions(self) -> Mapping[str, Any]:
        return self.record.get("extensions", EMPTY_MAPPING)

    def extras(self) -> Any:
        return self.record.get("extras")

    def as_raw_record(self) -> Mapping[str, Any]:
        return self.record


class ViewCollection(Sequence, Generic[V]):
    """Ordered, indexable collection of views over one top-level array.

    Views are built on access; the collection holds the document, the
    document does not hold its collections.
    """

    def __init__(self, document: "Document", key: str, factory: Callable[["Document", int, Mapping[str, Any]], V]):
        self._document = document
        self._key = key
        self._records = read_array(document.as_raw_record(), key, owner="document")
        self._factory = factory

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self[i] for i in range(*index.indices(len(self))))
        if index < 0:
            index += len(self._records)
        if not 0 <= index < len(self._records):
            raise IndexError(f"{self._key} index out of range: {index}")
        record = self._records[index]
        if not isinstance(record, Mapping):
            raise DocumentIntegrityError(
                f"must be a JSON object, got {type(record).__name__}",
                record="document", field=f"{self._key}[{index}]", value=record,
            )
        return self._factory(self._document, index, record)

    def __iter__(self) -> Iterator[V]:
        for i in range(len(self._records)):
            yield self[i]

    def __repr__(self) -> str:
        return f"ViewCollection({self._key!r}, len={len(self)})"


class Document:
    """An immutable glTF document.

    ``root`` is the decoded JSON object; it is deep-copied into read-only
    mappings and tuples so no view can change it.
    """

    def __init__(
        self,
        root: Mapping[str, Any],
        *,
        config: ConfigSource = None,
        source_path: Union[str, Path, None] = None,
    ):
        if not isinstance(root, Mapping):
            raise TypeError(f"glTF root must be a JSON object, got {type(root).__name__}")
        self.config: DocumentConfig = load_document_config(config)
        self.source_path: Optional[Path] = Path(source_path) if source_path is not None else None
        self._root = freeze_record(root)
        logger.debug(
            f"Loaded glTF document: materials={self._array_length('materials')} "
            f"textures={self._array_length('textures')} images={self._array_length('images')} "
            f"samplers={self._array_length('samplers')}"
        )
        if self.config.validate_on_load:
            from .validate import ensure_valid
            ensure_valid(self, self.config)

    @classmethod
    def from_json(cls, text: Union[str, bytes], config: ConfigSource = None) -> "Document":
        return cls(json.loads(text), config=config)

    def __repr__(self) -> str:
        where = f" {str(self.source_path)!r}" if self.source_path is not None else ""
        return f"<Document{where} materials={self._array_length('materials')} textures={self._array_length('textures')}>"

    def _array_length(self, key: str) -> int:
        value = self._root.get(key)
        return len(value) if isinstance(value, tuple) else 0

    def as_raw_record(self) -> Mapping[str, Any]:
        return self._root

    def base_path(self) -> Optional[Path]:
        if self.config.base_path is not None:
            return Path(self.config.base_path)
        if self.source_path is not None:
            return self.source_path.parent
        return None

    def materials(self) -> ViewCollection[MaterialView]:
        return ViewCollection(self, "materials", MaterialView)

    def textures(self) -> ViewCollection[TextureView]:
        return ViewCollection(self, "textures", TextureView)

    def images(self) -> ViewCollection[ImageView]:
        return ViewCollection(self, "images", ImageView)

    def samplers(self) -> ViewCollection[SamplerView]:
        return ViewCollection(self, "samplers", SamplerView)

    def texture(self, index: Any, *, owner: str = "document", field: str = "index") -> TextureView:
        """Resolve a texture index, naming ``owner`` and ``field`` on failure."""
        textures = self.textures()
        return textures[read_index(index, len(textures), owner=owner, field=field)]

    def image(self, index: Any, *, owner: str = "document", field: str = "index") -> ImageView:
        images = self.images()
        return images[read_index(index, len(images), owner=owner, field=field)]

    def sampler(self, index: Any, *, owner: str = "document", field: str = "index") -> SamplerView:
        samplers = self.samplers()
        return samplers[read_index(index, len(samplers), owner=owner, field=field)]


def _read_glb_json(data: bytes) -> bytes:
    if len(data) < _GLB_HEADER.size + _GLB_CHUNK_HEADER.size:
        raise ValueError("GLB file is too short for a header and JSON chunk")
    magic, version, length = _GLB_HEADER.unpack_from(data, 0)
    if magic != _GLB_MAGIC:
        raise ValueError(f"GLB magic mismatch: {magic!r}")
    if version != _GLB_VERSION:
        raise ValueError(f"Unsupported GLB version: {version}")
    if length > len(data):
        raise ValueError(f"GLB header declares {length} bytes, file has {len(data)}")
    chunk_length, chunk_type = _GLB_CHUNK_HEADER.unpack_from(data, _GLB_HEADER.size)
    if chunk_type != _GLB_CHUNK_JSON:
        raise ValueError(f"First GLB chunk must be JSON, got type 0x{chunk_type:08X}")
    start = _GLB_HEADER.size + _GLB_CHUNK_HEADER.size
    chunk = data[start:start + chunk_length]
    if len(chunk) != chunk_length:
        raise ValueError("GLB JSON chunk is truncated")
    return chunk


def load_document(path: Union[str, Path], config: ConfigSource = None) -> Document:
    """Load the JSON part of a ``.gltf`` or ``.glb`` file.

    Buffers and images are not read; only the record tree is decoded.
    """
    path = Path(path)
    data = path.read_bytes()
    if path.suffix.lower() == ".glb" or data[:4] == _GLB_MAGIC:
        data = _read_glb_json(data)
    root = json.loads(data.decode("utf-8-sig"))
    return Document(root, config=config, source_path=path)
