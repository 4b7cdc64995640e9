# python/gltfview/_records.py
# Read helpers for frozen glTF JSON records
# Exists so every view decodes fields, defaults and indices the same way
# RELEVANT FILES: python/gltfview/document.py, python/gltfview/material.py, python/gltfview/errors.py
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from .errors import DocumentIntegrityError

EMPTY_MAPPING: Mapping[str, Any] = MappingProxyType({})


def freeze_record(value: Any) -> Any:
    """Return a read-only copy of a decoded JSON tree.

    Objects become ``MappingProxyType`` and arrays become tuples; scalars are
    returned unchanged.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze_record(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_record(v) for v in value)
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def read_index(value: Any, count: int, *, owner: str, field: str) -> int:
    if not _is_int(value):
        raise DocumentIntegrityError(
            f"index must be a non-negative integer, got {value!r}",
            record=owner, field=field, value=value,
        )
    index = int(value)
    if not 0 <= index < count:
        raise DocumentIntegrityError(
            f"index {index} out of range [0, {count})",
            record=owner, field=field, value=value,
        )
    return index


def read_uint(record: Mapping[str, Any], key: str, default: int, *, owner: str, field: str) -> int:
    value = record.get(key)
    if value is None:
        return default
    if not _is_int(value) or value < 0:
        raise DocumentIntegrityError(
            f"must be a non-negative integer, got {value!r}",
            record=owner, field=field, value=value,
        )
    return int(value)


def read_optional_int(record: Mapping[str, Any], key: str, *, owner: str, field: str) -> Optional[int]:
    value = record.get(key)
    if value is None:
        return None
    if not _is_int(value):
        raise DocumentIntegrityError(
            f"must be an integer, got {value!r}",
            record=owner, field=field, value=value,
        )
    return int(value)


def read_float(record: Mapping[str, Any], key: str, default: float, *, owner: str, field: str) -> float:
    value = record.get(key)
    if value is None:
        return float(default)
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise DocumentIntegrityError(
            f"must be a number, got {value!r}",
            record=owner, field=field, value=value,
        )
    return float(value)


def read_bool(record: Mapping[str, Any], key: str, default: bool, *, owner: str, field: str) -> bool:
    value = record.get(key)
    if value is None:
        return default
    if not isinstance(value, (bool, np.bool_)):
        raise DocumentIntegrityError(
            f"must be a boolean, got {value!r}",
            record=owner, field=field, value=value,
        )
    return bool(value)


def read_optional_str(record: Mapping[str, Any], key: str, *, owner: str, field: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DocumentIntegrityError(
            f"must be a string, got {value!r}",
            record=owner, field=field, value=value,
        )
    return value


def read_factor(
    record: Mapping[str, Any],
    key: str,
    default: Sequence[float],
    *,
    owner: str,
    field: str,
) -> np.ndarray:
    """Decode a fixed-length float vector as a read-only float32 array."""
    value = record.get(key)
    size = len(default)
    if value is None:
        arr = np.array(default, dtype=np.float32)
    else:
        if isinstance(value, (bool, np.bool_)) or (
            isinstance(value, (tuple, list)) and any(isinstance(v, (bool, np.bool_)) for v in value)
        ):
            raise DocumentIntegrityError(
                f"expected {size} floats, got {value!r}",
                record=owner, field=field, value=value,
            )
        try:
            arr = np.array(value, dtype=np.float32)
        except (TypeError, ValueError) as exc:
            raise DocumentIntegrityError(
                f"expected {size} floats, got {value!r}",
                record=owner, field=field, value=value,
            ) from exc
        if arr.shape != (size,):
            raise DocumentIntegrityError(
                f"expected {size} floats, got shape {arr.shape}",
                record=owner, field=field, value=value,
            )
    arr.setflags(write=False)
    return arr


def read_sub_record(record: Mapping[str, Any], key: str, *, owner: str, field: str) -> Optional[Mapping[str, Any]]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise DocumentIntegrityError(
            f"must be a JSON object, got {type(value).__name__}",
            record=owner, field=field, value=value,
        )
    return value


def read_array(record: Mapping[str, Any], key: str, *, owner: str) -> Sequence[Any]:
    value = record.get(key)
    if value is None:
        return ()
    if not isinstance(value, tuple):
        raise DocumentIntegrityError(
            f"must be a JSON array, got {type(value).__name__}",
            record=owner, field=key, value=value,
        )
    return value
