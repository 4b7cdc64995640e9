# python/gltfview/config.py
# Document loading configuration parsed from mappings, JSON files or keyword overrides
# Exists to keep load-time options in one validated structure
# RELEVANT FILES: python/gltfview/document.py, python/gltfview/validate.py, tests/test_document_config.py
from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

ConfigSource = Union["DocumentConfig", Mapping[str, Any], str, Path, None]

_CONFIG_KEYS: Dict[str, str] = {
    "validateonload": "validate_on_load",
    "validate": "validate_on_load",
    "basepath": "base_path",
    "basedir": "base_path",
    "maxtexcoord": "max_tex_coord",
    "uvsets": "max_tex_coord",
}


def _normalize_key(value: Any) -> str:
    key = "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )
    if key not in _CONFIG_KEYS:
        raise ValueError(f"Unknown document config key: {value!r}")
    return _CONFIG_KEYS[key]


def _to_bool(value: Any, label: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{label} must be a boolean, got {value!r}")


@dataclass
class DocumentConfig:
    validate_on_load: bool = False
    base_path: Optional[str] = None
    max_tex_coord: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "validate_on_load": self.validate_on_load,
            "base_path": self.base_path,
            "max_tex_coord": self.max_tex_coord,
        }

    def copy(self) -> "DocumentConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if self.max_tex_coord is not None and self.max_tex_coord < 1:
            raise ValueError("max_tex_coord must be >= 1 when set")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["DocumentConfig"] = None) -> "DocumentConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        for raw_key, value in data.items():
            key = _normalize_key(raw_key)
            if key == "validate_on_load":
                base.validate_on_load = _to_bool(value, "validate_on_load")
            elif key == "base_path":
                base.base_path = None if value is None else str(value)
            elif key == "max_tex_coord":
                if value is None:
                    base.max_tex_coord = None
                elif isinstance(value, bool) or not isinstance(value, (int, str)):
                    raise TypeError("max_tex_coord must be an integer or None")
                else:
                    base.max_tex_coord = int(value)
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise TypeError(f"Document config file must hold a JSON object: {path}")
        return data
    raise ValueError(f"Unsupported document config file format: {path}")


def load_document_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> DocumentConfig:
    if isinstance(config, DocumentConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = DocumentConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = DocumentConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = DocumentConfig()
    else:
        raise TypeError("config must be DocumentConfig, mapping, path, or None")

    if overrides:
        cfg = DocumentConfig.from_mapping(overrides, cfg)
    cfg.validate()
    return cfg
