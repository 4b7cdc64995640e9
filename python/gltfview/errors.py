# python/gltfview/errors.py
# Error types raised when a glTF document violates its own cross-references
# Exists so loaders can catch malformed material data and report where it broke
# RELEVANT FILES: python/gltfview/material.py, python/gltfview/validate.py, tests/test_validate.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class IntegrityIssue:
    """One broken field found while reading or validating a document."""
    record: str
    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.record}: {self.field}: {self.message}"


class DocumentIntegrityError(ValueError):
    """A record refers to something the document does not contain.

    Raised for out-of-range or non-integer indices, a missing required
    ``index``, unknown ``alphaMode`` strings and factor vectors of the wrong
    length. ``record`` names the offending record (e.g. ``materials[2] 'Brass'``)
    and ``field`` the offending field (e.g. ``normalTexture.index``).
    """

    def __init__(
        self,
        message: str,
        *,
        record: str,
        field: str,
        value: Any = None,
        issues: Optional[Sequence[IntegrityIssue]] = None,
    ):
        super().__init__(f"{record}: {field}: {message}")
        self.record = record
        self.field = field
        self.value = value
        self.issues = tuple(issues) if issues is not None else (
            IntegrityIssue(record=record, field=field, message=message, value=value),
        )

    @classmethod
    def from_issues(cls, issues: Sequence[IntegrityIssue]) -> "DocumentIntegrityError":
        if not issues:
            raise ValueError("from_issues requires at least one issue")
        first = issues[0]
        message = first.message
        if len(issues) > 1:
            message = f"{message} (and {len(issues) - 1} more issue(s))"
        return cls(
            message,
            record=first.record,
            field=first.field,
            value=first.value,
            issues=issues,
        )
