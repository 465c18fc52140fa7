"""
Change-set descriptor handed to the pre-commit hooks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet


@dataclass(frozen=True)
class ChangeSet:
    """Whether a record is new and which of its fields changed since load."""

    is_new: bool
    modified: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def for_insert(cls) -> "ChangeSet":
        return cls(is_new=True)

    @classmethod
    def for_update(cls, before: Dict[str, Any], after: Dict[str, Any]) -> "ChangeSet":
        keys = set(before) | set(after)
        modified = frozenset(k for k in keys if before.get(k) != after.get(k))
        return cls(is_new=False, modified=modified)

    def touches(self, name: str) -> bool:
        return self.is_new or name in self.modified
