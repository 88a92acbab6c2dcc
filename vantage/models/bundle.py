from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from vantage.models.enums import TreemapKind


def _byte_count(raw: Any, key: str) -> int:
    # bool is an int subclass; true/false is never a byte count.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{key}: expected a number of bytes, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"{key}: expected a whole number of bytes, got {raw!r}")
    if raw < 0:
        raise ValueError(f"{key}: must be >= 0, got {raw!r}")
    return int(raw)


@dataclass(slots=True, frozen=True)
class Chunk:
    id: str
    name: str
    size: int
    files: tuple[str, ...] = ()
    modules: tuple[str, ...] | None = None
    module_sizes: Mapping[str, int] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        # Read-only copy, so mutating the caller's dict leaves the chunk unchanged.
        if self.module_sizes is not None:
            object.__setattr__(self, "module_sizes", MappingProxyType(dict(self.module_sizes)))

    def module_size(self, module: str) -> int:
        """Recorded size of *module* in this chunk, 0 when unknown."""
        if self.module_sizes is None:
            return 0
        return self.module_sizes.get(module, 0)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "files": list(self.files),
        }
        if self.modules is not None:
            payload["modules"] = list(self.modules)
        if self.module_sizes is not None:
            payload["moduleSizes"] = dict(self.module_sizes)
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Chunk:
        chunk_id = str(payload["id"])
        modules_raw = payload.get("modules")
        sizes_raw = payload.get("moduleSizes")
        return cls(
            id=chunk_id,
            name=str(payload.get("name", chunk_id)),
            size=_byte_count(payload["size"], "size"),
            files=tuple(str(f) for f in payload.get("files", ())),
            modules=tuple(str(m) for m in modules_raw) if modules_raw is not None else None,
            module_sizes=(
                {str(k): _byte_count(v, f"moduleSizes.{k}") for k, v in sizes_raw.items()}
                if sizes_raw is not None
                else None
            ),
        )


@dataclass(slots=True, frozen=True)
class ModuleInfo:
    name: str
    size: int
    path: str
    dependencies: tuple[str, ...] = ()
    is_duplicate: bool = False
    is_dead_code: bool = False


@dataclass(slots=True, frozen=True)
class BundleAnalysis:
    total_size: int
    chunk_count: int
    total_modules: int
    duplicate_modules: int
    dead_code_modules: int
    largest_modules: list[ModuleInfo]
    modules: list[ModuleInfo]


@dataclass(slots=True, frozen=True)
class ModifiedChunk:
    chunk: Chunk
    old_size: int
    new_size: int
    size_delta: int


@dataclass(slots=True, frozen=True)
class BundleDiff:
    added_chunks: list[Chunk]
    removed_chunks: list[Chunk]
    modified_chunks: list[ModifiedChunk]
    total_size_change: int

    @property
    def has_changes(self) -> bool:
        return bool(self.added_chunks or self.removed_chunks or self.modified_chunks)


@dataclass(slots=True, frozen=True)
class BudgetResult:
    path: str
    current_size: int
    max_size: int
    exceeds: bool


@dataclass(slots=True)
class TreemapNode:
    name: str
    value: int
    kind: TreemapKind
    children: list[TreemapNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "type": self.kind.value,
            "children": [child.to_dict() for child in self.children],
        }
