# Module census over a set of chunks.
#
# Every listed module occurrence becomes one ModuleInfo entry, so a module
# that ships in three chunks yields three entries.  Two flags are derived:
#
#   is_duplicate: the name occurs in two or more entries (counted over the
#                 flattened list, so a name listed twice in one chunk also
#                 counts as duplicated).
#
#   is_dead_code: heuristic only, the name is not shipped in any entry chunk
#                 AND occurs in just one entry.  There is no reachability
#                 graph; singly-referenced page code outside an entry chunk
#                 is reported as dead.

from __future__ import annotations

import heapq
from collections import Counter
from collections.abc import Sequence
from dataclasses import replace

from vantage.models.bundle import Chunk, ModuleInfo

LARGEST_MODULES_LIMIT = 10


def count_unique_modules(chunks: Sequence[Chunk]) -> int:
    names: set[str] = set()
    for chunk in chunks:
        if chunk.modules:
            names.update(chunk.modules)
    return len(names)


def extract_module_info(chunks: Sequence[Chunk]) -> list[ModuleInfo]:
    """One entry per (chunk, listed module); size is the recorded size or 0."""
    modules: list[ModuleInfo] = []
    for chunk in chunks:
        if not chunk.modules:
            continue
        for name in chunk.modules:
            modules.append(ModuleInfo(name=name, size=chunk.module_size(name), path=chunk.name))
    return modules


def _multi_occurrence(modules: Sequence[ModuleInfo]) -> set[str]:
    counts = Counter(module.name for module in modules)
    return {name for name, count in counts.items() if count > 1}


def find_duplicates(modules: Sequence[ModuleInfo]) -> tuple[list[ModuleInfo], set[str]]:
    """Flag duplicated entries.

    Returns the full list with ``is_duplicate`` applied and the set of
    duplicated names.
    """
    duplicated = _multi_occurrence(modules)
    flagged = [replace(module, is_duplicate=True) if module.name in duplicated else module for module in modules]
    return flagged, duplicated


def is_entry_chunk(chunk: Chunk) -> bool:
    return "pages/" in chunk.name or "main" in chunk.name or chunk.name.startswith("_")


def find_dead_code(modules: Sequence[ModuleInfo], chunks: Sequence[Chunk]) -> list[ModuleInfo]:
    entry_modules: set[str] = set()
    for chunk in chunks:
        if chunk.modules and is_entry_chunk(chunk):
            entry_modules.update(chunk.modules)

    shared = _multi_occurrence(modules)
    return [
        replace(module, is_dead_code=True)
        for module in modules
        if module.name not in entry_modules and module.name not in shared
    ]


def largest_modules(modules: Sequence[ModuleInfo], limit: int = LARGEST_MODULES_LIMIT) -> list[ModuleInfo]:
    """Top *limit* entries by size; equal sizes keep their input order."""
    return heapq.nlargest(limit, modules, key=lambda module: module.size)
