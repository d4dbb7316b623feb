"""Flatten a forest into the visible, navigable row sequence."""

from dataclasses import dataclass
from typing import AbstractSet, Callable, List, Optional, Sequence


@dataclass(frozen=True)
class TreeRecord:
    handle: int
    parent: Optional[int]
    depth: int


def materialize(
    roots: Sequence[int],
    children_of: Callable[[int], Sequence[int]],
    opened: AbstractSet[int],
) -> List[TreeRecord]:
    """Depth-first pre-order walk that only descends into opened nodes."""
    records: List[TreeRecord] = []
    stack = [(handle, None, 0) for handle in reversed(roots)]
    while stack:
        handle, parent, depth = stack.pop()
        records.append(TreeRecord(handle, parent, depth))
        if handle in opened:
            for child in reversed(children_of(handle)):
                stack.append((child, handle, depth + 1))
    return records


def index_of(tree: Sequence[TreeRecord], handle: Optional[int]) -> Optional[int]:
    if handle is None:
        return None
    for idx, record in enumerate(tree):
        if record.handle == handle:
            return idx
    return None


def record_for(tree: Sequence[TreeRecord], handle: Optional[int]) -> Optional[TreeRecord]:
    idx = index_of(tree, handle)
    return tree[idx] if idx is not None else None


__all__ = ["TreeRecord", "materialize", "index_of", "record_for"]
