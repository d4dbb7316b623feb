"""Forest adapters: the capability set the tree engine is written against.

Both entity kinds expose the same shape to the engine: a top-level container,
ordered child lists, blank creation, deep cloning and reclaiming. The engine
never touches ``Workspace`` or ``Todo`` fields directly except ``description``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AbstractSet, Callable, FrozenSet, List, Optional, Union

from core import EntityStore, InternalConsistencyError, Todo, Workspace

logger = logging.getLogger("doneit.engine")

Entity = Union[Workspace, Todo]


class SortKey(Enum):
    REVERSE = "reverse"
    DESCRIPTION = "description"
    PENDING = "pending"
    URGENCY = "urgency"


class Forest:
    """Base adapter; subclasses bind it to one arena of the store."""

    kind: str = ""
    sort_keys: FrozenSet[SortKey] = frozenset({SortKey.REVERSE, SortKey.DESCRIPTION})
    has_status: bool = False

    def __init__(self, store: EntityStore):
        self.store = store

    def roots(self) -> Optional[List[int]]:
        raise NotImplementedError

    def children(self, handle: int) -> List[int]:
        raise NotImplementedError

    def entity(self, handle: int) -> Entity:
        raise NotImplementedError

    def exists(self, handle: int) -> bool:
        raise NotImplementedError

    def attached(self, handle: int) -> bool:
        """True while ``handle`` hangs off the document, in any workspace."""
        raise NotImplementedError

    def create_blank(self) -> int:
        raise NotImplementedError

    def clone(self, handle: int) -> int:
        raise NotImplementedError

    def reclaim(self, handle: int, retained: AbstractSet[int]) -> int:
        """Drop a detached subtree from the arena, sparing retained handles."""
        raise NotImplementedError

    def sort_value(self, handle: int, key: SortKey):
        if key is SortKey.DESCRIPTION:
            return self.entity(handle).description
        raise ValueError(f"{self.kind} cannot be sorted by {key.value}")

    # ---------------------------------------------------------------- queries
    def walk(self) -> List[int]:
        """Every reachable handle, pre-order, regardless of expansion."""
        result: List[int] = []
        stack = list(reversed(self.roots() or []))
        while stack:
            handle = stack.pop()
            result.append(handle)
            stack.extend(reversed(self.children(handle)))
        return result

    def path_to(self, handle: int) -> Optional[List[int]]:
        """Ancestors of ``handle`` from the top down, or None when unreachable."""
        roots = self.roots() or []
        stack = [(root, []) for root in reversed(roots)]
        while stack:
            current, ancestors = stack.pop()
            if current == handle:
                return ancestors
            trail = ancestors + [current]
            for child in reversed(self.children(current)):
                stack.append((child, trail))
        return None

    def container_of(self, handle: int) -> List[int]:
        """Locate the list that holds ``handle`` by walking the forest."""
        path = self.path_to(handle)
        if path is None:
            raise InternalConsistencyError(f"{self.kind} handle {handle} is not attached")
        if not path:
            return self.roots() or []
        return self.children(path[-1])


class WorkspaceForest(Forest):
    kind = "workspace"

    def roots(self) -> Optional[List[int]]:
        return self.store.root_workspaces

    def children(self, handle: int) -> List[int]:
        return self.store.workspace(handle).children

    def entity(self, handle: int) -> Workspace:
        return self.store.workspace(handle)

    def exists(self, handle: int) -> bool:
        return self.store.has_workspace(handle)

    def attached(self, handle: int) -> bool:
        return handle in set(self.store.reachable_workspaces())

    def create_blank(self) -> int:
        return self.store.new_workspace()

    def clone(self, handle: int) -> int:
        return self.store.clone_workspace(handle)

    def reclaim(self, handle: int, retained: AbstractSet[int]) -> int:
        if handle in retained:
            return 0
        dropped = 0
        for ws_handle in self.store.subtree_workspaces(handle):
            if ws_handle in retained:
                continue
            for todo_handle in list(self.store.workspace(ws_handle).todos):
                dropped += _reclaim_todos(self.store, todo_handle, retained)
            self.store.delete_workspace(ws_handle)
            dropped += 1
        return dropped


class TodoForest(Forest):
    kind = "todo"
    sort_keys = frozenset(SortKey)
    has_status = True

    def __init__(self, store: EntityStore, workspace_selector: Callable[[], Optional[int]]):
        super().__init__(store)
        self._workspace_selector = workspace_selector

    def roots(self) -> Optional[List[int]]:
        workspace = self._workspace_selector()
        if workspace is None:
            return None
        return self.store.workspace(workspace).todos

    def children(self, handle: int) -> List[int]:
        return self.store.todo(handle).children

    def entity(self, handle: int) -> Todo:
        return self.store.todo(handle)

    def exists(self, handle: int) -> bool:
        return self.store.has_todo(handle)

    def attached(self, handle: int) -> bool:
        return handle in set(self.store.reachable_todos())

    def create_blank(self) -> int:
        return self.store.new_todo()

    def clone(self, handle: int) -> int:
        return self.store.clone_todo(handle)

    def reclaim(self, handle: int, retained: AbstractSet[int]) -> int:
        return _reclaim_todos(self.store, handle, retained)

    def sort_value(self, handle: int, key: SortKey):
        todo = self.store.todo(handle)
        if key is SortKey.PENDING:
            return todo.pending
        if key is SortKey.URGENCY:
            return todo.urgency
        return super().sort_value(handle, key)


def _reclaim_todos(store: EntityStore, handle: int, retained: AbstractSet[int]) -> int:
    dropped = 0
    for todo_handle in store.subtree_todos(handle):
        if todo_handle in retained:
            continue
        store.delete_todo(todo_handle)
        dropped += 1
    return dropped


__all__ = ["Forest", "WorkspaceForest", "TodoForest", "SortKey", "Entity"]
