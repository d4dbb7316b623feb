"""Arena storage for workspaces and todos.

Entities live in two flat dictionaries keyed by integer handles. Handles are
process-local: they are handed out by a counter, never reused, and never
written to disk. Parent/child structure is expressed only through the ordered
handle lists on each entity plus the ordered list of root workspaces.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from itertools import count
from typing import Dict, Iterator, List, Optional

from .entities import Todo, Workspace
from .errors import InternalConsistencyError

logger = logging.getLogger("doneit.store")


def new_id() -> str:
    return str(uuid.uuid4())


class EntityStore:
    def __init__(self) -> None:
        self._workspaces: Dict[int, Workspace] = {}
        self._todos: Dict[int, Todo] = {}
        self.root_workspaces: List[int] = []
        self._handles = count(1)

    # ------------------------------------------------------------------ create
    def create_workspace(self, workspace: Workspace) -> int:
        handle = next(self._handles)
        self._workspaces[handle] = workspace
        return handle

    def create_todo(self, todo: Todo) -> int:
        handle = next(self._handles)
        self._todos[handle] = todo
        return handle

    def new_workspace(self, description: str = "") -> int:
        return self.create_workspace(Workspace(id=new_id(), description=description))

    def new_todo(self, description: str = "") -> int:
        return self.create_todo(Todo(id=new_id(), description=description))

    # ------------------------------------------------------------------ lookup
    def workspace(self, handle: int) -> Workspace:
        try:
            return self._workspaces[handle]
        except KeyError:
            logger.error("unresolved workspace handle %s", handle)
            raise InternalConsistencyError(f"workspace handle {handle} does not resolve") from None

    def todo(self, handle: int) -> Todo:
        try:
            return self._todos[handle]
        except KeyError:
            logger.error("unresolved todo handle %s", handle)
            raise InternalConsistencyError(f"todo handle {handle} does not resolve") from None

    def find_workspace(self, handle: int) -> Optional[Workspace]:
        return self._workspaces.get(handle)

    def find_todo(self, handle: int) -> Optional[Todo]:
        return self._todos.get(handle)

    def has_workspace(self, handle: int) -> bool:
        return handle in self._workspaces

    def has_todo(self, handle: int) -> bool:
        return handle in self._todos

    @property
    def workspace_count(self) -> int:
        return len(self._workspaces)

    @property
    def todo_count(self) -> int:
        return len(self._todos)

    # ------------------------------------------------------------------ delete
    def delete_workspace(self, handle: int) -> Workspace:
        """Remove a workspace from the arena and from whichever list holds it.

        Child workspaces and todos are left in the arena; callers reclaim them
        explicitly when the whole subtree should go.
        """
        workspace = self._workspaces.pop(handle, None)
        if workspace is None:
            raise InternalConsistencyError(f"workspace handle {handle} does not resolve")
        if handle in self.root_workspaces:
            self.root_workspaces.remove(handle)
        for other in self._workspaces.values():
            if handle in other.children:
                other.children.remove(handle)
                break
        return workspace

    def delete_todo(self, handle: int) -> Todo:
        todo = self._todos.pop(handle, None)
        if todo is None:
            raise InternalConsistencyError(f"todo handle {handle} does not resolve")
        for container in self._todo_containers():
            if handle in container:
                container.remove(handle)
                break
        return todo

    def _todo_containers(self) -> Iterator[List[int]]:
        for workspace in self._workspaces.values():
            yield workspace.todos
        for todo in self._todos.values():
            yield todo.children

    # ------------------------------------------------------------------- walks
    def subtree_workspaces(self, handle: int) -> List[int]:
        """Handles of a workspace and all nested workspaces, pre-order."""
        result: List[int] = []
        stack = [handle]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self.workspace(current).children))
        return result

    def subtree_todos(self, handle: int) -> List[int]:
        """Handles of a todo and all nested todos, pre-order."""
        result: List[int] = []
        stack = [handle]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self.todo(current).children))
        return result

    def workspace_todos(self, handle: int) -> List[int]:
        """Every todo reachable from a workspace subtree."""
        result: List[int] = []
        for ws_handle in self.subtree_workspaces(handle):
            for todo_handle in self.workspace(ws_handle).todos:
                result.extend(self.subtree_todos(todo_handle))
        return result

    def reachable_workspaces(self) -> List[int]:
        result: List[int] = []
        for root in self.root_workspaces:
            result.extend(self.subtree_workspaces(root))
        return result

    def reachable_todos(self) -> List[int]:
        result: List[int] = []
        for root in self.root_workspaces:
            result.extend(self.workspace_todos(root))
        return result

    def child_progress(self, handle: int) -> tuple[int, int]:
        """(done, total) over the direct children of a todo."""
        children = self.todo(handle).children
        done = sum(1 for child in children if not self.todo(child).pending)
        return done, len(children)

    # ------------------------------------------------------------------- clone
    def clone_todo(self, handle: int) -> int:
        source = self.todo(handle)
        copy = replace(source, id=new_id(), children=[])
        copy_handle = self.create_todo(copy)
        copy.children = [self.clone_todo(child) for child in source.children]
        return copy_handle

    def clone_workspace(self, handle: int) -> int:
        source = self.workspace(handle)
        copy = replace(source, id=new_id(), children=[], todos=[])
        copy_handle = self.create_workspace(copy)
        copy.children = [self.clone_workspace(child) for child in source.children]
        copy.todos = [self.clone_todo(todo) for todo in source.todos]
        return copy_handle


__all__ = ["EntityStore", "new_id"]
