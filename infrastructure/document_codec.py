"""Nested-by-value document form <-> arena store.

On disk the document is ``{"workspaces": [Workspace]}`` where every node holds
its children by value and carries a stable string ``id``. Handles never appear
in this form; they are assigned fresh when the arena is built.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Set

from core import DocumentFormatError, EntityStore, Todo, Workspace, clamp_urgency, new_id

logger = logging.getLogger("doneit.persistence")


# ---------------------------------------------------------------------- due
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_epoch(value: Any, secs: float, nanos: int = 0) -> datetime:
    try:
        return EPOCH + timedelta(seconds=secs, microseconds=nanos // 1000)
    except (OverflowError, OSError, ValueError) as exc:
        raise DocumentFormatError(f"due timestamp out of range: {value!r}") from exc


def parse_due(value: Any) -> Optional[datetime]:
    """Accept ``{secs_since_epoch, nanos_since_epoch}``, epoch seconds, or ISO-8601 text."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise DocumentFormatError(f"invalid due value: {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch(value, value)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise DocumentFormatError(f"invalid due timestamp: {value!r}") from exc
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, dict) and "secs_since_epoch" in value:
        try:
            secs = int(value["secs_since_epoch"])
            nanos = int(value.get("nanos_since_epoch", 0))
        except (TypeError, ValueError, OverflowError) as exc:
            raise DocumentFormatError(f"invalid due timestamp: {value!r}") from exc
        return _from_epoch(value, secs, nanos)
    raise DocumentFormatError(f"invalid due value: {value!r}")


def format_due(value: Optional[datetime]) -> Optional[Dict[str, int]]:
    """Write ``due`` as ``{secs_since_epoch, nanos_since_epoch}`` in UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - EPOCH
    return {
        "secs_since_epoch": delta.days * 86400 + delta.seconds,
        "nanos_since_epoch": delta.microseconds * 1000,
    }


# --------------------------------------------------------------------- load
class _Loader:
    def __init__(self) -> None:
        self.store = EntityStore()
        self.seen_ids: Set[str] = set()

    def _take_id(self, node: Dict[str, Any]) -> str:
        raw = node.get("id")
        if raw is not None and not isinstance(raw, str):
            raise DocumentFormatError(f"id must be a string, got {type(raw).__name__}")
        if not raw:
            return self._remember(new_id())
        if raw in self.seen_ids:
            fresh = new_id()
            logger.warning("duplicate id %s in document, reassigned %s", raw, fresh)
            return self._remember(fresh)
        return self._remember(raw)

    def _remember(self, value: str) -> str:
        self.seen_ids.add(value)
        return value

    def todo(self, node: Any) -> int:
        node = _expect_object(node, "todo")
        todo = Todo(
            id=self._take_id(node),
            description=_expect_str(node.get("description", ""), "description"),
            pending=_expect_bool(node.get("pending", True), "pending"),
            urgency=clamp_urgency(_expect_uint(node.get("urgency", 0), "urgency")),
            effort=_expect_uint(node.get("effort", 0), "effort"),
            due=parse_due(node.get("due")),
        )
        handle = self.store.create_todo(todo)
        todo.children = [self.todo(child) for child in _expect_list(node.get("children", []), "children")]
        return handle

    def workspace(self, node: Any) -> int:
        node = _expect_object(node, "workspace")
        workspace = Workspace(
            id=self._take_id(node),
            description=_expect_str(node.get("description", ""), "description"),
        )
        handle = self.store.create_workspace(workspace)
        workspace.children = [self.workspace(child) for child in _expect_list(node.get("children", []), "children")]
        workspace.todos = [self.todo(todo) for todo in _expect_list(node.get("todos", []), "todos")]
        return handle


def _expect_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DocumentFormatError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _expect_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentFormatError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _expect_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise DocumentFormatError(f"{what} must be a string, got {type(value).__name__}")
    return value


def _expect_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise DocumentFormatError(f"{what} must be a boolean, got {type(value).__name__}")
    return value


def _expect_uint(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DocumentFormatError(f"{what} must be a non-negative integer, got {value!r}")
    return value


def store_from_document(data: Any) -> EntityStore:
    """Build an arena store from the nested form, preserving list order."""
    data = _expect_object(data, "document")
    loader = _Loader()
    loader.store.root_workspaces = [
        loader.workspace(node) for node in _expect_list(data.get("workspaces", []), "workspaces")
    ]
    return loader.store


# --------------------------------------------------------------------- save
def todo_to_dict(store: EntityStore, handle: int) -> Dict[str, Any]:
    todo = store.todo(handle)
    return {
        "id": todo.id,
        "description": todo.description,
        "due": format_due(todo.due),
        "effort": todo.effort,
        "urgency": todo.urgency,
        "pending": todo.pending,
        "children": [todo_to_dict(store, child) for child in todo.children],
    }


def workspace_to_dict(store: EntityStore, handle: int) -> Dict[str, Any]:
    workspace = store.workspace(handle)
    return {
        "id": workspace.id,
        "description": workspace.description,
        "children": [workspace_to_dict(store, child) for child in workspace.children],
        "todos": [todo_to_dict(store, todo) for todo in workspace.todos],
    }


def store_to_document(store: EntityStore) -> Dict[str, Any]:
    """Walk the live child lists back into the nested form."""
    return {"workspaces": [workspace_to_dict(store, root) for root in store.root_workspaces]}


__all__ = [
    "parse_due",
    "format_due",
    "store_from_document",
    "store_to_document",
    "todo_to_dict",
    "workspace_to_dict",
]
