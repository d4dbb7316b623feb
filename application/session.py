"""Document session: both tree engines, pane focus and todo search.

The session is the single owner of document state while the UI runs. Each
``dispatch`` runs exactly one step and then rematerializes both trees, so the
next step always sees a consistent (store, tree) pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from core import EntityStore

from .commands import Command, SearchChar, Token
from .forest import TodoForest, WorkspaceForest
from .tree_engine import TreeEngine

logger = logging.getLogger("doneit.engine")


class Pane(Enum):
    WORKSPACES = "workspaces"
    TODOS = "todos"


@dataclass
class SearchState:
    active: bool = False
    query: str = ""
    matches: List[int] = field(default_factory=list)
    # -1 means no match visited yet; the first NextMatch lands on matches[0]
    index: int = -1

    def reset(self) -> None:
        self.query = ""
        self.matches = []
        self.index = -1


class Session:
    def __init__(self, store: Optional[EntityStore] = None):
        self.store = store if store is not None else EntityStore()
        self.workspaces = TreeEngine(WorkspaceForest(self.store), retained=self._retained)
        self.todos = TreeEngine(
            TodoForest(self.store, lambda: self.workspaces.selected),
            retained=self._retained,
        )
        self.active_pane = Pane.WORKSPACES
        self.search = SearchState()
        self.running = True
        self._current_workspace: Optional[int] = None
        self.refresh()

    @property
    def active_engine(self) -> TreeEngine:
        return self.todos if self.active_pane is Pane.TODOS else self.workspaces

    @property
    def selected_workspace(self) -> Optional[int]:
        return self.workspaces.selected

    def _retained(self) -> Set[int]:
        return self.workspaces.clipboard_closure() | self._workspace_clipboard_todos() | self.todos.clipboard_closure()

    def _workspace_clipboard_todos(self) -> Set[int]:
        todos: Set[int] = set()
        for handle in self.workspaces.clipboard:
            if self.store.has_workspace(handle):
                todos.update(self.store.workspace_todos(handle))
        return todos

    # -------------------------------------------------------------- dispatch
    def dispatch(self, token: Token) -> bool:
        """Run one command step, then rematerialize both trees."""
        if token is Command.QUIT:
            self.running = False
            return True
        engine = self.active_engine
        if self.active_pane is Pane.TODOS and self.search.active:
            handled = self._handle_search(token)
        elif engine.busy:
            handled = engine.handle(token)
        elif token is Command.SWITCH_PANE:
            self.active_pane = Pane.WORKSPACES if self.active_pane is Pane.TODOS else Pane.TODOS
            handled = True
        elif token is Command.BEGIN_SEARCH:
            handled = self._begin_search()
        elif token is Command.NEXT_MATCH:
            handled = self._next_match()
        else:
            handled = engine.handle(token)
            if handled and engine is self.workspaces and token in (Command.EXPAND, Command.COLLAPSE):
                self.todos.reset_selection()
        self.refresh()
        return handled

    def refresh(self) -> None:
        self.workspaces.refresh()
        if self.workspaces.selected != self._current_workspace:
            self._current_workspace = self.workspaces.selected
            self.todos.reset_selection()
            self.search.reset()
        self.todos.refresh()

    # ---------------------------------------------------------------- search
    def _begin_search(self) -> bool:
        if self.active_pane is not Pane.TODOS:
            return False
        self.search.active = True
        self.search.reset()
        return True

    def _handle_search(self, token: Token) -> bool:
        if isinstance(token, SearchChar):
            self.search.query += token.char
            self._update_matches()
            return True
        if token is Command.SEARCH_BACKSPACE:
            if not self.search.query:
                return False
            self.search.query = self.search.query[:-1]
            self._update_matches()
            return True
        if token is Command.END_SEARCH:
            self.search.active = False
            self.search.query = ""
            return True
        return False

    def _update_matches(self) -> None:
        self.search.matches = []
        self.search.index = -1
        needle = self.search.query.lower()
        if not needle:
            return
        forest = self.todos.forest
        roots = forest.roots()
        if roots is None:
            return
        containing: Set[int] = set()
        # (handle, ancestors) pairs, pre-order
        stack = [(root, ()) for root in reversed(roots)]
        while stack:
            handle, ancestors = stack.pop()
            if needle in forest.entity(handle).description.lower():
                self.search.matches.append(handle)
                containing.update(ancestors)
            trail = ancestors + (handle,)
            for child in reversed(forest.children(handle)):
                stack.append((child, trail))
        self.todos.opened = containing
        logger.debug("search %r matched %s todos", self.search.query, len(self.search.matches))

    def _next_match(self) -> bool:
        if self.active_pane is not Pane.TODOS or not self.search.matches:
            return False
        self.search.index = (self.search.index + 1) % len(self.search.matches)
        self.todos.select(self.search.matches[self.search.index])
        return True

    def is_match(self, handle: int) -> bool:
        return handle in self.search.matches


__all__ = ["Session", "Pane", "SearchState"]
