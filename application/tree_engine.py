"""Selection, editing, clipboard and sorting over one forest.

One ``TreeEngine`` instance drives the workspace tree and another drives the
todo tree of the selected workspace. The algorithms are identical; everything
kind-specific lives behind the ``Forest`` adapter.

Every handle the engine dereferences comes from the tree it materialized on
the previous step, or from its clipboard (whose entries are kept alive in the
arena). ``handle()`` returns ``True`` when the token changed state and
``False`` for a no-op (empty clipboard, nothing selected, list boundary).
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Callable, Dict, List, Optional, Set

from core import TreeRecord, index_of, materialize, record_for

from .commands import Command, EditChar, SortChoice, SortKey, Token
from .forest import Forest

logger = logging.getLogger("doneit.engine")


class TreeEngine:
    def __init__(self, forest: Forest, retained: Optional[Callable[[], AbstractSet[int]]] = None):
        self.forest = forest
        self._retained = retained or (lambda: self.clipboard_closure())
        self.tree: List[TreeRecord] = []
        self.selected: Optional[int] = None
        self.opened: Set[int] = set()
        self.multi_selected: Set[int] = set()
        self.clipboard: List[int] = []
        # Editing
        self.editing: Optional[int] = None
        self.edit_buffer: str = ""
        # Sorting: armed flag plus the node whose container gets sorted
        self.sorting: bool = False
        self.sort_anchor: Optional[int] = None

        self._handlers: Dict[Command, Callable[[], bool]] = {
            Command.MOVE_UP: lambda: self.move(-1),
            Command.MOVE_DOWN: lambda: self.move(1),
            Command.EXPAND: self.expand,
            Command.COLLAPSE: self.collapse,
            Command.BEGIN_EDIT: self.begin_edit,
            Command.INSERT_SIBLING: self.insert_sibling,
            Command.INSERT_CHILD: self.insert_child,
            Command.DELETE: self.delete_selected,
            Command.TOGGLE_DONE: self.toggle_done,
            Command.URGENCY_UP: lambda: self.change_urgency(1),
            Command.URGENCY_DOWN: lambda: self.change_urgency(-1),
            Command.SWAP_UP: lambda: self.swap(-1),
            Command.SWAP_DOWN: lambda: self.swap(1),
            Command.BEGIN_SORT: self.begin_sort,
            Command.COPY: self.copy,
            Command.CUT: self.cut,
            Command.PASTE: self.paste,
            Command.PASTE_AS_CHILD: self.paste_as_child,
            Command.TOGGLE_MULTI_SELECT: self.toggle_multi_select,
        }
        self.refresh()

    # ------------------------------------------------------------------ state
    @property
    def busy(self) -> bool:
        """True while a modal sub-state (edit or sort) owns the keyboard."""
        return self.editing is not None or self.sorting

    def selected_index(self) -> Optional[int]:
        return index_of(self.tree, self.selected)

    def reset_selection(self) -> None:
        self.selected = None
        self.multi_selected.clear()

    def clipboard_closure(self) -> Set[int]:
        """Every handle reachable from a clipboard entry."""
        closure: Set[int] = set()
        for handle in self.clipboard:
            if not self.forest.exists(handle):
                continue
            stack = [handle]
            while stack:
                current = stack.pop()
                closure.add(current)
                stack.extend(self.forest.children(current))
        return closure

    def refresh(self) -> None:
        """Rematerialize, then pull selection and multi-selection back onto live nodes."""
        self._rematerialize()
        if self.selected is not None and index_of(self.tree, self.selected) is None:
            self.selected = self._nearest_visible(self.selected)
        if self.multi_selected:
            reachable = set(self.forest.walk())
            self.multi_selected &= reachable

    def _rematerialize(self) -> None:
        roots = self.forest.roots() or []
        self.tree = materialize(roots, self.forest.children, self.opened)

    def _nearest_visible(self, handle: int) -> Optional[int]:
        path = self.forest.path_to(handle) if self.forest.exists(handle) else None
        if path is None:
            return self.tree[0].handle if self.tree else None
        for ancestor in reversed(path):
            if index_of(self.tree, ancestor) is not None:
                return ancestor
        return self.tree[0].handle if self.tree else None

    def _container_of(self, handle: int) -> List[int]:
        record = record_for(self.tree, handle)
        if record is None:
            return self.forest.container_of(handle)
        if record.parent is None:
            return self.forest.roots() or []
        return self.forest.children(record.parent)

    # -------------------------------------------------------------- dispatch
    def handle(self, token: Token) -> bool:
        if self.editing is not None:
            return self._handle_edit(token)
        if self.sorting:
            return self._handle_sort(token)
        if not isinstance(token, Command):
            return False
        handler = self._handlers.get(token)
        if handler is None:
            return False
        return handler()

    # ------------------------------------------------------------ navigation
    def move(self, delta: int) -> bool:
        if not self.tree:
            return False
        idx = self.selected_index()
        if idx is None:
            if delta <= 0:
                return False
            self.selected = self.tree[0].handle
            return True
        target = idx + delta
        if target < 0 or target >= len(self.tree):
            return False
        self.selected = self.tree[target].handle
        return True

    def expand(self) -> bool:
        if self.selected is None:
            return False
        self.opened.add(self.selected)
        return True

    def collapse(self) -> bool:
        if self.selected is None:
            return False
        self.opened.discard(self.selected)
        return True

    def select(self, handle: int) -> bool:
        if index_of(self.tree, handle) is None:
            return False
        self.selected = handle
        return True

    # --------------------------------------------------------------- editing
    def begin_edit(self) -> bool:
        if self.selected is None:
            return False
        self._start_edit(self.selected, self.forest.entity(self.selected).description)
        return True

    def _start_edit(self, handle: int, seed: str) -> None:
        self.editing = handle
        self.edit_buffer = seed

    def _handle_edit(self, token: Token) -> bool:
        if isinstance(token, EditChar):
            self.edit_buffer += token.char
            return True
        if token is Command.EDIT_BACKSPACE:
            if not self.edit_buffer:
                return False
            self.edit_buffer = self.edit_buffer[:-1]
            return True
        if token is Command.EDIT_CLEAR:
            self.edit_buffer = ""
            return True
        if token is Command.COMMIT_EDIT:
            self.forest.entity(self.editing).description = self.edit_buffer
            self._end_edit()
            return True
        if token is Command.CANCEL_EDIT:
            self._end_edit()
            return True
        return False

    def _end_edit(self) -> None:
        self.editing = None
        self.edit_buffer = ""

    # ------------------------------------------------------------- insertion
    def insert_sibling(self) -> bool:
        roots = self.forest.roots()
        if roots is None:
            return False
        if self.selected is not None:
            container = self._container_of(self.selected)
            handle = self.forest.create_blank()
            container.insert(container.index(self.selected) + 1, handle)
        else:
            handle = self.forest.create_blank()
            roots.append(handle)
        self.selected = handle
        self._start_edit(handle, "")
        self._rematerialize()
        return True

    def insert_child(self) -> bool:
        if self.selected is None:
            return False
        parent = self.selected
        handle = self.forest.create_blank()
        self.forest.children(parent).append(handle)
        self.opened.add(parent)
        self.selected = handle
        self._start_edit(handle, "")
        self._rematerialize()
        return True

    # -------------------------------------------------------------- deletion
    def delete_selected(self) -> bool:
        if self.selected is None:
            return False
        handle = self.selected
        self._detach(handle)
        self._reclaim([handle])
        return True

    def _detach(self, handle: int) -> None:
        """Unlink ``handle`` from its container and re-anchor the selection."""
        deleted_index = index_of(self.tree, handle)
        anchor = deleted_index if deleted_index is not None else self.selected_index()
        container = self._container_of(handle)
        container.remove(handle)
        self._rematerialize()
        if not self.tree:
            self.selected = None
        elif anchor is not None and (deleted_index is not None or self.selected_index() is None):
            self.selected = self.tree[min(anchor, len(self.tree) - 1)].handle
        self.multi_selected.discard(handle)

    def _reclaim(self, handles: List[int]) -> None:
        retained = self._retained()
        dropped = 0
        for handle in handles:
            if self.forest.exists(handle):
                dropped += self.forest.reclaim(handle, retained)
        if dropped:
            logger.debug("reclaimed %s %s entities", dropped, self.forest.kind)

    # ------------------------------------------------------------ attributes
    def toggle_done(self) -> bool:
        if self.selected is None or not self.forest.has_status:
            return False
        self.forest.entity(self.selected).toggle_done()
        return True

    def change_urgency(self, delta: int) -> bool:
        if self.selected is None or not self.forest.has_status:
            return False
        entity = self.forest.entity(self.selected)
        return entity.raise_urgency() if delta > 0 else entity.lower_urgency()

    # ------------------------------------------------------------ reordering
    def swap(self, delta: int) -> bool:
        if self.selected is None:
            return False
        container = self._container_of(self.selected)
        idx = container.index(self.selected)
        target = idx + delta
        if target < 0 or target >= len(container):
            return False
        container[idx], container[target] = container[target], container[idx]
        return True

    def begin_sort(self) -> bool:
        if self.forest.roots() is None:
            return False
        self.sorting = True
        self.sort_anchor = self.selected
        return True

    def _handle_sort(self, token: Token) -> bool:
        if token is Command.CANCEL_EDIT:
            self._end_sort()
            return True
        if not isinstance(token, SortChoice) or token.key not in self.forest.sort_keys:
            return False
        if self.sort_anchor is not None and self.forest.exists(self.sort_anchor):
            container = self._container_of(self.sort_anchor)
        else:
            container = self.forest.roots() or []
        if token.key is SortKey.REVERSE:
            container.reverse()
        else:
            container.sort(key=lambda h: self.forest.sort_value(h, token.key))
        self._end_sort()
        return True

    def _end_sort(self) -> None:
        self.sorting = False
        self.sort_anchor = None

    # ------------------------------------------------------------- clipboard
    def _clipboard_candidates(self) -> List[int]:
        if self.multi_selected:
            ordered = [h for h in self.forest.walk() if h in self.multi_selected]
            return self._outermost(ordered)
        if self.selected is not None:
            return [self.selected]
        return []

    def _outermost(self, handles: List[int]) -> List[int]:
        chosen = set(handles)
        result = []
        for handle in handles:
            path = self.forest.path_to(handle) or []
            if not any(ancestor in chosen for ancestor in path):
                result.append(handle)
        return result

    def copy(self) -> bool:
        entries = self._clipboard_candidates()
        if not entries:
            return False
        previous, self.clipboard = self.clipboard, entries
        self._release(previous)
        return True

    def _release(self, previous: List[int]) -> None:
        """Reclaim replaced clipboard entries that nothing links to any more."""
        stale = [h for h in previous if self.forest.exists(h) and not self.forest.attached(h)]
        if stale:
            self._reclaim(stale)

    def cut(self) -> bool:
        if not self.copy():
            return False
        for handle in self.clipboard:
            self._detach(handle)
        self.multi_selected.clear()
        self.refresh()
        return True

    def paste(self) -> bool:
        if not self.clipboard:
            return False
        roots = self.forest.roots()
        if roots is None:
            return False
        if self.selected is not None:
            container = self._container_of(self.selected)
            position = container.index(self.selected) + 1
        else:
            container = roots
            position = len(container)
        clones = [self.forest.clone(handle) for handle in self.clipboard]
        container[position:position] = clones
        self.multi_selected.clear()
        return True

    def paste_as_child(self) -> bool:
        if not self.clipboard or self.selected is None:
            return False
        clone = self.forest.clone(self.clipboard[0])
        self.forest.children(self.selected).append(clone)
        return True

    def toggle_multi_select(self) -> bool:
        if self.selected is None:
            return False
        if self.selected in self.multi_selected:
            self.multi_selected.discard(self.selected)
        else:
            self.multi_selected.add(self.selected)
        return True


__all__ = ["TreeEngine"]
