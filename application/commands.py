"""Abstract command tokens consumed by the tree engines and the session."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .forest import SortKey


class Command(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    EXPAND = "expand"
    COLLAPSE = "collapse"
    BEGIN_EDIT = "begin_edit"
    COMMIT_EDIT = "commit_edit"
    CANCEL_EDIT = "cancel_edit"
    EDIT_BACKSPACE = "edit_backspace"
    EDIT_CLEAR = "edit_clear"
    INSERT_SIBLING = "insert_sibling"
    INSERT_CHILD = "insert_child"
    DELETE = "delete"
    TOGGLE_DONE = "toggle_done"
    URGENCY_UP = "urgency_up"
    URGENCY_DOWN = "urgency_down"
    SWAP_UP = "swap_up"
    SWAP_DOWN = "swap_down"
    BEGIN_SORT = "begin_sort"
    COPY = "copy"
    CUT = "cut"
    PASTE = "paste"
    PASTE_AS_CHILD = "paste_as_child"
    TOGGLE_MULTI_SELECT = "toggle_multi_select"
    BEGIN_SEARCH = "begin_search"
    SEARCH_BACKSPACE = "search_backspace"
    END_SEARCH = "end_search"
    NEXT_MATCH = "next_match"
    SWITCH_PANE = "switch_pane"
    QUIT = "quit"


@dataclass(frozen=True)
class SortChoice:
    key: SortKey


@dataclass(frozen=True)
class SearchChar:
    char: str


@dataclass(frozen=True)
class EditChar:
    char: str


Token = Union[Command, SortChoice, SearchChar, EditChar]


__all__ = ["Command", "SortChoice", "SearchChar", "EditChar", "SortKey", "Token"]
