"""Translate prompt_toolkit key presses into command tokens.

The mapping depends on the session's modal state: edit buffer, live search
and armed sort each take the keyboard over from the normal map.
"""

from typing import Dict, Optional, Union

from prompt_toolkit.keys import Keys

from application import Command, EditChar, SearchChar, Session, SortChoice, SortKey, Token
from application.session import Pane

NORMAL_KEYMAP: Dict[str, Command] = {
    "j": Command.MOVE_DOWN,
    "down": Command.MOVE_DOWN,
    "k": Command.MOVE_UP,
    "up": Command.MOVE_UP,
    "l": Command.EXPAND,
    "right": Command.EXPAND,
    "h": Command.COLLAPSE,
    "left": Command.COLLAPSE,
    "i": Command.BEGIN_EDIT,
    "a": Command.INSERT_SIBLING,
    "A": Command.INSERT_CHILD,
    "d": Command.DELETE,
    "delete": Command.DELETE,
    "c": Command.TOGGLE_DONE,
    "+": Command.URGENCY_UP,
    "=": Command.URGENCY_UP,
    "_": Command.URGENCY_DOWN,
    "-": Command.URGENCY_DOWN,
    "K": Command.SWAP_UP,
    "J": Command.SWAP_DOWN,
    "c-s": Command.BEGIN_SORT,
    "s": Command.BEGIN_SORT,
    "y": Command.COPY,
    "x": Command.CUT,
    "p": Command.PASTE,
    "P": Command.PASTE_AS_CHILD,
    " ": Command.TOGGLE_MULTI_SELECT,
    "/": Command.BEGIN_SEARCH,
    "n": Command.NEXT_MATCH,
    "c-i": Command.SWITCH_PANE,  # tab
    "q": Command.QUIT,
    "escape": Command.QUIT,
    "c-c": Command.QUIT,
}

SORT_KEYMAP: Dict[str, SortKey] = {
    "1": SortKey.REVERSE,
    "2": SortKey.DESCRIPTION,
    "3": SortKey.PENDING,
    "4": SortKey.URGENCY,
}

ENTER = "c-m"
BACKSPACE = "c-h"


def key_name(key: Union[Keys, str]) -> str:
    return key.value if isinstance(key, Keys) else str(key)


def _printable(name: str) -> bool:
    return len(name) == 1 and name.isprintable()


def translate_key(session: Session, key: Union[Keys, str]) -> Optional[Token]:
    name = key_name(key)
    if name == "c-c":
        return Command.QUIT
    engine = session.active_engine

    if engine.editing is not None:
        if name == ENTER:
            return Command.COMMIT_EDIT
        if name == "escape":
            return Command.CANCEL_EDIT
        if name == BACKSPACE:
            return Command.EDIT_BACKSPACE
        if name == "c-u":
            return Command.EDIT_CLEAR
        return EditChar(name) if _printable(name) else None

    if session.active_pane is Pane.TODOS and session.search.active:
        if name in (ENTER, "escape"):
            return Command.END_SEARCH
        if name == BACKSPACE:
            return Command.SEARCH_BACKSPACE
        return SearchChar(name) if _printable(name) else None

    if engine.sorting:
        if name == "escape":
            return Command.CANCEL_EDIT
        if name == "q":
            return Command.QUIT
        sort_key = SORT_KEYMAP.get(name)
        return SortChoice(sort_key) if sort_key else None

    return NORMAL_KEYMAP.get(name)


__all__ = ["NORMAL_KEYMAP", "SORT_KEYMAP", "key_name", "translate_key"]
