"""Footer renderer: one mode line under the two panes."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from application import Session

SORT_OPTIONS_TODOS = " 1:Reverse  2:Description  3:Pending  4:Urgency "
SORT_OPTIONS_WORKSPACES = " 1:Reverse  2:Description "
NORMAL_HINTS = " a/A add · i edit · d delete · c done · y/x/p copy/cut/paste · / search · tab switch · q quit"
EDIT_HINTS = " enter save · esc cancel"


def build_footer_text(session: Session) -> FormattedText:
    engine = session.active_engine
    parts: List[Tuple[str, str]] = []
    if session.search.active:
        parts.append(("class:footer.search", " Search: "))
        parts.append(("class:text", f" {session.search.query}"))
        parts.append(("class:caret", "▏"))
        if session.search.matches:
            parts.append(("class:footer.hint", f"  {len(session.search.matches)} match(es)"))
    elif engine.sorting:
        parts.append(("class:footer.sort", " Sort by: "))
        options = SORT_OPTIONS_TODOS if engine is session.todos else SORT_OPTIONS_WORKSPACES
        parts.append(("class:text", options))
    elif engine.editing is not None:
        parts.append(("class:footer.edit", " EDIT "))
        parts.append(("class:footer.hint", EDIT_HINTS))
    else:
        parts.append(("class:footer.mode", " NORMAL "))
        if engine.multi_selected:
            parts.append(("class:multi", f" [{len(engine.multi_selected)} selected]"))
        if engine.clipboard:
            parts.append(("class:footer.hint", f" [clipboard: {len(engine.clipboard)}]"))
        parts.append(("class:footer.hint", NORMAL_HINTS))
    return FormattedText(parts)


__all__ = ["build_footer_text"]
