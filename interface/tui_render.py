"""Panel renderers: materialized trees -> prompt_toolkit formatted text.

Renderers are pure: they read the session (trees, selection, highlight sets)
and never mutate it.
"""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText
from wcwidth import wcwidth

from application import Session
from core import TreeRecord

INDENT = "  "
CARET = "▏"
ICON_PENDING = "○"
ICON_DONE = "✓"
URGENCY_GLYPHS: Tuple[str, ...] = ("·", "!", "!!", "!!!")
URGENCY_WIDTH = 3

Fragments = List[Tuple[str, str]]


def display_width(text: str) -> int:
    """Printable width of text, honouring wide characters."""
    text = (text or "").expandtabs(4)
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Cut text so its visible width does not exceed width; mark the cut with an ellipsis."""
    text = (text or "").expandtabs(4)
    if display_width(text) <= width:
        return text
    if width <= 0:
        return ""
    acc = []
    used = 0
    for ch in text:
        w = wcwidth(ch) or 0
        if w < 0:
            w = 0
        if used + w > width - 1:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + "…"


def _merge_styles(base: str, extra: str) -> str:
    if not extra:
        return base
    return f"{base} {extra}".strip()


def _row_style(session_engine, record: TreeRecord) -> str:
    style = ""
    if record.handle in session_engine.multi_selected:
        style = "class:multi"
    if record.handle == session_engine.selected:
        style = _merge_styles(style, "class:selected")
    return style


def render_workspace_lines(session: Session, width: int = 40) -> FormattedText:
    engine = session.workspaces
    store = session.store
    parts: Fragments = []
    for row, record in enumerate(engine.tree):
        workspace = store.workspace(record.handle)
        row_style = _row_style(engine, record)
        indent = INDENT * record.depth
        if engine.editing == record.handle:
            text = trim_display(indent + engine.edit_buffer, max(1, width - 1))
            parts.append((_merge_styles("class:text", row_style), text))
            parts.append((_merge_styles("class:caret", row_style), CARET))
        else:
            suffix = ""
            if workspace.children and record.handle not in engine.opened:
                suffix = f"({len(workspace.children)})"
            text = trim_display(indent + workspace.description, max(1, width - display_width(suffix)))
            parts.append((_merge_styles("class:text", row_style), text))
            if suffix:
                parts.append((_merge_styles("class:text.dim", row_style), suffix))
        if row < len(engine.tree) - 1:
            parts.append(("", "\n"))
    return FormattedText(parts)


def render_todo_lines(session: Session, width: int = 80) -> FormattedText:
    engine = session.todos
    store = session.store
    parts: Fragments = []
    body_width = max(8, width - URGENCY_WIDTH - 1)
    for row, record in enumerate(engine.tree):
        todo = store.todo(record.handle)
        row_style = _row_style(engine, record)
        icon = ICON_PENDING if todo.pending else ICON_DONE
        prefix = f"{INDENT * record.depth}{icon} "
        used = display_width(prefix)
        parts.append((_merge_styles("class:icon.pending" if todo.pending else "class:icon.done", row_style), prefix))

        if engine.editing == record.handle:
            text = trim_display(engine.edit_buffer, max(1, body_width - used - 1))
            parts.append((_merge_styles("class:text", row_style), text))
            parts.append((_merge_styles("class:caret", row_style), CARET))
            used += display_width(text) + 1
        else:
            progress = ""
            if todo.children:
                done, total = store.child_progress(record.handle)
                progress = f" {ICON_DONE}{done}/{total}"
            desc_style = "class:text" if todo.pending else "class:text.done"
            if session.is_match(record.handle):
                desc_style = "class:match"
            text = trim_display(todo.description, max(1, body_width - used - display_width(progress)))
            parts.append((_merge_styles(desc_style, row_style), text))
            used += display_width(text)
            if progress:
                parts.append((_merge_styles("class:progress", row_style), progress))
                used += display_width(progress)

        padding = max(1, body_width - used + 1)
        glyph = URGENCY_GLYPHS[todo.urgency].rjust(URGENCY_WIDTH)
        parts.append((row_style, " " * padding))
        parts.append((_merge_styles(f"class:urgency.{todo.urgency}", row_style), glyph))
        if row < len(engine.tree) - 1:
            parts.append(("", "\n"))
    return FormattedText(parts)


def render_pane_title(session: Session, pane, label: str) -> FormattedText:
    style = "class:frame.title" if session.active_pane is pane else "class:frame.title.inactive"
    return FormattedText([(style, label)])


__all__ = [
    "display_width",
    "trim_display",
    "render_workspace_lines",
    "render_todo_lines",
    "render_pane_title",
]
