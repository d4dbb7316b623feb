#!/usr/bin/env python3
"""Full-screen two-pane TUI: workspaces on the left, todos on the right."""

import logging
import os
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.data_structures import Point
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.widgets import Frame

from application import Command, EditChar, Session
from application.session import Pane

from .tui_footer import build_footer_text
from .tui_keys import translate_key
from .tui_render import render_pane_title, render_todo_lines, render_workspace_lines
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("doneit.cli")

WORKSPACE_WEIGHT = 1
TODO_WEIGHT = 4


class DoneItTUI:
    def __init__(self, session: Session, theme: str = DEFAULT_THEME):
        self.session = session
        self.theme = theme
        self.style = build_style(theme)

        kb = KeyBindings()

        @kb.add(Keys.BracketedPaste, eager=True)
        def _(event):
            self.handle_paste(event.data)

        @kb.add(Keys.Any, eager=True)
        def _(event):
            key = event.key_sequence[0].key if event.key_sequence else event.data
            self.handle_key(key)

        self.workspace_control = FormattedTextControl(
            self.get_workspace_text,
            get_cursor_position=lambda: self._cursor_for(self.session.workspaces.selected_index()),
            show_cursor=False,
        )
        self.todo_control = FormattedTextControl(
            self.get_todo_text,
            get_cursor_position=lambda: self._cursor_for(self.session.todos.selected_index()),
            show_cursor=False,
        )
        workspace_frame = Frame(
            Window(content=self.workspace_control, wrap_lines=False, always_hide_cursor=True),
            title=lambda: render_pane_title(self.session, Pane.WORKSPACES, "Workspaces"),
            width=Dimension(weight=WORKSPACE_WEIGHT),
        )
        todo_frame = Frame(
            Window(content=self.todo_control, wrap_lines=False, always_hide_cursor=True),
            title=lambda: render_pane_title(self.session, Pane.TODOS, "Todos"),
            width=Dimension(weight=TODO_WEIGHT),
        )
        self.footer = Window(content=FormattedTextControl(self.get_footer_text), height=1, always_hide_cursor=True)
        root = HSplit([VSplit([workspace_frame, todo_frame], padding=0), self.footer])

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
        )
        # prompt_toolkit waits 0.5s by default to tell a bare Esc from an escape sequence.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("DONEIT_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    def _panel_widths(self):
        total = max(20, self.get_terminal_width())
        left = total * WORKSPACE_WEIGHT // (WORKSPACE_WEIGHT + TODO_WEIGHT)
        # two border columns per frame
        return max(4, left - 2), max(8, total - left - 2)

    @staticmethod
    def _cursor_for(index: Optional[int]) -> Point:
        return Point(0, index or 0)

    def get_workspace_text(self) -> FormattedText:
        return render_workspace_lines(self.session, self._panel_widths()[0])

    def get_todo_text(self) -> FormattedText:
        return render_todo_lines(self.session, self._panel_widths()[1])

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self.session)

    def handle_key(self, key) -> bool:
        token = translate_key(self.session, key)
        if token is None:
            return False
        changed = self.session.dispatch(token)
        if not self.session.running:
            logger.info("quit requested")
            self.app.exit()
        self.force_render()
        return changed

    def handle_paste(self, data: str) -> bool:
        """Bracketed paste feeds the edit buffer; outside edit mode it is ignored."""
        if self.session.active_engine.editing is None:
            return False
        for ch in data or "":
            if ch.isprintable():
                self.session.dispatch(EditChar(ch))
        self.force_render()
        return True

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def run(self) -> None:
        self.session.running = True
        self.session.refresh()
        self.app.run()
        if self.session.running:
            self.session.dispatch(Command.QUIT)


__all__ = ["DoneItTUI"]
