#!/usr/bin/env python3
"""Unit tests for DoneItTUI key routing and layout glue."""

from unittest.mock import Mock

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import DummyInput
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from application import Session
from core import EntityStore
from interface.tui_app import DoneItTUI


@pytest.fixture
def tui():
    store = EntityStore()
    for name in ("Inbox", "Work"):
        store.root_workspaces.append(store.new_workspace(name))
    with create_app_session(input=DummyInput(), output=DummyOutput()):
        ui = DoneItTUI(Session(store), theme="dark-olive")
        ui.app.exit = Mock()
        yield ui


def _text(fragments):
    return "".join(text for _, text in fragments)


def test_any_key_binding_is_eager(tui):
    bindings = tui.app.key_bindings.bindings
    any_bindings = [b for b in bindings if Keys.Any in b.keys]
    assert any_bindings
    assert all(b.eager() for b in any_bindings)


def test_escape_timeout_is_short(tui):
    assert tui.app.ttimeoutlen == pytest.approx(0.05)


def test_keys_drive_the_session(tui):
    assert tui.handle_key("j") is True
    assert tui.session.selected_workspace == tui.session.store.root_workspaces[0]
    tui.handle_key(Keys.Down)
    assert tui.session.selected_workspace == tui.session.store.root_workspaces[1]
    assert tui.handle_key("Z") is False


def test_quit_key_exits_application(tui):
    tui.handle_key("q")
    assert tui.session.running is False
    tui.app.exit.assert_called_once()


def test_typing_into_new_workspace(tui):
    for key in ["j", "a", "N", "e", "w", Keys.Enter]:
        tui.handle_key(key)
    store = tui.session.store
    assert [store.workspace(h).description for h in store.root_workspaces] == ["Inbox", "New", "Work"]


def test_paste_only_lands_in_edit_buffer(tui):
    assert tui.handle_paste("ignored") is False
    tui.handle_key("j")
    tui.handle_key("i")
    tui.handle_paste(" box\n")
    assert tui.session.workspaces.edit_buffer == "Inbox box"


def test_panel_text_and_cursor(tui):
    tui.handle_key("j")
    tui.handle_key("j")
    assert _text(tui.get_workspace_text()).split("\n") == ["Inbox", "Work"]
    assert _text(tui.get_todo_text()) == ""
    assert "NORMAL" in _text(tui.get_footer_text())
    assert tui.workspace_control.get_cursor_position().y == 1
    assert tui.todo_control.get_cursor_position().y == 0
