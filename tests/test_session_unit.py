from application import Command, EditChar, SearchChar, Session
from application.session import Pane
from core import EntityStore


def _add_todo(store, container, description):
    handle = store.new_todo(description)
    container.append(handle)
    return handle


def _inbox_store():
    store = EntityStore()
    inbox = store.new_workspace("Inbox")
    store.root_workspaces.append(inbox)
    _add_todo(store, store.workspace(inbox).todos, "Buy milk")
    return store, inbox


def _search_store():
    store = EntityStore()
    ws = store.new_workspace("Home")
    store.root_workspaces.append(ws)
    todos = store.workspace(ws).todos
    groceries = _add_todo(store, todos, "Groceries")
    milk = _add_todo(store, store.todo(groceries).children, "Buy milk")
    bread = _add_todo(store, store.todo(groceries).children, "Buy bread")
    loaf = _add_todo(store, store.todo(bread).children, "Whole MILK loaf")
    call = _add_todo(store, todos, "Call mom")
    return store, dict(groceries=groceries, milk=milk, bread=bread, loaf=loaf, call=call)


def _dispatch(session, *tokens):
    return [session.dispatch(token) for token in tokens]


def test_toggle_done_on_selected_todo():
    store, inbox = _inbox_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.TOGGLE_DONE)
    milk = store.workspace(inbox).todos[0]
    assert session.active_pane is Pane.TODOS
    assert session.todos.selected == milk
    assert store.todo(milk).pending is False


def test_todo_tree_follows_selected_workspace():
    store, inbox = _inbox_store()
    other = store.new_workspace("Work")
    store.root_workspaces.append(other)
    session = Session(store)
    assert session.todos.tree == []

    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN)
    assert session.todos.selected is not None

    _dispatch(session, Command.SWITCH_PANE, Command.MOVE_DOWN)
    assert session.selected_workspace == other
    assert session.todos.selected is None
    assert session.todos.tree == []


def test_expanding_a_workspace_resets_todo_selection():
    store, inbox = _inbox_store()
    store.workspace(inbox).children.append(store.new_workspace("Nested"))
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.SWITCH_PANE)
    assert session.todos.selected is not None
    _dispatch(session, Command.EXPAND)
    assert session.todos.selected is None
    assert len(session.workspaces.tree) == 2


def test_insert_todo_in_selected_workspace():
    store, inbox = _inbox_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.INSERT_SIBLING)
    _dispatch(session, EditChar("E"), EditChar("g"), EditChar("g"), EditChar("s"), Command.COMMIT_EDIT)
    todos = store.workspace(inbox).todos
    assert [store.todo(h).description for h in todos] == ["Buy milk", "Eggs"]
    assert session.todos.selected == todos[1]


def test_edit_mode_suppresses_pane_switch_and_search():
    store, _ = _inbox_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.BEGIN_EDIT)
    assert _dispatch(session, Command.SWITCH_PANE, Command.BEGIN_SEARCH) == [False, False]
    assert session.active_pane is Pane.TODOS
    assert session.search.active is False
    _dispatch(session, Command.CANCEL_EDIT)
    assert session.todos.editing is None


def test_search_is_only_available_in_todo_pane():
    store, _ = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN)
    assert _dispatch(session, Command.BEGIN_SEARCH) == [False]
    assert session.search.active is False


def test_search_expands_exactly_the_ancestors_of_matches():
    store, h = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.BEGIN_SEARCH)
    _dispatch(session, *(SearchChar(ch) for ch in "milk"))

    assert session.search.matches == [h["milk"], h["loaf"]]
    assert session.todos.opened == {h["groceries"], h["bread"]}
    visible = [r.handle for r in session.todos.tree]
    assert h["milk"] in visible and h["loaf"] in visible
    assert session.is_match(h["loaf"])
    assert not session.is_match(h["call"])


def test_search_keys_do_not_reach_the_engine():
    store, h = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.BEGIN_SEARCH, SearchChar("d"))
    assert session.search.query == "d"
    assert store.todo_count == 5
    assert session.search.matches == [h["bread"]]


def test_search_backspace_to_empty_clears_matches():
    store, h = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.BEGIN_SEARCH, SearchChar("m"))
    _dispatch(session, Command.SEARCH_BACKSPACE)
    assert session.search.query == ""
    assert session.search.matches == []
    assert _dispatch(session, Command.SEARCH_BACKSPACE) == [False]


def test_next_match_cycles_after_search_ends():
    store, h = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.BEGIN_SEARCH)
    _dispatch(session, *(SearchChar(ch) for ch in "milk"))
    _dispatch(session, Command.END_SEARCH)
    assert session.search.active is False
    assert session.search.matches == [h["milk"], h["loaf"]]

    _dispatch(session, Command.NEXT_MATCH)
    assert session.todos.selected == h["milk"]
    _dispatch(session, Command.NEXT_MATCH)
    assert session.todos.selected == h["loaf"]
    _dispatch(session, Command.NEXT_MATCH)
    assert session.todos.selected == h["milk"]


def test_next_match_without_matches_is_noop():
    store, _ = _search_store()
    session = Session(store)
    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE)
    assert _dispatch(session, Command.NEXT_MATCH) == [False]


def test_copied_todo_survives_deleting_its_workspace():
    store, inbox = _inbox_store()
    work = store.new_workspace("Work")
    store.root_workspaces.append(work)
    milk = store.workspace(inbox).todos[0]
    session = Session(store)

    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.COPY)
    _dispatch(session, Command.SWITCH_PANE, Command.DELETE)
    assert store.root_workspaces == [work]
    assert store.has_todo(milk)

    assert session.selected_workspace == work
    _dispatch(session, Command.SWITCH_PANE, Command.PASTE)
    pasted = store.workspace(work).todos
    assert [store.todo(h).description for h in pasted] == ["Buy milk"]
    assert pasted[0] != milk


def test_quit_stops_the_session():
    session = Session()
    assert session.running is True
    _dispatch(session, Command.QUIT)
    assert session.running is False


def test_clipboard_swap_across_workspaces_keeps_other_workspace_todos():
    store, inbox = _inbox_store()
    work = store.new_workspace("Work")
    store.root_workspaces.append(work)
    _add_todo(store, store.workspace(work).todos, "Report")
    milk = store.workspace(inbox).todos[0]
    session = Session(store)

    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.COPY)
    _dispatch(session, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.COPY)
    assert store.workspace(inbox).todos == [milk]
    assert store.has_todo(milk)


def test_copied_todo_of_deleted_workspace_is_freed_on_next_copy():
    store, inbox = _inbox_store()
    work = store.new_workspace("Work")
    store.root_workspaces.append(work)
    _add_todo(store, store.workspace(work).todos, "Report")
    milk = store.workspace(inbox).todos[0]
    session = Session(store)

    _dispatch(session, Command.MOVE_DOWN, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.COPY)
    _dispatch(session, Command.SWITCH_PANE, Command.DELETE)
    assert store.has_todo(milk)

    _dispatch(session, Command.SWITCH_PANE, Command.MOVE_DOWN, Command.COPY)
    assert not store.has_todo(milk)
    assert store.todo_count == len(store.reachable_todos())
