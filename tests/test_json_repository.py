import json
import logging

import pytest

from core import DocumentFormatError, EntityStore
from infrastructure.json_repository import JsonDocumentRepository


def _populated_store():
    store = EntityStore()
    ws = store.new_workspace("Inbox")
    store.root_workspaces.append(ws)
    todo = store.new_todo("Buy milk")
    store.todo(todo).urgency = 2
    store.workspace(ws).todos.append(todo)
    return store


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "doneit.json"
    repo = JsonDocumentRepository(path)
    repo.save(_populated_store())

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["workspaces"][0]["description"] == "Inbox"

    loaded = repo.load()
    ws = loaded.workspace(loaded.root_workspaces[0])
    assert loaded.todo(ws.todos[0]).description == "Buy milk"
    assert loaded.todo(ws.todos[0]).urgency == 2


def test_ids_are_stable_across_save_and_load(tmp_path):
    repo = JsonDocumentRepository(tmp_path / "doneit.json")
    store = _populated_store()
    original = store.workspace(store.root_workspaces[0]).id
    repo.save(store)
    loaded = repo.load()
    assert loaded.workspace(loaded.root_workspaces[0]).id == original


def test_missing_file_loads_empty(tmp_path):
    store = JsonDocumentRepository(tmp_path / "absent.json").load()
    assert store.root_workspaces == []


def test_malformed_file_loads_empty_and_warns(tmp_path, caplog):
    path = tmp_path / "doneit.json"
    path.write_text("{not json", encoding="utf-8")
    repo = JsonDocumentRepository(path)
    with caplog.at_level(logging.WARNING, logger="doneit.persistence"):
        store = repo.load()
    assert store.root_workspaces == []
    assert "malformed" in caplog.text
    with pytest.raises(DocumentFormatError):
        repo.read()


def test_wrong_shape_loads_empty(tmp_path):
    path = tmp_path / "doneit.json"
    path.write_text(json.dumps({"workspaces": [{"todos": [{"pending": 1}]}]}), encoding="utf-8")
    assert JsonDocumentRepository(path).load().root_workspaces == []


def test_save_replaces_atomically_without_leftovers(tmp_path):
    path = tmp_path / "doneit.json"
    path.write_text('{"workspaces": []}', encoding="utf-8")
    JsonDocumentRepository(path).save(_populated_store())
    assert json.loads(path.read_text(encoding="utf-8"))["workspaces"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["doneit.json"]


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "doneit.json"
    JsonDocumentRepository(path).save(EntityStore())
    assert json.loads(path.read_text(encoding="utf-8")) == {"workspaces": []}


def test_failed_save_keeps_previous_document(tmp_path, monkeypatch):
    path = tmp_path / "doneit.json"
    path.write_text('{"workspaces": []}', encoding="utf-8")

    def boom(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("infrastructure.json_repository.os.replace", boom)
    with pytest.raises(OSError):
        JsonDocumentRepository(path).save(_populated_store())
    assert path.read_text(encoding="utf-8") == '{"workspaces": []}'
    assert sorted(p.name for p in tmp_path.iterdir()) == ["doneit.json"]


@pytest.mark.parametrize(
    "due",
    [1e20, -1e20, {"secs_since_epoch": 10**18, "nanos_since_epoch": 0}],
)
def test_out_of_range_due_loads_empty(tmp_path, due):
    path = tmp_path / "doneit.json"
    document = {"workspaces": [{"id": "w", "todos": [{"id": "t", "due": due}]}]}
    path.write_text(json.dumps(document), encoding="utf-8")
    repo = JsonDocumentRepository(path)
    assert repo.load().root_workspaces == []
    with pytest.raises(DocumentFormatError):
        repo.read()


def test_deeply_nested_document_loads_empty(tmp_path):
    path = tmp_path / "doneit.json"
    depth = 100000
    path.write_text('{"workspaces": ' + "[" * depth + "]" * depth + "}", encoding="utf-8")
    repo = JsonDocumentRepository(path)
    assert repo.load().root_workspaces == []
    with pytest.raises(DocumentFormatError):
        repo.read()
