from .commands import Command, EditChar, SearchChar, SortChoice, SortKey, Token
from .forest import Forest, TodoForest, WorkspaceForest
from .session import Pane, SearchState, Session
from .tree_engine import TreeEngine

__all__ = [
    "Command",
    "EditChar",
    "SearchChar",
    "SortChoice",
    "SortKey",
    "Token",
    "Forest",
    "TodoForest",
    "WorkspaceForest",
    "Pane",
    "SearchState",
    "Session",
    "TreeEngine",
]
