from .entities import Todo, Workspace, URGENCY_MAX, URGENCY_MIN, clamp_urgency
from .errors import DoneItError, DocumentFormatError, InternalConsistencyError
from .store import EntityStore, new_id
from .tree import TreeRecord, index_of, materialize, record_for

__all__ = [
    "Todo",
    "Workspace",
    "URGENCY_MIN",
    "URGENCY_MAX",
    "clamp_urgency",
    # Errors
    "DoneItError",
    "DocumentFormatError",
    "InternalConsistencyError",
    # Storage
    "EntityStore",
    "new_id",
    # Tree
    "TreeRecord",
    "materialize",
    "index_of",
    "record_for",
]
