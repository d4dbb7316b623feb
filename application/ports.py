from pathlib import Path
from typing import Protocol

from core import EntityStore


class DocumentRepository(Protocol):
    path: Path

    def load(self) -> EntityStore:
        ...

    def save(self, store: EntityStore) -> None:
        ...
