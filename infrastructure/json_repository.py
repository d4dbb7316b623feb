import json
import logging
import os
import tempfile
from pathlib import Path

from core import DocumentFormatError, EntityStore
from infrastructure.document_codec import store_from_document, store_to_document

logger = logging.getLogger("doneit.persistence")


class JsonDocumentRepository:
    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> EntityStore:
        """Strict read: raises OSError / DocumentFormatError."""
        raw = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw)
            return store_from_document(data)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise DocumentFormatError(f"{self.path}: {exc}") from exc

    def load(self) -> EntityStore:
        """Lenient read: anything short of a valid document starts empty."""
        if not self.path.exists():
            logger.info("no document at %s, starting empty", self.path)
            return EntityStore()
        try:
            return self.read()
        except DocumentFormatError as exc:
            logger.warning("malformed document, starting empty: %s", exc)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("unreadable document %s, starting empty: %s", self.path, exc)
        return EntityStore()

    def save(self, store: EntityStore) -> None:
        payload = json.dumps(store_to_document(store), ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            ) as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
                tmp_path = Path(tmp.name)
            os.replace(str(tmp_path), str(self.path))
        finally:
            if tmp_path and tmp_path.exists() and tmp_path != self.path:
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
        logger.debug("saved %s workspaces to %s", len(store.root_workspaces), self.path)
