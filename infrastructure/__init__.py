from .document_codec import store_from_document, store_to_document
from .json_repository import JsonDocumentRepository

__all__ = ["JsonDocumentRepository", "store_from_document", "store_to_document"]
