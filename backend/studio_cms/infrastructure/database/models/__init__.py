from .store_document import StoreDocumentModel

__all__ = ["StoreDocumentModel"]
