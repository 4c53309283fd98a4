from .sqlite_store import ResultStore, StorageError

__all__ = ["ResultStore", "StorageError"]
