from text_refiner.storage.kv_store import KeyValueStore, StorageError

__all__ = ["KeyValueStore", "StorageError"]
