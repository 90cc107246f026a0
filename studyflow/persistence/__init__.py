"""
Persistence module for storage slots and bundled seed data.
"""

from .storage import InMemoryStorage, FileStorage, SQLiteStorage, StorageFactory
from .seed import load_seed, seed_for_key

__all__ = [
    "InMemoryStorage",
    "FileStorage",
    "SQLiteStorage",
    "StorageFactory",
    "load_seed",
    "seed_for_key",
]
