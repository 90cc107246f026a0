"""
Core interfaces and abstract base classes for the StudyFlow platform.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union


Record = Dict[str, Any]


class StorageSlot(ABC):
    """A single named slot holding a serialized blob."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored blob, or None when the slot is unset."""
        pass

    @abstractmethod
    def write(self, data: str) -> None:
        """Replace the stored blob."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Unset the slot."""
        pass

    @property
    @abstractmethod
    def key(self) -> str:
        """Get the slot key."""
        pass


class RecordService(ABC):
    """Asynchronous CRUD over a collection of records keyed by ``Id``."""

    @abstractmethod
    async def get_all(self) -> List[Record]:
        """Return every stored record."""
        pass

    @abstractmethod
    async def get_by_id(self, record_id: Union[int, str]) -> Optional[Record]:
        """Return the record with the given id, or None."""
        pass

    @abstractmethod
    async def create(self, data: Record) -> Record:
        """Store a new record and return it with its assigned id."""
        pass

    @abstractmethod
    async def update(self, record_id: Union[int, str], data: Record) -> Optional[Record]:
        """Merge data over an existing record, or return None."""
        pass

    @abstractmethod
    async def delete(self, record_id: Union[int, str]) -> bool:
        """Remove a record."""
        pass
