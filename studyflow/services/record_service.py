"""
Delayed CRUD over a JSON array persisted wholesale in a storage slot.
"""

import asyncio
import json
import logging
from typing import List, Optional, Union

from ..core.enums import IdLookupPolicy, DEFAULT_LATENCY_SECONDS
from ..core.exceptions import PersistenceError
from ..core.interfaces import Record, RecordService, StorageSlot
from ..core.validation import parse_record_id
from ..persistence.seed import seed_for_key

logger = logging.getLogger(__name__)


class JsonRecordService(RecordService):
    """Record store over a single storage slot.

    Every read re-parses the whole blob and every mutation writes the whole
    collection back. An unset slot falls back to the bundled seed dataset,
    which is only written back once something is mutated.

    With ``serialize_writes`` the read-modify-write cycle of mutations is
    guarded by an asyncio lock, so concurrent mutations through this
    instance are applied one after another. Without it, or across separate
    instances sharing a slot, the last write wins.
    """

    record_name = "record"

    def __init__(self, storage: StorageSlot, latency: float = DEFAULT_LATENCY_SECONDS,
                 serialize_writes: bool = True,
                 id_policy: IdLookupPolicy = IdLookupPolicy.NOT_FOUND):
        self._storage = storage
        self._latency = latency
        self._serialize_writes = serialize_writes
        self._id_policy = id_policy
        self._write_lock = asyncio.Lock()

    @property
    def id_policy(self) -> IdLookupPolicy:
        return self._id_policy

    async def _delay(self) -> None:
        await asyncio.sleep(self._latency)

    async def _load(self) -> List[Record]:
        stored = await asyncio.to_thread(self._storage.read)
        if not stored:
            logger.debug(f"Slot {self._storage.key} is empty, using seed data")
            return seed_for_key(self._storage.key)
        try:
            records = json.loads(stored)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt data in slot {self._storage.key}: {e}")
            raise PersistenceError(
                f"Failed to parse stored {self.record_name}s: {str(e)}",
                error_code="corrupt_storage",
                details={"key": self._storage.key},
            ) from e
        if not isinstance(records, list):
            raise PersistenceError(
                f"Stored {self.record_name}s are not a list",
                error_code="corrupt_storage",
                details={"key": self._storage.key},
            )
        return records

    async def _save(self, records: List[Record]) -> None:
        await asyncio.to_thread(self._storage.write, json.dumps(records))

    def _parse_id(self, record_id: Union[int, str]) -> Optional[int]:
        parsed = parse_record_id(record_id, self._id_policy)
        if parsed is None:
            logger.warning(f"Malformed {self.record_name} id {record_id!r}, treating as not found")
        return parsed

    async def _mutate(self, operation, *args):
        if not self._serialize_writes:
            return await operation(*args)
        async with self._write_lock:
            return await operation(*args)

    @staticmethod
    def _next_id(records: List[Record]) -> int:
        max_id = 0
        for record in records:
            record_id = record.get("Id")
            if isinstance(record_id, int) and not isinstance(record_id, bool):
                max_id = max(max_id, record_id)
        return max_id + 1

    def _prepare_new(self, data: Record, new_id: int) -> Record:
        """Build the stored form of a new record."""
        return {**data, "Id": new_id}

    def _validate(self, record: Record) -> None:
        """Hook for subclasses that check records before they are stored."""
        pass

    async def get_all(self) -> List[Record]:
        """Return every stored record."""
        await self._delay()
        return list(await self._load())

    async def get_by_id(self, record_id: Union[int, str]) -> Optional[Record]:
        """Return a copy of the matching record, or None."""
        await self._delay()
        parsed = self._parse_id(record_id)
        records = await self._load()
        for record in records:
            if parsed is not None and record.get("Id") == parsed:
                return dict(record)
        return None

    async def create(self, data: Record) -> Record:
        """Append a record with the next free id and persist the collection."""
        await self._delay()
        return await self._mutate(self._create, data)

    async def _create(self, data: Record) -> Record:
        records = await self._load()
        new_record = self._prepare_new(data, self._next_id(records))
        self._validate(new_record)
        records.append(new_record)
        await self._save(records)
        logger.info(f"Created {self.record_name} {new_record['Id']}")
        return dict(new_record)

    async def update(self, record_id: Union[int, str], data: Record) -> Optional[Record]:
        """Shallow-merge data over an existing record; None when absent."""
        await self._delay()
        parsed = self._parse_id(record_id)
        return await self._mutate(self._update, parsed, data)

    async def _update(self, parsed: Optional[int], data: Record) -> Optional[Record]:
        records = await self._load()
        for index, record in enumerate(records):
            if parsed is not None and record.get("Id") == parsed:
                merged = {**record, **data, "Id": record["Id"]}
                self._validate(merged)
                records[index] = merged
                await self._save(records)
                logger.info(f"Updated {self.record_name} {parsed}")
                return dict(merged)
        return None

    async def delete(self, record_id: Union[int, str]) -> bool:
        """Remove every record with the id; succeeds whether or not it existed."""
        await self._delay()
        parsed = self._parse_id(record_id)
        return await self._mutate(self._delete, parsed)

    async def _delete(self, parsed: Optional[int]) -> bool:
        records = await self._load()
        remaining = [r for r in records if parsed is None or r.get("Id") != parsed]
        await self._save(remaining)
        if len(remaining) != len(records):
            logger.info(f"Deleted {self.record_name} {parsed}")
        return True

