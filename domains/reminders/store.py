"""JSON file persistence for reminders.

The whole collection lives in one file and is rewritten on every mutation
(temp file + os.replace, so a failed write leaves the previous state).
Fine for a personal assistant's volume; not safe for several processes
writing the same file.

Layout: [{"id": "...", "owner": "...", "dueAt": "<ISO-8601>", "payload": "..."}]
"""

import asyncio
import json
import os
import tempfile
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dateutil.parser import isoparse

from logger import logger
from utils import sanitize_for_log
from .errors import StoreError


@dataclass
class Reminder:
    """A persisted reminder."""
    id: str
    owner: str
    due_at: datetime
    payload: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "dueAt": self.due_at.isoformat(),
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        due_at = isoparse(data["dueAt"])
        # Ensure timezone aware
        if due_at.tzinfo is None:
            due_at = due_at.replace(tzinfo=timezone.utc)
        return cls(
            id=str(data["id"]),
            owner=str(data["owner"]),
            due_at=due_at,
            payload=str(data["payload"]),
        )


class ReminderStore:
    """Durable id -> Reminder collection backed by a single JSON file.

    Every public method is a critical section: load, mutate and persist run
    under one lock, so two mutations never interleave.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()
        self._last_id = 0

    # ------------------------------------------------------------------
    # File I/O (blocking, run in a worker thread)
    # ------------------------------------------------------------------

    def _read(self) -> list[Reminder]:
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise StoreError(f"{self.path} does not contain a list")

        reminders = []
        for item in raw:
            try:
                reminders.append(Reminder.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping unreadable reminder record {sanitize_for_log(str(item))}: {e}")
        return reminders

    def _write(self, reminders: list[Reminder]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".reminders-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in reminders], f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"Failed to write {self.path}: {e}") from e

    async def _load(self) -> list[Reminder]:
        return await asyncio.to_thread(self._read)

    async def _save(self, reminders: list[Reminder]) -> None:
        await asyncio.to_thread(self._write, reminders)

    def _next_id(self, existing: list[Reminder]) -> str:
        """Creation timestamp in ms, bumped so ids strictly increase."""
        candidate = int(time.time() * 1000)
        numeric = [int(r.id) for r in existing if r.id.isdigit()]
        floor = max([self._last_id, *numeric]) if numeric else self._last_id
        if candidate <= floor:
            candidate = floor + 1
        self._last_id = candidate
        return str(candidate)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def create(self, owner: str, due_at: datetime, payload: str) -> Reminder:
        """Persist a new reminder.

        Args:
            owner: Opaque owner handle (WhatsApp sender)
            due_at: When the reminder should fire
            payload: What to remind about (non-empty)

        Returns:
            The stored Reminder with its fresh id

        Raises:
            ValueError: If payload is empty
            StoreError: If the collection cannot be read or written
        """
        if not payload or not payload.strip():
            raise ValueError("Reminder payload must not be empty")

        async with self._lock:
            reminders = await self._load()
            reminder = Reminder(
                id=self._next_id(reminders),
                owner=owner,
                due_at=due_at,
                payload=payload.strip(),
            )
            reminders.append(reminder)
            await self._save(reminders)

        logger.info(f"Saved reminder {reminder.id} for {sanitize_for_log(owner)}")
        return reminder

    async def delete(self, reminder_id: str) -> bool:
        """Delete a reminder by id. Deleting an absent id is a no-op.

        Returns:
            True if a record was removed
        """
        async with self._lock:
            reminders = await self._load()
            remaining = [r for r in reminders if r.id != reminder_id]
            if len(remaining) == len(reminders):
                return False
            await self._save(remaining)

        logger.info(f"Deleted reminder {reminder_id}")
        return True

    async def delete_by_owner(self, owner: str) -> list[Reminder]:
        """Delete every reminder of an owner, returning what was removed."""
        async with self._lock:
            reminders = await self._load()
            removed = [r for r in reminders if r.owner == owner]
            if removed:
                await self._save([r for r in reminders if r.owner != owner])

        if removed:
            logger.info(f"Deleted {len(removed)} reminders for {sanitize_for_log(owner)}")
        return removed

    async def get(self, reminder_id: str) -> Optional[Reminder]:
        async with self._lock:
            reminders = await self._load()
        return next((r for r in reminders if r.id == reminder_id), None)

    async def list_all(self) -> list[Reminder]:
        async with self._lock:
            return await self._load()

    async def list_by_owner(self, owner: str) -> list[Reminder]:
        """Reminders of one owner, in insertion order."""
        async with self._lock:
            reminders = await self._load()
        return [r for r in reminders if r.owner == owner]

    async def find_by_owner_and_payload_match(self, owner: str, query: str) -> Optional[Reminder]:
        """Find an owner's reminder whose payload loosely matches query.

        Case-insensitive, both directions: the query may be part of the
        payload or the payload part of the query. First match in stored
        order wins, so overlapping payloads are ambiguous.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return None

        for r in await self.list_by_owner(owner):
            payload = r.payload.lower()
            if needle in payload or payload in needle:
                return r
        return None
