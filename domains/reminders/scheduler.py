"""Arm, fire, cancel and restore reminder jobs with APScheduler.

The store is the source of truth; APScheduler only holds timers. A job
carries nothing but the reminder id and re-reads the record when it fires,
so a reminder cancelled a moment before its timer expires is never sent.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Awaitable, Callable, Optional
from zoneinfo import ZoneInfo

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from config import TIMEZONE
from logger import logger
from utils import sanitize_for_log
from . import messages
from .config import GRACE_SECONDS
from .errors import StoreError
from .store import Reminder, ReminderStore
from .text import TemplateTextGenerator, TextGenerator

# deliver(owner, text): push a message to the owner's chat
Deliver = Callable[[str, str], Awaitable[object]]


@dataclass
class ReconcileReport:
    """Outcome of restoring reminders after a restart."""
    armed: int
    reaped: int


class ReminderScheduler:
    """Keeps persisted reminders and APScheduler timers in step."""

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        store: ReminderStore,
        deliver: Deliver,
        text_generator: Optional[TextGenerator] = None,
        grace_seconds: int = GRACE_SECONDS,
        tz: Optional[tzinfo] = None,
    ):
        self.scheduler = scheduler
        self.store = store
        self.deliver = deliver
        self.text_generator = text_generator or TemplateTextGenerator()
        self.grace = timedelta(seconds=grace_seconds)
        self.tz = tz or ZoneInfo(TIMEZONE)
        # Reminder ids with a live timer
        self.armed_ids: set[str] = set()
        # Set once reconcile_on_start has loaded the snapshot
        self.ready = asyncio.Event()

    def _now(self) -> datetime:
        return datetime.now(self.tz)

    async def create(self, owner: str, due_at: datetime, payload: str) -> Reminder:
        """Persist a reminder and arm its timer.

        A due time that is not in the future is pushed to now + grace so the
        reminder still fires once.

        Args:
            owner: Owner handle (WhatsApp sender)
            due_at: Resolved due time
            payload: What to remind about

        Returns:
            The stored Reminder

        Raises:
            StoreError: If the reminder cannot be persisted
        """
        await self.ready.wait()

        now = self._now()
        if due_at <= now:
            adjusted = now + self.grace
            logger.warning(f"Due time {due_at.isoformat()} is not in the future, using {adjusted.isoformat()}")
            due_at = adjusted

        reminder = await self.store.create(owner, due_at, payload)
        try:
            self.arm(reminder)
        except Exception:
            logger.error(f"Failed to arm reminder {reminder.id}, rolling back")
            await self.store.delete(reminder.id)
            raise
        return reminder

    def arm(self, reminder: Reminder) -> None:
        """Add (or replace) the timer for a reminder."""
        self.scheduler.add_job(
            self.fire,
            trigger=DateTrigger(run_date=reminder.due_at),
            args=[reminder.id],
            id=reminder.id,
            name=f"reminder:{reminder.payload[:30]}",
            replace_existing=True,
            misfire_grace_time=None,
        )
        self.armed_ids.add(reminder.id)
        logger.info(f"Armed reminder {reminder.id} for {reminder.due_at.isoformat()}")

    async def fire(self, reminder_id: str) -> None:
        """Job body: deliver the reminder once, then forget it.

        The record is deleted whether or not delivery succeeded.
        """
        self.armed_ids.discard(reminder_id)

        reminder = await self.store.get(reminder_id)
        if reminder is None:
            logger.info(f"Reminder {reminder_id} no longer exists, nothing to send")
            return

        try:
            try:
                text = await self.text_generator.notification(reminder)
            except Exception as e:
                logger.warning(f"Notification text failed for {reminder_id}, using template: {e}")
                text = messages.format_notification(reminder)

            try:
                await self.deliver(reminder.owner, text)
                logger.info(f"Delivered reminder {reminder_id} to {sanitize_for_log(reminder.owner)}")
            except Exception as e:
                logger.error(f"Failed to deliver reminder {reminder_id}: {e}")
        finally:
            try:
                await self.store.delete(reminder_id)
            except StoreError as e:
                logger.error(f"Failed to delete fired reminder {reminder_id}: {e}")

    def _disarm(self, reminder_id: str) -> None:
        try:
            self.scheduler.remove_job(reminder_id)
        except JobLookupError:
            pass
        self.armed_ids.discard(reminder_id)

    async def cancel(self, reminder_id: str) -> bool:
        """Cancel a reminder by id.

        Returns:
            True if a stored reminder was removed
        """
        removed = await self.store.delete(reminder_id)
        self._disarm(reminder_id)
        if removed:
            logger.info(f"Cancelled reminder {reminder_id}")
        return removed

    async def cancel_matching(self, owner: str, query: str) -> Optional[Reminder]:
        """Cancel the owner's first reminder whose payload matches query."""
        reminder = await self.store.find_by_owner_and_payload_match(owner, query)
        if reminder is None:
            return None
        await self.cancel(reminder.id)
        return reminder

    async def clear_owner(self, owner: str) -> list[Reminder]:
        """Cancel every reminder of an owner."""
        removed = await self.store.delete_by_owner(owner)
        for reminder in removed:
            self._disarm(reminder.id)
        return removed

    async def list_for_owner(self, owner: str) -> list[Reminder]:
        return await self.store.list_by_owner(owner)

    async def reconcile_on_start(self) -> ReconcileReport:
        """Restore timers from the store after a restart.

        Reminders that came due while the process was down are dropped
        without being sent. The rest are re-armed.

        Returns:
            ReconcileReport with the armed and reaped counts
        """
        try:
            snapshot = await self.store.list_all()
        except StoreError as e:
            logger.error(f"Could not load reminders at startup: {e}")
            snapshot = []
        self.ready.set()

        now = self._now()
        armed = 0
        reaped = 0

        for reminder in snapshot:
            if reminder.due_at <= now:
                logger.warning(f"Reaping past reminder {reminder.id}: was due {reminder.due_at.isoformat()}")
                try:
                    await self.store.delete(reminder.id)
                except StoreError as e:
                    logger.error(f"Failed to reap reminder {reminder.id}: {e}")
                    continue
                reaped += 1
                continue

            try:
                self.arm(reminder)
                armed += 1
            except Exception as e:
                logger.error(f"Failed to re-arm reminder {reminder.id}: {e}")

        logger.info(f"Reconciled reminders: {armed} armed, {reaped} reaped")
        return ReconcileReport(armed=armed, reaped=reaped)
