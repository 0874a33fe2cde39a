from parcels.errors import NotFoundError
from parcels.models.reminder import Reminder, ReminderIn
from parcels.storage.base import REMINDERS, Eq, Store


class ReminderService:
    def __init__(self, store: Store):
        self.store = store

    async def create(self, reminder: ReminderIn) -> Reminder:
        row = await self.store.insert(REMINDERS, reminder.to_row())
        return Reminder.model_validate(row)

    async def list_all(self) -> list[Reminder]:
        rows = await self.store.find_many(REMINDERS, order_by="fecha_limite")
        return [Reminder.model_validate(r) for r in rows]

    async def get(self, reminder_id: int) -> Reminder:
        row = await self.store.find_one(REMINDERS, [Eq("id", reminder_id)])
        if row is None:
            raise NotFoundError(f"No reminder with id {reminder_id}")
        return Reminder.model_validate(row)

    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder. Returns whether a row was removed."""
        rows = await self.store.delete(REMINDERS, [Eq("id", reminder_id)])
        return bool(rows)
