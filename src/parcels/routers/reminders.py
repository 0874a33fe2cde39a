from fastapi import APIRouter, Depends

from parcels.deps import get_reminders
from parcels.errors import NotFoundError
from parcels.models.reminder import Reminder, ReminderIn
from parcels.services.reminders import ReminderService

router = APIRouter()


@router.post("", response_model=Reminder, status_code=201)
async def create_reminder(reminder: ReminderIn, service: ReminderService = Depends(get_reminders)):
    return await service.create(reminder)


@router.get("", response_model=list[Reminder])
async def list_reminders(service: ReminderService = Depends(get_reminders)):
    """All reminders, soonest due first."""
    return await service.list_all()


@router.get("/{reminder_id}", response_model=Reminder)
async def get_reminder(reminder_id: int, service: ReminderService = Depends(get_reminders)):
    return await service.get(reminder_id)


@router.delete("/{reminder_id}")
async def delete_reminder(reminder_id: int, service: ReminderService = Depends(get_reminders)):
    if not await service.delete(reminder_id):
        raise NotFoundError(f"No reminder with id {reminder_id}")
    return {"success": True}
