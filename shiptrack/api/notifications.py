from typing import List

from fastapi import APIRouter, Depends, HTTPException

from shiptrack.api.deps import get_current_principal, get_notification_service
from shiptrack.schemas import NotificationOut, Principal
from shiptrack.services.notification_service import NotificationService

router = APIRouter()  # main.py mounts at /api/notifications


@router.get("", response_model=List[NotificationOut])
def my_notifications(principal: Principal = Depends(get_current_principal),
                     service: NotificationService = Depends(get_notification_service)):
    return service.list_for_user(principal.id)


# Declared before /{notification_id}/read so "read-all" is not taken for an id.
@router.put("/read-all")
def mark_all_read(principal: Principal = Depends(get_current_principal),
                  service: NotificationService = Depends(get_notification_service)):
    updated = service.mark_all_read(principal.id)
    return {"message": "All marked as read", "updated": updated}


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: int,
              principal: Principal = Depends(get_current_principal),
              service: NotificationService = Depends(get_notification_service)):
    note = service.mark_read(notification_id, principal.id)
    if not note:
        raise HTTPException(status_code=404, detail="Notification not found")
    return note
