import logging
from typing import List, Optional

from shiptrack.store.ids import same_id
from shiptrack.store.record_store import Record, RecordStore
from shiptrack.utils.timestamps import now_iso

logger = logging.getLogger(__name__)


class NotificationService:
    """In-app notifications addressed to a single user."""

    def __init__(self, store: RecordStore):
        self.notifications = store.notifications

    def create(self, user_id, title: str, message: str, type: str = "info", link: Optional[str] = None) -> Record:
        note = self.notifications.create({
            "userId": user_id,
            "title": title,
            "message": message,
            "type": type,  # info, success, warning, error
            "link": link,
            "read": False,
        })
        logger.debug("Notification %s created for user %s: %s", note["id"], user_id, title)
        return note

    def list_for_user(self, user_id) -> List[Record]:
        mine = [n for n in self.notifications.find_all() if same_id(n.get("userId"), user_id)]
        return sorted(mine, key=lambda n: (n.get("createdAt") or "", n.get("id") or 0), reverse=True)

    def mark_read(self, notification_id, user_id) -> Optional[Record]:
        """Returns None when the notification is missing or belongs to someone else."""
        with self.notifications.lock:
            note = self.notifications.find_by_id(notification_id)
            if not note or not same_id(note.get("userId"), user_id):
                return None
            return self.notifications.update(note["id"], {"read": True})

    def mark_all_read(self, user_id) -> int:
        with self.notifications.lock:
            unread = [
                n for n in self.notifications.find_all()
                if same_id(n.get("userId"), user_id) and not n.get("read")
            ]
            for n in unread:
                self.notifications.update(n["id"], {"read": True})
        return len(unread)
