"""Shipment lifecycle: visibility, creation, status transitions and deletion.

Who may do what:

    action     admin  operator (of record)  carrier                     customer
    list/get   all    own operatorId        own carrierId or unassigned own customerId
    update     yes    yes                   if assigned, or claiming    never
    delete     yes    yes                   never                       never
    complete   yes    no                    if assigned                 never

A status change appends one history entry and notifies the shipment's
customer and carrier (never the acting carrier itself). Field-only edits are
silent. Notifications are sent after the shipment is written and their
failure never undoes the write.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from shiptrack.core.errors import (
    NotFoundError,
    UnauthorizedAccess,
    UnauthorizedCompleteDelivery,
    UnauthorizedDelete,
    UnauthorizedUpdate,
)
from shiptrack.schemas import HistoryEntry, Principal, Role
from shiptrack.services.notification_service import NotificationService
from shiptrack.store.ids import same_id
from shiptrack.store.record_store import Record, RecordStore
from shiptrack.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

STATUS_RECEIVED = "Received"
STATUS_IN_TRANSIT = "In Transit"
STATUS_DELIVERED = "Delivered"

# Never taken from an update payload: ids are immutable and history is append-only.
# ``note`` only annotates the history entry of this update.
_PROTECTED_FIELDS = ("id", "history", "note")


class ShipmentService:
    def __init__(self, store: RecordStore, notifications: NotificationService,
                 default_status: str = STATUS_RECEIVED):
        self.shipments = store.shipments
        self.notifications = notifications
        self.default_status = default_status

    # ---------- visibility ----------
    def is_visible(self, shipment: Record, principal: Principal) -> bool:
        role = principal.role
        if role == Role.ADMIN:
            return True
        if role == Role.OPERATOR:
            return same_id(shipment.get("operatorId"), principal.id)
        if role == Role.CARRIER:
            carrier_id = shipment.get("carrierId")
            return carrier_id is None or same_id(carrier_id, principal.id)
        if role == Role.CUSTOMER:
            return same_id(shipment.get("customerId"), principal.id)
        return False

    def list_for(self, principal: Principal) -> List[Record]:
        return [s for s in self.shipments.find_all() if self.is_visible(s, principal)]

    def get_by_id(self, shipment_id, principal: Principal) -> Record:
        shipment = self.shipments.find_by_id(shipment_id)
        if shipment is None:
            raise NotFoundError("Shipment", shipment_id)
        if not self.is_visible(shipment, principal):
            raise UnauthorizedAccess()
        return shipment

    def stats(self, principal: Principal) -> Dict[str, int]:
        visible = self.list_for(principal)
        return {
            "total": len(visible),
            "received": sum(1 for s in visible if s.get("status") == STATUS_RECEIVED),
            "inTransit": sum(1 for s in visible if s.get("status") == STATUS_IN_TRANSIT),
            "delivered": sum(1 for s in visible if s.get("status") == STATUS_DELIVERED),
        }

    # ---------- mutations ----------
    def create(self, data: Dict[str, Any], principal: Principal) -> Record:
        status = data.get("status") or self.default_status
        customer_id = data.get("customerId")
        shipment = self.shipments.create({
            **data,
            "status": status,
            "customerId": customer_id if customer_id is not None else principal.id,
            "operatorId": principal.id,
            "carrierId": None,
            "operatorConfirmed": False,
            "history": [self._history_entry(status, principal, "Shipment created")],
        })
        logger.info("Shipment %s created by %s (%s) with status %r",
                    shipment["id"], principal.username, principal.role, status)
        return shipment

    def update(self, shipment_id, data: Dict[str, Any], principal: Principal) -> Record:
        with self.shipments.lock:
            shipment = self.shipments.find_by_id(shipment_id)
            if shipment is None:
                raise NotFoundError("Shipment", shipment_id)
            if not self.can_update(shipment, data, principal):
                logger.warning("Update of shipment %s denied for %s (%s)",
                               shipment["id"], principal.username, principal.role)
                raise UnauthorizedUpdate()
            updated, status_changed = self._apply(shipment, data, principal)
        if status_changed:
            self._notify_status_change(updated, principal)
        return updated

    def complete_delivery(self, shipment_id, data: Dict[str, Any], principal: Principal) -> Record:
        with self.shipments.lock:
            shipment = self.shipments.find_by_id(shipment_id)
            if shipment is None:
                raise NotFoundError("Shipment", shipment_id)
            assigned = principal.role == Role.CARRIER and same_id(shipment.get("carrierId"), principal.id)
            if principal.role != Role.ADMIN and not assigned:
                raise UnauthorizedCompleteDelivery()
            changes = {k: data[k] for k in ("receivedBy", "proofOfDelivery") if data.get(k) is not None}
            changes["status"] = STATUS_DELIVERED
            changes["note"] = data.get("note") or "Delivery completed"
            if shipment.get("status") != STATUS_DELIVERED:
                changes["deliveredAt"] = now_iso()
            updated, status_changed = self._apply(shipment, changes, principal)
        if status_changed:
            self._notify_status_change(updated, principal)
        return updated

    def delete(self, shipment_id, principal: Principal) -> bool:
        with self.shipments.lock:
            shipment = self.shipments.find_by_id(shipment_id)
            if shipment is None:
                raise NotFoundError("Shipment", shipment_id)
            if not self.can_delete(shipment, principal):
                raise UnauthorizedDelete()
            deleted = self.shipments.delete(shipment["id"])
        logger.info("Shipment %s deleted by %s (%s)", shipment["id"], principal.username, principal.role)
        return deleted

    # ---------- rules ----------
    def can_update(self, shipment: Record, data: Dict[str, Any], principal: Principal) -> bool:
        role = principal.role
        if role == Role.ADMIN:
            return True
        if role == Role.OPERATOR:
            return same_id(shipment.get("operatorId"), principal.id)
        if role == Role.CARRIER:
            current = shipment.get("carrierId")
            if current is not None:
                return same_id(current, principal.id)
            # claim: take an unassigned shipment by naming yourself as its carrier
            return same_id(data.get("carrierId"), principal.id)
        return False

    def can_delete(self, shipment: Record, principal: Principal) -> bool:
        if principal.role == Role.ADMIN:
            return True
        return principal.role == Role.OPERATOR and same_id(shipment.get("operatorId"), principal.id)

    # ---------- helpers ----------
    def _apply(self, shipment: Record, data: Dict[str, Any], principal: Principal) -> Tuple[Record, bool]:
        changes = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        new_status = data.get("status")
        if new_status is None:
            changes.pop("status", None)
        status_changed = new_status is not None and new_status != shipment.get("status")
        if status_changed:
            note = data.get("note") or f"Status updated to {new_status}"
            changes["history"] = list(shipment.get("history") or []) + [
                self._history_entry(new_status, principal, note)
            ]
        updated = self.shipments.update(shipment["id"], changes)
        if status_changed:
            logger.info("Shipment %s: %r -> %r by %s (%s)", shipment["id"], shipment.get("status"),
                        new_status, principal.username, principal.role)
        return updated, status_changed

    def _history_entry(self, status: str, principal: Principal, note: str) -> Dict[str, Any]:
        return HistoryEntry(
            status=status,
            timestamp=now_iso(),
            updatedBy=principal.username,
            userId=principal.id,
            role=principal.role,
            note=note,
        ).model_dump()

    def _notify_status_change(self, shipment: Record, principal: Principal) -> None:
        shipment_id = shipment["id"]
        status = shipment.get("status")
        link = f"/shipments/{shipment_id}"
        kind = "success" if status == STATUS_DELIVERED else "info"

        customer_id = shipment.get("customerId")
        if customer_id is not None:
            self._notify(customer_id, "Shipment Update",
                         f"Your shipment #{shipment_id} is now {status}.", kind, link)

        carrier_id = shipment.get("carrierId")
        if carrier_id is not None and not same_id(carrier_id, principal.id):
            self._notify(carrier_id, "Shipment Updated",
                         f"Shipment #{shipment_id} was updated to {status} by {principal.username}.",
                         kind, link)

    def _notify(self, user_id, title: str, message: str, kind: str, link: Optional[str]) -> None:
        try:
            self.notifications.create(user_id, title, message, kind, link)
        except Exception:
            logger.exception("Failed to notify user %s about %s", user_id, link)
