from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from shiptrack.core.config import settings
from shiptrack.schemas import Principal
from shiptrack.security.utils import decode_token
from shiptrack.services.notification_service import NotificationService
from shiptrack.services.shipment_service import ShipmentService
from shiptrack.services.user_service import UserService
from shiptrack.store.record_store import RecordStore

security = HTTPBearer(auto_error=False)

def get_store(request: Request) -> RecordStore:
    return request.app.state.store

def get_notification_service(store: RecordStore = Depends(get_store)) -> NotificationService:
    return NotificationService(store)

def get_shipment_service(store: RecordStore = Depends(get_store),
                         notifications: NotificationService = Depends(get_notification_service)) -> ShipmentService:
    return ShipmentService(store, notifications, default_status=settings.DEFAULT_SHIPMENT_STATUS)

def get_user_service(store: RecordStore = Depends(get_store)) -> UserService:
    return UserService(store)

def get_current_principal(creds: HTTPAuthorizationCredentials = Depends(security),
                          users: UserService = Depends(get_user_service)) -> Principal:
    if not creds: raise HTTPException(status_code=401, detail='Access token required')
    try:
        payload = decode_token(creds.credentials)
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail='Invalid or expired token')
    if payload.get('type') != 'access':
        raise HTTPException(status_code=401, detail='Invalid access token')
    user = users.get(payload.get('id'))
    if not user: raise HTTPException(status_code=401, detail='User account no longer exists')
    return Principal(id=user['id'], username=user.get('username', ''), role=user.get('role', ''))
