import logging
from typing import Any, Dict, Optional

from shiptrack.core.errors import ConflictError, InvalidCredentials
from shiptrack.security.utils import create_access_token, hash_password, verify_password
from shiptrack.store.record_store import Record, RecordStore

logger = logging.getLogger(__name__)

_KNOWN_USER_TYPES = ("customer", "carrier", "operator")


def public_user(user: Record) -> Record:
    return {k: v for k, v in user.items() if k != "passwordHash"}


class UserService:
    def __init__(self, store: RecordStore):
        self.users = store.users

    def get(self, user_id) -> Optional[Record]:
        return self.users.find_by_id(user_id)

    def find_by_username(self, username: str) -> Optional[Record]:
        return next((u for u in self.users.find_all() if u.get("username") == username), None)

    def register(self, data: Dict[str, Any]) -> Record:
        with self.users.lock:
            if self.find_by_username(data["username"]):
                raise ConflictError("Username already exists")
            email = str(data["email"])
            if any(u.get("email") == email for u in self.users.find_all()):
                raise ConflictError("Email already exists")

            user_type = data.get("userType")
            role = data.get("role") or (user_type if user_type in _KNOWN_USER_TYPES else "user")
            user = self.users.create({
                "username": data["username"],
                "email": email,
                "passwordHash": hash_password(data["password"]),
                "role": role,
                "userType": user_type or role,
                "phone": data.get("phone") or "",
            })
        logger.info("Registered user %s (%s) as %s", user["id"], user["username"], role)
        return public_user(user)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        user = self.find_by_username(username)
        if not user or not user.get("passwordHash") or not verify_password(password, user["passwordHash"]):
            raise InvalidCredentials()
        token, _ = create_access_token(user)
        return {"token": token, "token_type": "bearer", "user": public_user(user)}
