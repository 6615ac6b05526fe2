from passlib.context import CryptContext
from datetime import datetime, timedelta
import jwt, uuid
from typing import Any, Dict, Tuple
from shiptrack.core.config import settings
from shiptrack.utils.timestamps import now_utc

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto')

def hash_password(p: str) -> str: return pwd_ctx.hash(p)

def verify_password(p: str, h: str) -> bool: return pwd_ctx.verify(p, h)

def generate_jti() -> str: return uuid.uuid4().hex

def create_access_token(user: Dict[str, Any]) -> Tuple[str, datetime]:
    exp = now_utc() + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRES_SECONDS)
    payload = {
        'sub': str(user['id']),
        'id': user['id'],
        'username': user.get('username', ''),
        'role': user.get('role', ''),
        'jti': generate_jti(),
        'exp': exp,
        'type': 'access',
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM), exp

def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
