from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class Role(str, Enum):
    ADMIN = "admin"
    OPERATOR = "operator"
    CARRIER = "carrier"
    CUSTOMER = "customer"


class Principal(BaseModel):
    id: int
    username: str = ""
    role: str  # not a Role: legacy accounts carry other labels and simply see nothing

    class Config:
        frozen = True


class HistoryEntry(BaseModel):
    status: str
    timestamp: str
    updatedBy: str
    userId: int
    role: str
    note: str = ""


# Shipments are open records: unknown payload keys (origin, weight, ...) are kept.
class ShipmentCreate(BaseModel):
    status: Optional[str] = None
    customerId: Optional[int] = None

    class Config:
        extra = "allow"


class ShipmentUpdate(BaseModel):
    status: Optional[str] = None
    carrierId: Optional[int] = None
    customerId: Optional[int] = None
    operatorId: Optional[int] = None
    operatorConfirmed: Optional[bool] = None
    note: Optional[str] = None

    class Config:
        extra = "allow"


class CompleteDelivery(BaseModel):
    receivedBy: Optional[str] = None
    proofOfDelivery: Optional[str] = None
    note: Optional[str] = None


class ShipmentOut(BaseModel):
    id: int
    status: str
    customerId: Optional[int] = None
    operatorId: Optional[int] = None
    carrierId: Optional[int] = None
    operatorConfirmed: bool = False
    history: List[HistoryEntry] = []
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    class Config:
        extra = "allow"


class ShipmentStats(BaseModel):
    total: int
    received: int
    inTransit: int
    delivered: int


class NotificationOut(BaseModel):
    id: int
    userId: int
    title: str
    message: str
    type: str = "info"
    link: Optional[str] = None
    read: bool = False
    createdAt: str


class RegisterPayload(BaseModel):
    username: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Optional[str] = None
    userType: Optional[str] = None
    phone: Optional[str] = ""


class LoginPayload(BaseModel):
    username: str
    password: str


class UserRead(BaseModel):
    id: int
    username: str
    email: Optional[str] = None
    role: str
    userType: Optional[str] = None
    phone: Optional[str] = ""


class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserRead
