from fastapi import APIRouter, Depends, HTTPException, status

from shiptrack.api.deps import get_current_principal, get_user_service
from shiptrack.core.errors import ConflictError, InvalidCredentials
from shiptrack.schemas import LoginPayload, Principal, RegisterPayload, TokenOut, UserRead
from shiptrack.services.user_service import UserService, public_user

router = APIRouter()  # main.py mounts at /api/auth


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterPayload, users: UserService = Depends(get_user_service)) -> dict:
    try:
        user = users.register(payload.model_dump())
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    return {"message": "User created successfully", "user": UserRead(**user).model_dump()}


@router.post("/login", response_model=TokenOut)
def login(payload: LoginPayload, users: UserService = Depends(get_user_service)):
    try:
        return users.login(payload.username, payload.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e)) from None


@router.get("/me", response_model=UserRead)
def me(principal: Principal = Depends(get_current_principal),
       users: UserService = Depends(get_user_service)):
    user = users.get(principal.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return public_user(user)
