from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_auth_service
from app.schemas.user_schema import LoginIn, RegisterIn
from app.services.auth_service import (
    AuthService,
    EmailAlreadyExists,
    InvalidCredentials,
    WeakPassword,
)

router = APIRouter(tags=["auth"])


@router.post("/register", summary="Register a user", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    try:
        user = svc.register(payload.email, payload.password)
    except EmailAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except WeakPassword as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return {
        "success": True,
        "message": "Added user",
        "data": f"User n°{user.id}, email: {user.email} with roles: {','.join(user.roles)} was created",
    }


@router.post("/login", summary="Log in and receive a bearer token")
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    try:
        result = svc.login(payload.email, payload.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return {"success": True, **result}
