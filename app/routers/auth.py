from fastapi import APIRouter, Depends

from app.routers.deps import get_auth_service
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.register(payload.username, payload.email, payload.password)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    return auth.login(payload.email, payload.password)
