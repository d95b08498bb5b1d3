"""
Endpoints de autenticación: login y registro.
"""

from fastapi import APIRouter, Depends

from app.schemas.auth import LoginRequest, LoginResponse, PublicUser, RegisterRequest
from app.services import auth_service
from app.storage import Storage, get_storage

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    storage: Storage = Depends(get_storage),
):
    """
    Autentica un usuario con email y contraseña.
    Retorna un token Bearer válido por 24 horas.
    """
    return await auth_service.login(storage, data)


@router.post("/register", response_model=PublicUser, status_code=201)
async def register(
    data: RegisterRequest,
    storage: Storage = Depends(get_storage),
):
    """Registra un doctor o laboratorio. No requiere autenticación."""
    return await auth_service.register(storage, data)
