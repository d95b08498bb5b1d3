"""
Router principal de la API.
Agrupa todos los sub-routers.
"""

from fastapi import APIRouter

from app.api.v1.admin import router as admin_router
from app.api.v1.auth import router as auth_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.doctors import router as doctors_router
from app.api.v1.labs import router as labs_router
from app.api.v1.notifications import router as notifications_router
from app.api.v1.orders import router as orders_router
from app.api.v1.users import router as users_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["Autenticación"],
)

api_v1_router.include_router(
    users_router,
    prefix="/users",
    tags=["Usuarios"],
)

api_v1_router.include_router(
    labs_router,
    prefix="/labs",
    tags=["Laboratorios"],
)

api_v1_router.include_router(
    doctors_router,
    prefix="/doctors",
    tags=["Doctores"],
)

api_v1_router.include_router(
    orders_router,
    prefix="/orders",
    tags=["Órdenes"],
)

api_v1_router.include_router(
    notifications_router,
    prefix="/notifications",
    tags=["Notificaciones"],
)

api_v1_router.include_router(
    dashboard_router,
    prefix="/dashboard",
    tags=["Dashboard"],
)

api_v1_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["Administración"],
)
