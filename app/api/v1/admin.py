"""
Endpoints de inicialización de datos demo. No usan autenticación Bearer:
se protegen con una confirmación explícita o con INIT_SECRET.
"""

import logging
import secrets

from fastapi import APIRouter, Depends, Header

from app.config import get_settings
from app.core.exceptions import ForbiddenException, ValidationException
from app.schemas.admin import InitDataResponse, InitProductionRequest
from app.services import seed_service
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/init-production-data", response_model=InitDataResponse)
async def init_production_data(
    data: InitProductionRequest,
    storage: Storage = Depends(get_storage),
):
    """Requiere `{"confirmInitialization": "INITIALIZE_PRODUCTION_DATA_CONFIRMED"}`."""
    if data.confirm_initialization != seed_service.PRODUCTION_CONFIRMATION:
        raise ValidationException("Falta la confirmación de inicialización")

    logger.info("Inicializando datos de producción")
    return await seed_service.seed_demo_data(
        storage, message="Datos de producción inicializados"
    )


@router.post("/init-test-data", response_model=InitDataResponse)
async def init_test_data(
    x_init_secret: str | None = Header(None, alias="x-init-secret"),
    storage: Storage = Depends(get_storage),
):
    """Requiere el header `x-init-secret` igual a INIT_SECRET."""
    settings = get_settings()
    expected = settings.INIT_SECRET
    if (
        not expected
        or expected == "disabled"
        or not x_init_secret
        or not secrets.compare_digest(x_init_secret, expected)
    ):
        raise ForbiddenException("Acceso no autorizado")

    # Contraseñas fijas solo en desarrollo
    passwords = None if settings.is_development else seed_service.random_passwords()
    logger.info("Inicializando datos de prueba")
    return await seed_service.seed_demo_data(
        storage, passwords, message="Datos de prueba inicializados"
    )
