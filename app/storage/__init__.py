"""
Capa de almacenamiento: interfaz abstracta + implementación SQLAlchemy.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.storage.base import Storage
from app.storage.sql import SQLStorage


async def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    """Dependency de FastAPI que envuelve la sesión de la petición."""
    return SQLStorage(db)


__all__ = ["Storage", "SQLStorage", "get_storage"]
