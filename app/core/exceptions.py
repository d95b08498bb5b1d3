"""
Excepciones HTTP personalizadas para la API.
Todas se serializan como {"error": "..."} en app.main.
"""

from fastapi import HTTPException, status


class CredentialsException(HTTPException):
    """Error de autenticación: token ausente, inválido o credenciales incorrectas (401)."""

    def __init__(self, detail: str = "Credenciales inválidas"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(HTTPException):
    """Error de permisos insuficientes o registro de otro tenant (403)."""

    def __init__(self, detail: str = "No tiene permisos para realizar esta acción"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundException(HTTPException):
    """Recurso no encontrado (404)."""

    def __init__(self, resource: str = "Recurso", detail: str | None = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} no encontrado",
        )


class ConflictException(HTTPException):
    """Conflicto de datos (400), ej: email duplicado o transición no permitida."""

    def __init__(self, detail: str = "El recurso ya existe"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class ValidationException(HTTPException):
    """Error de validación de negocio (400)."""

    def __init__(self, detail: str = "Datos inválidos"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )
