"""
Schemas para los endpoints de inicialización de datos.
"""

from pydantic import AliasChoices, BaseModel, Field


class InitProductionRequest(BaseModel):
    confirm_initialization: str | None = Field(
        None,
        validation_alias=AliasChoices("confirmInitialization", "confirm_initialization"),
    )


class SeedCredential(BaseModel):
    email: str
    password: str


class InitDataResponse(BaseModel):
    message: str
    initialized: bool = True
    laboratories_created: int
    users_created: int
    users_updated: int
    credentials: dict[str, SeedCredential]
