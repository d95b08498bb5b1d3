"""
Schemas para Order: Orden de trabajo con odontograma FDI.

El cliente web envía algunos campos en camelCase (nombrePaciente,
colorSustrato, colorTrabajo, doctorId); se aceptan ambas formas.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.models.order import OrderMaterial, OrderStatus, ToothCondition

# Dientes válidos FDI: adultos (11-18, 21-28, 31-38, 41-48)
# y deciduos (51-55, 61-65, 71-75, 81-85)
VALID_ADULT_TEETH = set(
    list(range(11, 19)) + list(range(21, 29)) +
    list(range(31, 39)) + list(range(41, 49))
)
VALID_DECIDUOUS_TEETH = set(
    list(range(51, 56)) + list(range(61, 66)) +
    list(range(71, 76)) + list(range(81, 86))
)
VALID_TEETH = VALID_ADULT_TEETH | VALID_DECIDUOUS_TEETH


def validate_odontograma(
    v: dict[int, list[ToothCondition]] | None,
) -> dict[int, list[ToothCondition]] | None:
    if v is None:
        return v
    for tooth in v:
        if tooth not in VALID_TEETH:
            raise ValueError(
                f"Número de diente FDI inválido: {tooth}. "
                "Adultos: 11-18, 21-28, 31-38, 41-48. "
                "Deciduos: 51-55, 61-65, 71-75, 81-85."
            )
    return v


def odontograma_to_storage(v: dict[int, list[ToothCondition]]) -> dict[str, list[str]]:
    """Convierte el odontograma validado al formato JSON de la columna."""
    return {str(tooth): [c.value for c in conditions] for tooth, conditions in v.items()}


def _unassigned_to_none(v):
    # El selector del cliente usa "" o "unassigned" para "sin doctor"
    if v in ("", "unassigned"):
        return None
    return v


# ── Campos editables compartidos ─────────────────────
class _OrderFields(BaseModel):
    value: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    nombre_paciente: str | None = Field(
        None, max_length=200,
        validation_alias=AliasChoices("nombre_paciente", "nombrePaciente"),
    )
    observaciones: str | None = Field(None, max_length=5000)
    instrucciones: str | None = Field(None, max_length=5000)
    color_sustrato: str | None = Field(
        None, max_length=100,
        validation_alias=AliasChoices("color_sustrato", "colorSustrato"),
    )
    color_trabajo: str | None = Field(
        None, max_length=100,
        validation_alias=AliasChoices("color_trabajo", "colorTrabajo"),
    )
    material: OrderMaterial | None = None

    @field_validator("material", mode="before")
    @classmethod
    def blank_material(cls, v):
        if v == "":
            return None
        return v


class OrderCreate(_OrderFields):
    """
    lab_id nunca se acepta del cliente: lo fija el servidor
    desde la sesión. doctor_id solo se usa cuando crea un laboratorio.
    """
    services: list[str] = Field(..., description="Servicios solicitados")
    odontograma: dict[int, list[ToothCondition]] = Field(
        default_factory=dict,
        description="{diente FDI: [condiciones]}",
    )
    doctor_id: UUID | None = Field(
        None, validation_alias=AliasChoices("doctor_id", "doctorId")
    )

    check_teeth = field_validator("odontograma")(validate_odontograma)
    doctor_unassigned = field_validator("doctor_id", mode="before")(_unassigned_to_none)


class OrderUpdate(_OrderFields):
    services: list[str] | None = None
    odontograma: dict[int, list[ToothCondition]] | None = None
    status: OrderStatus | None = None
    progress_percentage: int | None = Field(None, ge=0, le=100)
    doctor_id: UUID | None = Field(
        None, validation_alias=AliasChoices("doctor_id", "doctorId")
    )

    check_teeth = field_validator("odontograma")(validate_odontograma)
    doctor_unassigned = field_validator("doctor_id", mode="before")(_unassigned_to_none)


class OrderProgressUpdate(BaseModel):
    status: OrderStatus | None = None
    progress_percentage: int | None = Field(
        None, ge=0, le=100,
        validation_alias=AliasChoices("progress_percentage", "progressPercentage"),
    )


class OrderArchiveRequest(BaseModel):
    archivado: bool


# ── Respuestas ───────────────────────────────────────
class OrderResponse(BaseModel):
    id: UUID
    order_number: int
    doctor_id: UUID | None = None
    lab_id: UUID
    status: OrderStatus
    value: Decimal | None = None
    services: list[str]
    odontograma: dict[int, list[str]]
    nombre_paciente: str | None = None
    observaciones: str | None = None
    instrucciones: str | None = None
    color_sustrato: str | None = None
    color_trabajo: str | None = None
    material: str | None = None
    progress_percentage: str
    archivado: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderDetailResponse(OrderResponse):
    """Orden con nombres de doctor y laboratorio resueltos al leer."""
    doctor_name: str
    lab_name: str


class LabOrderSummary(BaseModel):
    """Orden listada desde /labs/{id}/orders."""
    id: UUID
    order_number: int
    doctor_id: UUID | None = None
    doctor_name: str
    status: OrderStatus
    value: Decimal | None = None
    services: list[str]
    progress_percentage: str
    archivado: bool
    created_at: datetime

    model_config = {"from_attributes": True}
