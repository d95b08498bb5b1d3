"""
Modelo Order: Orden de trabajo enviada por un doctor a un laboratorio.

El odontograma se guarda como JSON: {"<diente FDI>": ["corona", ...]}.
"""

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class OrderStatus(str, enum.Enum):
    """Estados del flujo de una orden."""
    PENDIENTE = "pendiente"
    INICIADA = "iniciada"
    EN_PROCESO = "en_proceso"
    TERMINADA = "terminada"
    CANCELADA = "cancelada"


class ToothCondition(str, enum.Enum):
    """Trabajos que se pueden marcar sobre un diente del odontograma."""
    CORONA = "corona"
    CARILLA = "carilla"
    CARILLA_V = "carilla_v"
    PUENTE = "puente"
    CORONA_SOBRE_IMPLANTE = "corona_sobre_implante"
    IMPLANTE = "implante"
    INCRUSTACION = "incrustacion"
    V_ONLEY = "v_onley"
    ONLEY = "onley"
    CHIP_CERAMICO = "chip_ceramico"
    MARYLAND = "maryland"


class OrderMaterial(str, enum.Enum):
    DISILICATO = "disilicato"
    ZIRCONIA = "zirconia"
    ZIRCONIA_MONOLITICA = "zirconia_monolitica"
    CEROMERO = "ceromero"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    order_number: Mapped[int] = mapped_column(
        Integer, unique=True, nullable=False,
        comment="Número visible, asignado desde order_sequences"
    )

    # Referencias blandas: doctor_id es null en órdenes de laboratorio
    # sin doctor asignado.
    doctor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, index=True)
    lab_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=OrderStatus.PENDIENTE,
    )
    value: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    # ── Trabajo solicitado ───────────────────────────
    services: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    odontograma: Mapped[dict[str, list[str]]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    nombre_paciente: Mapped[str | None] = mapped_column(String(200))
    observaciones: Mapped[str | None] = mapped_column(Text)
    instrucciones: Mapped[str | None] = mapped_column(Text)
    color_sustrato: Mapped[str | None] = mapped_column(String(100))
    color_trabajo: Mapped[str | None] = mapped_column(String(100))
    material: Mapped[str | None] = mapped_column(String(50))

    # ── Seguimiento ──────────────────────────────────
    progress_percentage: Mapped[str] = mapped_column(
        String(3), nullable=False, default="0", comment="0-100 como texto"
    )
    archivado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_orders_lab_status", "lab_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Order #{self.order_number} [{self.status.value}]>"
