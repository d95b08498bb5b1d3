"""
Modelo OrderSequence: Contador para el número visible de las órdenes.

Se bloquea con SELECT FOR UPDATE al asignar un número, para evitar
duplicados en concurrencia.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class OrderSequence(Base):
    __tablename__ = "order_sequences"

    name: Mapped[str] = mapped_column(
        String(50), primary_key=True,
        comment="Nombre de la secuencia (ej: orders)"
    )
    last_number: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )

    def __repr__(self) -> str:
        return f"<OrderSequence {self.name} #{self.last_number}>"
