from __future__ import annotations

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from utils.db import Base


class Descarte(Base):
    """Registro de descarte. Contabilizado só em chapas, sem cubagem."""
    __tablename__ = "fact_descarte"
    __table_args__ = (
        CheckConstraint("quantidade_chapas >= 0", name="quantidade_chapas_nao_negativa"),
        Index("idx_descarte_data", "data"),
    )

    descarteid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    data: Mapped[date] = mapped_column(Date, nullable=False)
    turnoid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_turnos.turnoid"), nullable=False)
    setorid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_setores.setorid"), nullable=False)
    produtoid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_produtos.produtoid"), nullable=False)
    tipo_descarte: Mapped[str | None] = mapped_column(Text)
    quantidade_chapas: Mapped[int] = mapped_column(Integer, nullable=False)
    obs: Mapped[str | None] = mapped_column(Text)
