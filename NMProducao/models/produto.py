from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from enums.enums import AtivoEnum
from utils.db import Base


class Produto(Base):
    __tablename__ = "dim_produtos"

    produtoid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    codigo: Mapped[str] = mapped_column(Text, nullable=False)
    descricao: Mapped[str] = mapped_column(Text, nullable=False)
    familiaid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_familias.familiaid"), nullable=False)
    comprimento_m: Mapped[float] = mapped_column(Float, nullable=False)
    largura_m: Mapped[float] = mapped_column(Float, nullable=False)
    bitola_m: Mapped[float] = mapped_column(Float, nullable=False)
    cubagem_m3: Mapped[float | None] = mapped_column(Float)  # volume unitário
    ativo: Mapped[str | None] = mapped_column(Text, default=AtivoEnum.sim.value, server_default=AtivoEnum.sim.value)

    familia: Mapped["Familia"] = relationship("Familia", back_populates="produtos")
