from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from enums.enums import AtivoEnum
from utils.db import Base


class Familia(Base):
    __tablename__ = "dim_familias"

    familiaid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    familianome: Mapped[str] = mapped_column(Text, nullable=False)
    sigla: Mapped[str | None] = mapped_column(Text)
    ativo: Mapped[str | None] = mapped_column(Text, default=AtivoEnum.sim.value, server_default=AtivoEnum.sim.value)

    produtos: Mapped[list["Produto"]] = relationship("Produto", back_populates="familia")
