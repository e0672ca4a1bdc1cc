from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from enums.enums import AtivoEnum
from utils.db import Base


class Setor(Base):
    __tablename__ = "dim_setores"

    setorid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    setornome: Mapped[str] = mapped_column(Text, nullable=False)
    ativo: Mapped[str | None] = mapped_column(Text, default=AtivoEnum.sim.value, server_default=AtivoEnum.sim.value)
