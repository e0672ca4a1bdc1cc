from __future__ import annotations

from datetime import date

from sqlalchemy import CheckConstraint, Date, Float, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from utils.db import Base


class Producao(Base):
    """
    Registro de produção. As dimensões são uma cópia das do produto no
    momento do lançamento: editar o produto depois não altera o histórico.
    """
    __tablename__ = "fact_producao"
    __table_args__ = (
        CheckConstraint("quantidade_chapas >= 0", name="quantidade_chapas_nao_negativa"),
        Index("idx_producao_data", "data"),
    )

    producaoid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    data: Mapped[date] = mapped_column(Date, nullable=False)
    turnoid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_turnos.turnoid"), nullable=False)
    setorid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_setores.setorid"), nullable=False)
    produtoid: Mapped[int] = mapped_column(Integer, ForeignKey("dim_produtos.produtoid"), nullable=False)
    quantidade_chapas: Mapped[int] = mapped_column(Integer, nullable=False)
    comprimento_m: Mapped[float | None] = mapped_column(Float)
    largura_m: Mapped[float | None] = mapped_column(Float)
    bitola_m: Mapped[float | None] = mapped_column(Float)
    cubagem_m3: Mapped[float | None] = mapped_column(Float)  # volume total do lançamento
