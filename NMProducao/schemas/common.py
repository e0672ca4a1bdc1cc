# schemas/common.py
from __future__ import annotations

from datetime import date
from typing import Any, Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


# -------------------------------------------------------------------
# Respostas simples
# -------------------------------------------------------------------
class Msg(BaseModel):
    """Resposta com mensagem plana (updates, ações)."""
    message: str


class CreatedOut(Msg):
    id: int


class DeletedOut(Msg):
    rowCount: int


# -------------------------------------------------------------------
# Resposta paginada genérica
# -------------------------------------------------------------------
T = TypeVar("T")


class Paginated(BaseModel, Generic[T]):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(alias="pageSize")
    total: int
    rows: Sequence[T]


# -------------------------------------------------------------------
# Entradas
# -------------------------------------------------------------------
def blank_to_none(value: Any) -> Any:
    """Texto vazio em campo numérico/data conta como ausente, não como inválido."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


FATO_CAMPOS_OBRIGATORIOS = ("Data", "TurnoID", "SetorID", "ProdutoID", "Quantidade_Chapas")


class FatoIn(BaseModel):
    """Campos comuns aos lançamentos de produção e de descarte."""
    model_config = ConfigDict(populate_by_name=True)

    data: Optional[date] = Field(None, alias="Data")
    turnoid: Optional[int] = Field(None, alias="TurnoID")
    setorid: Optional[int] = Field(None, alias="SetorID")
    produtoid: Optional[int] = Field(None, alias="ProdutoID")
    quantidade_chapas: Optional[int] = Field(None, alias="Quantidade_Chapas", ge=0)

    @field_validator("data", "turnoid", "setorid", "produtoid", "quantidade_chapas", mode="before")
    @classmethod
    def convert_blank_to_none(cls, v):
        return blank_to_none(v)
