# schemas/dimensoes.py
from pydantic import BaseModel, ConfigDict


class _Dimensao(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ativo: str | None = None


class TurnoOut(_Dimensao):
    turnoid: int
    turnonome: str


class SetorOut(_Dimensao):
    setorid: int
    setornome: str


class FamiliaOut(_Dimensao):
    familiaid: int
    familianome: str
    sigla: str | None = None
