# schemas/producao.py
from datetime import date

from pydantic import BaseModel

from schemas.common import FatoIn


class ProducaoIn(FatoIn):
    pass


class _FatoOut(BaseModel):
    """Colunas do fato + nomes das dimensões (LEFT JOIN, podem vir nulos)."""
    data: date
    turnoid: int
    setorid: int
    produtoid: int
    quantidade_chapas: int
    turnonome: str | None = None
    setornome: str | None = None
    produtodescricao: str | None = None
    codigo: str | None = None


class ProducaoOut(_FatoOut):
    producaoid: int
    comprimento_m: float | None = None
    largura_m: float | None = None
    bitola_m: float | None = None
    cubagem_m3: float | None = None
