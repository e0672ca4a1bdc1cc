# schemas/produto.py
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from enums.enums import AtivoEnum
from schemas.common import blank_to_none


class ProdutoIn(BaseModel):
    """
    Corpo de criação/edição de produto. Todos os campos são opcionais aqui:
    a checagem de obrigatórios é feita no serviço para devolver 400 com a
    lista dos que faltam.
    """
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    codigo: str | None = Field(None, alias="Codigo")
    descricao: str | None = Field(None, alias="Descricao")
    familiaid: int | None = Field(None, alias="FamiliaID")
    comprimento_m: float | None = Field(None, alias="Comprimento_m")
    largura_m: float | None = Field(None, alias="Largura_m")
    bitola_m: float | None = Field(None, alias="Bitola_m")
    cubagem_m3: float | None = Field(None, alias="Cubagem_m3")
    ativo: str = Field(AtivoEnum.sim.value, alias="Ativo")

    @field_validator("familiaid", "comprimento_m", "largura_m", "bitola_m", mode="before")
    @classmethod
    def convert_blank_to_none(cls, v):
        return blank_to_none(v)

    @field_validator("cubagem_m3", mode="before")
    @classmethod
    def convert_cubagem(cls, v):
        """
        Cubagem informada nunca derruba o cadastro: texto vazio vale 0 e
        qualquer coisa não numérica vira NaN (o serviço saneia para 0).
        """
        if v is None or isinstance(v, (int, float)) and not isinstance(v, bool):
            return v
        if isinstance(v, str) and not v.strip():
            return 0.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return math.nan


PRODUTO_CAMPOS_OBRIGATORIOS = ("Codigo", "Descricao", "FamiliaID", "Comprimento_m", "Largura_m", "Bitola_m")


class ProdutoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    produtoid: int
    codigo: str
    descricao: str
    familiaid: int
    comprimento_m: float
    largura_m: float
    bitola_m: float
    cubagem_m3: float | None = None
    ativo: str | None = None
