# schemas/descarte.py
from pydantic import ConfigDict, Field

from schemas.common import FatoIn
from schemas.producao import _FatoOut


class DescarteIn(FatoIn):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    tipo_descarte: str = Field("", alias="Tipo_Descarte")
    obs: str = Field("", alias="Obs")


class DescarteOut(_FatoOut):
    descarteid: int
    tipo_descarte: str | None = None
    obs: str | None = None
