# schemas/dashboard.py
from datetime import date
from typing import List

from pydantic import BaseModel


class ProducaoTurno(BaseModel):
    turnonome: str
    total: float


class ProducaoDia(BaseModel):
    data: date
    total: float


class DashboardStats(BaseModel):
    totalProdutos: int
    totalProducaoM3: float
    totalDescarteChapas: int
    eficiencia: float
    producaoPorTurno: List[ProducaoTurno]
    evolucaoProducao: List[ProducaoDia]
