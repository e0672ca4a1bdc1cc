"""
Endpoint de indicadores para o dashboard.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schemas.dashboard import DashboardStats
from services.dashboard_service import get_dashboard_stats
from utils.db import get_db

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard-stats",
    response_model=DashboardStats,
    summary="Indicadores gerais",
    description=(
            "**KPIs:**\n"
            "- Total de produtos\n"
            "- Produção total (m³)\n"
            "- Descarte total (chapas)\n"
            "- Eficiência (%) = (1 - descarte/produção) × 100; 0 sem produção\n\n"
            "**Gráficos:**\n"
            "- Produção (m³) por turno, inclusive turnos sem produção\n"
            "- Produção diária das últimas 14 datas"
    ),
)
def dashboard_stats(db: Session = Depends(get_db)):
    return get_dashboard_stats(db)
