# services/dashboard_service.py
"""
Indicadores do dashboard de produção.

Tudo é calculado direto no banco a cada chamada (sem cache).
"""
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.descarte import Descarte
from models.producao import Producao
from models.produto import Produto
from models.turno import Turno
from services.calculation_service import calculate_eficiencia

EVOLUCAO_DIAS = 14


def _producao_por_turno(db: Session) -> list[dict]:
    """Volume por turno, incluindo turnos sem produção (total 0)."""
    rows = (
        db.query(Turno.turnonome, func.coalesce(func.sum(Producao.cubagem_m3), 0).label("total"))
        .outerjoin(Producao, Producao.turnoid == Turno.turnoid)
        .group_by(Turno.turnoid, Turno.turnonome)
        .order_by(Turno.turnoid)
        .all()
    )
    return [{"turnonome": r.turnonome, "total": float(r.total)} for r in rows]


def _evolucao_producao(db: Session, dias: int = EVOLUCAO_DIAS) -> list[dict]:
    """Volume diário das últimas `dias` datas com produção, da mais recente para a mais antiga."""
    rows = (
        db.query(Producao.data, func.coalesce(func.sum(Producao.cubagem_m3), 0).label("total"))
        .group_by(Producao.data)
        .order_by(Producao.data.desc())
        .limit(dias)
        .all()
    )
    return [{"data": r.data, "total": float(r.total)} for r in rows]


def get_dashboard_stats(db: Session) -> Dict[str, Any]:
    total_produtos = db.query(func.count(Produto.produtoid)).scalar() or 0
    total_producao_m3 = db.query(func.coalesce(func.sum(Producao.cubagem_m3), 0)).scalar()
    total_chapas = db.query(func.coalesce(func.sum(Producao.quantidade_chapas), 0)).scalar()
    total_descarte_chapas = db.query(func.coalesce(func.sum(Descarte.quantidade_chapas), 0)).scalar()

    return {
        "totalProdutos": int(total_produtos),
        "totalProducaoM3": float(total_producao_m3 or 0),
        "totalDescarteChapas": int(total_descarte_chapas or 0),
        "eficiencia": calculate_eficiencia(total_chapas, total_descarte_chapas),
        "producaoPorTurno": _producao_por_turno(db),
        "evolucaoProducao": _evolucao_producao(db),
    }
