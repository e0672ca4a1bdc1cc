# client/dashboard.py
import logging
from datetime import date
from typing import Any, Optional

from client.api_client import ApiClient
from client.ui import ChartRenderer, NullChartRenderer, UiHooks
from enums.enums import NotificationKindEnum

logger = logging.getLogger(__name__)


def _num(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _label_data(value: Any) -> str:
    try:
        return date.fromisoformat(str(value)[:10]).strftime("%d/%m/%Y")
    except ValueError:
        return str(value)


def render_dashboard(data: dict, ui: UiHooks, charts: Optional[ChartRenderer] = None) -> None:
    """Preenche os indicadores e desenha os gráficos (se houver renderer)."""
    ui.set_text("totalProdutos", str(data.get("totalProdutos") or 0))
    ui.set_text("totalProducao", f"{_num(data.get('totalProducaoM3')):.4f}")
    ui.set_text("totalDescarte", str(data.get("totalDescarteChapas") or 0))
    ui.set_text("eficiencia", f"{_num(data.get('eficiencia')):.2f}%")

    charts = charts or NullChartRenderer()

    por_turno = data.get("producaoPorTurno")
    if por_turno:
        charts.bar(
            "chartProducaoTurno",
            [r.get("turnonome") or "" for r in por_turno],
            [_num(r.get("total")) for r in por_turno],
            "m³ por turno",
        )

    evolucao = data.get("evolucaoProducao")
    if evolucao:
        charts.line(
            "chartEvolucaoProducao",
            [_label_data(r.get("data")) for r in evolucao],
            [_num(r.get("total")) for r in evolucao],
            "m³ (últimos dias)",
        )


def load_dashboard(client: ApiClient, ui: UiHooks, charts: Optional[ChartRenderer] = None) -> dict:
    """
    Busca /dashboard-stats e atualiza a tela. Em caso de erro avisa o
    usuário e relança, para quem orquestra registrar a falha da tarefa.
    """
    try:
        data = client.fetch("/dashboard-stats") or {}
        render_dashboard(data, ui, charts)
        return data
    except Exception as err:
        ui.notify(f"Erro no dashboard: {err}", NotificationKindEnum.error.value)
        raise
