# client/ui.py
"""
Interfaces da camada de apresentação usadas pelo cliente.

A apresentação real (tela, terminal) implementa UiHooks; gráficos entram
por injeção de um ChartRenderer. Sem renderer disponível usa-se o
NullChartRenderer, que só registra que os gráficos foram pulados.
"""
import logging
from typing import Dict, List, Protocol, Sequence

from enums.enums import ConnectionStatusEnum, NotificationKindEnum

logger = logging.getLogger(__name__)


class UiHooks(Protocol):
    def show_loading(self, visible: bool) -> None: ...

    def update_connection_status(self, state: str) -> None: ...

    def notify(self, message: str, kind: str = "info") -> None: ...

    def set_text(self, element: str, value: str) -> None: ...


class ChartRenderer(Protocol):
    def bar(self, target: str, labels: Sequence[str], values: Sequence[float], label: str) -> None: ...

    def line(self, target: str, labels: Sequence[str], values: Sequence[float], label: str) -> None: ...


class LoggingUi:
    """UiHooks que só registra em log e guarda o último estado (CLI e testes)."""

    def __init__(self):
        self.loading = False
        self.connection_status = ConnectionStatusEnum.disconnected.value
        self.texts: Dict[str, str] = {}
        self.notifications: List[tuple[str, str]] = []

    def show_loading(self, visible: bool) -> None:
        self.loading = visible
        logger.debug("loading=%s", visible)

    def update_connection_status(self, state: str) -> None:
        self.connection_status = state
        logger.info("conexão: %s", state)

    def notify(self, message: str, kind: str = "info") -> None:
        self.notifications.append((kind, message))
        log = logger.error if kind == NotificationKindEnum.error else logger.info
        log("[%s] %s", kind, message)

    def set_text(self, element: str, value: str) -> None:
        self.texts[element] = value


class NullChartRenderer:
    available = False

    def bar(self, target: str, labels: Sequence[str], values: Sequence[float], label: str) -> None:
        logger.warning("Gráficos indisponíveis: pulando %s", target)

    def line(self, target: str, labels: Sequence[str], values: Sequence[float], label: str) -> None:
        logger.warning("Gráficos indisponíveis: pulando %s", target)
