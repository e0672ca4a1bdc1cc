# client/sync.py
"""
Conexão e sincronização do cliente.

`connect` testa a API e dispara as atualizações em paralelo. Cada tarefa
é isolada: a falha de uma é registrada e não cancela nem bloqueia as
outras. O indicador de carregamento é escondido ao final em qualquer
caso, com um segundo "esconder" atrasado de reserva.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from client.api_client import ApiClient
from client.dashboard import load_dashboard
from client.ui import ChartRenderer, UiHooks
from enums.enums import ConnectionStatusEnum, NotificationKindEnum

logger = logging.getLogger(__name__)

FAILSAFE_HIDE_DELAY_S = 1.0

Task = Callable[[], Any]


@dataclass
class TaskResult:
    name: str
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None


@dataclass
class SyncReport:
    connected: bool
    message: str = ""
    results: List[TaskResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[str]:
        return [r.name for r in self.results if r.ok]

    @property
    def failed(self) -> List[str]:
        return [r.name for r in self.results if not r.ok]


@dataclass
class SyncState:
    """Últimos dados bons de cada tarefa; falhas não apagam o que já havia."""
    data: Dict[str, Any] = field(default_factory=dict)

    def apply(self, results: List[TaskResult]) -> None:
        for r in results:
            if r.ok:
                self.data[r.name] = r.value

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)


def run_task_group(tasks: Mapping[str, Task], max_workers: Optional[int] = None) -> List[TaskResult]:
    """
    Executa todas as tarefas em paralelo e espera todas terminarem
    (sucesso ou falha), sem interromper na primeira falha.
    Resultados na mesma ordem de `tasks`.
    """
    if not tasks:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or len(tasks), thread_name_prefix="sync") as pool:
        futures = {name: pool.submit(fn) for name, fn in tasks.items()}
        wait(futures.values())

    results = []
    for name, fut in futures.items():
        exc = fut.exception()
        if exc is None:
            results.append(TaskResult(name=name, ok=True, value=fut.result()))
        else:
            logger.error("%s: %s", name, exc)
            results.append(TaskResult(name=name, ok=False, error=exc))
    return results


def default_tasks(client: ApiClient, ui: UiHooks, charts: Optional[ChartRenderer] = None) -> Dict[str, Task]:
    return {
        "dashboard": lambda: load_dashboard(client, ui, charts),
        "produtos": lambda: client.fetch("/produtos"),
        "turnos": lambda: client.fetch("/turnos"),
        "setores": lambda: client.fetch("/setores"),
        "consulta": lambda: client.fetch("/producao"),
    }


def _hide_loading(ui: UiHooks) -> None:
    try:
        ui.show_loading(False)
    except Exception:
        logger.exception("falha ao esconder carregamento")


def connect(
    client: ApiClient,
    ui: UiHooks,
    charts: Optional[ChartRenderer] = None,
    tasks: Optional[Mapping[str, Task]] = None,
    state: Optional[SyncState] = None,
    failsafe_delay: float = FAILSAFE_HIDE_DELAY_S,
) -> SyncReport:
    """
    Testa a conexão e sincroniza tudo. Nunca lança: o resultado (inclusive
    falha de conexão) vem no SyncReport.
    """
    report = SyncReport(connected=False)
    try:
        ui.update_connection_status(ConnectionStatusEnum.connecting.value)
        ui.show_loading(True)

        ping = client.fetch("/test-connection") or {}
        report.connected = True
        report.message = str(ping.get("message", ""))
        ui.update_connection_status(ConnectionStatusEnum.connected.value)
        ui.notify(f"Conectado: {report.message}", NotificationKindEnum.success.value)

        report.results = run_task_group(tasks if tasks is not None else default_tasks(client, ui, charts))
        if state is not None:
            state.apply(report.results)
        if report.failed:
            logger.warning("sincronização parcial; falharam: %s", ", ".join(report.failed))
    except Exception as err:
        logger.error("falha na conexão: %s", err)
        report.connected = False
        report.message = str(err)
        ui.update_connection_status(ConnectionStatusEnum.disconnected.value)
        ui.notify(f"Falha na conexão: {err}", NotificationKindEnum.error.value)
    finally:
        _hide_loading(ui)
        timer = threading.Timer(failsafe_delay, _hide_loading, args=(ui,))
        timer.daemon = True
        timer.start()
    return report
