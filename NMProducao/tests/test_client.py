import json
import socket
import sys
import threading
import time

import pytest
import requests

from client.api_client import ApiClient, ApiError, ApiTimeout
from client.config import ClientConfig
from client.dashboard import render_dashboard
from client.failsafe import install_failure_net
from client.sync import SyncState, connect, run_task_group
from client.ui import LoggingUi


class FakeResponse:
    def __init__(self, status_code=200, body=b"", chunks=None, delay=0.0):
        self.status_code = status_code
        self._chunks = chunks if chunks is not None else [body]
        self._delay = delay
        self.closed = False

    @property
    def ok(self):
        return self.status_code < 400

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            if self._delay:
                time.sleep(self._delay)
            yield chunk

    def close(self):
        self.closed = True


class FakeSession:
    """Responde por caminho; valores Exception são lançados."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        path = "/" + url.split("/", 3)[3]
        result = self.routes[path]
        if isinstance(result, Exception):
            raise result
        return result


def _json(status, text):
    return FakeResponse(status, text.encode("utf-8"))


def _client(routes, timeout=8.0):
    session = FakeSession(routes)
    return ApiClient(ClientConfig(base_url="http://api.local:3001", timeout=timeout), session), session


class RecordingUi(LoggingUi):
    def __init__(self):
        super().__init__()
        self.loading_calls = []

    def show_loading(self, visible):
        self.loading_calls.append(visible)
        super().show_loading(visible)


# ==================== ApiClient ====================

def test_fetch_requires_base_url():
    client = ApiClient(ClientConfig())
    with pytest.raises(ApiError, match="Defina a conexão primeiro."):
        client.fetch("/turnos")


def test_fetch_prefixes_base_url_and_sets_timeout():
    client, session = _client({"/turnos": _json(200, '[{"turnoid": 1}]')})
    assert client.fetch("/turnos") == [{"turnoid": 1}]
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://api.local:3001/turnos")
    assert kwargs["timeout"] == 8.0
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_fetch_prefers_server_error_message():
    client, _ = _client({"/produtos": _json(400, '{"error": "Campos obrigatórios: Codigo"}')})
    with pytest.raises(ApiError) as exc:
        client.fetch("/produtos", method="POST", json_body={})
    assert exc.value.message == "Campos obrigatórios: Codigo"
    assert exc.value.status == 400


def test_fetch_falls_back_to_status_message_on_non_json():
    client, _ = _client({"/dashboard-stats": _json(502, "<html>Bad gateway</html>")})
    with pytest.raises(ApiError, match="Erro HTTP 502"):
        client.fetch("/dashboard-stats")


def test_fetch_tolerates_empty_success_body():
    client, _ = _client({"/vazio": FakeResponse(204, b"")})
    assert client.fetch("/vazio") is None


def test_transport_timeout_becomes_api_timeout():
    client, _ = _client({"/turnos": requests.ReadTimeout("lento")})
    with pytest.raises(ApiTimeout):
        client.fetch("/turnos")


def test_slow_body_is_cut_at_deadline():
    slow = FakeResponse(200, chunks=[b"[", b"1", b"]"], delay=0.05)
    client, _ = _client({"/lento": slow}, timeout=0.06)
    with pytest.raises(ApiTimeout):
        client.fetch("/lento")
    assert slow.closed


def test_network_error_is_normalized():
    client, _ = _client({"/turnos": requests.ConnectionError("recusado")})
    with pytest.raises(ApiError, match="Falha de rede"):
        client.fetch("/turnos")


@pytest.fixture
def trickling_server():
    """Servidor que manda a linha de status e os cabeçalhos um byte por vez."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(1)
    stop = threading.Event()

    def serve():
        try:
            conn, _ = srv.accept()
        except OSError:
            return
        with conn:
            for byte in b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nX-Lento: sim\r\n":
                if stop.wait(0.1):
                    return
                try:
                    conn.sendall(bytes([byte]))
                except OSError:
                    return

    threading.Thread(target=serve, daemon=True).start()
    yield srv.getsockname()[1]
    stop.set()
    srv.close()


def test_slow_headers_are_cut_at_total_deadline(trickling_server):
    client = ApiClient(ClientConfig.from_host("127.0.0.1", trickling_server, timeout=0.5))
    started = time.monotonic()
    with pytest.raises(ApiTimeout):
        client.fetch("/turnos")
    assert time.monotonic() - started < 2.0


# ==================== fan-out ====================

STATS = (
    '{"totalProdutos": 3, "totalProducaoM3": 1.5, "totalDescarteChapas": 20, "eficiencia": 80,'
    ' "producaoPorTurno": [{"turnonome": "Manhã", "total": 1.5}],'
    ' "evolucaoProducao": [{"data": "2025-03-10", "total": 1.5}]}'
)


def _routes(**overrides):
    routes = {
        "/test-connection": _json(200, '{"message": "API funcionando"}'),
        "/dashboard-stats": _json(200, STATS),
        "/produtos": _json(200, '{"page": 1, "pageSize": 50, "total": 0, "rows": []}'),
        "/turnos": _json(200, '[{"turnoid": 1, "turnonome": "Manhã"}]'),
        "/setores": _json(200, '[{"setorid": 1, "setornome": "Geral"}]'),
        "/producao": _json(200, '{"page": 1, "pageSize": 50, "total": 0, "rows": []}'),
    }
    routes.update(overrides)
    return routes


def test_connect_with_one_failing_task_still_completes():
    client, _ = _client(_routes(**{"/setores": _json(500, '{"error": "Rota quebrada"}')}))
    ui = RecordingUi()
    state = SyncState()

    report = connect(client, ui, state=state, failsafe_delay=0.01)

    assert report.connected is True
    assert report.failed == ["setores"]
    assert sorted(report.succeeded) == ["consulta", "dashboard", "produtos", "turnos"]
    assert state.get("turnos") == [{"turnoid": 1, "turnonome": "Manhã"}]
    assert state.get("setores") is None
    assert ui.texts["eficiencia"] == "80.00%"
    assert ui.connection_status == "connected"
    assert ui.loading is False


def test_connect_when_dashboard_fails_notifies_and_hides_loading():
    client, _ = _client(_routes(**{"/dashboard-stats": requests.ReadTimeout("lento")}))
    ui = RecordingUi()
    report = connect(client, ui, failsafe_delay=0.01)
    assert report.failed == ["dashboard"]
    assert any(kind == "error" and "dashboard" in msg for kind, msg in ui.notifications)
    assert ui.loading is False


def test_connect_failure_reports_disconnected():
    client, _ = _client(_routes(**{"/test-connection": requests.ConnectionError("recusado")}))
    ui = RecordingUi()
    report = connect(client, ui, failsafe_delay=0.01)
    assert report.connected is False
    assert report.results == []
    assert ui.connection_status == "disconnected"
    assert ui.notifications[-1][0] == "error"
    assert ui.loading_calls[0] is True and ui.loading_calls[-1] is False


def test_failsafe_hides_loading_again():
    client, _ = _client(_routes())
    ui = RecordingUi()
    connect(client, ui, tasks={}, failsafe_delay=0.01)
    deadline = time.monotonic() + 2
    while ui.loading_calls.count(False) < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    assert ui.loading_calls.count(False) >= 2


def test_task_group_waits_for_all_tasks():
    def falha():
        raise ValueError("quebrou")

    def lenta():
        time.sleep(0.05)
        return "pronto"

    results = run_task_group({"falha": falha, "lenta": lenta})
    assert [(r.name, r.ok) for r in results] == [("falha", False), ("lenta", True)]
    assert results[1].value == "pronto"
    assert isinstance(results[0].error, ValueError)


# ==================== apresentação ====================

class RecordingCharts:
    def __init__(self):
        self.drawn = []

    def bar(self, target, labels, values, label):
        self.drawn.append(("bar", target, list(labels), list(values)))

    def line(self, target, labels, values, label):
        self.drawn.append(("line", target, list(labels), list(values)))


def test_render_dashboard_with_and_without_charts():
    data = json.loads(STATS)
    ui = LoggingUi()
    render_dashboard(data, ui)
    assert ui.texts == {
        "totalProdutos": "3",
        "totalProducao": "1.5000",
        "totalDescarte": "20",
        "eficiencia": "80.00%",
    }

    charts = RecordingCharts()
    render_dashboard(data, ui, charts)
    assert charts.drawn == [
        ("bar", "chartProducaoTurno", ["Manhã"], [1.5]),
        ("line", "chartEvolucaoProducao", ["10/03/2025"], [1.5]),
    ]


def _explode():
    raise RuntimeError("na thread")


def test_failure_net_forces_loading_closed(monkeypatch):
    seen = []
    monkeypatch.setattr(sys, "excepthook", lambda *a: seen.append("sys"))
    monkeypatch.setattr(threading, "excepthook", lambda args: seen.append("thread"))

    ui = RecordingUi()
    ui.show_loading(True)
    uninstall = install_failure_net(ui)
    try:
        try:
            raise RuntimeError("inesperado")
        except RuntimeError:
            sys.excepthook(*sys.exc_info())

        t = threading.Thread(target=_explode)
        t.start()
        t.join()
    finally:
        uninstall()

    assert ui.loading is False
    assert seen == ["sys", "thread"]
    assert ui.loading_calls.count(False) == 2
